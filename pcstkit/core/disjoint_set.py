"""Disjoint-set (union-find) over the integer range ``0..n-1``."""

from typing import List


class DisjointSet:
    """Union-find with path compression and union by size."""

    def __init__(self, n: int):
        self.parent: List[int] = list(range(n))
        self._size: List[int] = [1] * n

    def __len__(self) -> int:
        return len(self.parent)

    def find(self, x: int) -> int:
        """Return the representative of the set containing x."""
        root = x
        while self.parent[root] != root:
            root = self.parent[root]
        # Path compression
        while self.parent[x] != root:
            self.parent[x], x = root, self.parent[x]
        return root

    def union(self, x: int, y: int) -> int:
        """Merge the sets containing x and y, returning the surviving representative."""
        root_x = self.find(x)
        root_y = self.find(y)
        if root_x == root_y:
            return root_x

        if self._size[root_x] < self._size[root_y]:
            root_x, root_y = root_y, root_x
        self.parent[root_y] = root_x
        self._size[root_x] += self._size[root_y]
        return root_x

    def size(self, x: int) -> int:
        """Number of elements in the set containing x."""
        return self._size[self.find(x)]
