"""
Pruning of the growth-phase forest.

- ``none``: keep every tight edge.
- ``simple`` / ``gw``: strip non-root leaves without prize, repeatedly.
- ``strong``: per component, a bottom-up pass computes the net value of the
  subtree below every edge (prizes minus edge costs, counting only subtrees
  that are themselves kept) and drops the edges whose value is not positive.
  Without a root, the subtree below a dropped edge stays as a tree of its
  own when its value is positive.

In rooted mode only the tree containing the root is kept.
"""

from collections import defaultdict
from typing import Dict, List, Optional, Sequence

import numpy as np

from ..config import PruningMode


def prune(
    edge_indices: Sequence[int],
    edges: np.ndarray,
    costs: np.ndarray,
    prizes: np.ndarray,
    root: Optional[int] = None,
    mode: PruningMode = PruningMode.STRONG,
    tolerance: float = 1e-9,
) -> List[int]:
    """Return the subset of ``edge_indices`` that survives pruning, sorted."""
    mode = PruningMode.parse(mode)
    if root is not None:
        # rooted: trees that never reached the root are not part of the answer
        adj = _adjacency(edge_indices, edges)
        reachable = set(_component(adj, edges, root)) if root in adj else {root}
        edge_indices = [e for e in edge_indices if int(edges[e][0]) in reachable]
    if mode == PruningMode.NONE:
        return sorted(int(e) for e in edge_indices)
    if mode in (PruningMode.SIMPLE, PruningMode.GW):
        return _strip_empty_leaves(edge_indices, edges, prizes, root, tolerance)
    return _strong_prune(edge_indices, edges, costs, prizes, root, tolerance)


def _adjacency(edge_indices: Sequence[int], edges: np.ndarray) -> Dict[int, List[int]]:
    adj: Dict[int, List[int]] = defaultdict(list)
    for e in sorted(int(e) for e in edge_indices):
        u, v = int(edges[e][0]), int(edges[e][1])
        adj[u].append(e)
        adj[v].append(e)
    return adj


def _other(edges: np.ndarray, e: int, node: int) -> int:
    u, v = int(edges[e][0]), int(edges[e][1])
    return v if u == node else u


# ----------------------------------------------------------------------
# Simple / GW
# ----------------------------------------------------------------------

def _strip_empty_leaves(edge_indices, edges, prizes, root, tolerance) -> List[int]:
    adj = _adjacency(edge_indices, edges)
    kept = set(int(e) for e in edge_indices)
    degree = {node: len(incident) for node, incident in adj.items()}

    def removable(node: int) -> bool:
        return (degree[node] == 1 and node != root
                and float(prizes[node]) <= tolerance)

    stack = sorted((node for node in adj if removable(node)), reverse=True)
    while stack:
        leaf = stack.pop()
        if not removable(leaf):
            continue
        edge = next(e for e in adj[leaf] if e in kept)
        kept.discard(edge)
        degree[leaf] -= 1
        neighbor = _other(edges, edge, leaf)
        degree[neighbor] -= 1
        if removable(neighbor):
            stack.append(neighbor)

    return sorted(kept)


# ----------------------------------------------------------------------
# Strong
# ----------------------------------------------------------------------

def _strong_prune(edge_indices, edges, costs, prizes, root, tolerance) -> List[int]:
    adj = _adjacency(edge_indices, edges)
    seen = set()
    kept: List[int] = []

    for start in sorted(adj):
        if start in seen:
            continue
        component = _component(adj, edges, start)
        seen.update(component)

        if root is not None and root in component:
            anchor = root
        else:
            # highest prize, lowest index on ties
            anchor = min(component, key=lambda node: (-float(prizes[node]), node))

        for top, value, piece in _subtree_values(adj, edges, costs, prizes, anchor, tolerance):
            if top == root:
                kept.extend(piece)
            elif root is None and value > tolerance:
                kept.extend(piece)

    return sorted(kept)


def _component(adj, edges, start: int) -> List[int]:
    nodes = [start]
    visited = {start}
    i = 0
    while i < len(nodes):
        node = nodes[i]
        i += 1
        for e in adj[node]:
            nbr = _other(edges, e, node)
            if nbr not in visited:
                visited.add(nbr)
                nodes.append(nbr)
    return nodes


def _subtree_values(adj, edges, costs, prizes, anchor: int, tolerance: float):
    """Bottom-up net values of the tree hanging from ``anchor``.

    Dropping an edge splits its subtree off as a separate tree, topped by the
    child endpoint of that edge.

    Returns:
        List of (top node, net value, kept edges) per resulting tree, the
        anchor's tree first.
    """
    parent_edge: Dict[int, int] = {anchor: -1}
    order = [anchor]
    stack = [anchor]
    while stack:
        node = stack.pop()
        for e in adj[node]:
            if e == parent_edge[node]:
                continue
            child = _other(edges, e, node)
            parent_edge[child] = e
            order.append(child)
            stack.append(child)

    value = {node: float(prizes[node]) for node in order}
    keep_edge = set()
    for node in reversed(order):
        e = parent_edge[node]
        if e < 0:
            continue
        net = value[node] - float(costs[e])
        if net > tolerance:
            keep_edge.add(e)
            value[_other(edges, e, node)] += net

    # parents precede children in ``order``
    top_of = {anchor: anchor}
    pieces: Dict[int, List[int]] = {anchor: []}
    for node in order[1:]:
        e = parent_edge[node]
        if e in keep_edge:
            top = top_of[_other(edges, e, node)]
            top_of[node] = top
            pieces[top].append(e)
        else:
            top_of[node] = node
            pieces[node] = []
    return [(top, value[top], piece) for top, piece in pieces.items()]
