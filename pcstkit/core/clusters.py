"""
Cluster bookkeeping for the growth simulation.

Clusters live in a flat arena addressed by the index of their disjoint-set
representative. Growth is tracked lazily: a record stores the values as of
``last_time`` and the current values are derived from the elapsed time while
the cluster is active.

Two growth quantities are kept per cluster:

- ``grown``: total amount grown by the cluster and every cluster merged into
  it. Compared against ``prize_sum`` to decide saturation.
- ``moat``: growth of the cluster since it was formed by its last merge.

The growth paid towards the edges of a node ``u`` is the sum of the moats of
every cluster that has ever contained ``u``. It is stored as
``base[u] + offset[c] + moat(c)`` so that a merge only rewrites ``base`` for
the members of the smaller side.
"""

import math
from typing import List

import numpy as np


class ClusterArena:
    """Index-addressed cluster records, one per node at creation."""

    def __init__(self, prizes: np.ndarray):
        n = len(prizes)
        self.prize_sum = np.asarray(prizes, dtype=np.float64).copy()
        self.grown = np.zeros(n, dtype=np.float64)
        self.moat = np.zeros(n, dtype=np.float64)
        self.offset = np.zeros(n, dtype=np.float64)
        self.last_time = np.zeros(n, dtype=np.float64)
        self.base = np.zeros(n, dtype=np.float64)
        self.active: List[bool] = [True] * n
        self.never_saturating: List[bool] = [False] * n
        self.members: List[List[int]] = [[i] for i in range(n)]

    def __len__(self) -> int:
        return len(self.active)

    # ------------------------------------------------------------------
    # Lazy growth
    # ------------------------------------------------------------------

    def _elapsed(self, c: int, t: float) -> float:
        if not self.active[c]:
            return 0.0
        return max(t - float(self.last_time[c]), 0.0)

    def grown_at(self, c: int, t: float) -> float:
        return float(self.grown[c]) + self._elapsed(c, t)

    def moat_at(self, c: int, t: float) -> float:
        return float(self.moat[c]) + self._elapsed(c, t)

    def flush(self, c: int, t: float):
        """Fold the growth accumulated up to time t into the stored record."""
        elapsed = self._elapsed(c, t)
        if elapsed > 0.0:
            self.grown[c] += elapsed
            self.moat[c] += elapsed
        self.last_time[c] = max(t, float(self.last_time[c]))

    def node_dual(self, u: int, c: int, t: float) -> float:
        """Growth paid towards the edges of node u, whose cluster is c."""
        return float(self.base[u]) + float(self.offset[c]) + self.moat_at(c, t)

    def remaining(self, c: int, t: float) -> float:
        """Prize budget cluster c has left before it saturates."""
        if self.never_saturating[c]:
            return math.inf
        return float(self.prize_sum[c]) - self.grown_at(c, t)

    # ------------------------------------------------------------------
    # State changes
    # ------------------------------------------------------------------

    def deactivate(self, c: int, t: float):
        self.flush(c, t)
        self.active[c] = False

    def merge(self, keep: int, drop: int, t: float):
        """Combine cluster ``drop`` into ``keep`` at time t.

        ``keep`` must be the representative chosen by the disjoint set, which
        is always the side with more members.
        """
        self.flush(keep, t)
        self.flush(drop, t)

        new_offset = float(self.offset[keep]) + float(self.moat[keep])
        shift = float(self.offset[drop]) + float(self.moat[drop]) - new_offset
        for u in self.members[drop]:
            self.base[u] += shift
        self.members[keep].extend(self.members[drop])
        self.members[drop] = []

        self.offset[keep] = new_offset
        self.moat[keep] = 0.0
        self.grown[keep] += self.grown[drop]
        self.prize_sum[keep] += self.prize_sum[drop]
        self.active[keep] = self.active[keep] or self.active[drop]
        self.never_saturating[keep] = self.never_saturating[keep] or self.never_saturating[drop]
        self.last_time[keep] = t
        self.active[drop] = False
