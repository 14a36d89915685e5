"""
Growth phase of the Goemans-Williamson primal-dual PCST approximation.

Every node starts as its own cluster. Active clusters grow at unit rate; the
growth of the clusters on either side of an edge pays for that edge, and once
its cost is fully paid the edge is tight: it is selected and its two clusters
merge. A cluster whose growth reaches the sum of its prizes saturates and
stops growing. In rooted mode the root's cluster never saturates.

The simulation is event driven. Edge events are recomputed lazily: an entry
is only rescheduled when it is popped and found not yet tight, or when one of
its clusters goes from inactive to active through a merge (the only way the
growth rate of an edge can increase).
"""

from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from .clusters import ClusterArena
from .disjoint_set import DisjointSet
from .events import Event, EventKind, EventQueue


@dataclass
class GrowthResult:
    """Output of :func:`run_growth`."""
    edges: List[int] = field(default_factory=list)  # in selection order
    saturated: List[int] = field(default_factory=list)  # nodes of clusters that saturated
    end_time: float = 0.0


def run_growth(
    prizes: np.ndarray,
    edges: np.ndarray,
    costs: np.ndarray,
    root: Optional[int] = None,
    tolerance: float = 1e-9,
) -> GrowthResult:
    """
    Grow clusters until no event is left and return the tight edges.

    Args:
        prizes: Non-negative prize per node, shape (n,).
        edges: Undirected edges as node index pairs, shape (m, 2), no
            self-loops or parallel edges.
        costs: Non-negative cost per edge, shape (m,).
        root: Index of the root node, or None for forest mode.
        tolerance: Absolute tolerance for time and budget comparisons.

    Returns:
        GrowthResult whose ``edges`` form an acyclic candidate forest.
    """
    n = len(prizes)
    m = len(edges)
    edge_list = [(int(u), int(v)) for u, v in edges]
    cost_list = [float(c) for c in costs]

    arena = ClusterArena(prizes)
    dsu = DisjointSet(n)
    queue = EventQueue(tolerance)
    edge_version = [0] * m
    cluster_version = [0] * n
    # Edges touching each cluster; may contain edges that became internal
    incident: List[List[int]] = [[] for _ in range(n)]
    for e, (u, v) in enumerate(edge_list):
        incident[u].append(e)
        incident[v].append(e)

    for u in range(n):
        if not incident[u] and float(prizes[u]) <= tolerance and u != root:
            arena.active[u] = False
    if root is not None:
        arena.never_saturating[root] = True
        arena.active[root] = True

    result = GrowthResult()
    now = 0.0

    def edge_slack(e: int, cu: int, cv: int) -> float:
        u, v = edge_list[e]
        return cost_list[e] - arena.node_dual(u, cu, now) - arena.node_dual(v, cv, now)

    def schedule_edge(e: int):
        edge_version[e] += 1
        u, v = edge_list[e]
        cu, cv = dsu.find(u), dsu.find(v)
        if cu == cv:
            return
        slack = edge_slack(e, cu, cv)
        rate = int(arena.active[cu]) + int(arena.active[cv])
        if slack <= tolerance:
            when = now
        elif rate == 0:
            return
        else:
            when = now + slack / rate
        queue.push(Event(when, EventKind.EDGE_TIGHT, e, edge_version[e]))

    def schedule_saturation(c: int):
        cluster_version[c] += 1
        if not arena.active[c] or arena.never_saturating[c]:
            return
        when = now + max(arena.remaining(c, now), 0.0)
        queue.push(Event(when, EventKind.SATURATION, c, cluster_version[c]))

    for c in range(n):
        schedule_saturation(c)
    for e in range(m):
        schedule_edge(e)

    while queue:
        event = queue.pop()
        now = max(now, event.time)

        if event.kind == EventKind.EDGE_TIGHT:
            e = event.target
            if event.version != edge_version[e]:
                continue
            u, v = edge_list[e]
            cu, cv = dsu.find(u), dsu.find(v)
            if cu == cv:
                continue
            if edge_slack(e, cu, cv) > tolerance:
                schedule_edge(e)
                continue

            result.edges.append(e)
            # An inactive side joining an active one starts growing again,
            # so every edge on its boundary needs a fresh event
            woken: List[int] = []
            if arena.active[cu] != arena.active[cv]:
                sleeper = cv if arena.active[cu] else cu
                woken = list(incident[sleeper])

            keep = dsu.union(cu, cv)
            drop = cv if keep == cu else cu
            arena.merge(keep, drop, now)
            incident[keep].extend(incident[drop])
            incident[drop] = []
            cluster_version[drop] += 1

            schedule_saturation(keep)
            for other in woken:
                if other != e:
                    schedule_edge(other)
        else:
            c = event.target
            if event.version != cluster_version[c]:
                continue
            if dsu.find(c) != c or not arena.active[c]:
                continue
            if arena.remaining(c, now) > tolerance:
                schedule_saturation(c)
                continue
            arena.deactivate(c, now)
            cluster_version[c] += 1
            result.saturated.extend(arena.members[c])

    result.end_time = now
    # a node can saturate twice: alone, then again inside a later merged cluster
    result.saturated = sorted(set(result.saturated))
    return result
