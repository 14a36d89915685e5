"""
Primal-dual PCST core: disjoint set, event queue, cluster arena, growth and
pruning phases, and the solver facades built on them.
"""

from .disjoint_set import DisjointSet
from .events import Event, EventKind, EventQueue
from .clusters import ClusterArena
from .growth import GrowthResult, run_growth
from .pruning import prune
from .solver import PCSTInstance, PCSTResult, PCSTSolver
from .iterative import IterativePCSTSolver, steiner_edges

__all__ = [
    "DisjointSet",
    "Event",
    "EventKind",
    "EventQueue",
    "ClusterArena",
    "GrowthResult",
    "run_growth",
    "prune",
    "PCSTInstance",
    "PCSTResult",
    "PCSTSolver",
    "IterativePCSTSolver",
    "steiner_edges",
]
