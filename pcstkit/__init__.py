"""Prize-Collecting Steiner Tree extraction for knowledge-graph retrieval."""

from .config import ExtractorConfig, IterativeConfig, PruningMode, SolverConfig
from .core import IterativePCSTSolver, PCSTInstance, PCSTResult, PCSTSolver
from .exceptions import InvalidEdgeCostError, InvalidPrizeError, InvalidRootError, PCSTError

__all__ = [
    "PCSTSolver",
    "IterativePCSTSolver",
    "PCSTInstance",
    "PCSTResult",
    "SolverConfig",
    "IterativeConfig",
    "ExtractorConfig",
    "PruningMode",
    "PCSTError",
    "InvalidRootError",
    "InvalidPrizeError",
    "InvalidEdgeCostError",
]
