"""
Central configuration for the PCST solver and the retrieval helpers.

All settings are plain dataclasses validated in ``__post_init__``.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Union


class PruningMode(str, Enum):
    """Post-processing applied to the growth-phase forest."""

    NONE = "none"
    SIMPLE = "simple"
    GW = "gw"
    STRONG = "strong"

    @classmethod
    def parse(cls, value: Union["PruningMode", str]) -> "PruningMode":
        """Accept a mode or its case-insensitive name."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            names = ", ".join(repr(m.value) for m in cls)
            raise ValueError(f"pruning must be one of {names}, got {value!r}") from None


@dataclass
class SolverConfig:
    """Configuration for a single PCST solve."""

    # ========== Algorithm ==========
    pruning: PruningMode = PruningMode.STRONG
    tolerance: float = 1e-9

    # ========== Graph input ==========
    cost_attr: str = "cost"  # edge attribute holding the edge cost
    default_edge_cost: float = 1.0  # used when an edge has no cost attribute

    # ========== Output ==========
    verbose: bool = False

    @classmethod
    def default(cls) -> "SolverConfig":
        """Strong pruning with a 1e-9 tolerance."""
        return cls()

    def __post_init__(self):
        """Validate configuration after initialization."""
        self.pruning = PruningMode.parse(self.pruning)
        if not math.isfinite(self.tolerance) or self.tolerance < 0:
            raise ValueError(f"tolerance must be finite and non-negative, got {self.tolerance}")
        if not math.isfinite(self.default_edge_cost) or self.default_edge_cost < 0:
            raise ValueError(
                f"default_edge_cost must be finite and non-negative, got {self.default_edge_cost}")
        if not self.cost_attr:
            raise ValueError("cost_attr must be a non-empty attribute name")

    def print_summary(self):
        """Print human-readable configuration summary."""
        print("=" * 60)
        print("PCST Solver Configuration")
        print("=" * 60)
        print(f"Pruning: {self.pruning.value}")
        print(f"Tolerance: {self.tolerance:g}")
        print(f"Cost attribute: {self.cost_attr} (default {self.default_edge_cost:g})")
        print("=" * 60)


@dataclass
class IterativeConfig:
    """Settings for the iterative (IPCST) refinement."""

    beta: float = 2.0  # prize scaling divisor applied at every level
    max_depth: int = 10

    def __post_init__(self):
        if not math.isfinite(self.beta) or self.beta <= 0:
            raise ValueError(f"beta must be positive, got {self.beta}")
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {self.max_depth}")


@dataclass
class ExtractorConfig:
    """Settings for knowledge-graph subgraph extraction."""

    budget: int = 70  # max nodes in the extracted subgraph
    pruning: PruningMode = PruningMode.STRONG
    tolerance: float = 1e-9
    cost_attr: str = "cost"
    default_edge_cost: float = 1.0
    verbose: bool = True  # print debug info per extraction, set False for batch loops

    def __post_init__(self):
        self.pruning = PruningMode.parse(self.pruning)
        if self.budget <= 0:
            raise ValueError(f"budget must be positive, got {self.budget}")
        if not math.isfinite(self.tolerance) or self.tolerance < 0:
            raise ValueError(f"tolerance must be finite and non-negative, got {self.tolerance}")
        if not math.isfinite(self.default_edge_cost) or self.default_edge_cost < 0:
            raise ValueError(
                f"default_edge_cost must be finite and non-negative, got {self.default_edge_cost}")

    def solver_config(self) -> SolverConfig:
        """Solver settings derived from this extractor configuration."""
        return SolverConfig(
            pruning=self.pruning,
            tolerance=self.tolerance,
            cost_attr=self.cost_attr,
            default_edge_cost=self.default_edge_cost,
            verbose=False,
        )
