"""
Prize-Collecting Steiner Tree solver.

Given a weighted graph, a prize per node and an optional root, select a forest
(or, when rooted, a single tree containing the root) that approximately
maximizes collected prize minus paid edge cost. Runs the Goemans-Williamson
growth phase followed by the configured pruning.

The graph is read once into an index-addressed :class:`PCSTInstance`:
direction is ignored, self-loops are dropped and parallel edges are
coalesced to their cheapest cost. Nothing is cached between calls.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, List, Mapping, Optional, Sequence, Set, Tuple

import networkx as nx
import numpy as np

from ..config import SolverConfig
from ..exceptions import InvalidEdgeCostError, InvalidPrizeError, InvalidRootError
from .growth import GrowthResult, run_growth
from .pruning import prune


@dataclass
class PCSTResult:
    """Selected nodes and edges plus their accounting."""
    nodes: Set[Hashable] = field(default_factory=set)
    edges: Set[Tuple[Hashable, Hashable]] = field(default_factory=set)
    edge_cost: float = 0.0  # sum of selected edge costs
    prize: float = 0.0  # sum of selected node prizes
    penalty: float = 0.0  # sum of prizes left uncollected

    @property
    def net_value(self) -> float:
        return self.prize - self.edge_cost

    @property
    def total_cost(self) -> float:
        """Edge cost plus the prizes of excluded nodes (the minimized objective)."""
        return self.edge_cost + self.penalty

    @property
    def num_nodes(self) -> int:
        return len(self.nodes)

    @property
    def num_edges(self) -> int:
        return len(self.edges)


def _as_float(value: Any) -> float:
    if isinstance(value, bool):
        raise TypeError("boolean is not a numeric weight")
    return float(value)


def _is_root_given(root: Any) -> bool:
    return root is not None and not (isinstance(root, str) and root == "")


@dataclass
class PCSTInstance:
    """Index-addressed, normalized form of one solve input."""
    nodes: List[Hashable]
    prizes: np.ndarray  # (n,) float64
    edges: np.ndarray  # (m, 2) int64, u < v
    costs: np.ndarray  # (m,) float64
    edge_labels: List[Tuple[Hashable, Hashable]]  # endpoints as given by the cheapest input edge
    root: Optional[int] = None

    @property
    def num_nodes(self) -> int:
        return len(self.nodes)

    @property
    def num_edges(self) -> int:
        return len(self.edges)

    @classmethod
    def from_graph(
        cls,
        graph: nx.Graph,
        prizes: Optional[Mapping[Hashable, float]] = None,
        root: Optional[Hashable] = None,
        cost_attr: str = "cost",
        default_edge_cost: float = 1.0,
    ) -> "PCSTInstance":
        """Validate and index a networkx graph (any of the four graph classes)."""
        nodes = list(graph.nodes())
        node_to_idx = {node: i for i, node in enumerate(nodes)}

        root_idx = None
        if _is_root_given(root):
            if root not in node_to_idx:
                raise InvalidRootError(root)
            root_idx = node_to_idx[root]

        prize_array = _prize_array(prizes or {}, node_to_idx)

        raw_edges = []
        for u, v, data in graph.edges(data=True):
            cost = data.get(cost_attr, default_edge_cost)
            raw_edges.append((node_to_idx[u], node_to_idx[v], cost, (u, v)))

        edges, costs, labels = _normalize_edges(raw_edges)
        return cls(nodes, prize_array, edges, costs, labels, root_idx)

    @classmethod
    def from_arrays(
        cls,
        prizes: Sequence[float],
        edges: Sequence[Sequence[int]],
        costs: Sequence[float],
        root: Optional[int] = None,
    ) -> "PCSTInstance":
        """Validate and normalize index-addressed input; nodes are ``0..n-1``."""
        prize_list = list(prizes)
        n = len(prize_list)
        nodes = list(range(n))
        node_to_idx = {i: i for i in nodes}

        root_idx = None
        if root is not None:
            if not isinstance(root, (int, np.integer)) or not 0 <= int(root) < n:
                raise InvalidRootError(root)
            root_idx = int(root)

        prize_array = _prize_array(dict(enumerate(prize_list)), node_to_idx)

        edge_list = [tuple(int(x) for x in edge) for edge in edges]
        cost_list = list(costs)
        if len(edge_list) != len(cost_list):
            raise ValueError(f"got {len(edge_list)} edges but {len(cost_list)} costs")
        raw_edges = []
        for (u, v), cost in zip(edge_list, cost_list):
            if not (0 <= u < n and 0 <= v < n):
                raise ValueError(f"edge ({u}, {v}) references a node outside 0..{n - 1}")
            raw_edges.append((u, v, cost, (u, v)))

        edges_arr, costs_arr, labels = _normalize_edges(raw_edges)
        return cls(nodes, prize_array, edges_arr, costs_arr, labels, root_idx)

    def with_prizes(self, prizes: np.ndarray) -> "PCSTInstance":
        """Same graph and root with a different prize vector."""
        return PCSTInstance(self.nodes, np.asarray(prizes, dtype=np.float64),
                            self.edges, self.costs, self.edge_labels, self.root)

    def to_result(self, edge_indices: Sequence[int]) -> PCSTResult:
        """Build a result from normalized edge indices, priced with this instance's prizes."""
        node_idx: Set[int] = set()
        for e in edge_indices:
            node_idx.add(int(self.edges[e][0]))
            node_idx.add(int(self.edges[e][1]))
        if self.root is not None:
            node_idx.add(self.root)

        edge_cost = float(sum(float(self.costs[e]) for e in edge_indices))
        prize = float(sum(float(self.prizes[i]) for i in node_idx))
        penalty = float(self.prizes.sum()) - prize
        return PCSTResult(
            nodes={self.nodes[i] for i in node_idx},
            edges={self.edge_labels[e] for e in edge_indices},
            edge_cost=edge_cost,
            prize=prize,
            penalty=max(penalty, 0.0),
        )


def _prize_array(prizes: Mapping[Hashable, Any], node_to_idx: Dict[Hashable, int]) -> np.ndarray:
    prize_array = np.zeros(len(node_to_idx), dtype=np.float64)
    for node, value in prizes.items():
        try:
            prize = _as_float(value)
        except (TypeError, ValueError):
            raise InvalidPrizeError(node, value) from None
        if not math.isfinite(prize) or prize < 0:
            raise InvalidPrizeError(node, value)
        idx = node_to_idx.get(node)
        if idx is not None:
            prize_array[idx] = prize
    return prize_array


def _normalize_edges(raw_edges):
    """Drop self-loops and keep the cheapest of parallel edges.

    Args:
        raw_edges: Iterable of (u_idx, v_idx, cost, label).

    Returns:
        (edges (m, 2) int64, costs (m,) float64, labels) ordered by (min, max)
        endpoint index.
    """
    best: Dict[Tuple[int, int], Tuple[float, Any]] = {}
    for u, v, value, label in raw_edges:
        try:
            cost = _as_float(value)
        except (TypeError, ValueError):
            raise InvalidEdgeCostError(label, value) from None
        if not math.isfinite(cost) or cost < 0:
            raise InvalidEdgeCostError(label, value)
        if u == v:
            continue
        key = (u, v) if u < v else (v, u)
        if key not in best or cost < best[key][0]:
            best[key] = (cost, label)

    keys = sorted(best)
    if not keys:
        return np.zeros((0, 2), dtype=np.int64), np.zeros(0, dtype=np.float64), []
    edges = np.array(keys, dtype=np.int64)
    costs = np.array([best[k][0] for k in keys], dtype=np.float64)
    labels = [best[k][1] for k in keys]
    return edges, costs, labels


class PCSTSolver:
    """Goemans-Williamson PCST approximation with configurable pruning."""

    def __init__(self, config: Optional[SolverConfig] = None):
        """
        Initialize PCST solver.

        Args:
            config: Pruning mode, tolerance and edge-cost attribute settings.
                Defaults to strong pruning with a 1e-9 tolerance.
        """
        self.config = config or SolverConfig.default()

    def solve(
        self,
        graph: nx.Graph,
        prizes: Optional[Mapping[Hashable, float]] = None,
        root: Optional[Hashable] = None,
    ) -> PCSTResult:
        """
        Select a prize-collecting forest (or rooted tree) from ``graph``.

        Args:
            graph: NetworkX graph; direction is ignored and it is not modified.
            prizes: node -> non-negative prize. Missing nodes get 0.
            root: Node that must be in the result. None or "" for forest mode.

        Returns:
            PCSTResult with the selected nodes and edges.

        Raises:
            InvalidRootError: root given but not in the graph.
            InvalidPrizeError: a prize is negative or not finite.
            InvalidEdgeCostError: an edge cost is negative or not finite.
        """
        instance = PCSTInstance.from_graph(
            graph, prizes, root,
            cost_attr=self.config.cost_attr,
            default_edge_cost=self.config.default_edge_cost,
        )
        return self.solve_instance(instance)

    def solve_arrays(
        self,
        prizes: Sequence[float],
        edges: Sequence[Sequence[int]],
        costs: Sequence[float],
        root: Optional[int] = None,
    ) -> PCSTResult:
        """Solve index-addressed input: nodes are ``0..len(prizes)-1``."""
        return self.solve_instance(PCSTInstance.from_arrays(prizes, edges, costs, root))

    def solve_instance(self, instance: PCSTInstance) -> PCSTResult:
        edge_indices, _ = self.run(instance)
        result = instance.to_result(edge_indices)
        if self.config.verbose:
            print(f"  Final: {result.num_nodes} nodes, {result.num_edges} edges, "
                  f"net value={result.net_value:.4g}")
        return result

    def run(self, instance: PCSTInstance) -> Tuple[List[int], GrowthResult]:
        """Run growth and pruning, returning kept edge indices and the raw growth output."""
        if instance.num_nodes == 0:
            return [], GrowthResult()

        if self.config.verbose:
            scored = int(np.count_nonzero(instance.prizes))
            root_name = instance.nodes[instance.root] if instance.root is not None else None
            print(f"  PCST input: {instance.num_nodes} nodes, {instance.num_edges} edges, "
                  f"pruning='{self.config.pruning.value}', {scored} scored nodes, "
                  f"root={root_name}")

        growth = run_growth(instance.prizes, instance.edges, instance.costs,
                            root=instance.root, tolerance=self.config.tolerance)
        kept = prune(growth.edges, instance.edges, instance.costs, instance.prizes,
                     root=instance.root, mode=self.config.pruning,
                     tolerance=self.config.tolerance)

        if self.config.verbose:
            print(f"  Growth: {len(growth.edges)} tight edges, "
                  f"{len(growth.saturated)} saturated nodes, t={growth.end_time:.4g}")
            print(f"  Pruned: {len(growth.edges)} -> {len(kept)} edges")
        return kept, growth
