"""
PCST subgraph extraction for context retrieval.

Prize structure: callers score the nodes relevant to a query (for example by
embedding similarity) and pass those scores as prizes. Unscored nodes have
zero prize and survive only if they connect high-prize nodes cheaply enough
to justify the edge cost. The selected tree is then capped to a node budget
by peeling the lowest-prize leaves, so the result stays connected.
"""

import time
from dataclasses import dataclass
from typing import Hashable, Mapping, Optional

import networkx as nx

from ..config import ExtractorConfig
from ..core.solver import PCSTResult, PCSTSolver


@dataclass
class ExtractedSubgraph:
    """Container for extraction results."""
    subgraph: nx.Graph
    result: PCSTResult
    root: Optional[Hashable]
    num_nodes: int
    num_edges: int
    extraction_time_ms: float
    trimmed: int = 0  # nodes removed to meet the budget


class SubgraphExtractor:
    """Extract query-relevant connected subgraphs with the PCST solver."""

    def __init__(self, config: Optional[ExtractorConfig] = None):
        """
        Args:
            config: Budget, pruning and cost settings. Defaults to a 70-node
                budget with strong pruning.
        """
        self.config = config or ExtractorConfig()
        self.solver = PCSTSolver(self.config.solver_config())

    def extract(
        self,
        G: nx.Graph,
        prizes: Mapping[Hashable, float],
        root: Optional[Hashable] = None,
    ) -> ExtractedSubgraph:
        """
        Extract the prize-maximizing subgraph of ``G``.

        Pipeline:
        1. PCST: select the prize-maximizing forest (tree when rooted)
        2. Materialize: copy the selected nodes and edges with their attributes
        3. Budget: trim lowest-prize leaves until within budget

        Args:
            G: Knowledge graph (any networkx graph class); not modified.
            prizes: node -> relevance score. Missing nodes get 0.
            root: Optional node the subgraph must be anchored on.

        Returns:
            ExtractedSubgraph with a simple (non-multi) graph of the same
            directedness as ``G``.
        """
        start_time = time.time()

        result = self.solver.solve(G, prizes, root)
        subgraph = self._materialize(G, result)
        if self.config.verbose:
            print(f"  PCST selected: {len(subgraph)} nodes, "
                  f"{subgraph.number_of_edges()} edges "
                  f"(prize={result.prize:.4g}, cost={result.edge_cost:.4g})")

        trimmed = 0
        if len(subgraph) > self.config.budget:
            pre = len(subgraph)
            subgraph = self._trim_to_budget(subgraph, prizes, root)
            trimmed = pre - len(subgraph)
            if self.config.verbose:
                print(f"  Trimmed: {pre} -> {len(subgraph)} nodes")

        elapsed_ms = (time.time() - start_time) * 1000
        return ExtractedSubgraph(
            subgraph=subgraph,
            result=result,
            root=root if root in subgraph else None,
            num_nodes=len(subgraph),
            num_edges=subgraph.number_of_edges(),
            extraction_time_ms=elapsed_ms,
            trimmed=trimmed,
        )

    # ------------------------------------------------------------------
    # Materialization and trimming
    # ------------------------------------------------------------------

    def _materialize(self, G: nx.Graph, result: PCSTResult) -> nx.Graph:
        """Copy selected nodes and edges (cheapest parallel edge) with attributes."""
        H = nx.DiGraph() if G.is_directed() else nx.Graph()
        H.graph.update(G.graph)
        for node in G.nodes():
            if node in result.nodes:
                H.add_node(node, **G.nodes[node])

        cost_attr = self.config.cost_attr
        default = self.config.default_edge_cost
        for u, v in result.edges:
            data = G.get_edge_data(u, v)
            if G.is_multigraph():
                data = min(data.values(), key=lambda d: d.get(cost_attr, default))
            H.add_edge(u, v, **data)
        return H

    def _trim_to_budget(self, subgraph: nx.Graph, prizes: Mapping[Hashable, float],
                        root: Optional[Hashable] = None) -> nx.Graph:
        """Trim to budget by iteratively removing lowest-prize leaves."""
        G = subgraph.copy()
        G_und = G.to_undirected(as_view=True) if G.is_directed() else G

        while len(G) > self.config.budget:
            leaves = [n for n in G.nodes() if G_und.degree(n) <= 1 and n != root]
            if not leaves:
                break
            worst_leaf = min(leaves, key=lambda n: prizes.get(n, 0.0))
            G.remove_node(worst_leaf)

        return G

    def validate_subgraph(self, extracted: ExtractedSubgraph) -> bool:
        """Check that the subgraph is within budget and, when rooted, connected."""
        subgraph = extracted.subgraph
        if len(subgraph) > self.config.budget:
            return False
        if extracted.root is None or len(subgraph) == 0:
            return True
        if subgraph.is_directed():
            return nx.is_weakly_connected(subgraph)
        return nx.is_connected(subgraph)
