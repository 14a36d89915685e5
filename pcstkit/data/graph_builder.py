"""
NetworkX knowledge-graph construction for PCST retrieval.

Builds graphs from extracted facts, either ``(subject, relation, object)``
triples with a uniform cost or ``(source, target, relation, confidence)``
quads. Confidence is turned into an edge cost (``1 - confidence``, floored
at ``min_cost``), so well-supported relations are cheap for the solver to
keep. When the same node pair is asserted more than once the cheapest
edge wins, which is what the solver would pick anyway.
"""

from collections import Counter
from typing import Iterable, Optional, Sequence

import networkx as nx


def confidence_to_cost(confidence: float, min_cost: float = 0.01) -> float:
    """Edge cost for a relation extracted with the given confidence."""
    return max(1.0 - float(confidence), min_cost)


class GraphBuilder:
    """
    Builder for NetworkX graphs from fact lists.

    Every edge carries a ``relation`` and a ``cost`` attribute. Nodes carry
    ``entity_name``.
    """

    def __init__(self, directed: bool = False, base_cost: float = 1.0,
                 min_cost: float = 0.01, verbose: bool = False):
        """
        Initialize the graph builder.

        Args:
            directed: If True, create directed graphs, else undirected (default).
            base_cost: Cost of triple edges, which carry no confidence.
            min_cost: Floor for costs derived from confidence.
            verbose: Print a summary after each build.
        """
        if base_cost < 0:
            raise ValueError(f"base_cost must be non-negative, got {base_cost}")
        if min_cost < 0:
            raise ValueError(f"min_cost must be non-negative, got {min_cost}")
        self.directed = directed
        self.base_cost = base_cost
        self.min_cost = min_cost
        self.verbose = verbose

    def _new_graph(self, graph_id: Optional[str]) -> nx.Graph:
        G = nx.DiGraph() if self.directed else nx.Graph()
        if graph_id:
            G.graph["id"] = graph_id
        return G

    def _add_fact(self, G: nx.Graph, source: str, target: str, relation: str, cost: float):
        G.add_node(source, entity_name=source)
        G.add_node(target, entity_name=target)
        if G.has_edge(source, target) and G[source][target]["cost"] <= cost:
            return
        G.add_edge(source, target, relation=relation, cost=cost)

    def build_from_triples(
        self,
        triples: Iterable[Sequence[str]],
        graph_id: Optional[str] = None
    ) -> nx.Graph:
        """
        Build a graph from [subject, relation, object] triples.

        Args:
            triples: Iterable of 3-item sequences
            graph_id: Optional identifier for the graph

        Returns:
            NetworkX Graph or DiGraph with ``base_cost`` on every edge
        """
        G = self._new_graph(graph_id)
        skipped = 0
        for triple in triples:
            if len(triple) != 3:
                print(f"Warning: Skipping invalid triple: {triple}")
                skipped += 1
                continue
            subject, relation, obj = triple
            self._add_fact(G, subject, obj, relation, self.base_cost)

        if self.verbose:
            print(f"✓ Graph built: {G.number_of_nodes()} nodes, "
                  f"{G.number_of_edges()} edges ({skipped} skipped)")
        return G

    def build_from_relations(
        self,
        relations: Iterable[Sequence],
        graph_id: Optional[str] = None
    ) -> nx.Graph:
        """
        Build a graph from (source, target, relation, confidence) quads.

        Args:
            relations: Iterable of 4-item sequences, confidence in [0, 1]
            graph_id: Optional identifier for the graph

        Returns:
            NetworkX Graph or DiGraph with confidence-derived edge costs
        """
        G = self._new_graph(graph_id)
        skipped = 0
        for item in relations:
            if len(item) != 4:
                print(f"Warning: Skipping invalid relation: {item}")
                skipped += 1
                continue
            source, target, relation, confidence = item
            if not 0.0 <= float(confidence) <= 1.0:
                raise ValueError(
                    f"confidence must be in [0, 1], got {confidence} for {source!r}->{target!r}")
            cost = confidence_to_cost(confidence, self.min_cost)
            self._add_fact(G, source, target, relation, cost)

        if self.verbose:
            print(f"✓ Graph built: {G.number_of_nodes()} nodes, "
                  f"{G.number_of_edges()} edges ({skipped} skipped)")
        return G

    def compute_graph_statistics(self, G: nx.Graph) -> dict:
        """
        Compute graph statistics relevant to PCST extraction.

        Args:
            G: NetworkX graph

        Returns:
            Dictionary of statistics
        """
        stats = {
            "num_nodes": G.number_of_nodes(),
            "num_edges": G.number_of_edges(),
            "is_directed": G.is_directed(),
            "density": nx.density(G) if G.number_of_nodes() > 1 else 0.0,
        }

        if G.number_of_nodes() == 0:
            stats["num_components"] = 0
        elif G.is_directed():
            stats["num_components"] = nx.number_weakly_connected_components(G)
        else:
            stats["num_components"] = nx.number_connected_components(G)

        relation_counts = Counter(
            data.get("relation", "unknown") for _, _, data in G.edges(data=True))
        stats["num_unique_relations"] = len(relation_counts)
        stats["top_relations"] = relation_counts.most_common(10)

        costs = [data.get("cost", self.base_cost) for _, _, data in G.edges(data=True)]
        stats["total_cost"] = float(sum(costs))
        stats["avg_cost"] = stats["total_cost"] / len(costs) if costs else 0.0

        degrees = [d for _, d in G.degree()]
        stats["avg_degree"] = sum(degrees) / len(degrees) if degrees else 0
        return stats
