"""Knowledge-graph construction."""

from .graph_builder import GraphBuilder, confidence_to_cost

__all__ = [
    "GraphBuilder",
    "confidence_to_cost",
]
