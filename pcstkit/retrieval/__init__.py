"""
Retrieval helpers for extracting query-relevant subgraphs.
"""

from .subgraph import ExtractedSubgraph, SubgraphExtractor

__all__ = [
    "SubgraphExtractor",
    "ExtractedSubgraph",
]
