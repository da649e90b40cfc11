"""Graph-indexed power manifolds."""

from .graph import GraphLike, IndexedGraph, as_graph
from .graph_manifold import GraphManifold, GraphManifoldType

__all__ = [
    "GraphLike",
    "GraphManifold",
    "GraphManifoldType",
    "IndexedGraph",
    "as_graph",
]
