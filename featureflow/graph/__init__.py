"""Graph layer for structural analysis of flow graphs with networkx."""

from .node_types import NodeKind
from .feature_graph import FeatureGraph
from .builder import build_graph

__all__ = [
    "NodeKind",
    "FeatureGraph",
    "build_graph",
]
