"""Schema layer for loading, validating and editing flow graphs."""

from .errors import GraphLoadError, GraphValidationError
from .models import (
    EdgeData,
    FeatureEdge,
    FeatureNode,
    FeatureNodeData,
    FlowGraph,
    Position,
    Rule,
    RuleOperator,
    RuleValue,
)
from .loader import (
    dump_graph,
    load_context,
    load_document,
    load_graph,
    parse_graph_from_string,
    save_graph,
)

__all__ = [
    "GraphLoadError",
    "GraphValidationError",
    "EdgeData",
    "FeatureEdge",
    "FeatureNode",
    "FeatureNodeData",
    "FlowGraph",
    "Position",
    "Rule",
    "RuleOperator",
    "RuleValue",
    "dump_graph",
    "load_context",
    "load_document",
    "load_graph",
    "parse_graph_from_string",
    "save_graph",
]
