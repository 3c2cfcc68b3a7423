"""Validation runner that orchestrates all validators."""

from pathlib import Path

from ..graph.builder import build_graph
from ..graph.feature_graph import FeatureGraph
from ..schema.loader import load_graph
from ..schema.models import FlowGraph
from .base import ValidationResult
from .orphan_detector import check_isolated_nodes
from .reachability import check_rootless_components, check_self_loops
from .reference_integrity import check_dangling_edges, check_duplicate_ids
from .rules import check_duplicate_rule_ids, check_rule_operators


def run_validators(flow: FlowGraph, graph: FeatureGraph) -> ValidationResult:
    """Run all validators on a flow graph.

    Args:
        flow: The parsed flow graph.
        graph: The feature graph built from it.

    Returns:
        Combined ValidationResult from all validators.
    """
    result = ValidationResult()

    # Reference integrity first (the engine assumes it holds)
    result.merge(check_duplicate_ids(flow))
    result.merge(check_dangling_edges(flow, graph))

    result.merge(check_isolated_nodes(graph))
    result.merge(check_rootless_components(graph))
    result.merge(check_self_loops(graph))

    result.merge(check_rule_operators(flow))
    result.merge(check_duplicate_rule_ids(flow))

    return result


def validate_graph(flow: FlowGraph) -> ValidationResult:
    """Build the feature graph and run all validators."""
    return run_validators(flow, build_graph(flow))


def validate_graph_file(path: str | Path) -> ValidationResult:
    """Load and validate a graph file.

    Args:
        path: Path to the JSON or YAML graph file.

    Returns:
        ValidationResult from all validators.

    Raises:
        GraphLoadError: If the file cannot be loaded.
        GraphValidationError: If the document is structurally incomplete.
    """
    return validate_graph(load_graph(path))
