"""Isolated node detection validator."""

from ..graph.feature_graph import FeatureGraph
from .base import ValidationResult


def check_isolated_nodes(graph: FeatureGraph) -> ValidationResult:
    """Check for features with no paths in or out.

    A graph made only of unconnected features is a valid starting point, so
    this only warns once the graph has at least one path.

    Args:
        graph: The feature graph to check.

    Returns:
        ValidationResult with warnings for isolated features.
    """
    result = ValidationResult()

    if graph.graph.number_of_edges() == 0:
        return result

    for node_id in graph.get_isolated_ids():
        result.add_warning(
            code="ISOLATED_NODE",
            message=f"Node '{node_id}' has no paths to or from other nodes",
            node=node_id,
        )

    return result
