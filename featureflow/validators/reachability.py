"""Structural reachability validators."""

from ..graph.feature_graph import FeatureGraph
from .base import ValidationResult


def check_rootless_components(graph: FeatureGraph) -> ValidationResult:
    """Check for connected groups of features that contain no root.

    Every feature in such a group has an incoming path, typically because
    the group is a cycle. Simulation starts only from roots, so nothing in
    the group can become reachable under any context.

    Args:
        graph: The feature graph to check.

    Returns:
        ValidationResult with one warning per rootless component.
    """
    result = ValidationResult()

    for component in graph.get_rootless_components():
        result.add_warning(
            code="NO_ROOT_COMPONENT",
            message=(
                f"Nodes {', '.join(repr(n) for n in component)} all have incoming "
                "paths; none of them can be reached during simulation"
            ),
            node=component[0],
            nodes=component,
        )

    return result


def check_self_loops(graph: FeatureGraph) -> ValidationResult:
    """Report paths that lead back to their own source."""
    result = ValidationResult()

    for edge_id in graph.get_self_loops():
        result.add_info(
            code="SELF_LOOP",
            message="Path leads back to its own source node",
            edge=edge_id,
        )

    return result
