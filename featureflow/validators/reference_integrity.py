"""Reference integrity validators: unique ids and resolvable endpoints."""

from collections import Counter

from ..graph.feature_graph import FeatureGraph
from ..schema.models import FlowGraph
from .base import ValidationResult


def check_duplicate_ids(flow: FlowGraph) -> ValidationResult:
    """Check that node ids and edge ids are unique.

    Args:
        flow: The parsed flow graph.

    Returns:
        ValidationResult with an error per duplicated id.
    """
    result = ValidationResult()

    node_counts = Counter(node.id for node in flow.nodes)
    for node_id, count in node_counts.items():
        if count > 1:
            result.add_error(
                code="DUPLICATE_NODE_ID",
                message=f"Node id '{node_id}' is used by {count} nodes",
                node=node_id,
                count=count,
            )

    edge_counts = Counter(edge.id for edge in flow.edges)
    for edge_id, count in edge_counts.items():
        if count > 1:
            result.add_error(
                code="DUPLICATE_EDGE_ID",
                message=f"Edge id '{edge_id}' is used by {count} edges",
                edge=edge_id,
                count=count,
            )

    return result


def check_dangling_edges(flow: FlowGraph, graph: FeatureGraph) -> ValidationResult:
    """Check that every edge endpoint refers to a declared node.

    Reachability is undefined for an edge with a missing endpoint, so these
    must be repaired before simulating.

    Args:
        flow: The parsed flow graph.
        graph: The feature graph.

    Returns:
        ValidationResult with errors for unresolved endpoints.
    """
    result = ValidationResult()
    missing = set(graph.get_missing_ids())

    for edge in flow.edges:
        for role, endpoint in (("source", edge.source), ("target", edge.target)):
            if endpoint in missing:
                result.add_error(
                    code="DANGLING_EDGE",
                    message=f"Edge {role} references undefined node '{endpoint}'",
                    edge=edge.id,
                    referenced_node=endpoint,
                    endpoint=role,
                )

    return result
