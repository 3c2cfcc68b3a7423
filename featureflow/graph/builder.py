"""Builder for converting a FlowGraph document into a FeatureGraph."""

from ..schema.models import FlowGraph
from .feature_graph import FeatureGraph


def build_graph(flow: FlowGraph) -> FeatureGraph:
    """Build a FeatureGraph from a FlowGraph.

    Args:
        flow: The parsed flow graph.

    Returns:
        A FeatureGraph representing the flow.
    """
    graph = FeatureGraph()

    # Add all features first so edges can tell declared nodes from missing ones
    for node in flow.nodes:
        graph.add_feature(
            node.id,
            node.data.label,
            description=node.data.description,
        )

    for edge in flow.edges:
        graph.add_path(edge.id, edge.source, edge.target, edge.rules)

    return graph
