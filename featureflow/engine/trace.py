"""Ancestor tracing: every node and edge on some backward path to a root."""

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Sequence

from ..schema.models import FeatureEdge

logger = logging.getLogger(__name__)


@dataclass
class TraceResult:
    """Nodes and edges to highlight for a focused node."""

    highlighted_nodes: set[str] = field(default_factory=set)
    highlighted_edges: set[str] = field(default_factory=set)


def trace_ancestors(focus_node_id: str, edges: Sequence[FeatureEdge]) -> TraceResult:
    """Collect the ancestor closure of a node by raw connectivity.

    Rules and the simulation context are ignored: this answers how the node
    could be reached at all, not whether it currently is.

    Args:
        focus_node_id: The node to trace back from.
        edges: Edge snapshot.

    Returns:
        TraceResult containing the focus node, its ancestors, and every edge
        leading into any of them.
    """
    incoming: dict[str, list[FeatureEdge]] = {}
    for edge in edges:
        incoming.setdefault(edge.target, []).append(edge)

    result = TraceResult(highlighted_nodes={focus_node_id})
    queue: deque[str] = deque([focus_node_id])

    while queue:
        node_id = queue.popleft()
        for edge in incoming.get(node_id, []):
            result.highlighted_edges.add(edge.id)
            if edge.source not in result.highlighted_nodes:
                result.highlighted_nodes.add(edge.source)
                queue.append(edge.source)

    logger.debug(
        "Traced '%s': %d ancestor(s), %d edge(s)",
        focus_node_id,
        len(result.highlighted_nodes) - 1,
        len(result.highlighted_edges),
    )
    return result
