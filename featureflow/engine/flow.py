"""Reachability propagation through a flow graph under a simulation context."""

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Sequence

from ..schema.models import FeatureEdge, FeatureNode
from .rules import SimulationState, evaluate_edge_rules

logger = logging.getLogger(__name__)


@dataclass
class FlowEvaluationResult:
    """Which nodes are reachable and which edges can be traversed."""

    reachable_nodes: set[str] = field(default_factory=set)
    valid_edges: dict[str, bool] = field(default_factory=dict)

    def is_reachable(self, node_id: str) -> bool:
        return node_id in self.reachable_nodes

    def is_valid(self, edge_id: str) -> bool:
        return self.valid_edges.get(edge_id, False)


def find_root_nodes(
    nodes: Sequence[FeatureNode], edges: Sequence[FeatureEdge]
) -> list[str]:
    """Get ids of nodes that are not the target of any edge, in input order."""
    targeted = {edge.target for edge in edges}
    return [node.id for node in nodes if node.id not in targeted]


def evaluate_flow(
    nodes: Sequence[FeatureNode],
    edges: Sequence[FeatureEdge],
    state: SimulationState,
) -> FlowEvaluationResult:
    """Propagate reachability from the root nodes along rule-satisfied edges.

    Roots are always reachable. An edge is valid when its source is
    reachable and all of its rules pass; a valid edge makes its target
    reachable. Edges never reached by the traversal are recorded as
    invalid, so every input edge has an entry in ``valid_edges``.

    Args:
        nodes: Node snapshot.
        edges: Edge snapshot; endpoints are expected to name nodes.
        state: Current condition values.

    Returns:
        The FlowEvaluationResult for this snapshot.
    """
    result = FlowEvaluationResult()

    roots = find_root_nodes(nodes, edges)
    result.reachable_nodes.update(roots)

    outgoing: dict[str, list[FeatureEdge]] = {}
    for edge in edges:
        outgoing.setdefault(edge.source, []).append(edge)

    # BFS from all roots; each node is expanded at most once
    queue: deque[str] = deque(roots)
    expanded: set[str] = set()

    while queue:
        node_id = queue.popleft()
        if node_id in expanded:
            continue
        expanded.add(node_id)

        for edge in outgoing.get(node_id, []):
            edge_valid = (
                edge.source in result.reachable_nodes
                and evaluate_edge_rules(edge, state)
            )
            result.valid_edges[edge.id] = edge_valid

            if edge_valid:
                result.reachable_nodes.add(edge.target)
                queue.append(edge.target)

    # Edges in disconnected or blocked parts of the graph
    for edge in edges:
        result.valid_edges.setdefault(edge.id, False)

    logger.debug(
        "Flow evaluated: %d root(s), %d/%d node(s) reachable, %d/%d edge(s) valid",
        len(roots),
        len(result.reachable_nodes),
        len(nodes),
        sum(result.valid_edges.values()),
        len(result.valid_edges),
    )
    return result
