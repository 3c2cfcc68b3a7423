"""FeatureGraph wrapper around networkx for flow graphs."""

from typing import Any, Iterator

import networkx as nx

from ..schema.models import Rule
from .node_types import NodeKind


class FeatureGraph:
    """A structural view of a flow graph.

    Wraps a networkx MultiDiGraph keyed by edge id, so parallel paths
    between the same pair of features are kept apart. Endpoints that are
    referenced by an edge but not declared as features are kept as
    ``NodeKind.MISSING`` nodes instead of being silently invented.
    """

    def __init__(self):
        """Initialize an empty feature graph."""
        self._graph = nx.MultiDiGraph()

    @property
    def graph(self) -> nx.MultiDiGraph:
        """Get the underlying networkx graph."""
        return self._graph

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    def add_feature(self, node_id: str, label: str, **attrs: Any) -> str:
        """Add a declared feature node.

        Args:
            node_id: The node id.
            label: The feature label.
            **attrs: Additional attributes for the node.

        Returns:
            The node ID.
        """
        self._graph.add_node(node_id, kind=NodeKind.FEATURE, label=label, **attrs)
        return node_id

    def add_path(
        self,
        edge_id: str,
        source: str,
        target: str,
        rules: list[Rule] | None = None,
    ) -> None:
        """Add a path (edge) between two nodes.

        Args:
            edge_id: The edge id, used as the multigraph key.
            source: Source node id.
            target: Target node id.
            rules: Rules gating the path.
        """
        for endpoint in (source, target):
            if not self._graph.has_node(endpoint):
                self._graph.add_node(endpoint, kind=NodeKind.MISSING, label=None)

        self._graph.add_edge(source, target, key=edge_id, rules=rules or [])

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def _ids_of_kind(self, kind: NodeKind) -> list[str]:
        return [
            node_id
            for node_id, data in self._graph.nodes(data=True)
            if data.get("kind") == kind
        ]

    def get_feature_ids(self) -> list[str]:
        """Get ids of all declared features."""
        return self._ids_of_kind(NodeKind.FEATURE)

    def get_missing_ids(self) -> list[str]:
        """Get ids referenced by edges but never declared."""
        return self._ids_of_kind(NodeKind.MISSING)

    def is_feature(self, node_id: str) -> bool:
        """Check whether an id names a declared feature."""
        return (
            self._graph.has_node(node_id)
            and self._graph.nodes[node_id].get("kind") == NodeKind.FEATURE
        )

    def get_root_ids(self) -> list[str]:
        """Get declared features with no incoming paths."""
        return [
            node_id
            for node_id in self.get_feature_ids()
            if self._graph.in_degree(node_id) == 0
        ]

    def get_isolated_ids(self) -> list[str]:
        """Get declared features with no paths in or out."""
        return [
            node_id
            for node_id in self.get_feature_ids()
            if self._graph.degree(node_id) == 0
        ]

    def get_rootless_components(self) -> list[list[str]]:
        """Get connected groups of features in which no feature is a root.

        Nothing in such a group can ever become reachable during simulation,
        whatever the context.

        Returns:
            Sorted feature id lists, one per rootless component.
        """
        roots = set(self.get_root_ids())
        components = []
        for component in nx.weakly_connected_components(self._graph):
            features = sorted(n for n in component if self.is_feature(n))
            if features and roots.isdisjoint(features):
                components.append(features)
        return sorted(components)

    def iter_paths(self) -> Iterator[tuple[str, str, str, list[Rule]]]:
        """Iterate over all paths.

        Yields:
            Tuples of (edge_id, source, target, rules).
        """
        for source, target, key, data in self._graph.edges(keys=True, data=True):
            yield key, source, target, data.get("rules", [])

    def get_self_loops(self) -> list[str]:
        """Get ids of paths whose source is their target."""
        return [
            edge_id
            for edge_id, source, target, _ in self.iter_paths()
            if source == target
        ]
