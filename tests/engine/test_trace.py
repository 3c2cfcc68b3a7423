"""Tests for ancestor tracing."""

import networkx as nx

from featureflow.engine.trace import trace_ancestors
from featureflow.schema.models import FeatureEdge


def edge(edge_id, source, target):
    return FeatureEdge(id=edge_id, source=source, target=target)


class TestTraceAncestors:
    def test_chain_from_leaf(self, chain_graph):
        result = trace_ancestors("D", chain_graph.edges)

        assert result.highlighted_nodes == {"A", "B", "C", "D"}
        assert result.highlighted_edges == {"ab", "bc", "cd"}

    def test_chain_from_root(self, chain_graph):
        result = trace_ancestors("A", chain_graph.edges)

        assert result.highlighted_nodes == {"A"}
        assert result.highlighted_edges == set()

    def test_chain_from_middle(self, chain_graph):
        result = trace_ancestors("B", chain_graph.edges)

        assert result.highlighted_nodes == {"A", "B"}
        assert result.highlighted_edges == {"ab"}

    def test_ignores_rules(self, gated_graph):
        result = trace_ancestors("reports", gated_graph.edges)

        assert result.highlighted_nodes == {"home", "admin", "reports"}
        assert result.highlighted_edges == {"home-admin", "admin-reports"}

    def test_diamond_collects_all_paths(self):
        edges = [
            edge("ab", "A", "B"),
            edge("ac", "A", "C"),
            edge("bd", "B", "D"),
            edge("cd", "C", "D"),
            edge("de", "D", "E"),
        ]

        result = trace_ancestors("D", edges)

        assert result.highlighted_nodes == {"A", "B", "C", "D"}
        assert result.highlighted_edges == {"ab", "ac", "bd", "cd"}

    def test_cycle_terminates(self):
        edges = [edge("ab", "A", "B"), edge("bc", "B", "C"), edge("ca", "C", "A")]

        result = trace_ancestors("A", edges)

        assert result.highlighted_nodes == {"A", "B", "C"}
        assert result.highlighted_edges == {"ab", "bc", "ca"}

    def test_unknown_focus_node(self, chain_graph):
        result = trace_ancestors("nowhere", chain_graph.edges)

        assert result.highlighted_nodes == {"nowhere"}
        assert result.highlighted_edges == set()

    def test_matches_networkx_ancestors(self, gated_graph, gated_feature_graph):
        for node in gated_graph.nodes:
            result = trace_ancestors(node.id, gated_graph.edges)

            assert result.highlighted_nodes == nx.ancestors(gated_feature_graph.graph, node.id) | {node.id}
