"""Tests for graph builder."""

from featureflow.graph.builder import build_graph
from featureflow.graph.node_types import NodeKind


class TestBuildGraph:
    def test_build_features(self, chain_graph):
        graph = build_graph(chain_graph)

        assert graph.get_feature_ids() == ["A", "B", "C", "D"]
        assert graph.graph.nodes["A"]["label"] == "Start"

    def test_build_paths(self, chain_graph):
        graph = build_graph(chain_graph)

        paths = [(edge_id, s, t) for edge_id, s, t, _ in graph.iter_paths()]
        assert sorted(paths) == [("ab", "A", "B"), ("bc", "B", "C"), ("cd", "C", "D")]

    def test_dangling_endpoint_not_a_feature(self, examples_dir):
        from featureflow.schema.loader import load_graph

        graph = build_graph(load_graph(examples_dir / "invalid" / "dangling_edge.json"))

        assert graph.get_missing_ids() == ["X"]
        assert graph.graph.nodes["X"]["kind"] == NodeKind.MISSING
        assert graph.get_feature_ids() == ["A", "B", "C"]
