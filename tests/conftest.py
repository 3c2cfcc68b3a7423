"""Shared fixtures for tests."""

from pathlib import Path

import pytest

from featureflow.graph.builder import build_graph
from featureflow.schema.loader import parse_graph_from_string


@pytest.fixture
def examples_dir() -> Path:
    """Return the path to the examples directory."""
    return Path(__file__).parent.parent / "examples"


@pytest.fixture
def chain_graph_yaml() -> str:
    """Return a linear A -> B -> C -> D graph without rules."""
    return """
nodes:
  - {id: A, position: {x: 0, y: 0}, data: {label: Start}}
  - {id: B, position: {x: 0, y: 100}, data: {label: Middle}}
  - {id: C, position: {x: 0, y: 200}, data: {label: Later}}
  - {id: D, position: {x: 0, y: 300}, data: {label: End}}
edges:
  - {id: ab, source: A, target: B}
  - {id: bc, source: B, target: C}
  - {id: cd, source: C, target: D}
"""


@pytest.fixture
def gated_graph_yaml() -> str:
    """Return a graph whose paths are gated by rules."""
    return """
nodes:
  - {id: home, position: {x: 0, y: 0}, data: {label: Home}}
  - {id: admin, position: {x: 0, y: 100}, data: {label: Admin}}
  - {id: reports, position: {x: 0, y: 200}, data: {label: Reports}}
  - {id: beta, position: {x: 200, y: 100}, data: {label: Beta}}
edges:
  - id: home-admin
    source: home
    target: admin
    data:
      rules:
        - {id: r1, condition: role, operator: is, value: admin}
  - id: admin-reports
    source: admin
    target: reports
    data:
      rules:
        - {id: r2, condition: seats, operator: greater_than, value: 10}
  - id: home-beta
    source: home
    target: beta
    data:
      rules:
        - {id: r3, condition: beta_enabled, operator: is, value: true}
"""


@pytest.fixture
def chain_graph(chain_graph_yaml):
    """Return the parsed chain graph."""
    return parse_graph_from_string(chain_graph_yaml, "yaml")


@pytest.fixture
def gated_graph(gated_graph_yaml):
    """Return the parsed gated graph."""
    return parse_graph_from_string(gated_graph_yaml, "yaml")


@pytest.fixture
def chain_feature_graph(chain_graph):
    """Return a feature graph built from the chain graph."""
    return build_graph(chain_graph)


@pytest.fixture
def gated_feature_graph(gated_graph):
    """Return a feature graph built from the gated graph."""
    return build_graph(gated_graph)
