"""Pydantic models for feature flow graphs."""

import secrets
from enum import Enum
from typing import Any, Iterable

from pydantic import BaseModel, ConfigDict, Field, model_validator

RuleValue = bool | int | float | str


class RuleOperator(str, Enum):
    """Operators a rule can apply to a condition value."""

    IS = "is"
    IS_NOT = "is_not"
    GREATER_THAN = "greater_than"
    LESS_THAN = "less_than"


def _short_id(nbytes: int = 4) -> str:
    return secrets.token_hex(nbytes)


class Rule(BaseModel):
    """A single predicate on an edge, e.g. ``role is "admin"``."""

    id: str = Field(default_factory=lambda: _short_id(3))
    condition: str
    # Kept as a plain string so graphs with operators this version does not
    # know about still load; see validators.rules.check_rule_operators.
    operator: str = RuleOperator.IS.value
    value: RuleValue


class Position(BaseModel):
    """Canvas position of a node. Not used by the engine."""

    x: float = 0.0
    y: float = 0.0


class FeatureNodeData(BaseModel):
    """Display data stored on each node."""

    model_config = ConfigDict(extra="allow")

    label: str
    description: str | None = None


class FeatureNode(BaseModel):
    """A feature in the flow graph."""

    model_config = ConfigDict(extra="allow")

    id: str
    type: str = "feature"
    position: Position = Field(default_factory=Position)
    data: FeatureNodeData

    @property
    def label(self) -> str:
        return self.data.label


class EdgeData(BaseModel):
    """Payload of an edge: its ordered rule list."""

    model_config = ConfigDict(extra="allow")

    rules: list[Rule] = Field(default_factory=list)


class FeatureEdge(BaseModel):
    """A conditional path between two features."""

    model_config = ConfigDict(extra="allow")

    id: str
    source: str
    target: str
    data: EdgeData = Field(default_factory=EdgeData)

    @model_validator(mode="before")
    @classmethod
    def normalize_data(cls, data: Any) -> Any:
        """Treat a missing or null ``data`` / ``rules`` as an empty rule list."""
        if not isinstance(data, dict):
            return data
        payload = data.get("data")
        if payload is None:
            data["data"] = {"rules": []}
        elif isinstance(payload, dict) and payload.get("rules") is None:
            payload["rules"] = []
        return data

    @property
    def rules(self) -> list[Rule]:
        return self.data.rules


class FlowGraph(BaseModel):
    """An immutable-by-convention snapshot of nodes and edges.

    Editing methods never mutate the receiver; each returns a new
    ``FlowGraph`` so callers can hand consistent snapshots to the engine.
    """

    nodes: list[FeatureNode] = Field(default_factory=list)
    edges: list[FeatureEdge] = Field(default_factory=list)

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def get_node(self, node_id: str) -> FeatureNode | None:
        """Get a node by id."""
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def get_edge(self, edge_id: str) -> FeatureEdge | None:
        """Get an edge by id."""
        for edge in self.edges:
            if edge.id == edge_id:
                return edge
        return None

    def get_node_ids(self) -> list[str]:
        """Get all node ids in document order."""
        return [node.id for node in self.nodes]

    def _require_node(self, node_id: str) -> FeatureNode:
        node = self.get_node(node_id)
        if node is None:
            raise KeyError(f"Unknown node '{node_id}'")
        return node

    def _require_edge(self, edge_id: str) -> FeatureEdge:
        edge = self.get_edge(edge_id)
        if edge is None:
            raise KeyError(f"Unknown edge '{edge_id}'")
        return edge

    # -------------------------------------------------------------------------
    # Node editing
    # -------------------------------------------------------------------------

    def add_node(
        self,
        label: str,
        position: Position | None = None,
        parent_id: str | None = None,
        node_id: str | None = None,
    ) -> tuple["FlowGraph", str]:
        """Add a node, optionally connected from a parent.

        Args:
            label: The feature label.
            position: Canvas position (defaults to the origin).
            parent_id: If given, an unconditional edge parent -> new node is added.
            node_id: Explicit id; a short random id is generated otherwise.

        Returns:
            The new graph and the id of the added node.
        """
        if parent_id is not None:
            self._require_node(parent_id)

        new_id = node_id or _short_id()
        node = FeatureNode(
            id=new_id,
            position=position or Position(),
            data=FeatureNodeData(label=label),
        )
        edges = list(self.edges)
        if parent_id is not None:
            edges.append(
                FeatureEdge(id=f"e-{parent_id}-{new_id}", source=parent_id, target=new_id)
            )
        return FlowGraph(nodes=[*self.nodes, node], edges=edges), new_id

    def update_node(
        self,
        node_id: str,
        label: str | None = None,
        description: str | None = None,
    ) -> "FlowGraph":
        """Return a graph with the node's label and/or description replaced."""
        self._require_node(node_id)

        changes: dict[str, Any] = {}
        if label is not None:
            changes["label"] = label
        if description is not None:
            changes["description"] = description

        nodes = [
            node.model_copy(update={"data": node.data.model_copy(update=changes)})
            if node.id == node_id
            else node
            for node in self.nodes
        ]
        return FlowGraph(nodes=nodes, edges=list(self.edges))

    def remove_nodes(self, node_ids: Iterable[str]) -> "FlowGraph":
        """Remove nodes together with every edge touching them."""
        ids = set(node_ids)
        return FlowGraph(
            nodes=[node for node in self.nodes if node.id not in ids],
            edges=[
                edge
                for edge in self.edges
                if edge.source not in ids and edge.target not in ids
            ],
        )

    def remove_node(self, node_id: str) -> "FlowGraph":
        """Remove a node together with every edge touching it."""
        return self.remove_nodes([node_id])

    # -------------------------------------------------------------------------
    # Edge editing
    # -------------------------------------------------------------------------

    def connect(
        self, source: str, target: str, edge_id: str | None = None
    ) -> tuple["FlowGraph", str]:
        """Add an unconditional edge between two existing nodes."""
        self._require_node(source)
        self._require_node(target)

        new_id = edge_id or _short_id()
        edge = FeatureEdge(id=new_id, source=source, target=target)
        return FlowGraph(nodes=list(self.nodes), edges=[*self.edges, edge]), new_id

    def remove_edge(self, edge_id: str) -> "FlowGraph":
        """Remove a single edge."""
        self._require_edge(edge_id)
        return FlowGraph(
            nodes=list(self.nodes),
            edges=[edge for edge in self.edges if edge.id != edge_id],
        )

    # -------------------------------------------------------------------------
    # Rule editing
    # -------------------------------------------------------------------------

    def _with_rules(self, edge_id: str, rules: list[Rule]) -> "FlowGraph":
        edges = [
            edge.model_copy(update={"data": edge.data.model_copy(update={"rules": rules})})
            if edge.id == edge_id
            else edge
            for edge in self.edges
        ]
        return FlowGraph(nodes=list(self.nodes), edges=edges)

    def add_rule(
        self,
        edge_id: str,
        condition: str,
        operator: str,
        value: RuleValue,
    ) -> tuple["FlowGraph", str]:
        """Append a rule to an edge's rule list."""
        edge = self._require_edge(edge_id)
        rule = Rule(condition=condition, operator=RuleOperator(operator).value, value=value)
        return self._with_rules(edge_id, [*edge.rules, rule]), rule.id

    def update_rule(self, edge_id: str, rule_id: str, **changes: Any) -> "FlowGraph":
        """Replace fields (condition, operator, value) of one rule."""
        edge = self._require_edge(edge_id)
        if not any(rule.id == rule_id for rule in edge.rules):
            raise KeyError(f"Unknown rule '{rule_id}' on edge '{edge_id}'")

        rules = [
            Rule.model_validate({**rule.model_dump(), **changes})
            if rule.id == rule_id
            else rule
            for rule in edge.rules
        ]
        return self._with_rules(edge_id, rules)

    def remove_rule(self, edge_id: str, rule_id: str) -> "FlowGraph":
        """Remove one rule from an edge."""
        edge = self._require_edge(edge_id)
        return self._with_rules(
            edge_id, [rule for rule in edge.rules if rule.id != rule_id]
        )
