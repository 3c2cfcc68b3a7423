"""Flow evaluation engine: pure functions over graph snapshots."""

from .conditions import ConditionSchema, ConditionType, discover_conditions, get_values_for_condition
from .flow import FlowEvaluationResult, evaluate_flow, find_root_nodes
from .rules import (
    SimulationState,
    evaluate_edge_rules,
    evaluate_rule,
    parse_value,
    rule_to_text,
    value_to_text,
    values_equal,
)
from .trace import TraceResult, trace_ancestors

__all__ = [
    "ConditionSchema",
    "ConditionType",
    "discover_conditions",
    "get_values_for_condition",
    "FlowEvaluationResult",
    "evaluate_flow",
    "find_root_nodes",
    "SimulationState",
    "evaluate_edge_rules",
    "evaluate_rule",
    "parse_value",
    "rule_to_text",
    "value_to_text",
    "values_equal",
    "TraceResult",
    "trace_ancestors",
]
