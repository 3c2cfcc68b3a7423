"""Validators for the rules attached to edges."""

from collections import Counter

from ..schema.models import FlowGraph, RuleOperator
from .base import ValidationResult

KNOWN_OPERATORS = {op.value for op in RuleOperator}


def check_rule_operators(flow: FlowGraph) -> ValidationResult:
    """Check for rules whose operator is not one of the known operators.

    The engine lets such rules pass, so the edge is never blocked by them.

    Args:
        flow: The parsed flow graph.

    Returns:
        ValidationResult with a warning per unknown operator.
    """
    result = ValidationResult()

    for edge in flow.edges:
        for rule in edge.rules:
            if rule.operator not in KNOWN_OPERATORS:
                result.add_warning(
                    code="UNKNOWN_OPERATOR",
                    message=(
                        f"Rule on condition '{rule.condition}' uses unknown operator "
                        f"'{rule.operator}' and always passes"
                    ),
                    edge=edge.id,
                    rule=rule.id,
                    operator=rule.operator,
                )

    return result


def check_duplicate_rule_ids(flow: FlowGraph) -> ValidationResult:
    """Check that rule ids are unique within each edge."""
    result = ValidationResult()

    for edge in flow.edges:
        counts = Counter(rule.id for rule in edge.rules)
        for rule_id, count in counts.items():
            if count > 1:
                result.add_warning(
                    code="DUPLICATE_RULE_ID",
                    message=f"Rule id '{rule_id}' is used by {count} rules on this edge",
                    edge=edge.id,
                    rule=rule_id,
                )

    return result
