"""Rule predicate evaluation.

Values come in three kinds: boolean, number and text. Equality is strict:
both sides must be the same kind, so ``True`` never equals ``1`` and ``5``
never equals ``"5"``. Ordering operators only hold between two numbers.
"""

import logging
import re
from typing import Any, Mapping

from ..schema.models import FeatureEdge, Rule, RuleOperator, RuleValue

logger = logging.getLogger(__name__)

SimulationState = Mapping[str, RuleValue]

_OPERATOR_TEXT = {
    RuleOperator.IS: "is",
    RuleOperator.IS_NOT: "is not",
    RuleOperator.GREATER_THAN: ">",
    RuleOperator.LESS_THAN: "<",
}

_DECIMAL = re.compile(r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|Infinity)\Z")
_PREFIXED_INT = re.compile(r"0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)\Z")


def is_number(value: Any) -> bool:
    """True for ints and floats, but not for booleans."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def value_kind(value: Any) -> str:
    """Return ``"boolean"``, ``"number"`` or ``"text"`` for a rule value."""
    if isinstance(value, bool):
        return "boolean"
    if is_number(value):
        return "number"
    return "text"


def values_equal(left: Any, right: Any) -> bool:
    """Strict equality: same kind and same value."""
    return value_kind(left) == value_kind(right) and left == right


def value_to_text(value: RuleValue) -> str:
    """Canonical text form of a value (``true``, ``5``, ``2.5``, ``admin``)."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def parse_value(text: str) -> RuleValue:
    """Convert user-entered text into a boolean, number or trimmed string.

    Hex, octal and binary literals and ``Infinity`` count as numbers;
    ``1_000`` and ``inf`` stay text.

    >>> parse_value("true"), parse_value("42"), parse_value(" admin ")
    (True, 42, 'admin')
    """
    stripped = text.strip()
    if stripped == "true":
        return True
    if stripped == "false":
        return False
    if _PREFIXED_INT.match(stripped):
        return int(stripped, 0)
    if _DECIMAL.match(stripped):
        number = float(stripped.replace("Infinity", "inf"))
        return int(number) if number.is_integer() else number
    return stripped


def rule_to_text(rule: Rule) -> str:
    """Render a rule for display, e.g. ``age > 18``."""
    try:
        op_text = _OPERATOR_TEXT[RuleOperator(rule.operator)]
    except ValueError:
        op_text = rule.operator
    return f"{rule.condition} {op_text} {value_to_text(rule.value)}"


def evaluate_rule(rule: Rule, state: SimulationState) -> bool:
    """Check whether a single rule passes for the given context.

    A condition missing from the context places no constraint, so the rule
    passes. Kind mismatches on ordering operators fail rather than raise.

    Args:
        rule: The rule to check.
        state: Current condition values.

    Returns:
        Whether the rule passes.
    """
    current = state.get(rule.condition)
    if current is None:
        return True

    if rule.operator == RuleOperator.IS:
        return values_equal(current, rule.value)
    if rule.operator == RuleOperator.IS_NOT:
        return not values_equal(current, rule.value)
    if rule.operator == RuleOperator.GREATER_THAN:
        return is_number(current) and is_number(rule.value) and current > rule.value
    if rule.operator == RuleOperator.LESS_THAN:
        return is_number(current) and is_number(rule.value) and current < rule.value

    # Unknown operators never block a path.
    logger.debug("Rule %s uses unknown operator %r; treating as passed", rule.id, rule.operator)
    return True


def evaluate_edge_rules(edge: FeatureEdge, state: SimulationState) -> bool:
    """Check whether every rule on an edge passes (no rules means always)."""
    return all(evaluate_rule(rule, state) for rule in edge.rules)
