"""Condition schema discovery from edge rules."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable

from ..schema.models import FeatureEdge, RuleValue
from .rules import is_number, value_kind, value_to_text


class ConditionType(str, Enum):
    """Inferred type of a condition, used to pick an input control."""

    BOOLEAN = "boolean"
    NUMBER = "number"
    ENUM = "enum"


@dataclass
class ConditionSchema:
    """A condition name with its inferred type and every value seen for it."""

    name: str
    type: ConditionType
    options: list[RuleValue] = field(default_factory=list)


def _infer_type(values: list[RuleValue]) -> ConditionType:
    if all(isinstance(v, bool) for v in values):
        return ConditionType.BOOLEAN
    if all(is_number(v) for v in values):
        return ConditionType.NUMBER
    return ConditionType.ENUM


def discover_conditions(edges: Iterable[FeatureEdge]) -> list[ConditionSchema]:
    """Extract every distinct condition referenced by the edges' rules.

    Values are de-duplicated under strict equality and sorted by their text
    form, so numbers sort as strings ("10" before "9"). Conditions are
    sorted by name.

    Args:
        edges: The edges to scan.

    Returns:
        One ConditionSchema per condition name.
    """
    # Keyed by (kind, value) so True and 1 stay distinct while 1 and 1.0 merge.
    seen: dict[str, dict[tuple[str, RuleValue], RuleValue]] = {}

    for edge in edges:
        for rule in edge.rules:
            values = seen.setdefault(rule.condition, {})
            values.setdefault((value_kind(rule.value), rule.value), rule.value)

    conditions = []
    for name, values in seen.items():
        options = sorted(values.values(), key=value_to_text)
        conditions.append(
            ConditionSchema(name=name, type=_infer_type(options), options=options)
        )

    return sorted(conditions, key=lambda c: c.name)


def get_values_for_condition(
    conditions: Iterable[ConditionSchema], name: str
) -> list[RuleValue]:
    """Get the known values of one condition, or an empty list."""
    for condition in conditions:
        if condition.name == name:
            return list(condition.options)
    return []
