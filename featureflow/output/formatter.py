"""Output formatting for validation, simulation, trace and schema results."""

import json
from typing import Any, Literal, Mapping

from ..engine.conditions import ConditionSchema
from ..engine.flow import FlowEvaluationResult
from ..engine.rules import rule_to_text, value_to_text
from ..engine.trace import TraceResult
from ..schema.models import FlowGraph, RuleValue
from ..validators.base import Severity, ValidationIssue, ValidationResult

OutputFormat = Literal["text", "json"]


def format_validation_result(
    result: ValidationResult,
    format: OutputFormat = "text",
) -> str:
    """Format a validation result for output.

    Args:
        result: The validation result to format.
        format: Output format ("text" or "json").

    Returns:
        Formatted string representation.
    """
    if format == "json":
        return _format_validation_json(result)
    return _format_validation_text(result)


def _format_validation_text(result: ValidationResult) -> str:
    """Format result as human-readable text."""
    lines: list[str] = []

    errors = result.errors
    warnings = result.warnings

    lines.append("ERRORS:")
    if errors:
        for issue in errors:
            lines.append(f"  {_format_issue_text(issue)}")
    else:
        lines.append("  (none)")

    lines.append("")

    lines.append("WARNINGS:")
    if warnings:
        for issue in warnings:
            lines.append(f"  {_format_issue_text(issue)}")
    else:
        lines.append("  (none)")

    if result.infos:
        lines.append("")
        lines.append("INFO:")
        for issue in result.infos:
            lines.append(f"  {_format_issue_text(issue)}")

    # Summary
    lines.append("")
    if result.is_valid:
        if warnings:
            lines.append(f"Validation passed with {len(warnings)} warning(s)")
        else:
            lines.append("Validation passed")
    else:
        lines.append(
            f"Validation failed: {len(errors)} error(s), {len(warnings)} warning(s)"
        )

    return "\n".join(lines)


def _format_issue_text(issue: ValidationIssue) -> str:
    """Format a single issue as text."""
    location = f"{issue.location} " if issue.location else ""

    if issue.severity == Severity.ERROR:
        symbol = "✘"
    elif issue.severity == Severity.WARNING:
        symbol = "⚠"
    else:
        symbol = "ℹ"

    return f"{symbol} {issue.code}: {location}{issue.message}"


def _format_validation_json(result: ValidationResult) -> str:
    """Format result as JSON."""
    data = {
        "valid": result.is_valid,
        "error_count": len(result.errors),
        "warning_count": len(result.warnings),
        "issues": [
            {
                "code": issue.code,
                "message": issue.message,
                "severity": issue.severity.value,
                "node": issue.node,
                "edge": issue.edge,
                "details": issue.details,
            }
            for issue in result.issues
        ],
    }
    return json.dumps(data, indent=2)


# -----------------------------------------------------------------------------
# Simulation
# -----------------------------------------------------------------------------


def format_simulation_result(
    flow: FlowGraph,
    state: Mapping[str, RuleValue],
    result: FlowEvaluationResult,
    format: OutputFormat = "text",
) -> str:
    """Format a flow evaluation for output.

    Nodes and edges are listed in document order.
    """
    if format == "json":
        data: dict[str, Any] = {
            "context": dict(state),
            "reachable_nodes": [n.id for n in flow.nodes if n.id in result.reachable_nodes],
            "unreachable_nodes": [n.id for n in flow.nodes if n.id not in result.reachable_nodes],
            "valid_edges": {edge.id: result.valid_edges[edge.id] for edge in flow.edges},
        }
        return json.dumps(data, indent=2)

    lines: list[str] = []

    lines.append("CONTEXT:")
    if state:
        for name in sorted(state):
            lines.append(f"  {name} = {value_to_text(state[name])}")
    else:
        lines.append("  (empty)")

    lines.append("")
    lines.append("NODES:")
    if flow.nodes:
        for node in flow.nodes:
            symbol = "✔" if node.id in result.reachable_nodes else "✘"
            lines.append(f"  {symbol} {node.id} ({node.data.label})")
    else:
        lines.append("  (none)")

    lines.append("")
    lines.append("EDGES:")
    if flow.edges:
        for edge in flow.edges:
            symbol = "✔" if result.valid_edges[edge.id] else "✘"
            rules = " and ".join(rule_to_text(r) for r in edge.rules) or "always"
            lines.append(f"  {symbol} {edge.id}: {edge.source} -> {edge.target} [{rules}]")
    else:
        lines.append("  (none)")

    reached = sum(1 for node in flow.nodes if node.id in result.reachable_nodes)
    lines.append("")
    lines.append(f"{reached} of {len(flow.nodes)} node(s) reachable")
    return "\n".join(lines)


# -----------------------------------------------------------------------------
# Trace
# -----------------------------------------------------------------------------


def format_trace_result(
    flow: FlowGraph,
    focus_node_id: str,
    result: TraceResult,
    format: OutputFormat = "text",
) -> str:
    """Format an ancestor trace for output."""
    nodes = [n.id for n in flow.nodes if n.id in result.highlighted_nodes]
    edges = [e.id for e in flow.edges if e.id in result.highlighted_edges]

    if format == "json":
        return json.dumps(
            {"focus": focus_node_id, "highlighted_nodes": nodes, "highlighted_edges": edges},
            indent=2,
        )

    lines = [f"TRACE: {focus_node_id}", "", "NODES:"]
    lines.extend(f"  {node_id}" for node_id in nodes)
    lines.append("")
    lines.append("EDGES:")
    if edges:
        lines.extend(f"  {edge_id}" for edge_id in edges)
    else:
        lines.append("  (none)")
    return "\n".join(lines)


# -----------------------------------------------------------------------------
# Condition schema
# -----------------------------------------------------------------------------


def format_conditions(
    conditions: list[ConditionSchema],
    format: OutputFormat = "text",
) -> str:
    """Format a discovered condition schema for output."""
    if format == "json":
        return json.dumps(
            [
                {"name": c.name, "type": c.type.value, "options": c.options}
                for c in conditions
            ],
            indent=2,
        )

    if not conditions:
        return "No conditions found"

    lines = []
    for condition in conditions:
        options = ", ".join(value_to_text(v) for v in condition.options)
        lines.append(f"{condition.name} ({condition.type.value}): {options}")
    return "\n".join(lines)
