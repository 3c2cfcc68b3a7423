"""Validators for structural checks on flow graphs."""

from .base import Severity, ValidationIssue, ValidationResult
from .orphan_detector import check_isolated_nodes
from .reachability import check_rootless_components, check_self_loops
from .reference_integrity import check_dangling_edges, check_duplicate_ids
from .rules import check_duplicate_rule_ids, check_rule_operators
from .runner import run_validators, validate_graph, validate_graph_file

__all__ = [
    "Severity",
    "ValidationIssue",
    "ValidationResult",
    "check_isolated_nodes",
    "check_rootless_components",
    "check_self_loops",
    "check_dangling_edges",
    "check_duplicate_ids",
    "check_duplicate_rule_ids",
    "check_rule_operators",
    "run_validators",
    "validate_graph",
    "validate_graph_file",
]
