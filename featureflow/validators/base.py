"""Base classes for validation results."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Severity(str, Enum):
    """Severity level of a validation issue."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass
class ValidationIssue:
    """A single validation issue."""

    code: str
    message: str
    severity: Severity
    node: str | None = None
    edge: str | None = None
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def location(self) -> str:
        """Bracketed node/edge location, or an empty string."""
        parts = []
        if self.node:
            parts.append(f"node {self.node}")
        if self.edge:
            parts.append(f"edge {self.edge}")
        return f"[{', '.join(parts)}]" if parts else ""

    def __str__(self) -> str:
        location = f" {self.location}" if self.location else ""
        return f"{self.severity.value.upper()}: {self.code}{location} - {self.message}"


@dataclass
class ValidationResult:
    """Result of running validation on a graph."""

    issues: list[ValidationIssue] = field(default_factory=list)

    @property
    def errors(self) -> list[ValidationIssue]:
        """Get all error-level issues."""
        return [i for i in self.issues if i.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[ValidationIssue]:
        """Get all warning-level issues."""
        return [i for i in self.issues if i.severity == Severity.WARNING]

    @property
    def infos(self) -> list[ValidationIssue]:
        """Get all info-level issues."""
        return [i for i in self.issues if i.severity == Severity.INFO]

    @property
    def has_errors(self) -> bool:
        """Check if there are any errors."""
        return len(self.errors) > 0

    @property
    def has_warnings(self) -> bool:
        """Check if there are any warnings."""
        return len(self.warnings) > 0

    @property
    def is_valid(self) -> bool:
        """Check if the graph is valid (no errors)."""
        return not self.has_errors

    def add_issue(self, issue: ValidationIssue) -> None:
        """Add an issue to the result."""
        self.issues.append(issue)

    def _add(
        self,
        severity: Severity,
        code: str,
        message: str,
        node: str | None,
        edge: str | None,
        details: dict[str, Any],
    ) -> None:
        self.issues.append(
            ValidationIssue(
                code=code,
                message=message,
                severity=severity,
                node=node,
                edge=edge,
                details=details,
            )
        )

    def add_error(
        self,
        code: str,
        message: str,
        node: str | None = None,
        edge: str | None = None,
        **details: Any,
    ) -> None:
        """Add an error issue."""
        self._add(Severity.ERROR, code, message, node, edge, details)

    def add_warning(
        self,
        code: str,
        message: str,
        node: str | None = None,
        edge: str | None = None,
        **details: Any,
    ) -> None:
        """Add a warning issue."""
        self._add(Severity.WARNING, code, message, node, edge, details)

    def add_info(
        self,
        code: str,
        message: str,
        node: str | None = None,
        edge: str | None = None,
        **details: Any,
    ) -> None:
        """Add an informational issue."""
        self._add(Severity.INFO, code, message, node, edge, details)

    def merge(self, other: "ValidationResult") -> None:
        """Merge another result into this one."""
        self.issues.extend(other.issues)
