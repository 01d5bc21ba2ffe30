"""Validation result data structures.

Each pre-validation rule and each limit check returns a ValidationResult
instead of flipping shared flags; results are aggregated into a
ValidationReport.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ogrinfo_validator.errors import OgrValidatorError


class Severity(Enum):
    """Severity level for validation results.

    ERROR: Aborts the pipeline (malformed input)
    WARNING: Recorded on the result, never aborts (limit violations)
    """

    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class ValidationResult:
    """Result from a single validation rule.

    Attributes:
        rule_name: Identifier for the rule that produced this result.
        passed: Whether the validation passed.
        severity: How serious a failure is (ERROR aborts, WARNING doesn't).
        message: Human-readable description of the result.
        error: The hard error to raise for a failed ERROR result.
        context: Extra values the rule measured (row counts, entry names, ...).
    """

    rule_name: str
    passed: bool
    severity: Severity
    message: str
    error: OgrValidatorError | None = field(default=None, compare=False)
    context: dict[str, Any] = field(default_factory=dict, compare=False)


@dataclass
class ValidationReport:
    """Aggregate of all validation results.

    Attributes:
        results: List of individual validation results.
    """

    results: list[ValidationResult] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        """True if no ERROR-severity rules failed."""
        return not any(not r.passed and r.severity == Severity.ERROR for r in self.results)

    @property
    def errors(self) -> list[ValidationResult]:
        """Return only failed ERROR-severity results."""
        return [r for r in self.results if not r.passed and r.severity == Severity.ERROR]

    def find(self, rule_name: str) -> ValidationResult | None:
        """Return the result produced by a rule, if it ran."""
        return next((r for r in self.results if r.rule_name == rule_name), None)
