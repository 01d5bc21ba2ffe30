"""Pre-validation of input files before ogrinfo is invoked.

This module provides the public API for validating inputs:
- prevalidate(): Run the rules and raise the first hard failure
- check(): Run the rules and return the report without raising
- ValidationReport: Aggregate validation results
- ValidationRule: Base class for custom rules
"""

from ogrinfo_validator.validation.results import (
    Severity,
    ValidationReport,
    ValidationResult,
)
from ogrinfo_validator.validation.rules import ValidationRule
from ogrinfo_validator.validation.runner import check, prevalidate, require_input

__all__ = [
    "Severity",
    "ValidationReport",
    "ValidationResult",
    "ValidationRule",
    "check",
    "prevalidate",
    "require_input",
]
