"""Validation runner that executes pre-validation rules against an input."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from ogrinfo_validator.errors import InputNotSpecifiedError
from ogrinfo_validator.formats import InputDescriptor, describe_input
from ogrinfo_validator.validation.results import ValidationReport, ValidationResult
from ogrinfo_validator.validation.rules import (
    GeoCSVColumnsRule,
    GeoJSONStructureRule,
    InputExistsRule,
    ShapefileBundleRule,
    SidecarPresentRule,
    ValidationRule,
)

logger = logging.getLogger(__name__)

# Existence rules come first; format rules assume a readable file.
DEFAULT_RULES: tuple[ValidationRule, ...] = (
    InputExistsRule(),
    SidecarPresentRule(),
    GeoJSONStructureRule(),
    GeoCSVColumnsRule(),
    ShapefileBundleRule(),
)


def require_input(path: str | Path | None) -> InputDescriptor:
    """Classify a caller-supplied path, rejecting an empty one.

    Raises:
        InputNotSpecifiedError: If path is None or empty.
    """
    if path is None or not str(path).strip():
        raise InputNotSpecifiedError()
    descriptor = describe_input(path)
    logger.debug("Classified %s as %s", descriptor.path, descriptor.format.value)
    return descriptor


def check(
    descriptor: InputDescriptor,
    *,
    rules: Sequence[ValidationRule] | None = None,
) -> ValidationReport:
    """Run the applicable rules against an input, stopping at the first failure.

    Args:
        descriptor: The classified input file.
        rules: Optional sequence of rules to run. Defaults to DEFAULT_RULES.

    Returns:
        ValidationReport with results from the rules that ran. When a rule
        fails, its result is the last one in the report.
    """
    if rules is None:
        rules = DEFAULT_RULES

    results: list[ValidationResult] = []

    for rule in rules:
        if not rule.applies_to(descriptor):
            continue
        result = rule.check(descriptor)
        logger.debug("Rule %s: %s", rule.name, result.message)
        results.append(result)
        if not result.passed:
            break

    return ValidationReport(results=results)


def prevalidate(
    descriptor: InputDescriptor,
    *,
    rules: Sequence[ValidationRule] | None = None,
) -> ValidationReport:
    """Run pre-validation and raise the first hard failure.

    Raises:
        OgrValidatorError: The error carried by the first failing rule.
    """
    report = check(descriptor, rules=rules)
    for result in report.errors:
        if result.error is not None:
            raise result.error
    return report
