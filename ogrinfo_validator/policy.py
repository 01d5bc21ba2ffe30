"""Limit checks applied to detail-mode metadata.

Limits never abort the pipeline. Each limit produces a WARNING-severity
ValidationResult; failed results become messages on ``Metadata.errors``.
Limits run in the order the caller gave them; unknown keys are ignored.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import replace

from ogrinfo_validator.errors import LimitsMissingError
from ogrinfo_validator.models import Metadata
from ogrinfo_validator.options import LimitsConfig
from ogrinfo_validator.report import extract_feature_count
from ogrinfo_validator.validation.results import Severity, ValidationResult

logger = logging.getLogger(__name__)


class LimitRule(ABC):
    """Base class for limit checks.

    Subclasses must define:
        key: The limits key that enables the rule
        description: Human-readable explanation

    Subclasses must implement:
        evaluate(): Check the metadata and return a result
    """

    key: str
    description: str
    severity = Severity.WARNING

    @abstractmethod
    def evaluate(self, limits: LimitsConfig, metadata: Metadata, report: str) -> ValidationResult:
        """Check one limit.

        Args:
            limits: The caller's limits.
            metadata: Metadata parsed from the report.
            report: Raw ogrinfo report.

        Returns:
            ValidationResult; ``context`` may carry values to record on the metadata.
        """
        ...

    def _pass(self, message: str, **context: object) -> ValidationResult:
        return ValidationResult(
            rule_name=self.key,
            passed=True,
            severity=self.severity,
            message=message,
            context=dict(context),
        )

    def _fail(self, message: str, **context: object) -> ValidationResult:
        return ValidationResult(
            rule_name=self.key,
            passed=False,
            severity=self.severity,
            message=message,
            context=dict(context),
        )


class FeatureCountLimit(LimitRule):
    """Flag layers whose feature count reaches the ceiling.

    The ceiling is exclusive: a count equal to it is already a violation.
    The extracted count is recorded either way.
    """

    key = "featureCount"
    description = "Feature count must stay below the configured ceiling"

    def evaluate(self, limits: LimitsConfig, metadata: Metadata, report: str) -> ValidationResult:
        count = extract_feature_count(report)
        if count is None:
            return self._pass("No feature count in report")

        ceiling = limits.feature_count
        if ceiling is not None and count >= ceiling:
            return self._fail(f"Exceeds Limit of {ceiling} features", feature_count=count)
        return self._pass(f"{count} features", feature_count=count)


class ExtentLimit(LimitRule):
    """Flag extents whose corners fall outside longitude/latitude bounds.

    Skipped when checkExtent is false or the report has no parseable extent.
    """

    key = "checkExtent"
    description = "Extent must stay within world longitude/latitude bounds"

    def evaluate(self, limits: LimitsConfig, metadata: Metadata, report: str) -> ValidationResult:
        if not limits.check_extent:
            return self._pass("Extent check disabled")

        bbox = metadata.bounding_box
        if bbox is None:
            return self._pass("No extent in report")
        if not bbox.within_world:
            return self._fail("Invalid Vector Shape", extent=bbox.to_list())
        return self._pass("Extent within bounds")


DEFAULT_LIMIT_RULES: Mapping[str, LimitRule] = {
    rule.key: rule for rule in (FeatureCountLimit(), ExtentLimit())
}


def apply_limits(
    metadata: Metadata,
    limits: LimitsConfig,
    report: str,
    *,
    rules: Mapping[str, LimitRule] | None = None,
) -> Metadata:
    """Evaluate limits and return metadata augmented with counts and violations.

    Args:
        metadata: Detail-mode metadata from the report parser.
        limits: The caller's limits.
        report: Raw ogrinfo report.
        rules: Limit rules by key. Defaults to DEFAULT_LIMIT_RULES.

    Returns:
        A copy of metadata with ``feature_count`` and ``errors`` filled in.

    Raises:
        LimitsMissingError: If the limits mapping is empty.
    """
    if not limits.limits:
        raise LimitsMissingError()
    if rules is None:
        rules = DEFAULT_LIMIT_RULES

    feature_count = metadata.feature_count
    violations = list(metadata.errors)

    for key in limits.limits:
        rule = rules.get(key)
        if rule is None:
            logger.debug("Ignoring unknown limit %r", key)
            continue
        result = rule.evaluate(limits, metadata, report)
        if "feature_count" in result.context:
            feature_count = result.context["feature_count"]
        if not result.passed:
            logger.warning("Limit %s violated: %s", key, result.message)
            violations.append(result.message)

    return replace(metadata, feature_count=feature_count, errors=tuple(violations))
