"""Option and limits parameters.

Callers may pass options as an OptionSet, a plain list of symbols, or the
mapping form ``{"options": ["summaryOnly", "listAll"]}``; limits as a
LimitsConfig or the mapping form
``{"limits": {"featureCount": 1000, "checkExtent": True}}``. Both are
normalized here and rejected with OptionsError / LimitsError when malformed.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from ogrinfo_validator.constants import DETAIL_FLAG, OPTION_FLAGS
from ogrinfo_validator.errors import InvalidLimitsError, OptionsError


@dataclass(frozen=True)
class OptionSet:
    """Ordered symbolic ogrinfo options.

    Attributes:
        symbols: Option names, each a key of OPTION_FLAGS, in caller order.
    """

    symbols: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        unknown = [s for s in self.symbols if s not in OPTION_FLAGS]
        if unknown:
            raise OptionsError(f"unknown option(s): {', '.join(map(str, unknown))}")

    @property
    def flags(self) -> list[str]:
        """ogrinfo flags for the symbols, in the same order."""
        return [OPTION_FLAGS[s] for s in self.symbols]

    @property
    def detail(self) -> bool:
        """True when the per-layer listing was requested."""
        return DETAIL_FLAG in self.flags

    def __bool__(self) -> bool:
        return bool(self.symbols)


@dataclass(frozen=True)
class LimitsConfig:
    """Post-hoc checks applied to detail-mode metadata.

    Attributes:
        limits: Raw limit values keyed by name, in caller order. Unknown keys
            are kept but ignored by the policy engine.
    """

    limits: dict[str, Any] = field(default_factory=dict)

    @property
    def feature_count(self) -> int | None:
        """Exclusive feature ceiling: counts at or above it are violations."""
        return self.limits.get("featureCount")

    @property
    def check_extent(self) -> bool:
        """Whether the extent must lie within world bounds."""
        return bool(self.limits.get("checkExtent", False))


def parse_options(options: Any) -> OptionSet:
    """Normalize a caller's options parameter.

    Args:
        options: None, an OptionSet, a list/tuple of symbols, or a mapping
            with the single key ``options`` holding such a list.

    Returns:
        The OptionSet (empty for None).

    Raises:
        OptionsError: If the value has the wrong shape or an unknown symbol.
    """
    if options is None:
        return OptionSet()
    if isinstance(options, OptionSet):
        return options

    if isinstance(options, Mapping):
        if list(options.keys()) != ["options"]:
            raise OptionsError("expected a mapping with the single key 'options'")
        options = options["options"]

    if not isinstance(options, (list, tuple)):
        raise OptionsError("options must be a list of option names")
    if not all(isinstance(o, str) for o in options):
        raise OptionsError("option names must be strings")

    return OptionSet(symbols=tuple(options))


def _check_limit_values(limits: Mapping[str, Any]) -> None:
    count = limits.get("featureCount")
    if "featureCount" in limits and (
        isinstance(count, bool) or not isinstance(count, int) or count <= 0
    ):
        raise InvalidLimitsError("featureCount must be a positive integer")
    if "checkExtent" in limits and not isinstance(limits["checkExtent"], bool):
        raise InvalidLimitsError("checkExtent must be true or false")


def parse_limits(limits: Any) -> LimitsConfig | None:
    """Normalize a caller's limits parameter.

    Args:
        limits: None, a LimitsConfig, or a mapping whose only key is
            ``limits``, itself a mapping.

    Returns:
        The LimitsConfig, or None when no limits were given.

    Raises:
        InvalidLimitsError: If the value has the wrong shape or bad values.
    """
    if limits is None:
        return None
    if isinstance(limits, LimitsConfig):
        _check_limit_values(limits.limits)
        return limits

    if not isinstance(limits, Mapping):
        raise InvalidLimitsError("expected a mapping with the single key 'limits'")
    if list(limits.keys()) != ["limits"]:
        raise InvalidLimitsError("expected a mapping with the single key 'limits'")

    inner = limits["limits"]
    if not isinstance(inner, Mapping):
        raise InvalidLimitsError("'limits' must be a mapping")

    _check_limit_values(inner)
    return LimitsConfig(limits=dict(inner))
