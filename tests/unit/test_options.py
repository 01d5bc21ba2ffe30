"""Tests for option and limits parameter checking."""

from __future__ import annotations

from typing import Any

import pytest
from hypothesis import given
from hypothesis import strategies as st

from ogrinfo_validator.constants import OPTION_FLAGS
from ogrinfo_validator.errors import InvalidLimitsError, OptionsError
from ogrinfo_validator.options import LimitsConfig, OptionSet, parse_limits, parse_options


class TestOptionSet:
    """Tests for OptionSet."""

    @pytest.mark.unit
    def test_flags_follow_symbol_order(self) -> None:
        assert OptionSet(("listAll", "summaryOnly")).flags == ["-al", "-so"]
        assert OptionSet(("summaryOnly", "listAll")).flags == ["-so", "-al"]

    @pytest.mark.unit
    def test_detail_requires_list_all(self) -> None:
        assert OptionSet(("summaryOnly", "listAll")).detail
        assert not OptionSet(("summaryOnly",)).detail
        assert not OptionSet().detail

    @pytest.mark.unit
    def test_unknown_symbol_invalidates_set(self) -> None:
        with pytest.raises(OptionsError):
            OptionSet(("listAll", "readOnly"))

    @pytest.mark.unit
    def test_truthiness(self) -> None:
        assert not OptionSet()
        assert OptionSet(("listAll",))

    @pytest.mark.unit
    @given(symbols=st.lists(st.sampled_from(sorted(OPTION_FLAGS)), max_size=4))
    def test_one_flag_per_symbol(self, symbols: list[str]) -> None:
        """Every recognized symbol maps to exactly one flag, in order."""
        assert OptionSet(tuple(symbols)).flags == [OPTION_FLAGS[s] for s in symbols]


class TestParseOptions:
    """Tests for parse_options function."""

    @pytest.mark.unit
    def test_none_is_empty(self) -> None:
        assert parse_options(None) == OptionSet()

    @pytest.mark.unit
    def test_mapping_form(self) -> None:
        assert parse_options({"options": ["summaryOnly", "listAll"]}) == OptionSet(
            ("summaryOnly", "listAll")
        )

    @pytest.mark.unit
    def test_list_form(self) -> None:
        assert parse_options(["listAll"]) == OptionSet(("listAll",))

    @pytest.mark.unit
    def test_option_set_passes_through(self) -> None:
        options = OptionSet(("listAll",))
        assert parse_options(options) is options

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "options",
        [
            "listAll",
            42,
            {},
            {"opts": ["listAll"]},
            {"options": "listAll"},
            {"options": ["listAll"], "extra": 1},
            {"options": ["readOnly"]},
            ["listAll", 3],
        ],
    )
    def test_malformed_options_raise(self, options: Any) -> None:
        with pytest.raises(OptionsError):
            parse_options(options)


class TestLimitsConfig:
    """Tests for LimitsConfig accessors."""

    @pytest.mark.unit
    def test_accessors(self) -> None:
        limits = LimitsConfig({"featureCount": 10, "checkExtent": True})
        assert limits.feature_count == 10
        assert limits.check_extent is True

    @pytest.mark.unit
    def test_defaults(self) -> None:
        limits = LimitsConfig()
        assert limits.feature_count is None
        assert limits.check_extent is False


class TestParseLimits:
    """Tests for parse_limits function."""

    @pytest.mark.unit
    def test_none_is_none(self) -> None:
        assert parse_limits(None) is None

    @pytest.mark.unit
    def test_mapping_form(self) -> None:
        limits = parse_limits({"limits": {"featureCount": 1000, "checkExtent": False}})
        assert limits == LimitsConfig({"featureCount": 1000, "checkExtent": False})

    @pytest.mark.unit
    def test_empty_limits_are_structurally_valid(self) -> None:
        assert parse_limits({"limits": {}}) == LimitsConfig({})

    @pytest.mark.unit
    def test_unknown_keys_are_kept(self) -> None:
        limits = parse_limits({"limits": {"maxArea": 5}})
        assert limits is not None
        assert limits.limits == {"maxArea": 5}

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "limits",
        [
            [],
            "limits",
            {"limit": {}},
            {"limits": []},
            {"limits": [{"featureCount": 1}]},
            {"limits": {}, "options": []},
            {"limits": {"featureCount": 0}},
            {"limits": {"featureCount": -5}},
            {"limits": {"featureCount": "100"}},
            {"limits": {"featureCount": True}},
            {"limits": {"checkExtent": "yes"}},
        ],
    )
    def test_malformed_limits_raise(self, limits: Any) -> None:
        with pytest.raises(InvalidLimitsError):
            parse_limits(limits)

    @pytest.mark.unit
    def test_limits_config_values_are_checked(self) -> None:
        with pytest.raises(InvalidLimitsError):
            parse_limits(LimitsConfig({"featureCount": 0}))
