"""Tests for the pre-validation runner."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from ogrinfo_validator.errors import (
    IncompleteBundleError,
    InputNotFoundError,
    InputNotSpecifiedError,
    InvalidGeoCSVError,
    InvalidGeoJSONError,
    SidecarMissingError,
)
from ogrinfo_validator.formats import VectorFormat, describe_input
from ogrinfo_validator.validation import check, prevalidate, require_input
from ogrinfo_validator.validation.results import ValidationResult
from ogrinfo_validator.validation.rules import ValidationRule


class TestRequireInput:
    """Tests for require_input function."""

    @pytest.mark.unit
    @pytest.mark.parametrize("path", [None, "", "   "])
    def test_empty_path_raises(self, path: str | None) -> None:
        with pytest.raises(InputNotSpecifiedError):
            require_input(path)

    @pytest.mark.unit
    def test_returns_classified_descriptor(self) -> None:
        descriptor = require_input("lon.csv")
        assert descriptor.format == VectorFormat.GEOCSV


class TestCheck:
    """Tests for check function."""

    @pytest.mark.unit
    def test_runs_only_applicable_rules(self, valid_csv: Path) -> None:
        report = check(describe_input(valid_csv))

        assert report.passed
        assert [r.rule_name for r in report.results] == ["input_exists", "geocsv_columns"]

    @pytest.mark.unit
    def test_stops_at_first_failure(self, tmp_path: Path) -> None:
        """A missing file never reaches the format rule."""
        report = check(describe_input(tmp_path / "missing.csv"))

        assert not report.passed
        assert [r.rule_name for r in report.results] == ["input_exists"]

    @pytest.mark.unit
    def test_custom_rules(self, valid_geojson: Path) -> None:
        class Recorder(ValidationRule):
            name = "recorder"
            description = "Records the call"

            def check(self, descriptor: object) -> ValidationResult:
                return self._pass("seen")

        report = check(describe_input(valid_geojson), rules=[Recorder()])

        assert report.find("recorder") is not None
        assert report.find("input_exists") is None


class TestPrevalidate:
    """Tests for prevalidate function."""

    @pytest.mark.unit
    def test_valid_inputs_pass(
        self, valid_geojson: Path, valid_csv: Path, valid_bundle: Path
    ) -> None:
        for path in (valid_geojson, valid_csv, valid_bundle):
            assert prevalidate(describe_input(path)).passed

    @pytest.mark.unit
    def test_other_format_only_needs_to_exist(self, tmp_path: Path) -> None:
        path = tmp_path / "roads.gpkg"
        path.write_bytes(b"SQLite format 3\x00")

        assert prevalidate(describe_input(path)).passed

    @pytest.mark.unit
    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(InputNotFoundError):
            prevalidate(describe_input(tmp_path / "missing.geojson"))

    @pytest.mark.unit
    def test_missing_sidecar_raises(self, tmp_path: Path) -> None:
        (tmp_path / "roads.shp").write_bytes(b"")

        with pytest.raises(SidecarMissingError):
            prevalidate(describe_input(tmp_path / "roads.shp"))

    @pytest.mark.unit
    def test_bad_geojson_raises(self, geojson_file: Callable[..., Path]) -> None:
        path = geojson_file({"type": "FeatureCollection", "features": [{"type": "Feature"}]})

        with pytest.raises(InvalidGeoJSONError):
            prevalidate(describe_input(path))

    @pytest.mark.unit
    def test_bad_geocsv_raises(self, csv_file: Callable[..., Path]) -> None:
        path = csv_file("longitude,longitude\n1,2\n")

        with pytest.raises(InvalidGeoCSVError, match="Missing lat/lng columns"):
            prevalidate(describe_input(path))

    @pytest.mark.unit
    def test_incomplete_bundle_raises(self, zip_file: Callable[..., Path]) -> None:
        with pytest.raises(IncompleteBundleError):
            prevalidate(describe_input(zip_file(["roads.shp"])))
