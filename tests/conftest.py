"""Shared pytest fixtures for ogrinfo-validator tests."""

from __future__ import annotations

import json
import zipfile
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

import pytest

from ogrinfo_validator.command import InspectionReport

GDAL_VERSION = "GDAL 3.8.4, released 2024/02/08"


# =============================================================================
# Fake ogrinfo
# =============================================================================


class FakeRunner:
    """CommandRunner that answers the version probe and returns a canned report."""

    def __init__(
        self,
        report: str = "",
        *,
        stderr: str = "",
        version: str = GDAL_VERSION,
        version_stderr: str = "",
    ) -> None:
        self.executable = "ogrinfo"
        self.report = report
        self.stderr = stderr
        self.version = version
        self.version_stderr = version_stderr
        self.calls: list[list[str]] = []

    def run(self, args: Sequence[str]) -> InspectionReport:
        self.calls.append(list(args))
        if list(args) == ["--version"]:
            return InspectionReport(stdout=self.version, stderr=self.version_stderr)
        return InspectionReport(stdout=self.report, stderr=self.stderr)

    @property
    def inspect_calls(self) -> list[list[str]]:
        """Calls other than the version probe."""
        return [c for c in self.calls if c != ["--version"]]


@pytest.fixture
def fake_runner() -> Callable[..., FakeRunner]:
    """Factory for FakeRunner instances."""
    return FakeRunner


# =============================================================================
# Report Fixtures
# =============================================================================


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def load_report(fixtures_dir: Path) -> Callable[[str], str]:
    """Return a loader for canned ogrinfo reports by stem."""

    def _load(name: str) -> str:
        return (fixtures_dir / "reports" / f"{name}.txt").read_text()

    return _load


# =============================================================================
# Input File Builders
# =============================================================================


def point_feature(lon: float = 12.5, lat: float = 41.9, **properties: Any) -> dict[str, Any]:
    """Build a minimal valid GeoJSON point Feature."""
    return {
        "type": "Feature",
        "geometry": {"type": "Point", "coordinates": [lon, lat]},
        "properties": properties,
    }


def feature_collection(*features: dict[str, Any]) -> dict[str, Any]:
    return {"type": "FeatureCollection", "features": list(features)}


@pytest.fixture
def geojson_file(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing a payload as JSON into tmp_path."""

    def _write(payload: Any, name: str = "input.geojson") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(payload))
        return path

    return _write


@pytest.fixture
def csv_file(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing CSV text into tmp_path."""

    def _write(content: str, name: str = "input.csv") -> Path:
        path = tmp_path / name
        path.write_text(content)
        return path

    return _write


@pytest.fixture
def zip_file(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing a zip archive with the given member names."""

    def _write(names: Sequence[str], name: str = "bundle.zip") -> Path:
        path = tmp_path / name
        with zipfile.ZipFile(path, "w") as archive:
            for member in names:
                archive.writestr(member, b"\x00\x00\x27\x0a")
        return path

    return _write


@pytest.fixture
def valid_geojson(geojson_file: Callable[..., Path]) -> Path:
    """FeatureCollection with two point features."""
    return geojson_file(
        feature_collection(point_feature(name="Rome"), point_feature(2.35, 48.85, name="Paris")),
        "points.geojson",
    )


@pytest.fixture
def valid_csv(csv_file: Callable[..., Path]) -> Path:
    """GeoCSV with mixed-case lat/lng headers and three rows."""
    return csv_file(
        "name,Latitude,LONGITUDE\nRome,41.9,12.5\nParis,48.85,2.35\nLima,-12.04,-77.04\n",
        "cities.csv",
    )


@pytest.fixture
def valid_bundle(zip_file: Callable[..., Path]) -> Path:
    """Zip holding a .shp/.shx pair plus an attribute table."""
    return zip_file(["weather.shp", "weather.shx", "weather.dbf"], "weather2015.zip")
