"""Pre-validation rules run before ogrinfo is invoked.

Each rule checks one structural aspect of an input file and applies only to
the formats it understands. Rules stop at the first problem they find and
report it as a failed ValidationResult carrying the error to raise.
"""

from __future__ import annotations

import csv
import json
from abc import ABC, abstractmethod
from typing import Any

from ogrinfo_validator.archive import list_archive_entries
from ogrinfo_validator.constants import (
    BUNDLE_REQUIRED_EXTENSIONS,
    FEATURE_MEMBERS,
    FORBIDDEN_COLLECTION_MEMBERS,
    LATITUDE_COLUMN,
    LATITUDE_RANGE,
    LONGITUDE_COLUMN,
    LONGITUDE_RANGE,
    VALID_GEOMETRY_TYPES,
)
from ogrinfo_validator.errors import (
    IncompleteBundleError,
    InputNotFoundError,
    InvalidArchiveError,
    InvalidGeoCSVError,
    InvalidGeoJSONError,
    OgrValidatorError,
    SidecarMissingError,
)
from ogrinfo_validator.formats import InputDescriptor, VectorFormat, sidecar_path
from ogrinfo_validator.tabular import open_rows
from ogrinfo_validator.validation.results import Severity, ValidationResult


class ValidationRule(ABC):
    """Base class for all pre-validation rules.

    Subclasses must define:
        name: Unique identifier for the rule
        description: Human-readable explanation for --verbose

    Subclasses must implement:
        check(): Run the validation and return a result

    Subclasses may override:
        applies_to(): Restrict the rule to some inputs (default: all)
    """

    name: str
    severity: Severity = Severity.ERROR
    description: str

    def applies_to(self, descriptor: InputDescriptor) -> bool:
        """Return True if this rule should run for the input."""
        return True

    @abstractmethod
    def check(self, descriptor: InputDescriptor) -> ValidationResult:
        """Run this validation rule against an input file.

        Args:
            descriptor: The classified input file.

        Returns:
            ValidationResult indicating pass/fail with message.
        """
        ...

    def _pass(self, message: str, **context: Any) -> ValidationResult:
        """Helper to create a passing result."""
        return ValidationResult(
            rule_name=self.name,
            passed=True,
            severity=self.severity,
            message=message,
            context=context,
        )

    def _fail(self, error: OgrValidatorError) -> ValidationResult:
        """Helper to create a failing result from the error it should raise."""
        return ValidationResult(
            rule_name=self.name,
            passed=False,
            severity=self.severity,
            message=error.description,
            error=error,
            context=dict(error.context),
        )


class InputExistsRule(ValidationRule):
    """Check that the input path resolves to an existing file."""

    name = "input_exists"
    description = "Verify the input file exists"

    def check(self, descriptor: InputDescriptor) -> ValidationResult:
        """Check that the resolved path is a regular file."""
        if not descriptor.resolved_path.is_file():
            return self._fail(InputNotFoundError(str(descriptor.path)))
        return self._pass(f"Input file exists: {descriptor.resolved_path}")


class SidecarPresentRule(ValidationRule):
    """Check that a bare shapefile has its .shx index next to it."""

    name = "sidecar_present"
    description = "Verify a .shp file has its .shx index"

    def applies_to(self, descriptor: InputDescriptor) -> bool:
        return descriptor.needs_sidecar

    def check(self, descriptor: InputDescriptor) -> ValidationResult:
        """Check for the sidecar index file."""
        sidecar = sidecar_path(descriptor.resolved_path)
        if not sidecar.is_file():
            return self._fail(SidecarMissingError(str(descriptor.path), str(sidecar)))
        return self._pass(f"Sidecar index exists: {sidecar}")


def _geometry_type(geometry: Any) -> Any:
    if isinstance(geometry, dict):
        return geometry.get("type")
    return None


def _feature_collection_problem(payload: dict[str, Any]) -> str | None:
    """Return the first structural problem of a FeatureCollection, or None."""
    features = payload.get("features")
    if not isinstance(features, list):
        return "FeatureCollection 'features' must be an array"

    for member in FORBIDDEN_COLLECTION_MEMBERS:
        if member in payload:
            return f"FeatureCollection must not have a '{member}' member"

    for index, feature in enumerate(features):
        label = f"features[{index}]"
        if not isinstance(feature, dict):
            return f"{label} is not an object"

        missing = sorted(FEATURE_MEMBERS - feature.keys())
        if missing:
            return f"{label} is missing {', '.join(repr(m) for m in missing)}"
        extra = sorted(feature.keys() - FEATURE_MEMBERS)
        if extra:
            return f"{label} has unexpected {', '.join(repr(m) for m in extra)}"

        geometry = feature["geometry"]
        geometry_type = _geometry_type(geometry)
        if geometry_type not in VALID_GEOMETRY_TYPES:
            return f"{label} has invalid geometry type {geometry_type!r}"
        for member in ("geometry", "properties"):
            if member in geometry:
                return f"{label} geometry must not have a '{member}' member"

    return None


def _feature_problem(payload: dict[str, Any]) -> str | None:
    """Return the first structural problem of a single Feature, or None."""
    missing = sorted(FEATURE_MEMBERS - payload.keys())
    if missing:
        return f"Feature is missing {', '.join(repr(m) for m in missing)}"
    geometry_type = _geometry_type(payload["geometry"])
    if geometry_type not in VALID_GEOMETRY_TYPES:
        return f"Feature has invalid geometry type {geometry_type!r}"
    return None


def geojson_problem(payload: Any) -> str | None:
    """Return the first GeoJSON structure problem in a parsed document, or None.

    FeatureCollections and Features are checked member by member; a bare
    geometry object passes if its type is canonical. Anything else fails.
    """
    if not isinstance(payload, dict):
        return "top-level value is not an object"

    geojson_type = payload.get("type")
    if not isinstance(geojson_type, str):
        return "missing 'type' member"

    if geojson_type.lower() == "featurecollection":
        return _feature_collection_problem(payload)
    if geojson_type == "Feature":
        return _feature_problem(payload)
    if geojson_type in VALID_GEOMETRY_TYPES:
        return None
    return f"unsupported GeoJSON type {geojson_type!r}"


class GeoJSONStructureRule(ValidationRule):
    """Check that a GeoJSON file parses and has a valid Feature(Collection) shape."""

    name = "geojson_structure"
    description = "Verify GeoJSON parses and features have type, geometry and properties"

    def applies_to(self, descriptor: InputDescriptor) -> bool:
        return descriptor.format == VectorFormat.GEOJSON

    def check(self, descriptor: InputDescriptor) -> ValidationResult:
        """Parse the file and check its structure."""
        path = str(descriptor.path)
        try:
            payload = json.loads(descriptor.resolved_path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            return self._fail(InvalidGeoJSONError(path, f"not valid JSON ({e})"))
        except OSError as e:
            return self._fail(InvalidGeoJSONError(path, f"cannot read file ({e})"))

        problem = geojson_problem(payload)
        if problem is not None:
            return self._fail(InvalidGeoJSONError(path, problem))
        return self._pass("GeoJSON structure is valid")


def _truncated(value: str | None) -> int | None:
    """Parse a coordinate cell and truncate it toward zero, None if not numeric."""
    if value is None:
        return None
    try:
        return int(float(value))
    except (ValueError, OverflowError):
        return None


def _within(value: int | None, bounds: tuple[int, int]) -> bool:
    return value is not None and bounds[0] <= value <= bounds[1]


def row_in_range(row: dict[str, str]) -> bool:
    """Return True if a GeoCSV row has latitude/longitude within world bounds."""
    return _within(_truncated(row.get(LATITUDE_COLUMN)), LATITUDE_RANGE) and _within(
        _truncated(row.get(LONGITUDE_COLUMN)), LONGITUDE_RANGE
    )


class GeoCSVColumnsRule(ValidationRule):
    """Check GeoCSV lat/lng columns and stream every row through a range check.

    Headers are matched case-insensitively. Exactly one latitude and one
    longitude column are required. The first out-of-range row fails the
    file; on success the total row count is recorded in the result context.
    """

    name = "geocsv_columns"
    description = "Verify GeoCSV has latitude/longitude columns with in-range values"

    def applies_to(self, descriptor: InputDescriptor) -> bool:
        return descriptor.format == VectorFormat.GEOCSV

    def check(self, descriptor: InputDescriptor) -> ValidationResult:
        """Check headers, then each row in file order."""
        path = str(descriptor.path)
        row_count = 0
        try:
            with open_rows(descriptor.resolved_path) as stream:
                lat_count = stream.headers.count(LATITUDE_COLUMN)
                lng_count = stream.headers.count(LONGITUDE_COLUMN)
                if lat_count != 1 or lng_count != 1:
                    return self._fail(
                        InvalidGeoCSVError(path, "Missing lat/lng columns", headers=stream.headers)
                    )

                for row_number, row in enumerate(stream.rows, start=1):
                    if not row_in_range(row):
                        return self._fail(
                            InvalidGeoCSVError(path, "Invalid lat/lng values", row=row_number)
                        )
                    row_count += 1
        except (OSError, UnicodeDecodeError, csv.Error) as e:
            return self._fail(InvalidGeoCSVError(path, "Unreadable CSV", reason=str(e)))

        return self._pass(f"GeoCSV has {row_count} valid rows", row_count=row_count)


class ShapefileBundleRule(ValidationRule):
    """Check that a zip bundle holds exactly one .shp and one .shx member.

    The member list is collected completely before it is counted.
    """

    name = "shapefile_bundle"
    description = "Verify the archive holds a .shp/.shx pair"

    def applies_to(self, descriptor: InputDescriptor) -> bool:
        return descriptor.format == VectorFormat.SHAPEFILE_BUNDLE

    def check(self, descriptor: InputDescriptor) -> ValidationResult:
        """List archive members and apply the completeness rule."""
        try:
            entries = list_archive_entries(descriptor.resolved_path)
        except InvalidArchiveError as e:
            return self._fail(e)

        required = [e for e in entries if e.extension in BUNDLE_REQUIRED_EXTENSIONS]
        names = [e.name for e in required]
        if len(required) != 2 or {e.extension for e in required} != BUNDLE_REQUIRED_EXTENSIONS:
            return self._fail(IncompleteBundleError(str(descriptor.path), names))

        return self._pass(f"Bundle holds {', '.join(names)}", required_files=names)
