"""Extraction of metadata from ogrinfo's text report.

ogrinfo has no stable output grammar: the SRS block changes shape with the
coordinate system and the source driver. Extraction is therefore a set of
independent, best-effort field extractors that return None when a label
is missing, plus a format-dependent split of the SRS block.

A typical detail report (``ogrinfo -so -al countries.geojson``)::

    INFO: Open of `countries.geojson'
          using driver `GeoJSON' successful.

    Layer name: countries
    Geometry: Multi Polygon
    Feature Count: 255
    Extent: (-180.000000, -90.000000) - (180.000000, 83.634101)
    Layer SRS WKT:
    GEOGCRS["WGS 84",
        ...
        ID["EPSG",4326]]
    Data axis to CRS axis mapping: 2,1
    ADMIN: String (0.0)
    ISO_A3: String (0.0)
"""

from __future__ import annotations

import logging
import re

from ogrinfo_validator.constants import (
    PROJECTION_TOKENS,
    SRS_MARKER,
    SUMMARY_MARKER,
    UNKNOWN_SRS,
)
from ogrinfo_validator.errors import UnsupportedProjectionError
from ogrinfo_validator.formats import VectorFormat
from ogrinfo_validator.models import Metadata

logger = logging.getLogger(__name__)

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")
_LAYER_ORDINAL = re.compile(r"^\d+:\s*")
_FEATURE_COUNT = re.compile(r"^Feature Count:\s*(\d+)", re.IGNORECASE | re.MULTILINE)
_BRACKETS = "[]"


def extract_field(report: str, label: str) -> str | None:
    """Return the trimmed value after a line-leading ``label:``, or None.

    Matching is case-insensitive and uses the first line with the label.
    """
    pattern = re.compile(rf"^\s*{re.escape(label)}:[ \t]*(.*)$", re.IGNORECASE | re.MULTILINE)
    match = pattern.search(report)
    if match is None:
        return None
    return match.group(1).strip()


def extract_feature_count(report: str) -> int | None:
    """Return the integer after ``Feature Count:``, or None if absent."""
    match = _FEATURE_COUNT.search(report)
    if match is None:
        return None
    return int(match.group(1))


def summary_text(report: str) -> str:
    """Reduce a report to a one-line summary starting at the driver line.

    Everything before the first ``using`` is dropped, layer ordinals
    ("1: ") are removed, and lines are joined with single spaces.
    """
    start = report.find(SUMMARY_MARKER)
    if start >= 0:
        report = report[start:]

    parts = []
    for line in report.splitlines():
        line = _LAYER_ORDINAL.sub("", _CONTROL_CHARS.sub("", line).strip())
        if line:
            parts.append(line)
    return " ".join(parts).strip()


def srs_block(report: str) -> str:
    """Return the trimmed text after ``Layer SRS WKT:``, "" if the marker is absent."""
    start = report.find(SRS_MARKER)
    if start < 0:
        return ""
    return report[start + len(SRS_MARKER) :].strip()


def split_native_srs(block: str) -> tuple[str, str]:
    """Split an SRS block at its last bracket into (srs, attributes).

    WKT always ends with a closing bracket, so whatever follows the last
    ``[`` or ``]`` is the attribute listing. Without brackets the whole
    block is the SRS.
    """
    last = max(block.rfind(b) for b in _BRACKETS)
    if last < 0:
        return block, ""
    return block[: last + 1], block[last + 1 :].strip()


def split_geocsv_srs(block: str) -> tuple[str, str]:
    """Split a GeoCSV SRS block into ("(unknown)", attributes).

    CSV sources have no real coordinate system; ogrinfo prints
    ``(unknown)`` and the attribute listing follows it.
    """
    position = block.find(UNKNOWN_SRS)
    if position < 0:
        return UNKNOWN_SRS, block
    return UNKNOWN_SRS, block[position + len(UNKNOWN_SRS) :].strip()


def _check_projection(srs: str) -> None:
    for token in PROJECTION_TOKENS:
        if token in srs:
            raise UnsupportedProjectionError(token)


def parse_detail(report: str, vector_format: VectorFormat) -> Metadata:
    """Extract per-layer metadata from a ``-al`` report.

    Raises:
        UnsupportedProjectionError: If a native source reports a projected CRS.
    """
    block = srs_block(report)
    if vector_format == VectorFormat.GEOCSV:
        srs, attributes = split_geocsv_srs(block)
    else:
        srs, attributes = split_native_srs(block)
        _check_projection(srs)

    metadata = Metadata(
        layer_name=extract_field(report, "Layer name"),
        geometry=extract_field(report, "Geometry"),
        extent=extract_field(report, "Extent"),
        spatial_reference=srs,
        attribute_block=attributes,
    )
    logger.debug(
        "Parsed layer=%r geometry=%r extent=%r",
        metadata.layer_name,
        metadata.geometry,
        metadata.extent,
    )
    return metadata


def parse_report(report: str, vector_format: VectorFormat, *, detail: bool) -> Metadata:
    """Turn an ogrinfo report into Metadata.

    Args:
        report: ogrinfo stdout.
        vector_format: Format of the inspected input.
        detail: True when ``-al`` was requested.

    Returns:
        A detail record, or a summary record with only ``info``.
    """
    if detail:
        return parse_detail(report, vector_format)
    return Metadata(info=summary_text(report))
