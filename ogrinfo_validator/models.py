"""Metadata records extracted from ogrinfo reports.

- BoundingBox: the four corner values of a layer extent
- Metadata: the result payload returned to callers

Both are immutable; the policy engine returns an augmented copy rather than
mutating the parser's record.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

_NUMBER = r"\s*(-?\d+(?:\.\d+)?(?:[eE][-+]?\d+)?)\s*"
# Optional third value per corner: 3D layers report (x, y, z) - (x, y, z)
_Z = r"(?:,\s*-?\d+(?:\.\d+)?(?:[eE][-+]?\d+)?\s*)?"
_EXTENT_PATTERN = re.compile(rf"\({_NUMBER},{_NUMBER}{_Z}\)\s*-\s*\({_NUMBER},{_NUMBER}{_Z}\)")


@dataclass(frozen=True)
class BoundingBox:
    """Layer extent as reported by ogrinfo: ``(x1, y1) - (x2, y2)``.

    Attributes:
        top_left_lon: First x value.
        top_left_lat: First y value.
        bottom_right_lon: Second x value.
        bottom_right_lat: Second y value.
    """

    top_left_lon: float
    top_left_lat: float
    bottom_right_lon: float
    bottom_right_lat: float

    @classmethod
    def from_extent(cls, text: str | None) -> BoundingBox | None:
        """Parse an extent string, returning None if it has no corner pairs."""
        if not text:
            return None
        match = _EXTENT_PATTERN.search(text)
        if match is None:
            return None
        return cls(*(float(v) for v in match.groups()))

    @property
    def within_world(self) -> bool:
        """True if the corners stay inside longitude/latitude bounds."""
        return (
            self.top_left_lon >= -180
            and self.top_left_lat <= 90
            and self.bottom_right_lon <= 180
            and self.bottom_right_lat >= -90
        )

    def to_list(self) -> list[float]:
        return [
            self.top_left_lon,
            self.top_left_lat,
            self.bottom_right_lon,
            self.bottom_right_lat,
        ]


@dataclass(frozen=True)
class Metadata:
    """Metadata extracted from one ogrinfo report.

    A summary-mode record only has ``info``. A detail-mode record has the
    layer fields; any of them may be None when the report lacks the label.

    Attributes:
        info: Free-text summary (summary mode only).
        layer_name: Value of the "Layer name:" line.
        geometry: Value of the "Geometry:" line.
        extent: Value of the "Extent:" line, e.g. "(-180.0, -90.0) - (180.0, 83.6)".
        spatial_reference: SRS text, "(unknown)" for GeoCSV sources.
        attribute_block: Text following the SRS (field definitions, features).
        feature_count: Value of "Feature Count:", set only by the featureCount limit.
        errors: Limit violation messages.
    """

    info: str | None = None
    layer_name: str | None = None
    geometry: str | None = None
    extent: str | None = None
    spatial_reference: str | None = None
    attribute_block: str | None = None
    feature_count: int | None = None
    errors: tuple[str, ...] = field(default=())

    @property
    def detail(self) -> bool:
        """True for a per-layer (detail mode) record."""
        return self.info is None

    @property
    def bounding_box(self) -> BoundingBox | None:
        return BoundingBox.from_extent(self.extent)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the caller-facing dict.

        ``featureCount`` is present only when recorded and ``errors`` only
        when non-empty.
        """
        if not self.detail:
            result: dict[str, Any] = {"info": self.info}
        else:
            result = {
                "layerName": self.layer_name,
                "geometry": self.geometry,
                "extent": self.extent,
                "spatialReference": self.spatial_reference,
                "attributeBlock": self.attribute_block,
            }
            if self.feature_count is not None:
                result["featureCount"] = self.feature_count
        if self.errors:
            result["errors"] = list(self.errors)
        return result
