"""Format classification for routing inputs to the right pre-validation.

Classification is by file suffix only; it performs no I/O. Content checks
belong to the validation rules (see validation/rules.py).

- GEOJSON: .geojson and .json
- GEOCSV: .csv with latitude/longitude columns
- SHAPEFILE_BUNDLE: .zip holding a .shp/.shx pair
- OTHER: anything else ogrinfo may be able to open (.shp, .gpkg, ...)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from ogrinfo_validator.constants import SHAPEFILE_EXTENSION, SHAPEFILE_INDEX_EXTENSION


class VectorFormat(Enum):
    """Input kind inferred from the file name."""

    GEOJSON = "geojson"
    GEOCSV = "geocsv"
    SHAPEFILE_BUNDLE = "shapefile_bundle"
    OTHER = "other"


FORMAT_EXTENSIONS: dict[str, VectorFormat] = {
    ".geojson": VectorFormat.GEOJSON,
    ".json": VectorFormat.GEOJSON,
    ".csv": VectorFormat.GEOCSV,
    ".zip": VectorFormat.SHAPEFILE_BUNDLE,
}


@dataclass(frozen=True)
class InputDescriptor:
    """A classified input file.

    Attributes:
        path: Path as given by the caller.
        format: Inferred format tag.
    """

    path: Path
    format: VectorFormat

    @property
    def resolved_path(self) -> Path:
        """Absolute path handed to ogrinfo."""
        return self.path.resolve()

    @property
    def needs_sidecar(self) -> bool:
        """True for a bare shapefile, which ogrinfo cannot open without its .shx."""
        return self.path.suffix.lower() == SHAPEFILE_EXTENSION


def classify_format(path: str | Path) -> VectorFormat:
    """Classify a path by its suffix.

    Only the last suffix counts, so ``roads.v2.geojson`` is GeoJSON and
    ``roads.geojson.zip`` is a bundle.

    Args:
        path: File path to classify.

    Returns:
        The VectorFormat for the suffix, OTHER when unrecognized.
    """
    return FORMAT_EXTENSIONS.get(Path(path).suffix.lower(), VectorFormat.OTHER)


def describe_input(path: str | Path) -> InputDescriptor:
    """Build an InputDescriptor for a non-empty path."""
    path = Path(path)
    return InputDescriptor(path=path, format=classify_format(path))


def sidecar_path(path: Path) -> Path:
    """Return the .shx index expected next to a .shp file.

    The sidecar suffix follows the case of the primary suffix
    (``A.SHP`` -> ``A.SHX``).
    """
    suffix = SHAPEFILE_INDEX_EXTENSION
    if path.suffix.isupper():
        suffix = suffix.upper()
    return path.with_suffix(suffix)
