"""Shared constants for ogrinfo-validator.

This module contains the fixed vocabularies used across the pipeline:
option flags, CSV decoding hints, report marker tokens and the extensions
that drive format classification.
"""

from __future__ import annotations

# Symbolic option name -> ogrinfo flag
OPTION_FLAGS: dict[str, str] = {
    "summaryOnly": "-so",
    "listAll": "-al",
}

# Flag that switches report parsing into per-layer detail mode
DETAIL_FLAG: str = OPTION_FLAGS["listAll"]

# Open options that make the CSV driver read lat/lng rows as points
GEOCSV_OPEN_OPTIONS: tuple[str, ...] = (
    "-oo",
    "X_POSSIBLE_NAMES=longitude",
    "-oo",
    "Y_POSSIBLE_NAMES=latitude",
    "-oo",
    "KEEP_GEOM_COLUMNS=NO",
)

# GDAL virtual file system prefix for reading inside zip archives
VSIZIP_PREFIX: str = "/vsizip/"

# Required GeoCSV positional columns (headers are lower-cased before matching)
LATITUDE_COLUMN: str = "latitude"
LONGITUDE_COLUMN: str = "longitude"

LATITUDE_RANGE: tuple[int, int] = (-90, 90)
LONGITUDE_RANGE: tuple[int, int] = (-180, 180)

# Shapefile primary/index pair
SHAPEFILE_EXTENSION: str = ".shp"
SHAPEFILE_INDEX_EXTENSION: str = ".shx"
BUNDLE_REQUIRED_EXTENSIONS: frozenset[str] = frozenset(
    {SHAPEFILE_EXTENSION, SHAPEFILE_INDEX_EXTENSION}
)

VALID_GEOMETRY_TYPES: frozenset[str] = frozenset(
    {
        "Point",
        "MultiPoint",
        "LineString",
        "MultiLineString",
        "Polygon",
        "MultiPolygon",
        "GeometryCollection",
    }
)

# Members that must never appear on a FeatureCollection itself
FORBIDDEN_COLLECTION_MEMBERS: tuple[str, ...] = (
    "coordinates",
    "geometries",
    "geometry",
    "properties",
)

FEATURE_MEMBERS: frozenset[str] = frozenset({"type", "geometry", "properties"})

# Report markers (see ogrinfo text output)
SUMMARY_MARKER: str = "using"
SRS_MARKER: str = "Layer SRS WKT:"
UNKNOWN_SRS: str = "(unknown)"
PROJECTION_TOKENS: tuple[str, ...] = ("PROJECTION", "PROJCRS")
