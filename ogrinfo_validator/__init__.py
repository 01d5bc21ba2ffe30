"""ogrinfo-validator - Validate vector files and extract ogrinfo metadata."""

from ogrinfo_validator.cli import cli
from ogrinfo_validator.formats import VectorFormat, classify_format
from ogrinfo_validator.models import BoundingBox, Metadata
from ogrinfo_validator.pipeline import inspect_file, run_pipeline

__all__ = [
    "BoundingBox",
    "Metadata",
    "VectorFormat",
    "classify_format",
    "cli",
    "inspect_file",
    "run_pipeline",
]
