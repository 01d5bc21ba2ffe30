"""Validate a vector file, run ogrinfo on it and extract checked metadata.

Stages run strictly in order and any hard failure stops the run:

1. classify the path and pre-validate the file
2. check options and limits
3. build the argument list
4. probe and run ogrinfo
5. parse the report
6. apply limits (detail mode only; violations are recorded, not raised)

Usage:
    from ogrinfo_validator import inspect_file

    inspect_file("countries.geojson")
    # {"info": "using driver `GeoJSON' successful. countries (Multi Polygon)"}

    inspect_file(
        "weather2015.zip",
        {"options": ["summaryOnly", "listAll"]},
        {"limits": {"featureCount": 1000, "checkExtent": True}},
    )
    # {"layerName": ..., "featureCount": 1204, "errors": ["Exceeds Limit of 1000 features"]}

    inspect_file("missing.geojson")
    # "Failed: Input file does not exist"
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from ogrinfo_validator.command import CommandRunner, OgrInfoRunner, inspect, probe
from ogrinfo_validator.errors import OgrValidatorError
from ogrinfo_validator.invocation import build_arguments
from ogrinfo_validator.models import Metadata
from ogrinfo_validator.options import parse_limits, parse_options
from ogrinfo_validator.policy import apply_limits
from ogrinfo_validator.report import parse_report
from ogrinfo_validator.validation import prevalidate, require_input

logger = logging.getLogger(__name__)


def run_pipeline(
    path: str | Path | None,
    options: Any = None,
    limits: Any = None,
    *,
    runner: CommandRunner | None = None,
) -> Metadata:
    """Run the full pipeline and return the extracted metadata.

    Args:
        path: Vector file to inspect.
        options: OptionSet, list of option names, or ``{"options": [...]}``.
        limits: LimitsConfig or ``{"limits": {...}}``. Applied in detail
            mode only, but always checked for shape.
        runner: Command runner; defaults to the ``ogrinfo`` executable.

    Returns:
        Metadata from the report, with limit violations in ``errors``.

    Raises:
        OgrValidatorError: On the first hard failure of any stage.
    """
    descriptor = require_input(path)
    prevalidate(descriptor)

    option_set = parse_options(options)
    limits_config = parse_limits(limits)

    args = build_arguments(descriptor, option_set)

    if runner is None:
        runner = OgrInfoRunner()
    probe(runner)
    report = inspect(runner, args).stdout

    metadata = parse_report(report, descriptor.format, detail=option_set.detail)
    if option_set.detail and limits_config is not None:
        metadata = apply_limits(metadata, limits_config, report)
    return metadata


def inspect_file(
    path: str | Path | None,
    options: Any = None,
    limits: Any = None,
    *,
    runner: CommandRunner | None = None,
) -> dict[str, Any] | str:
    """Inspect a vector file without raising.

    Same arguments as run_pipeline().

    Returns:
        The metadata dict on success, or a ``"Failed: ..."`` description.
    """
    try:
        return run_pipeline(path, options, limits, runner=runner).to_dict()
    except OgrValidatorError as e:
        logger.debug("Inspection of %s failed: %s", path, e)
        return e.description
    except Exception as e:
        logger.exception("Unexpected error while inspecting %s", path)
        return f"Failed: {e}"
