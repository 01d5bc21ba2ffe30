"""ogrinfo-validator CLI - Command-line interface for the inspection pipeline.

The CLI is a thin wrapper around the Python API (see pipeline.py).
All business logic lives in the library; the CLI handles user interaction.

Exit codes for ``inspect``:
    0: metadata extracted, no limit violated
    1: hard failure (bad input, bad parameters, ogrinfo failure)
    2: metadata extracted, at least one limit violated
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import click

from ogrinfo_validator.command import OgrInfoRunner
from ogrinfo_validator.config import get_setting, load_limits_file
from ogrinfo_validator.constants import OPTION_FLAGS
from ogrinfo_validator.errors import OgrValidatorError
from ogrinfo_validator.formats import FORMAT_EXTENSIONS
from ogrinfo_validator.json_output import ErrorDetail, error_envelope, success_envelope
from ogrinfo_validator.models import Metadata
from ogrinfo_validator.options import LimitsConfig, parse_limits
from ogrinfo_validator.output import detail, error, info, success, warn
from ogrinfo_validator.pipeline import run_pipeline

EXIT_FAILURE = 1
EXIT_LIMITS_VIOLATED = 2


def should_output_json(ctx: click.Context, json_flag: bool = False) -> bool:
    """Determine if JSON output should be used.

    Global --format=json takes precedence, but per-command --json also works.
    """
    obj = ctx.find_root().obj or {}
    global_format = obj.get("format", "text")
    return global_format == "json" or json_flag


def output_json_envelope(envelope: Any) -> None:
    """Output a JSON envelope to stdout."""
    click.echo(envelope.to_json())


@click.group()
@click.version_option(package_name="ogrinfo-validator")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "text"]),
    default="text",
    help="Output format (json for machine parsing, text for humans).",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log debug details to stderr.")
@click.pass_context
def cli(ctx: click.Context, output_format: str, verbose: bool) -> None:
    """ogrinfo-validator - Validate vector files and extract ogrinfo metadata."""
    ctx.ensure_object(dict)
    ctx.obj["format"] = output_format
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


def _build_limits(
    limits_file: Path | None,
    feature_count: int | None,
    check_extent: bool,
) -> LimitsConfig | None:
    """Merge a limits file with limit flags; flags win."""
    limits: dict[str, Any] = {}
    if limits_file is not None:
        config = parse_limits(load_limits_file(limits_file))
        if config is not None:
            limits.update(config.limits)
    if feature_count is not None:
        limits["featureCount"] = feature_count
    if check_extent:
        limits["checkExtent"] = True
    if limits_file is None and not limits:
        return None
    return LimitsConfig(limits=limits)


def _print_metadata(path: Path, metadata: Metadata) -> None:
    """Print extracted metadata with styled output."""
    success(f"Inspected {path}")
    if not metadata.detail:
        info(metadata.info or "")
    else:
        fields = (
            ("Layer name", metadata.layer_name),
            ("Geometry", metadata.geometry),
            ("Extent", metadata.extent),
            ("Feature count", metadata.feature_count),
        )
        for label, value in fields:
            if value is not None:
                info(f"{label}: {value}")
        srs = metadata.spatial_reference or ""
        info(f"SRS: {srs.splitlines()[0] if srs else '(none)'}")
        for line in (metadata.attribute_block or "").splitlines():
            detail(line)
    for violation in metadata.errors:
        warn(violation)


@cli.command("inspect")
@click.argument("path", type=click.Path(path_type=Path))
@click.option(
    "--option",
    "-o",
    "option_names",
    multiple=True,
    type=click.Choice(list(OPTION_FLAGS)),
    help="ogrinfo option to pass, in order (repeatable).",
)
@click.option(
    "--feature-count",
    type=click.IntRange(min=1),
    default=None,
    help="Flag layers with this many features or more (requires -o listAll).",
)
@click.option(
    "--check-extent",
    is_flag=True,
    default=False,
    help="Flag extents outside world bounds (requires -o listAll).",
)
@click.option(
    "--limits-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="YAML/JSON file with a 'limits' mapping.",
)
@click.option("--ogrinfo", "ogrinfo_path", default=None, help="Path to the ogrinfo executable.")
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="YAML config file.",
)
@click.option("--json", "json_flag", is_flag=True, default=False, help="Output as JSON.")
@click.pass_context
def inspect_command(
    ctx: click.Context,
    path: Path,
    option_names: tuple[str, ...],
    feature_count: int | None,
    check_extent: bool,
    limits_file: Path | None,
    ogrinfo_path: str | None,
    config_file: Path | None,
    json_flag: bool,
) -> None:
    """Validate PATH and print the metadata ogrinfo reports for it.

    PATH may be a GeoJSON (.geojson/.json), a GeoCSV (.csv), a zipped
    shapefile (.zip) or any other file ogrinfo can open.
    """
    use_json = should_output_json(ctx, json_flag)

    try:
        executable = get_setting("ogrinfo", cli_value=ogrinfo_path, config_file=config_file)
        limits = _build_limits(limits_file, feature_count, check_extent)
        metadata = run_pipeline(
            path,
            list(option_names),
            limits,
            runner=OgrInfoRunner(executable),
        )
    except OgrValidatorError as err:
        if use_json:
            envelope = error_envelope(
                "inspect",
                [ErrorDetail(type=type(err).__name__, message=err.description, code=err.code)],
            )
            output_json_envelope(envelope)
        else:
            error(err.description)
        raise SystemExit(EXIT_FAILURE) from err

    if use_json:
        output_json_envelope(success_envelope("inspect", metadata.to_dict()))
    else:
        _print_metadata(path, metadata)

    if metadata.errors:
        raise SystemExit(EXIT_LIMITS_VIOLATED)


@cli.command("formats")
@click.option("--json", "json_flag", is_flag=True, default=False, help="Output as JSON.")
@click.pass_context
def formats_command(ctx: click.Context, json_flag: bool) -> None:
    """List the file extensions with format-specific validation."""
    mapping = {ext: fmt.value for ext, fmt in FORMAT_EXTENSIONS.items()}
    if should_output_json(ctx, json_flag):
        output_json_envelope(success_envelope("formats", {"extensions": mapping}))
        return
    for ext, fmt in mapping.items():
        info(f"{ext}: {fmt}")
    detail("Any other extension is passed to ogrinfo without format checks.")
