"""Styled terminal output for the CLI.

All user-facing CLI messages go through these functions so that every
command prints with the same prefixes and colors:

    from ogrinfo_validator.output import success, info, warn, error, detail

    success("countries.geojson passed validation")
    info("Layer name: countries")
    warn("Exceeds Limit of 100 features")
    error("Failed: Invalid GeoJSON: features[3] is missing 'properties'")
    detail("ADMIN: String (0.0)")

Warnings and errors go to stderr; the rest goes to stdout.
"""

from __future__ import annotations

import click

# ANSI color codes via click's style system
_STYLES = {
    "success": {"fg": "green"},
    "info": {"fg": "blue"},
    "warn": {"fg": "yellow"},
    "error": {"fg": "red"},
    "detail": {"fg": "bright_black"},  # Dimmed/gray
}

_PREFIXES = {
    "success": "\u2713",  # checkmark
    "info": "\u2192",  # arrow
    "warn": "\u26a0",  # warning
    "error": "\u2717",  # X
    "detail": " ",  # space (no prefix, just indent)
}


def _output(message: str, style: str, *, err: bool = False) -> None:
    """Internal helper for styled output.

    Args:
        message: The message to display.
        style: The style name (success, error, info, warn, detail).
        err: Write to stderr instead of stdout.
    """
    fg_color = _STYLES[style]["fg"]
    styled_prefix = click.style(_PREFIXES[style], fg=fg_color)
    styled_message = click.style(message, fg=fg_color)
    click.echo(f"{styled_prefix} {styled_message}", err=err)


def success(message: str) -> None:
    """Print a success message with green checkmark."""
    _output(message, "success")


def info(message: str) -> None:
    """Print an info message with blue arrow."""
    _output(message, "info")


def warn(message: str) -> None:
    """Print a warning message with yellow warning symbol to stderr."""
    _output(message, "warn", err=True)


def error(message: str) -> None:
    """Print an error message with red X to stderr."""
    _output(message, "error", err=True)


def detail(message: str) -> None:
    """Print a detail message in dimmed text."""
    _output(message, "detail")
