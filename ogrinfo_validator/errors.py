"""Structured error codes for ogrinfo-validator.

All errors follow the format OGRV-{category}{number}:
- OGRV-INP*: Input file errors
- OGRV-FMT*: Malformed GeoJSON, GeoCSV or shapefile bundle
- OGRV-OPT*: Options parameter errors
- OGRV-LIM*: Limits parameter errors
- OGRV-ENV*: Inspection tool environment errors
- OGRV-CMD*: Inspection command errors
- OGRV-PRJ*: Spatial reference errors
- OGRV-CFG*: Configuration file errors

Every error is a hard failure: it aborts the pipeline and is reported to the
caller as a single message. Limit violations are not errors; they are
collected on the result (see policy.py).
"""

from __future__ import annotations

from typing import Any


class OgrValidatorError(Exception):
    """Base class for all ogrinfo-validator errors.

    All errors have:
    - code: Structured error code (e.g., OGRV-INP001)
    - message: Human-readable error message
    """

    code: str = "OGRV-000"

    # Reserved attribute names that cannot be overwritten by context
    _RESERVED_ATTRS = frozenset({"code", "message", "context", "args"})

    def __init__(self, message: str, **context: Any) -> None:
        """Initialize an ogrinfo-validator error.

        Args:
            message: Human-readable error message.
            **context: Additional context stored as error attributes.
                Reserved keys (code, message, context, args) are ignored.
        """
        self.message = message
        self.context = context
        for key, value in context.items():
            if key not in self._RESERVED_ATTRS:
                setattr(self, key, value)
        super().__init__(f"[{self.code}] {message}")

    @property
    def description(self) -> str:
        """Plain failure description returned by the caller-facing API."""
        reason = self.context.get("reason")
        if reason:
            return f"Failed: {self.message}: {reason}"
        return f"Failed: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert error to JSON-serializable dict."""
        return {
            "code": self.code,
            "message": self.message,
            "context": self.context,
        }


# Input Errors (OGRV-INP*)
class InputError(OgrValidatorError):
    """Base class for missing or unreadable input files."""

    code = "OGRV-INP000"


class InputNotSpecifiedError(InputError):
    """Raised when the input path is empty or None.

    Error code: OGRV-INP001
    """

    code = "OGRV-INP001"

    def __init__(self) -> None:
        super().__init__("Input file not specified")


class InputNotFoundError(InputError):
    """Raised when the input path does not resolve to an existing file.

    Error code: OGRV-INP002
    """

    code = "OGRV-INP002"

    def __init__(self, path: str) -> None:
        super().__init__("Input file does not exist", path=path)


class SidecarMissingError(InputError):
    """Raised when a bare shapefile has no .shx index next to it.

    Error code: OGRV-INP003
    """

    code = "OGRV-INP003"

    def __init__(self, path: str, sidecar: str) -> None:
        super().__init__(".shx file missing", path=path, sidecar=sidecar)


# Format Errors (OGRV-FMT*)
class FormatError(OgrValidatorError):
    """Base class for structurally malformed input files."""

    code = "OGRV-FMT000"


class InvalidGeoJSONError(FormatError):
    """Raised when a GeoJSON file cannot be parsed or has a bad structure.

    Error code: OGRV-FMT001
    """

    code = "OGRV-FMT001"

    def __init__(self, path: str, reason: str) -> None:
        super().__init__("Invalid GeoJSON", path=path, reason=reason)


class InvalidGeoCSVError(FormatError):
    """Raised when a GeoCSV file lacks lat/lng columns or has bad values.

    Error code: OGRV-FMT002
    """

    code = "OGRV-FMT002"

    def __init__(self, path: str, message: str, **context: Any) -> None:
        super().__init__(message, path=path, **context)


class IncompleteBundleError(FormatError):
    """Raised when a shapefile bundle does not hold exactly one .shp and one .shx.

    Error code: OGRV-FMT003
    """

    code = "OGRV-FMT003"

    def __init__(self, path: str, found: list[str]) -> None:
        super().__init__("Missing companion file", path=path, found=found)


class InvalidArchiveError(FormatError):
    """Raised when a bundle is not a readable zip archive.

    Error code: OGRV-FMT004
    """

    code = "OGRV-FMT004"

    def __init__(self, path: str, reason: str) -> None:
        super().__init__("Invalid archive", path=path, reason=reason)


# Parameter Errors (OGRV-OPT*, OGRV-LIM*)
class OptionsError(OgrValidatorError):
    """Raised when the options parameter is malformed or has unknown symbols.

    Error code: OGRV-OPT001
    """

    code = "OGRV-OPT001"

    def __init__(self, reason: str) -> None:
        super().__init__('Incorrect parameter type "options"', reason=reason)


class LimitsError(OgrValidatorError):
    """Base class for limits parameter errors."""

    code = "OGRV-LIM000"


class InvalidLimitsError(LimitsError):
    """Raised when the limits parameter is malformed.

    Error code: OGRV-LIM001
    """

    code = "OGRV-LIM001"

    def __init__(self, reason: str) -> None:
        super().__init__('Incorrect parameter type "limits"', reason=reason)


class LimitsMissingError(LimitsError):
    """Raised when limits are requested but the limits mapping is empty.

    Error code: OGRV-LIM002
    """

    code = "OGRV-LIM002"

    def __init__(self) -> None:
        super().__init__("Limit parameters are missing")


# Tool Errors (OGRV-ENV*, OGRV-CMD*)
class ToolEnvironmentError(OgrValidatorError):
    """Raised when the ogrinfo executable is missing or its version probe fails.

    Error code: OGRV-ENV001
    """

    code = "OGRV-ENV001"

    def __init__(self, executable: str, reason: str) -> None:
        super().__init__("Check GDAL is installed", executable=executable, reason=reason)


class CommandError(OgrValidatorError):
    """Raised when ogrinfo reports anything on stderr or exits non-zero.

    Error code: OGRV-CMD001
    """

    code = "OGRV-CMD001"

    def __init__(self, args: list[str], stderr: str, returncode: int) -> None:
        super().__init__(
            "Command failed",
            arguments=args,
            stderr=stderr,
            returncode=returncode,
        )


# Projection Errors (OGRV-PRJ*)
class UnsupportedProjectionError(OgrValidatorError):
    """Raised when a detail report carries a projected coordinate system.

    Error code: OGRV-PRJ001
    """

    code = "OGRV-PRJ001"

    def __init__(self, token: str) -> None:
        super().__init__("Projection not supported", token=token)


# Configuration Errors (OGRV-CFG*)
class ConfigError(OgrValidatorError):
    """Base class for configuration-related errors."""

    code = "OGRV-CFG000"


class ConfigParseError(ConfigError):
    """Raised when a configuration or limits file cannot be parsed.

    Error code: OGRV-CFG001
    """

    code = "OGRV-CFG001"

    def __init__(self, path: str, parse_error: str) -> None:
        super().__init__(
            f"Failed to parse config file {path}: {parse_error}",
            path=path,
            parse_error=parse_error,
        )


class ConfigInvalidStructureError(ConfigError):
    """Raised when a configuration or limits file has an invalid structure.

    Error code: OGRV-CFG002
    """

    code = "OGRV-CFG002"

    def __init__(self, path: str, detail: str) -> None:
        super().__init__(
            f"Invalid config structure in {path}: {detail}",
            path=path,
            detail=detail,
        )
