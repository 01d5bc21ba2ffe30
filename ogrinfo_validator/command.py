"""Execution of the ogrinfo command-line utility.

ogrinfo is treated as a black box: it receives an argument list and returns
a text report on stdout plus diagnostics on stderr. Any stderr output is a
failure; ogrinfo reports unreadable data there even when it exits with 0.

Example:
    from ogrinfo_validator.command import OgrInfoRunner, inspect, probe

    runner = OgrInfoRunner()
    probe(runner)
    report = inspect(runner, ["/data/roads.geojson", "-so", "-al"])
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from ogrinfo_validator.errors import CommandError, ToolEnvironmentError

logger = logging.getLogger(__name__)

DEFAULT_EXECUTABLE = "ogrinfo"


@dataclass(frozen=True)
class InspectionReport:
    """Raw output of one ogrinfo call.

    Attributes:
        stdout: The text report.
        stderr: Diagnostics; empty on success.
        returncode: Process exit status.
    """

    stdout: str
    stderr: str = ""
    returncode: int = 0

    @property
    def failed(self) -> bool:
        return bool(self.stderr.strip()) or self.returncode != 0


@runtime_checkable
class CommandRunner(Protocol):
    """Anything that can run ogrinfo with an argument list."""

    executable: str

    def run(self, args: Sequence[str]) -> InspectionReport:
        """Run the command once and return its output without judging it."""
        ...


class OgrInfoRunner:
    """Runs the ogrinfo executable as a subprocess."""

    def __init__(self, executable: str = DEFAULT_EXECUTABLE) -> None:
        self.executable = executable

    def run(self, args: Sequence[str]) -> InspectionReport:
        """Run ogrinfo with args and capture its output.

        Raises:
            ToolEnvironmentError: If the executable cannot be started.
        """
        command = [self.executable, *args]
        logger.debug("Running %s", " ".join(command))
        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as e:
            raise ToolEnvironmentError(self.executable, str(e)) from e
        return InspectionReport(
            stdout=result.stdout,
            stderr=result.stderr,
            returncode=result.returncode,
        )


def probe(runner: CommandRunner) -> str:
    """Confirm ogrinfo is available by asking for its version.

    Returns:
        The version line (e.g. "GDAL 3.8.4, released 2024/02/08").

    Raises:
        ToolEnvironmentError: If the probe fails or prints nothing.
    """
    report = runner.run(["--version"])
    if report.failed:
        raise ToolEnvironmentError(runner.executable, report.stderr.strip() or "probe failed")
    version = report.stdout.strip()
    if not version:
        raise ToolEnvironmentError(runner.executable, "no version output")
    logger.debug("Using %s", version)
    return version


def inspect(runner: CommandRunner, args: Sequence[str]) -> InspectionReport:
    """Run ogrinfo with the built argument list.

    Raises:
        CommandError: If ogrinfo wrote to stderr or exited non-zero.
    """
    report = runner.run(args)
    if report.failed:
        raise CommandError(list(args), report.stderr.strip(), report.returncode)
    return report
