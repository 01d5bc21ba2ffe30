"""Streaming access to delimited (CSV) files.

Headers are normalized to lower case once; rows are then yielded one at a
time as dicts keyed by the normalized headers, so a validator can stop at
the first bad row without reading the rest of the file.
"""

from __future__ import annotations

import csv
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path


@dataclass
class RowStream:
    """An open CSV file.

    Attributes:
        headers: Lower-cased, stripped header names in file order.
        rows: Iterator over data rows keyed by normalized header.
    """

    headers: list[str]
    rows: Iterator[dict[str, str]]


def _lift_field_size_limit() -> None:
    """Raise csv's per-field cap to the largest value the platform accepts."""
    limit = sys.maxsize
    while True:
        try:
            csv.field_size_limit(limit)
            return
        except OverflowError:
            limit //= 2


def _iter_rows(reader: Iterator[list[str]], headers: list[str]) -> Iterator[dict[str, str]]:
    for values in reader:
        if not values:
            continue
        yield dict(zip(headers, values))


@contextmanager
def open_rows(path: Path) -> Iterator[RowStream]:
    """Open a CSV file for row-by-row reading.

    A leading UTF-8 BOM is ignored. An empty file has no headers and no rows.
    Fields of any length are accepted.

    Raises:
        OSError: If the file cannot be opened.
    """
    _lift_field_size_limit()
    with open(path, newline="", encoding="utf-8-sig") as f:
        reader = csv.reader(f)
        first = next(reader, [])
        headers = [h.strip().lower() for h in first]
        yield RowStream(headers=headers, rows=_iter_rows(reader, headers))
