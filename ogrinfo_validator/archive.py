"""Listing of entries inside a shapefile bundle (zip archive)."""

from __future__ import annotations

import logging
import zipfile
from pathlib import Path, PurePosixPath
from typing import NamedTuple

from ogrinfo_validator.errors import InvalidArchiveError

logger = logging.getLogger(__name__)


class ArchiveEntry(NamedTuple):
    """A file member of an archive.

    Attributes:
        name: Member name as stored in the archive (may include folders).
        extension: Lower-cased suffix of the member, "" when it has none.
    """

    name: str
    extension: str


def list_archive_entries(path: Path) -> list[ArchiveEntry]:
    """Return all file members of a zip archive, in archive order.

    Directory members are skipped.

    Raises:
        InvalidArchiveError: If the file is not a readable zip archive.
    """
    try:
        with zipfile.ZipFile(path) as archive:
            infos = archive.infolist()
    except (zipfile.BadZipFile, OSError) as e:
        raise InvalidArchiveError(str(path), str(e)) from e

    entries = [
        ArchiveEntry(name=info.filename, extension=PurePosixPath(info.filename).suffix.lower())
        for info in infos
        if not info.is_dir()
    ]
    logger.debug("Archive %s has %d file entries", path, len(entries))
    return entries
