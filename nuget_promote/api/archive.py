"""
Package archive access.

A .nupkg file is a zip archive; this module exposes the entries needed by the
license validator.
"""

import io
import logging
import zipfile
from typing import List

from ..exceptions import ArchiveEntryNotFoundError, FeedError


class ZipArchiveReader:
    """Read entries from an in-memory or on-disk package archive."""

    def __init__(self, source) -> None:
        """
        Open an archive.

        Args:
            source: Path of the archive, a binary stream or the raw archive bytes

        Raises:
            FeedError: If the data is not a valid zip archive
        """
        if isinstance(source, (bytes, bytearray)):
            source = io.BytesIO(source)
        try:
            self._zip = zipfile.ZipFile(source)
        except zipfile.BadZipFile as e:
            raise FeedError(f"Package archive is corrupt: {e}") from e
        # Entry names are matched case-insensitively, as NuGet does on Windows
        self._entries = {name.lower(): name for name in self._zip.namelist()}

    def names(self) -> List[str]:
        return list(self._entries.values())

    def read_text(self, path: str) -> str:
        """
        Read an archive entry as UTF-8 text.

        Args:
            path: Entry path inside the archive

        Returns:
            Decoded file content (undecodable bytes are replaced)

        Raises:
            ArchiveEntryNotFoundError: If there is no such entry
        """
        name = self._entries.get(path.lstrip("/").lower())
        if name is None:
            raise ArchiveEntryNotFoundError(f"File '{path}' not found in the package archive")
        logging.debug("Reading archive entry %s", name)
        return self._zip.read(name).decode("utf-8-sig", errors="replace")

    def close(self) -> None:
        self._zip.close()

    def __enter__(self) -> "ZipArchiveReader":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


__all__ = ["ZipArchiveReader"]
