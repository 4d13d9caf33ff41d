# npz_writer/lowlevel.py
"""
A low-level wrapper around the ZIP archive primitive.

This module isolates `zipfile` from the rest of the library: it opens the
destination, writes fully encoded entries and finalizes the archive, and
translates I/O failures into `DestinationError`.
"""

import zipfile
from typing import Any

from .dataclasses import ArchiveEntry
from .exceptions import DestinationError

# Fixed member timestamp, so identical input gives identical archive bytes.
_ENTRY_DATE_TIME = (1980, 1, 1, 0, 0, 0)
# -rw------- for members, as NumPy writes them.
_ENTRY_EXTERNAL_ATTR = 0o600 << 16

class ZipArchiveHandle:
    """
    A thin, direct wrapper over a `zipfile.ZipFile` opened for writing.
    Each entry is written and finalized in a single call.
    """
    def __init__(self, destination: Any):
        self._destination = destination
        try:
            self._zip = zipfile.ZipFile(destination, mode='w', allowZip64=True)
        except OSError as e:
            raise DestinationError.from_os_error(e, destination) from e
        self._closed = False

    def write_entry(self, entry: ArchiveEntry) -> zipfile.ZipInfo:
        """
        Writes one complete entry into the archive.

        Args:
            entry: The encoded entry, with its member name and compression
                   settings.

        Returns:
            The ZipInfo of the written member (sizes are filled in).
        """
        if self._closed:
            raise ValueError("Operation attempted on a closed archive.")

        zinfo = zipfile.ZipInfo(entry.name, date_time=_ENTRY_DATE_TIME)
        zinfo.external_attr = _ENTRY_EXTERNAL_ATTR
        if entry.compress:
            compress_type, compresslevel = zipfile.ZIP_DEFLATED, entry.compression_level
        else:
            compress_type, compresslevel = zipfile.ZIP_STORED, None

        try:
            self._zip.writestr(
                zinfo,
                entry.data,
                compress_type=compress_type,
                compresslevel=compresslevel,
            )
        except OSError as e:
            raise DestinationError.from_os_error(e, self._destination) from e
        return zinfo

    def close(self) -> None:
        """Writes the central directory and releases the destination."""
        if not self._closed:
            self._closed = True
            try:
                self._zip.close()
            except OSError as e:
                raise DestinationError.from_os_error(e, self._destination) from e

    @property
    def closed(self) -> bool:
        return self._closed
