# npz_writer/file.py
"""High-level NPY/NPZ writers and the `open` factory for archives."""

import builtins
import contextlib
import io
import logging
import os
import warnings
from typing import Any, BinaryIO, Iterator, List, Mapping, Optional, Tuple, Union

import numpy as np

from . import format
from .abc import ArchiveBase
from .lowlevel import ZipArchiveHandle
from .dataclasses import ArchiveEntry, EntryResult, NpyHeader
from ._internal import header_builder, naming
from ._internal.header_builder import Version
from .exceptions import DestinationError, EmptyArchiveWarning, NpzConfigError

logger = logging.getLogger(__name__)

DEFAULT_COMPRESSION_LEVEL = 3

Destination = Union[str, "os.PathLike[str]", BinaryIO]


def _validate_compression(compress: bool, compression_level: int) -> None:
    if not isinstance(compress, bool):
        raise NpzConfigError(f"compress must be a bool, got {compress!r}")
    if isinstance(compression_level, bool) or not isinstance(compression_level, int):
        raise NpzConfigError(f"compression_level must be an int, got {compression_level!r}")
    if not 0 <= compression_level <= 9:
        raise NpzConfigError(f"compression_level must be between 0 and 9, got {compression_level}")


@contextlib.contextmanager
def _open_destination(destination: Destination) -> Iterator[BinaryIO]:
    """Truncates/creates a path, or passes a caller-owned file object through."""
    if hasattr(destination, "write"):
        yield destination
        return

    try:
        fp = builtins.open(os.fspath(destination), "wb")
    except OSError as e:
        raise DestinationError.from_os_error(e, destination) from e
    try:
        yield fp
    finally:
        try:
            fp.close()
        except OSError as e:
            raise DestinationError.from_os_error(e, destination) from e


def write_array(
    destination: Destination,
    array: Any,
    *,
    version: Optional[Version] = None
) -> NpyHeader:
    """
    Writes a single array to an .npy file.

    The destination is truncated (or created); no extension is appended.

    Args:
        destination: A path, or a writable binary file object. File objects
                     are written to but not closed.
        array: The array to save. Non-array values go through `numpy.asarray`.
        version: (Optional) Force NPY format version (1, 0) or (2, 0).

    Returns:
        The NpyHeader that was written.

    Raises:
        UnsupportedTypeError: If the element type is not supported. The
            destination is left untouched.
        EncodingError: If the header cannot be built.
        DestinationError: If the destination cannot be created or written.
    """
    array = np.asarray(array)
    # Resolved before the destination is truncated.
    header = format.header_for_array(array, version)

    with _open_destination(destination) as fp:
        try:
            fp.write(header_builder.encode_header(header))
            format.write_array_data(fp, array)
        except OSError as e:
            raise DestinationError.from_os_error(e, destination) from e

    logger.debug(f"Saved {header.descr} array of shape {header.shape} to {destination!r}")
    return header


def open(
    destination: Destination,
    *,
    compress: bool = False,
    compression_level: int = DEFAULT_COMPRESSION_LEVEL
) -> "ArchiveWriter":
    """
    Opens an .npz archive for writing.
    The destination is truncated (or created); no extension is appended.

    Args:
        destination: A path, or a writable binary file object.
        compress: If True, members are deflated; otherwise they are stored.
        compression_level: Deflate level, 0 to 9. Ignored when not compressing.

    Returns:
        An ArchiveWriter, typically used within a `with` statement.

    Raises:
        NpzConfigError: If the compression settings are invalid.
        DestinationError: If the destination cannot be created.
    """
    _validate_compression(compress, compression_level)
    handle = ZipArchiveHandle(destination)
    return ArchiveWriter(handle, compress=compress, compression_level=compression_level)


class ArchiveWriter(ArchiveBase):
    """
    A handle for writing named arrays into an .npz archive.
    Created via `npz_writer.open(...)`.

    Each array is encoded into its own in-memory buffer and written as a
    complete `<name>.npy` member before the next one starts, so a failure
    while encoding one array never corrupts the members already written.
    """
    def __init__(
        self,
        handle: ZipArchiveHandle,
        *,
        compress: bool = False,
        compression_level: int = DEFAULT_COMPRESSION_LEVEL
    ):
        self._handle = handle
        self.compress = compress
        self.compression_level = compression_level
        self._names: List[str] = []

    @property
    def names(self) -> Tuple[str, ...]:
        """Names of the arrays written so far, without the '.npy' suffix."""
        return tuple(self._names)

    def add(self, name: str, array: Any) -> EntryResult:
        """
        Encodes an array and writes it as the member `<name>.npy`.

        Args:
            name: The array name. Must be unique within this archive.
            array: The array to save.

        Returns:
            An EntryResult with the member's name and sizes.

        Raises:
            UnsupportedTypeError: If the element type is not supported. No
                member is written for this array.
            ValueError: If `name` was already written, or the archive is closed.
        """
        if self.closed:
            raise ValueError("Operation attempted on a closed archive.")
        if not isinstance(name, str):
            raise TypeError(f"Array names must be strings, not {type(name).__name__}")
        if name in self._names:
            raise ValueError(f"An array named '{name}' was already written to this archive.")

        buffer = io.BytesIO()
        format.encode_array(buffer, array)
        entry = ArchiveEntry(
            name=name + ".npy",
            compress=self.compress,
            compression_level=self.compression_level,
            data=buffer.getvalue(),
        )
        zinfo = self._handle.write_entry(entry)
        self._names.append(name)

        logger.debug(
            f"Wrote archive member {entry.name} "
            f"({zinfo.file_size} bytes, {zinfo.compress_size} stored)"
        )
        return EntryResult(
            name=entry.name,
            size=zinfo.file_size,
            compressed_size=zinfo.compress_size,
            compression_ratio=zinfo.compress_size / zinfo.file_size,
        )

    def add_all(self, arrays: Mapping[str, Any]) -> List[EntryResult]:
        """Writes every (name, array) pair of a mapping, in iteration order."""
        return [self.add(name, array) for name, array in arrays.items()]

    def close(self) -> None:
        self._handle.close()

    @property
    def closed(self) -> bool:
        return self._handle.closed


def write_archive(
    destination: Destination,
    /,
    *arrays: Any,
    compress: bool = False,
    compression_level: int = DEFAULT_COMPRESSION_LEVEL,
    **named_arrays: Any
) -> List[EntryResult]:
    """
    Writes several arrays to an .npz archive.

    Called with a single mapping, its keys are used as array names:

        write_archive("data.npz", {"x": x, "y": y})

    Otherwise positional arrays are saved as `arr_0`, `arr_1`, ... and keyword
    arrays under their keyword. A keyword that collides with a positional
    name wins:

        write_archive("data.npz", a, b, y=c)   # arr_0, arr_1, y
        write_archive("data.npz", a, arr_0=b)  # arr_0 holds b

    Args:
        destination: A path, or a writable binary file object. Truncated (or
                     created); no extension is appended.
        *arrays: A single name->array mapping, or arrays to name by position.
        compress: If True, members are deflated; otherwise they are stored.
        compression_level: Deflate level, 0 to 9.
        **named_arrays: Arrays to save under their keyword name.

    Returns:
        One EntryResult per member, in write order.

    Raises:
        TypeError: If a mapping is mixed with other arrays, or a name is not
            a string.
        NpzConfigError: If the compression settings are invalid.
        UnsupportedTypeError: If an array's element type is not supported.
            Members written before it remain and the archive is finalized.
        DestinationError: If the destination cannot be created or written.
    """
    if len(arrays) == 1 and isinstance(arrays[0], Mapping) and not named_arrays:
        name_to_array = naming.resolve_names((), arrays[0])
    elif any(isinstance(a, Mapping) for a in arrays):
        raise TypeError(
            "A mapping of arrays must be the only array argument. "
            "Pass the other arrays inside the mapping instead."
        )
    else:
        name_to_array = naming.resolve_names(arrays, named_arrays)

    _validate_compression(compress, compression_level)

    if not name_to_array:
        warnings.warn(
            f"No arrays to write to {destination!r}. "
            "The archive will be empty and might not be readable as a dataset.",
            EmptyArchiveWarning,
            stacklevel=2,
        )

    with open(destination, compress=compress, compression_level=compression_level) as writer:
        return writer.add_all(name_to_array)
