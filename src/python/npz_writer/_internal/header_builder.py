# npz_writer/_internal/header_builder.py

"""
Internal functions to build the NPY header preamble.

The preamble is the 6-byte magic string, the 2-byte version, a little-endian
length field (2 bytes in version 1.0, 4 bytes in version 2.0) and the header
dictionary literal, padded with spaces and terminated by a newline so that the
whole preamble ends on a 64-byte boundary.
"""

import numbers
import struct
from typing import Any, Iterable, Optional, Tuple, TypeAlias

from ..dataclasses import NpyHeader
from ..exceptions import EncodingError

# TypeAlias for clarity in function signatures.
Version: TypeAlias = Tuple[int, int]

MAGIC_PREFIX = b"\x93NUMPY"
MAGIC_LEN = len(MAGIC_PREFIX) + 2
ARRAY_ALIGN = 64

# struct format of the header length field, per supported version.
_LENGTH_FORMATS: dict[Version, str] = {
    (1, 0): '<H',
    (2, 0): '<I',
}

def _normalize_shape(shape: Iterable[Any]) -> Tuple[int, ...]:
    """Validates dimension extents and returns them as a tuple of ints."""
    try:
        extents = tuple(shape)
    except TypeError:
        raise EncodingError(f"Shape must be a sequence of integers, got {shape!r}") from None

    for extent in extents:
        # bool is an Integral, but True is not a dimension extent.
        if isinstance(extent, bool) or not isinstance(extent, numbers.Integral):
            raise EncodingError(f"Shape extents must be integers, got {extent!r} in {extents!r}")
        if extent < 0:
            raise EncodingError(f"Shape extents must be non-negative, got {extent} in {extents!r}")
    return tuple(int(extent) for extent in extents)

def render_header_dict(descr: str, fortran_order: bool, shape: Tuple[int, ...]) -> str:
    """
    Renders the header dictionary literal, without padding.

    A one-dimensional shape keeps its trailing comma, `(3,)`, and a scalar
    shape renders as `()`, both as Python's tuple repr does.
    """
    return (
        f"{{'descr': '{descr}', "
        f"'fortran_order': {bool(fortran_order)!r}, "
        f"'shape': {tuple(shape)!r}, }}"
    )

def _pad(literal: str, version: Version) -> str:
    length_size = struct.calcsize(_LENGTH_FORMATS[version])
    unpadded = MAGIC_LEN + length_size + len(literal) + 1  # +1 for the newline
    return literal + " " * (-unpadded % ARRAY_ALIGN) + "\n"

def _fits(literal: str, version: Version) -> bool:
    length_size = struct.calcsize(_LENGTH_FORMATS[version])
    return len(_pad(literal, version)) < 256 ** length_size

def build_header(
    descr: str,
    fortran_order: bool,
    shape: Iterable[Any],
    version: Optional[Version] = None
) -> NpyHeader:
    """
    Builds the header description for an array.

    Args:
        descr: The descriptor string, e.g. '<f8'.
        fortran_order: Whether the data is stored column-major.
        shape: The dimension extents, in the array's own order.
        version: (Optional) Force a format version, (1, 0) or (2, 0). By
                 default version 1.0 is used unless the header is too long
                 for its 2-byte length field.

    Returns:
        An NpyHeader ready for `encode_header`.

    Raises:
        EncodingError: If the shape is malformed, the descriptor cannot be
            written as latin-1, or the requested version cannot hold the header.
    """
    if not isinstance(descr, str):
        raise EncodingError(f"Descriptor must be a string, got {descr!r}")
    try:
        descr.encode('latin1')
    except UnicodeEncodeError:
        raise EncodingError(f"Descriptor {descr!r} is not latin-1 encodable") from None

    extents = _normalize_shape(shape)
    literal = render_header_dict(descr, fortran_order, extents)

    if version is None:
        version = (1, 0) if _fits(literal, (1, 0)) else (2, 0)
    else:
        version = tuple(version)
        if version not in _LENGTH_FORMATS:
            supported = ", ".join(str(v) for v in _LENGTH_FORMATS)
            raise EncodingError(f"Unsupported format version {version}. Supported versions are: {supported}")

    if not _fits(literal, version):
        raise EncodingError(
            f"Header of {len(literal)} bytes does not fit the length field "
            f"of format version {version[0]}.{version[1]}"
        )

    return NpyHeader(
        version=version,
        descr=descr,
        fortran_order=bool(fortran_order),
        shape=extents,
    )

def encode_header(header: NpyHeader) -> bytes:
    """Serializes a header to its exact preamble bytes."""
    literal = render_header_dict(header.descr, header.fortran_order, header.shape)
    padded = _pad(literal, header.version).encode('latin1')
    major, minor = header.version
    return (
        MAGIC_PREFIX
        + bytes([major, minor])
        + struct.pack(_LENGTH_FORMATS[header.version], len(padded))
        + padded
    )
