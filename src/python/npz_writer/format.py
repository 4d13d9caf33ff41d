# npz_writer/format.py
"""
The NPY array encoder.

Every array is written with `fortran_order: True` and its shape unchanged, so
the raw bytes always follow in column-major order. Column-major arrays are
written straight from their memory; other layouts are reordered through a
buffered iterator, `BUFFER_SIZE` bytes at a time.
"""

from typing import Any, BinaryIO, Optional
import numpy as np

from .dataclasses import NpyHeader
from ._internal import descriptors, header_builder
from ._internal.header_builder import ARRAY_ALIGN, MAGIC_LEN, MAGIC_PREFIX, Version

BUFFER_SIZE = 2 ** 18

def header_for_array(array: np.ndarray, version: Optional[Version] = None) -> NpyHeader:
    """
    Builds the NPY header describing an array.

    Raises:
        UnsupportedTypeError: If the array's dtype has no NPY descriptor.
        EncodingError: If the header cannot be represented in `version`.
    """
    descr = descriptors.dtype_to_descriptor(array.dtype)
    return header_builder.build_header(descr, True, array.shape, version)

def write_array_data(fp: BinaryIO, array: np.ndarray) -> None:
    """Writes the raw element bytes of `array` in column-major order."""
    if array.flags.f_contiguous:
        # A flat uint8 view of the same memory, no copy.
        fp.write(np.ravel(array, order='F').view(np.uint8).data)
        return

    buffersize = max(BUFFER_SIZE // array.itemsize, 1)
    for chunk in np.nditer(
        array,
        flags=['external_loop', 'buffered', 'zerosize_ok'],
        buffersize=buffersize,
        order='F',
    ):
        fp.write(chunk.tobytes('C'))

def encode_array(fp: BinaryIO, array: Any, version: Optional[Version] = None) -> NpyHeader:
    """
    Writes one array to a byte sink as a complete NPY stream.

    Args:
        fp: Any object with a `write(bytes)` method (file, BytesIO, ...).
        array: The array to encode. Non-array values are converted with
               `numpy.asarray`; Python scalars become 0-d arrays.
        version: (Optional) Force NPY format version (1, 0) or (2, 0).

    Returns:
        The NpyHeader that was written.

    Raises:
        UnsupportedTypeError: If the element type is not supported. Nothing
            has been written to `fp` in that case.
        EncodingError: If the header cannot be built.
    """
    array = np.asarray(array)
    header = header_for_array(array, version)
    fp.write(header_builder.encode_header(header))
    write_array_data(fp, array)
    return header

__all__ = [
    'ARRAY_ALIGN',
    'BUFFER_SIZE',
    'MAGIC_LEN',
    'MAGIC_PREFIX',
    'encode_array',
    'header_for_array',
    'write_array_data',
]
