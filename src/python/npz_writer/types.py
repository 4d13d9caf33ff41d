# npz_writer/types.py

"""
Core type-safe enumerations for the npz_writer library.
"""
from enum import IntEnum

class ElementKind(IntEnum):
    """
    Enumeration of the element categories an NPY file can hold.

    Each member maps to one type letter of the NPY descriptor string
    (see `npz_writer._internal.descriptors`).
    """
    # Logical
    BOOL = 0

    # Integers
    INT = 1
    UINT = 2

    # Floating point (IEEE 754) and pairs of floats
    FLOAT = 3
    COMPLEX = 4

    # Fixed-width character sequences
    BYTES = 5    # one byte per character
    UNICODE = 6  # UCS-4, four bytes per character
