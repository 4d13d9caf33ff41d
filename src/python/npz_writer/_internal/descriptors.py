# npz_writer/_internal/descriptors.py

"""
Internal utilities for mapping element types to NPY descriptor strings.

This module handles validation of NumPy dtypes and the conversion between
`ElementType` values and the descriptor strings stored in NPY headers
(e.g. '<f8', '>i4', '|b1').
"""

import sys
from typing import TypeAlias
import numpy as np

from ..dataclasses import ElementType
from ..exceptions import UnsupportedTypeError
from ..types import ElementKind

# TypeAlias for clarity in function signatures.
Descriptor: TypeAlias = str

# --- Mappings ---

# Maps NumPy dtype kind characters to element kinds.
_NP_KIND_TO_ELEMENT_KIND: dict[str, ElementKind] = {
    'b': ElementKind.BOOL,
    'i': ElementKind.INT,
    'u': ElementKind.UINT,
    'f': ElementKind.FLOAT,
    'c': ElementKind.COMPLEX,
    'S': ElementKind.BYTES,
    'U': ElementKind.UNICODE,
}

# Maps element kinds to the NPY descriptor type letter.
_ELEMENT_KIND_TO_LETTER: dict[ElementKind, str] = {
    ElementKind.BOOL: 'b',
    ElementKind.INT: 'i',
    ElementKind.UINT: 'u',
    ElementKind.FLOAT: 'f',
    ElementKind.COMPLEX: 'c',
    ElementKind.BYTES: 'S',
    ElementKind.UNICODE: 'U',
}

# Allowed byte widths for the fixed-size kinds.
_SUPPORTED_WIDTHS: dict[ElementKind, frozenset[int]] = {
    ElementKind.BOOL: frozenset({1}),
    ElementKind.INT: frozenset({1, 2, 4, 8}),
    ElementKind.UINT: frozenset({1, 2, 4, 8}),
    ElementKind.FLOAT: frozenset({2, 4, 8}),
    ElementKind.COMPLEX: frozenset({8, 16}),
}

_UCS4_WIDTH = 4

# --- Functions ---

def _unsupported(dtype: np.dtype) -> UnsupportedTypeError:
    supported_kinds = ", ".join(kind.name for kind in ElementKind)
    return UnsupportedTypeError(
        f"Unsupported NumPy dtype: '{dtype}'. "
        f"Supported element kinds are: {supported_kinds}"
    )

def element_type_from_dtype(dtype: np.dtype) -> ElementType:
    """
    Resolves the `ElementType` of a NumPy dtype.

    Args:
        dtype: The NumPy dtype of the array about to be encoded.

    Returns:
        The matching ElementType, keeping the dtype's byte order.

    Raises:
        UnsupportedTypeError: If the dtype is structured, an object dtype, or
            a kind/width combination with no NPY descriptor (e.g. longdouble).
    """
    dtype = np.dtype(dtype)
    if dtype.fields is not None or dtype.subdtype is not None:
        raise _unsupported(dtype)

    kind = _NP_KIND_TO_ELEMENT_KIND.get(dtype.kind)
    if kind is None:
        raise _unsupported(dtype)

    width = dtype.itemsize
    if kind is ElementKind.BYTES:
        if width < 1:
            raise _unsupported(dtype)
    elif kind is ElementKind.UNICODE:
        if width < _UCS4_WIDTH or width % _UCS4_WIDTH:
            raise _unsupported(dtype)
    elif width not in _SUPPORTED_WIDTHS[kind]:
        raise _unsupported(dtype)

    return ElementType(kind=kind, width=width, byteorder=dtype.byteorder)

def _byteorder_marker(element_type: ElementType, host_byteorder: str) -> str:
    if element_type.kind is ElementKind.BYTES:
        return '|'
    if element_type.width == 1:
        return '|'
    order = element_type.byteorder
    if order in ('=', '|'):
        return '<' if host_byteorder == 'little' else '>'
    return order

def resolve_descriptor(
    element_type: ElementType,
    host_byteorder: str = sys.byteorder
) -> Descriptor:
    """
    Builds the NPY descriptor string for an element type.

    Args:
        element_type: The resolved element type.
        host_byteorder: 'little' or 'big', used when the element type is in
            native byte order. Defaults to the running interpreter's order.

    Returns:
        A descriptor such as '<f8', '>i4', '|b1', '|S5' or '<U3'.
    """
    letter = _ELEMENT_KIND_TO_LETTER[element_type.kind]
    count = element_type.width
    if element_type.kind is ElementKind.UNICODE:
        count //= _UCS4_WIDTH
    return f"{_byteorder_marker(element_type, host_byteorder)}{letter}{count}"

def dtype_to_descriptor(dtype: np.dtype) -> Descriptor:
    """Shortcut for `resolve_descriptor(element_type_from_dtype(dtype))`."""
    return resolve_descriptor(element_type_from_dtype(dtype))
