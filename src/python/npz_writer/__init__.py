# npz_writer/__init__.py
"""
NPY and NPZ writers for NumPy arrays.
"""
from .file import DEFAULT_COMPRESSION_LEVEL, ArchiveWriter, open, write_archive, write_array
from .format import encode_array
from .convenience import npzwrite
from .types import ElementKind
from .dataclasses import ElementType, EntryResult, NpyHeader
from .exceptions import (
    DestinationError,
    EmptyArchiveWarning,
    EncodingError,
    NpzConfigError,
    NpzError,
    UnsupportedTypeError,
)

__version__ = "0.1.0"


# Define what gets imported with 'from npz_writer import *'
__all__ = [
    'open',
    'write_array',
    'write_archive',
    'npzwrite',
    'encode_array',
    'ArchiveWriter',
    'DEFAULT_COMPRESSION_LEVEL',
    'ElementKind',
    'ElementType',
    'EntryResult',
    'NpyHeader',
    'NpzError',
    'NpzConfigError',
    'UnsupportedTypeError',
    'EncodingError',
    'DestinationError',
    'EmptyArchiveWarning',
    '__version__',
]
