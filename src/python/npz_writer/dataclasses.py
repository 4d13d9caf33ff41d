# npz_writer/dataclasses.py
"""
Dataclasses for structured data within the npz_writer library.
"""
from dataclasses import dataclass
from typing import Tuple
from .types import ElementKind

@dataclass(frozen=True, slots=True)
class ElementType:
    """The element type of an array, resolved once per encode call."""
    kind: ElementKind
    width: int  # bytes per element
    byteorder: str  # '<', '>', '=' (host native) or '|' (not applicable)

@dataclass(frozen=True, slots=True)
class NpyHeader:
    """The header fields written in front of the raw array bytes."""
    version: Tuple[int, int]
    descr: str
    fortran_order: bool
    shape: Tuple[int, ...]

@dataclass(frozen=True, slots=True)
class ArchiveEntry:
    """One fully encoded NPY stream waiting to be written into an archive."""
    name: str  # member name, including the '.npy' suffix
    compress: bool
    compression_level: int
    data: bytes

@dataclass(frozen=True, slots=True)
class EntryResult:
    """Details of a single archive member once it has been written."""
    name: str
    size: int
    compressed_size: int
    compression_ratio: float
