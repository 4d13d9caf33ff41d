# tests/conftest.py
"""
Pytest configuration and shared fixtures for the test suite.
"""
import zipfile

import pytest
from pathlib import Path
import numpy as np

from npz_writer import write_archive

# One array per supported element type, in both native and swapped byte order
# where the byte order matters.
SUPPORTED_DTYPES = [
    'bool',
    'int8', 'int16', 'int32', 'int64',
    'uint8', 'uint16', 'uint32', 'uint64',
    'float16', 'float32', 'float64',
    'complex64', 'complex128',
    '>i2', '>i4', '>u8', '>f4', '>f8', '>c16',
    'S5', 'U3', '>U3',
]

def make_array(dtype: str, shape: tuple) -> np.ndarray:
    """Builds a deterministic, non-trivial array of the given dtype and shape."""
    dtype = np.dtype(dtype)
    count = int(np.prod(shape, dtype=np.int64))
    values = np.arange(count)
    if dtype.kind == 'b':
        data = values % 3 == 0
    elif dtype.kind == 'S':
        data = np.array([f"b{v}".encode() for v in values], dtype=dtype)
    elif dtype.kind == 'U':
        data = np.array([f"u{v}" for v in values], dtype=dtype)
    elif dtype.kind == 'c':
        data = values + 1j * (values + 0.5)
    else:
        data = values % 100
    return np.asarray(data).astype(dtype).reshape(shape)

@pytest.fixture(scope="session")
def standard_archive(tmp_path_factory) -> Path:
    """
    A pytest fixture that writes a standard archive from positional and
    keyword arrays. Runs once per test session.
    """
    filepath = tmp_path_factory.getbasetemp() / "standard.npz"
    write_archive(
        filepath,
        np.arange(10, dtype=np.int64),
        np.linspace(0, 1, 6, dtype=np.float32).reshape(2, 3),
        y=np.array([True, False, True]),
    )
    return filepath

@pytest.fixture
def read_member():
    """Returns a helper reading the raw bytes of one archive member."""
    def _read(path: Path, member: str) -> bytes:
        with zipfile.ZipFile(path) as zf:
            return zf.read(member)
    return _read
