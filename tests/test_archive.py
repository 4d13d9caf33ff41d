# tests/test_archive.py
"""
Comprehensive tests for the archive writer and `write_archive`.
"""
import io
import zipfile

import pytest
import numpy as np
from pathlib import Path

import npz_writer
from npz_writer import (
    DestinationError,
    EmptyArchiveWarning,
    NpzConfigError,
    UnsupportedTypeError,
    write_archive,
)
from npz_writer._internal.naming import resolve_names

from conftest import SUPPORTED_DTYPES, make_array

# --- Naming tests ---

def test_resolve_names_positional_then_named():
    merged = resolve_names(["a", "b"], {"y": "c"})
    assert merged == {"arr_0": "a", "arr_1": "b", "y": "c"}
    assert list(merged) == ["arr_0", "arr_1", "y"]

def test_resolve_names_keyword_wins_on_collision():
    merged = resolve_names(["a", "b"], {"arr_1": "z"})
    assert merged == {"arr_0": "a", "arr_1": "z"}

def test_resolve_names_rejects_non_string_names():
    with pytest.raises(TypeError, match="must be strings"):
        resolve_names([], {1: "a"})

# --- write_archive tests ---

def test_positional_and_keyword_members(standard_archive: Path):
    """Positional arrays become arr_0, arr_1; keyword arrays keep their name."""
    with zipfile.ZipFile(standard_archive) as zf:
        assert sorted(zf.namelist()) == ["arr_0.npy", "arr_1.npy", "y.npy"]

    with np.load(standard_archive) as npz:
        np.testing.assert_array_equal(npz["arr_0"], np.arange(10, dtype=np.int64))
        np.testing.assert_array_equal(
            npz["arr_1"], np.linspace(0, 1, 6, dtype=np.float32).reshape(2, 3)
        )
        np.testing.assert_array_equal(npz["y"], np.array([True, False, True]))

def test_keyword_overrides_positional_name(tmp_path: Path):
    filepath = tmp_path / "collision.npz"
    a = np.arange(3)
    b = np.arange(3, 8)

    write_archive(filepath, a, arr_0=b)

    with zipfile.ZipFile(filepath) as zf:
        assert zf.namelist() == ["arr_0.npy"]
    with np.load(filepath) as npz:
        np.testing.assert_array_equal(npz["arr_0"], b)

def test_mapping_form(tmp_path: Path):
    filepath = tmp_path / "mapping.npz"
    arrays = {name: make_array(name, (3, 2)) for name in ['int8', 'float64', 'complex64']}

    results = write_archive(filepath, arrays)

    assert [r.name for r in results] == ["int8.npy", "float64.npy", "complex64.npy"]
    with np.load(filepath) as npz:
        assert sorted(npz.files) == sorted(arrays)
        for name, original in arrays.items():
            np.testing.assert_array_equal(npz[name], original)
            assert npz[name].dtype == original.dtype

def test_mapping_form_allows_reserved_names(tmp_path: Path):
    """Names that clash with keyword options can still be given through a mapping."""
    filepath = tmp_path / "reserved.npz"
    write_archive(filepath, {"compress": np.arange(2), "compression_level": np.arange(3)})
    with np.load(filepath) as npz:
        assert sorted(npz.files) == ["compress", "compression_level"]

def test_keyword_named_destination_is_an_array(tmp_path: Path):
    filepath = tmp_path / "dest_kw.npz"
    write_archive(filepath, destination=np.arange(4))
    with np.load(filepath) as npz:
        np.testing.assert_array_equal(npz["destination"], np.arange(4))

def test_mapping_mixed_with_arrays_fails(tmp_path: Path):
    filepath = tmp_path / "mixed.npz"
    with pytest.raises(TypeError, match="mapping of arrays must be the only"):
        write_archive(filepath, {"x": np.arange(2)}, np.arange(3))
    assert not filepath.exists()

@pytest.mark.parametrize("compress", [False, True])
def test_every_dtype_roundtrips_in_archive(tmp_path: Path, compress):
    filepath = tmp_path / f"all_dtypes_{compress}.npz"
    arrays = {f"a{i}": make_array(dtype, (4, 3)) for i, dtype in enumerate(SUPPORTED_DTYPES)}

    write_archive(filepath, arrays, compress=compress)

    with np.load(filepath) as npz:
        for name, original in arrays.items():
            assert npz[name].dtype == original.dtype
            np.testing.assert_array_equal(npz[name], original)

def test_compression_settings_are_applied(tmp_path: Path):
    stored_path = tmp_path / "stored.npz"
    deflated_path = tmp_path / "deflated.npz"
    data = np.zeros((200, 50), dtype=np.float64)

    stored = write_archive(stored_path, data)
    deflated = write_archive(deflated_path, data, compress=True, compression_level=9)

    with zipfile.ZipFile(stored_path) as zf:
        assert zf.getinfo("arr_0.npy").compress_type == zipfile.ZIP_STORED
    with zipfile.ZipFile(deflated_path) as zf:
        assert zf.getinfo("arr_0.npy").compress_type == zipfile.ZIP_DEFLATED

    assert stored[0].compressed_size == stored[0].size
    assert deflated[0].compressed_size < deflated[0].size
    assert deflated[0].compression_ratio < 0.1
    with np.load(deflated_path) as npz:
        np.testing.assert_array_equal(npz["arr_0"], data)

def test_members_are_complete_npy_streams(standard_archive: Path, read_member, tmp_path: Path):
    """Each member is byte-identical to the .npy file of the same array."""
    single = tmp_path / "single.npy"
    npz_writer.write_array(single, np.arange(10, dtype=np.int64))
    assert read_member(standard_archive, "arr_0.npy") == single.read_bytes()

def test_empty_archive_warns_and_is_valid(tmp_path: Path):
    filepath = tmp_path / "empty.npz"

    with pytest.warns(EmptyArchiveWarning, match="No arrays to write"):
        results = write_archive(filepath, {})

    assert results == []
    assert zipfile.is_zipfile(filepath)
    with zipfile.ZipFile(filepath) as zf:
        assert zf.namelist() == []
    with np.load(filepath) as npz:
        assert list(npz.files) == []

def test_no_arguments_is_empty_archive(tmp_path: Path):
    filepath = tmp_path / "empty_args.npz"
    with pytest.warns(EmptyArchiveWarning):
        write_archive(filepath)
    assert zipfile.is_zipfile(filepath)

def test_overwrite_leaves_no_residual_bytes(tmp_path: Path):
    filepath = tmp_path / "overwrite.npz"
    write_archive(filepath, big=np.zeros(50_000))
    long_size = filepath.stat().st_size

    write_archive(filepath, small=np.arange(3))

    assert filepath.stat().st_size < long_size
    with np.load(filepath) as npz:
        assert list(npz.files) == ["small"]

def test_same_input_gives_same_bytes(tmp_path: Path):
    first = tmp_path / "first.npz"
    second = tmp_path / "second.npz"
    write_archive(first, np.arange(5), x=np.eye(3), compress=True)
    write_archive(second, np.arange(5), x=np.eye(3), compress=True)
    assert first.read_bytes() == second.read_bytes()

def test_file_object_destination(tmp_path: Path):
    buffer = io.BytesIO()
    write_archive(buffer, x=np.arange(6).reshape(2, 3))
    buffer.seek(0)
    with np.load(buffer) as npz:
        np.testing.assert_array_equal(npz["x"], np.arange(6).reshape(2, 3))

# --- Error path tests ---

def test_unsupported_type_keeps_earlier_members(tmp_path: Path):
    """A failing array aborts the write but the archive is finalized with earlier members."""
    filepath = tmp_path / "partial.npz"
    arrays = {
        "good": np.arange(4),
        "bad": np.array([object()]),
        "never": np.arange(2),
    }

    with pytest.raises(UnsupportedTypeError):
        write_archive(filepath, arrays)

    with zipfile.ZipFile(filepath) as zf:
        assert zf.testzip() is None
        assert zf.namelist() == ["good.npy"]
    with np.load(filepath) as npz:
        np.testing.assert_array_equal(npz["good"], np.arange(4))

@pytest.mark.parametrize("kwargs", [
    {"compression_level": 10},
    {"compression_level": -1},
    {"compression_level": "3"},
    {"compress": "yes"},
])
def test_invalid_compression_settings(tmp_path: Path, kwargs):
    filepath = tmp_path / "config.npz"
    with pytest.raises(NpzConfigError):
        write_archive(filepath, np.arange(3), **kwargs)
    assert not filepath.exists()

def test_missing_directory_raises_destination_error(tmp_path: Path):
    filepath = tmp_path / "missing" / "data.npz"
    with pytest.raises(DestinationError) as excinfo:
        write_archive(filepath, np.arange(3))
    assert isinstance(excinfo.value.__cause__, FileNotFoundError)

# --- ArchiveWriter tests ---

def test_writer_add_and_close(tmp_path: Path):
    filepath = tmp_path / "writer.npz"

    with npz_writer.open(filepath, compress=True) as f:
        assert not f.closed
        res1 = f.add("prices", np.linspace(0, 1, 5))
        res2 = f.add("volumes", np.arange(5, dtype=np.uint32))
        assert res1.name == "prices.npy"
        assert res2.name == "volumes.npy"
        assert f.names == ("prices", "volumes")

    assert f.closed
    with np.load(filepath) as npz:
        assert sorted(npz.files) == ["prices", "volumes"]

def test_writer_rejects_duplicate_names(tmp_path: Path):
    filepath = tmp_path / "dup.npz"
    with npz_writer.open(filepath) as f:
        f.add("x", np.arange(2))
        with pytest.raises(ValueError, match="already written"):
            f.add("x", np.arange(3))

    with np.load(filepath) as npz:
        np.testing.assert_array_equal(npz["x"], np.arange(2))

def test_operation_on_closed_writer_fails(tmp_path: Path):
    filepath = tmp_path / "closed.npz"
    f = npz_writer.open(filepath)
    f.close()
    f.close()  # closing twice is a no-op
    assert f.closed
    with pytest.raises(ValueError, match="Operation attempted on a closed archive"):
        f.add("x", np.arange(5))
    with pytest.raises(ValueError, match="closed archive"):
        with f:
            pass

def test_writer_is_closed_when_body_raises(tmp_path: Path):
    filepath = tmp_path / "raises.npz"
    with pytest.raises(RuntimeError):
        with npz_writer.open(filepath) as f:
            f.add("kept", np.arange(3))
            raise RuntimeError("boom")

    assert f.closed
    with np.load(filepath) as npz:
        assert list(npz.files) == ["kept"]
