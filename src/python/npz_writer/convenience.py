# npz_writer/convenience.py
"""
High-level convenience function covering both the .npy and .npz writers.
"""
from typing import Any, List, Mapping, Union

from .dataclasses import EntryResult, NpyHeader
from .file import DEFAULT_COMPRESSION_LEVEL, Destination, write_array, write_archive

def npzwrite(
    destination: Destination,
    /,
    *arrays: Any,
    compress: bool = False,
    compression_level: int = DEFAULT_COMPRESSION_LEVEL,
    **named_arrays: Any
) -> Union[NpyHeader, List[EntryResult]]:
    """
    Saves one or several arrays, picking the file format from the arguments.

    - `npzwrite("x.npy", x)` writes a single .npy file.
    - `npzwrite("d.npz", {"x": x, "y": y})` writes an .npz archive with the
      mapping's keys as names.
    - `npzwrite("d.npz", a, b, y=c)` writes an .npz archive with members
      `arr_0`, `arr_1` and `y`.

    The file name is used as given; no extension is appended. Any existing
    file is overwritten.

    Args:
        destination: A path, or a writable binary file object.
        *arrays: The arrays to save, or a single name->array mapping.
        compress: (.npz only) If True, members are deflated.
        compression_level: (.npz only) Deflate level, 0 to 9.
        **named_arrays: (.npz only) Arrays to save under their keyword name.

    Returns:
        The NpyHeader for a single .npy file, or one EntryResult per member
        of an .npz archive.
    """
    if len(arrays) == 1 and not named_arrays and not isinstance(arrays[0], Mapping):
        return write_array(destination, arrays[0])
    return write_archive(
        destination,
        *arrays,
        compress=compress,
        compression_level=compression_level,
        **named_arrays,
    )
