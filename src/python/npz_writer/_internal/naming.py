# npz_writer/_internal/naming.py

"""
Internal logic for naming the arrays of an archive.
"""

from typing import Any, Mapping, Sequence

POSITIONAL_NAME_FORMAT = "arr_{index}"

def positional_name(index: int) -> str:
    """Returns the default name of the `index`-th positional array."""
    return POSITIONAL_NAME_FORMAT.format(index=index)

def resolve_names(
    positional: Sequence[Any],
    named: Mapping[str, Any]
) -> dict[str, Any]:
    """
    Merges positional and named arrays into a single name->array mapping.

    Positional arrays are named `arr_0`, `arr_1`, ... in argument order. The
    named arrays are applied afterwards as an overriding update, so a keyword
    called e.g. `arr_0` replaces the first positional array.

    Args:
        positional: Arrays given without a name.
        named: Arrays given with an explicit name.

    Returns:
        A new dictionary; positional names first, then the named ones.

    Raises:
        TypeError: If a name is not a string.
    """
    merged: dict[str, Any] = {
        positional_name(i): value for i, value in enumerate(positional)
    }
    for name, value in named.items():
        if not isinstance(name, str):
            raise TypeError(f"Array names must be strings, not {type(name).__name__}")
        merged[name] = value
    return merged
