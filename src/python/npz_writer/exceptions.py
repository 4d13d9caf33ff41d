# npz_writer/exceptions.py
"""Custom exception and warning types for the npz_writer library."""

from typing import Optional

class NpzError(Exception):
    """Base exception for all errors raised by this library."""
    pass

class NpzConfigError(NpzError, ValueError):
    """Error related to writer configuration, such as a bad compression level."""
    pass

class UnsupportedTypeError(NpzError, TypeError):
    """Raised when an array's element type has no NPY descriptor."""
    pass

class EncodingError(NpzError, ValueError):
    """
    Raised when a header cannot be built: a malformed shape (negative or
    non-integer extent) or a header that does not fit the requested
    format version.
    """
    pass

class DestinationError(NpzError, OSError):
    """
    Error raised when the destination cannot be created, truncated or written.

    The instance carries the same `errno`, `strerror` and `filename` as the
    `OSError` it was built from, so callers catching `OSError` keep working.
    """

    @classmethod
    def from_os_error(
        cls,
        os_error: OSError,
        destination: Optional[object] = None
    ) -> "DestinationError":
        """Factory method to create a DestinationError from an OSError."""
        filename = os_error.filename if os_error.filename is not None else destination
        if os_error.errno is None:
            # OSError(errno, strerror, filename) needs a real errno to populate
            # the attributes, fall back to a plain message.
            err = cls(str(os_error))
            err.filename = filename
            return err
        return cls(os_error.errno, os_error.strerror, filename)

class EmptyArchiveWarning(UserWarning):
    """
    Emitted when an archive is written without any member.

    The archive is still produced and is a valid ZIP file, but it holds no
    arrays and is unlikely to be what the caller meant to write.
    """
    pass
