# npz_writer/abc.py
"""Abstract Base Classes for the npz_writer library."""

import abc

class ArchiveBase(abc.ABC):
    """Abstract base class for archive handles."""

    @abc.abstractmethod
    def close(self) -> None:
        """
        Finalizes the archive and releases the destination.
        Subsequent operations on the object will raise an error.
        """
        raise NotImplementedError

    @property
    @abc.abstractmethod
    def closed(self) -> bool:
        """Returns True if the archive is closed."""
        raise NotImplementedError

    def __enter__(self) -> "ArchiveBase":
        if self.closed:
            raise ValueError("Cannot enter context with a closed archive.")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
