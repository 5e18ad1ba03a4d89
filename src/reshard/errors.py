"""Error types for reshard."""

from pathlib import Path


class ReshardError(Exception):
    """Base exception for reshard errors.

    Carries the filesystem path the failing step was operating on, when
    there is one.
    """

    def __init__(self, message: str, path: str | Path | None = None):
        super().__init__(message)
        self.path = path


class ConfigError(ReshardError):
    """Configuration error."""
    pass


class ReadFailure(ReshardError):
    """Reading a file's contents failed."""
    pass


class WriteFailure(ReshardError):
    """Writing a file's contents failed."""
    pass


class RemoveFailure(ReshardError):
    """Removing a file or directory failed."""
    pass


class DirectoryCreateFailure(ReshardError):
    """Creating a shard directory failed."""
    pass


class DirectoryListFailure(ReshardError):
    """Listing a directory's entries failed."""
    pass


class SerializationFailure(ReshardError):
    """Sentinel metadata could not be serialized."""
    pass


class SentinelCreateFailure(ReshardError):
    """The sentinel file could not be created."""
    pass


class PartialWriteFailure(ReshardError):
    """Fewer bytes were written than were serialized."""
    pass


class SyncFailure(ReshardError):
    """Flushing a written file to disk failed."""
    pass
