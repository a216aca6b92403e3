"""Custom exception hierarchy for heightmaps."""

from typing import Optional


class HeightmapError(Exception):
    """Base exception for heightmaps library."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message)
        self.cause = cause


class ConfigurationError(HeightmapError):
    """Configuration and caller-input errors."""
    pass


class MissingArgumentError(ConfigurationError):
    """A required argument was not supplied."""
    pass


class DuplicatePayloadError(ConfigurationError):
    """The layer is already held by the collection."""
    pass


class OutOfRangeError(ConfigurationError):
    """A position or slot index falls outside the valid domain."""
    pass


class NegativeIndexError(ConfigurationError):
    """A position or slot index is negative."""
    pass


class EmptyCollectionError(ConfigurationError):
    """The collection holds no entries."""
    pass


class MisalignedIndexError(ConfigurationError):
    """A physical position does not address the start of an entry."""
    pass
