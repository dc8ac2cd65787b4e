"""Custom exceptions for definition loading and save persistence."""
from __future__ import annotations


class DataError(Exception):
    """Base exception for the data layer."""


class DataNotFoundError(DataError):
    """Raised when a requested file does not exist."""


class DataIOError(DataError):
    """Raised when the filesystem refuses a read or write."""


class DataDecodeError(DataError):
    """Raised when JSON is malformed or violates the expected schema."""

    def __init__(self, location: str, cause: str) -> None:
        self.location = location
        self.cause = cause
        super().__init__(f"{location}: {cause}")


class DataEncodeError(DataError):
    """Raised when in-memory state cannot be serialized."""


class DataValidationError(DataDecodeError):
    """Raised when a definition file fails structural validation."""
