"""Custom exceptions for time-tracker.

All exceptions inherit from TimeTrackerError, allowing the presentation
layer to catch every domain failure with a single except clause while
services raise the most specific type.

Exception hierarchy:
    TimeTrackerError (base)
    ├── InvalidActivity
    ├── NoRecordsError
    ├── RecordIndexError (also an IndexError)
    ├── StorageError
    │   ├── CorruptStore
    │   └── StoreWriteError
    ├── InvalidConfig
    ├── SinkError
    └── ExportError
"""

from pathlib import Path
from typing import Any


class TimeTrackerError(Exception):
    """Base exception for all time-tracker errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


# =============================================================================
# Record Errors
# =============================================================================


class InvalidActivity(TimeTrackerError):
    """Raised when an activity label is empty after trimming."""

    def __init__(self, activity: str | None = None):
        super().__init__("Activity name cannot be empty", {"activity": repr(activity)})
        self.activity = activity


class NoRecordsError(TimeTrackerError):
    """Raised when a comment or edit targets an empty log."""

    def __init__(self, operation: str):
        super().__init__("No records in the log", {"operation": operation})
        self.operation = operation


class RecordIndexError(TimeTrackerError, IndexError):
    """Raised when a record position is outside the collection."""

    def __init__(self, index: int, length: int):
        super().__init__("Record position out of range", {"index": index, "length": length})
        self.index = index
        self.length = length


# =============================================================================
# Storage Errors
# =============================================================================


class StorageError(TimeTrackerError):
    """Raised when persisted data cannot be read or written."""

    def __init__(self, message: str, key: str | None = None, path: Path | None = None):
        details: dict[str, Any] = {}
        if key:
            details["key"] = key
        if path:
            details["path"] = str(path)
        super().__init__(message, details)
        self.key = key
        self.path = path


class CorruptStore(StorageError):
    """Raised when the persisted log is not a valid record collection.

    The store never partially loads: either every record validates or
    this is raised and the caller decides how to recover.
    """

    def __init__(self, reason: str, key: str | None = None):
        super().__init__(f"Persisted log is unreadable: {reason}", key=key)
        self.reason = reason


class StoreWriteError(StorageError):
    """Raised when a write to local storage fails.

    The operation that triggered the write has not been applied.
    """


# =============================================================================
# Configuration Errors
# =============================================================================


class InvalidConfig(TimeTrackerError):
    """Raised when configuration text cannot be turned into an ActivityConfig.

    Examples:
        - Invalid YAML syntax
        - Missing or empty ``activities`` list
        - Non-string activity labels
    """

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


# =============================================================================
# Export Errors
# =============================================================================


class SinkError(TimeTrackerError):
    """Raised by an export sink when delivery fails."""


class ExportError(TimeTrackerError):
    """Raised when an export does not complete.

    ``delivered`` tells whether the payload reached the sink before the
    failure (the log is kept in either case).
    """

    def __init__(self, message: str, delivered: bool = False, cause: Exception | None = None):
        details: dict[str, Any] = {"delivered": delivered}
        if cause is not None:
            details["cause"] = str(cause)
        super().__init__(message, details)
        self.delivered = delivered
        self.cause = cause
