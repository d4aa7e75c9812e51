"""Local key/value storage.

Every persisted value (log, configuration text, theme) is a string stored
under a key. Each key maps to one file inside the data directory, and
writes replace the file atomically so an interrupted write never leaves a
half-written value behind.
"""

import logging
from pathlib import Path

from time_tracker.exceptions import StorageError, StoreWriteError
from time_tracker.utils import delete_file, ensure_dir, file_exists, read_file, write_file_atomic

logger = logging.getLogger(__name__)


class KeyValueStorage:
    """File-backed string storage keyed by name."""

    def __init__(self, data_dir: Path):
        """Initialize storage.

        Args:
            data_dir: Directory holding one file per key. Created on first write.
        """
        self.data_dir = data_dir

    def path_for(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key.startswith("."):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.data_dir / key

    def get_item(self, key: str) -> str | None:
        """Return the stored value, or None when the key has never been set.

        Raises:
            StorageError: If the value exists but cannot be read.
        """
        path = self.path_for(key)
        if not file_exists(path):
            return None
        try:
            return read_file(path)
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Failed to read stored value: {e}", key=key, path=path) from e

    def set_item(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value.

        Raises:
            StoreWriteError: If the value could not be written. The previous
                value is left in place.
        """
        path = self.path_for(key)
        try:
            ensure_dir(self.data_dir)
            write_file_atomic(path, value)
        except OSError as e:
            raise StoreWriteError(f"Failed to write stored value: {e}", key=key, path=path) from e
        logger.debug(f"Stored {len(value)} chars under {key}")

    def remove_item(self, key: str) -> None:
        """Delete the value stored under ``key``; missing keys are ignored.

        Raises:
            StoreWriteError: If the file exists but cannot be removed.
        """
        path = self.path_for(key)
        try:
            delete_file(path)
        except OSError as e:
            raise StoreWriteError(f"Failed to remove stored value: {e}", key=key, path=path) from e
