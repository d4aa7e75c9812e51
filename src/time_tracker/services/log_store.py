"""Log store: the single owner of the activity log.

The store keeps the canonical, creation-ordered list of records in memory
and writes the whole list to storage on every mutation. Mutations run
under one re-entrant lock that is held across the persistence call, so
overlapping requests are applied one after another and a snapshot always
reflects every mutation that completed before it was taken.

Each mutation builds the new list, persists it, and only then swaps it in.
When the write fails the in-memory log is left exactly as it was.

Display order (newest first) is derived at read time. Positions coming
from a newest-first view must be translated with
``display_to_storage_index`` before they reach ``edit_at``.
"""

import json
import logging
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import datetime, timedelta

from pydantic import TypeAdapter, ValidationError

from time_tracker.config.paths import LOGS_KEY
from time_tracker.exceptions import (
    CorruptStore,
    NoRecordsError,
    RecordIndexError,
    StorageError,
)
from time_tracker.models.record import (
    LogRecord,
    append_comment,
    create_record,
    edit_record,
    truncate_to_millis,
    utc_now,
)
from time_tracker.services.storage import KeyValueStorage

logger = logging.getLogger(__name__)

_RECORDS_ADAPTER = TypeAdapter(list[LogRecord])

# Smallest step between two timestamps at the stored precision
TIMESTAMP_STEP = timedelta(milliseconds=1)


def display_to_storage_index(displayed_index: int, length: int) -> int:
    """Translate a newest-first position into a creation-order position.

    ``0`` is the most recently created record, which is stored last.

    Args:
        displayed_index: Position in the newest-first view.
        length: Number of records in the log.

    Returns:
        ``length - 1 - displayed_index``

    Raises:
        RecordIndexError: If the position is negative or past the end.
    """
    if displayed_index < 0 or displayed_index >= length:
        raise RecordIndexError(displayed_index, length)
    return length - 1 - displayed_index


def serialize_records(records: list[LogRecord], indent: int | None = None) -> str:
    """Serialize records to the JSON interchange format."""
    return json.dumps([r.to_dict() for r in records], indent=indent, ensure_ascii=False)


def parse_records(text: str) -> list[LogRecord]:
    """Parse the JSON interchange format into records.

    Raises:
        CorruptStore: If the text is not a JSON array of valid records.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise CorruptStore(f"invalid JSON ({e})", key=LOGS_KEY) from e
    if not isinstance(data, list):
        raise CorruptStore(f"expected a list, got {type(data).__name__}", key=LOGS_KEY)
    try:
        return _RECORDS_ADAPTER.validate_python(data)
    except ValidationError as e:
        raise CorruptStore(f"{e.error_count()} invalid field(s)", key=LOGS_KEY) from e


class LogStore:
    """Owns, mutates and persists the activity log.

    Example:
        >>> store = LogStore(KeyValueStorage(tmp_path))
        >>> store.init()
        >>> store.record_activity("Work")
        >>> store.add_comment_to_latest("Wrote report")
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        clock: Callable[[], datetime] = utc_now,
    ):
        """Initialize the store (empty until ``init`` is called).

        Args:
            storage: Persistence backend.
            clock: Returns the current UTC instant; injected for tests.
        """
        self._storage = storage
        self._clock = clock
        self._records: list[LogRecord] = []
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def load(self) -> list[LogRecord]:
        """Read the persisted log without touching the in-memory state.

        Returns:
            The persisted records, or an empty list when nothing is stored.

        Raises:
            CorruptStore: If the stored value is not a valid log.
            StorageError: If the stored value cannot be read.
        """
        raw = self._storage.get_item(LOGS_KEY)
        if raw is None:
            return []
        return parse_records(raw)

    def init(self) -> list[LogRecord]:
        """Hydrate the store from storage.

        An unreadable or corrupt persisted log is logged and replaced by an
        empty log in memory; the stored value is left alone until the next
        mutation.
        """
        try:
            records = self.load()
        except StorageError as e:
            logger.error(f"Error reading logs, starting empty: {e}")
            records = []
        with self._lock:
            self._records = records
        logger.debug(f"Loaded {len(records)} record(s)")
        return self.snapshot()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def snapshot(self) -> list[LogRecord]:
        """Copy of the log in creation order; changing it never affects the store."""
        with self._lock:
            return [r.model_copy(deep=True) for r in self._records]

    def display_snapshot(self) -> list[LogRecord]:
        """Copy of the log newest first, as presented to the user."""
        return list(reversed(self.snapshot()))

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    @contextmanager
    def exclusive(self) -> Iterator[list[LogRecord]]:
        """Hold the mutation lock and yield a snapshot.

        No other mutation can run until the block exits, so work based on
        the snapshot (such as export followed by ``clear``) sees a log
        that cannot change underneath it.
        """
        with self._lock:
            yield self.snapshot()

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def record_activity(self, label: str) -> list[LogRecord]:
        """Append a new record stamped with the current instant and persist.

        Raises:
            InvalidActivity: If the label is empty after trimming.
            StoreWriteError: If persisting fails (nothing is appended).
        """
        with self._lock:
            now = truncate_to_millis(self._clock())
            if self._records and now <= self._records[-1].timestamp:
                now = self._records[-1].timestamp + TIMESTAMP_STEP
            record = create_record(label, now)
            self._commit([*self._records, record])
            logger.debug(f"Recorded activity '{record.activity}'")
            return self.snapshot()

    def add_comment_to_latest(self, text: str) -> list[LogRecord]:
        """Append a comment to the most recently created record and persist.

        Raises:
            NoRecordsError: If the log is empty.
            StoreWriteError: If persisting fails (the comment is not added).
        """
        with self._lock:
            if not self._records:
                raise NoRecordsError("add_comment")
            updated = [*self._records[:-1], append_comment(self._records[-1], text)]
            self._commit(updated)
            return self.snapshot()

    def edit_at(
        self,
        position_from_oldest: int,
        new_activity: str,
        new_comments_raw: str | None = None,
    ) -> list[LogRecord]:
        """Replace activity and comments of the record at a creation-order position.

        Args:
            position_from_oldest: Index in creation order (0 is the oldest).
            new_activity: Replacement label, trimmed.
            new_comments_raw: Comma separated comments replacing the old list,
                or None to keep the stored comments untouched.

        Raises:
            NoRecordsError: If the log is empty.
            RecordIndexError: If the position is out of range.
            InvalidActivity: If the new label is empty after trimming.
            StoreWriteError: If persisting fails (the record is unchanged).
        """
        with self._lock:
            if not self._records:
                raise NoRecordsError("edit")
            if position_from_oldest < 0 or position_from_oldest >= len(self._records):
                raise RecordIndexError(position_from_oldest, len(self._records))
            updated = list(self._records)
            updated[position_from_oldest] = edit_record(
                updated[position_from_oldest], new_activity, new_comments_raw
            )
            self._commit(updated)
            logger.debug(f"Edited record at position {position_from_oldest}")
            return self.snapshot()

    def clear(self) -> None:
        """Empty the log and persist the empty state.

        Raises:
            StoreWriteError: If persisting fails (the log is kept).
        """
        with self._lock:
            self._commit([])
            logger.info("Log cleared")

    def _commit(self, records: list[LogRecord]) -> None:
        # Persist first; memory only changes once the write succeeded
        self._storage.set_item(LOGS_KEY, serialize_records(records))
        self._records = records
