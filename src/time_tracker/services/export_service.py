"""Export of the activity log.

The coordinator serializes the whole log to indented JSON, hands it to an
export sink, and clears the log once the sink has accepted the payload.
If the sink fails nothing is cleared.

Clear policy: the log is cleared immediately after a successful handoff
to the sink. There is no second confirmation step.

Sinks are the platform-specific part (download, share sheet, file write).
Two are shipped: ``DirectorySink`` writes a file, ``StreamSink`` writes to
an open text stream such as stdout.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import TextIO

from time_tracker.config.paths import EXPORT_FILE_EXTENSION, EXPORT_FILE_PREFIX, EXPORT_INDENT
from time_tracker.exceptions import ExportError, SinkError, StoreWriteError
from time_tracker.models.record import LogRecord, format_iso_timestamp, utc_now
from time_tracker.models.results import ExportResult
from time_tracker.services.log_store import LogStore, serialize_records
from time_tracker.utils import write_file_atomic

logger = logging.getLogger(__name__)


def build_export_payload(records: list[LogRecord]) -> str:
    """Human-readable JSON with fields in activity, timestamp, comments order."""
    return serialize_records(records, indent=EXPORT_INDENT)


def suggest_file_name(now: datetime, prefix: str = EXPORT_FILE_PREFIX) -> str:
    """File name embedding ``now``; ``:`` is replaced so the name is filesystem safe."""
    stamp = format_iso_timestamp(now).replace(":", "_")
    return f"{prefix}_{stamp}{EXPORT_FILE_EXTENSION}"


class ExportSink(ABC):
    """Destination for an exported payload."""

    key: str

    @abstractmethod
    def deliver(self, payload: str, suggested_file_name: str) -> None:
        """Deliver the payload.

        Raises:
            SinkError: If the payload could not be delivered.
        """

    def describe(self, suggested_file_name: str) -> str:
        """Where a delivered payload ended up, for user messages."""
        return suggested_file_name


class DirectorySink(ExportSink):
    """Writes the export as a file inside a directory."""

    key = "directory"

    def __init__(self, directory: Path):
        self.directory = directory

    def deliver(self, payload: str, suggested_file_name: str) -> None:
        target = self.directory / suggested_file_name
        try:
            write_file_atomic(target, payload)
        except OSError as e:
            raise SinkError(f"Could not write export file: {e}", {"path": str(target)}) from e
        logger.info(f"Export written to {target}")

    def describe(self, suggested_file_name: str) -> str:
        return str(self.directory / suggested_file_name)


class StreamSink(ExportSink):
    """Writes the export to an open text stream."""

    key = "stream"

    def __init__(self, stream: TextIO):
        self.stream = stream

    def deliver(self, payload: str, suggested_file_name: str) -> None:
        try:
            self.stream.write(payload)
            self.stream.write("\n")
            self.stream.flush()
        except (OSError, ValueError) as e:
            raise SinkError(f"Could not write export to stream: {e}") from e


class ExportCoordinator:
    """Exports the log to a sink and clears it on successful delivery."""

    def __init__(
        self,
        store: LogStore,
        clock: Callable[[], datetime] = utc_now,
        file_prefix: str = EXPORT_FILE_PREFIX,
    ):
        """Initialize coordinator.

        Args:
            store: Log store to read and clear.
            clock: Returns the current UTC instant (used in the file name).
            file_prefix: Prefix of suggested file names.
        """
        self._store = store
        self._clock = clock
        self._file_prefix = file_prefix

    def export_all(self, sink: ExportSink) -> ExportResult:
        """Export every record to ``sink`` and clear the log.

        The store's mutation lock is held for the whole export, so no
        record can be added between serialization and clearing.

        Returns:
            ExportResult with the file name, record count and cleared flag.

        Raises:
            ExportError: If delivery failed (the log is unchanged), or if
                delivery succeeded but the log could not be cleared
                (``delivered`` is True and the log is kept).
        """
        with self._store.exclusive() as records:
            payload = build_export_payload(records)
            file_name = suggest_file_name(self._clock(), self._file_prefix)

            try:
                sink.deliver(payload, file_name)
            except Exception as e:
                logger.error(f"Error exporting logs: {e}")
                raise ExportError("Failed to export logs", delivered=False, cause=e) from e

            try:
                self._store.clear()
            except StoreWriteError as e:
                logger.error(f"Export delivered but clearing the log failed: {e}")
                raise ExportError(
                    "Logs were exported but could not be cleared", delivered=True, cause=e
                ) from e

        logger.info(f"Exported {len(records)} record(s) as {file_name}")
        return ExportResult(file_name=file_name, record_count=len(records), cleared=True)
