"""Tracker service: the command surface the presentation layer talks to.

Composes storage, the log store, the configuration service and the export
coordinator into one explicitly initialized object that screens (or the
CLI) receive instead of reaching for module-level state.
"""

import logging
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from time_tracker.config.paths import EXPORT_FILE_PREFIX
from time_tracker.exceptions import NoRecordsError
from time_tracker.models.config import ActivityConfig
from time_tracker.models.enums import Theme
from time_tracker.models.record import LogRecord, utc_now
from time_tracker.models.results import ExportResult
from time_tracker.services.config_service import ConfigService
from time_tracker.services.export_service import ExportCoordinator, ExportSink
from time_tracker.services.log_store import LogStore, display_to_storage_index
from time_tracker.services.storage import KeyValueStorage

logger = logging.getLogger(__name__)


class TrackerService:
    """Read/command surface for the UI."""

    def __init__(
        self,
        data_dir: Path,
        clock: Callable[[], datetime] = utc_now,
        export_prefix: str = EXPORT_FILE_PREFIX,
    ):
        """Initialize the service; call ``init`` before use.

        Args:
            data_dir: Directory for persisted log, configuration and theme.
            clock: Returns the current UTC instant; injected for tests.
            export_prefix: Prefix of suggested export file names.
        """
        self.storage = KeyValueStorage(data_dir)
        self.store = LogStore(self.storage, clock=clock)
        self.config_service = ConfigService(self.storage)
        self.exporter = ExportCoordinator(self.store, clock=clock, file_prefix=export_prefix)

    def init(self) -> "TrackerService":
        """Hydrate the log, configuration and theme from storage."""
        self.store.init()
        self.config_service.init()
        logger.debug(f"Tracker initialized from {self.storage.data_dir}")
        return self

    # ------------------------------------------------------------------
    # Log
    # ------------------------------------------------------------------

    def get_snapshot(self) -> list[LogRecord]:
        """Records in creation order."""
        return self.store.snapshot()

    def get_display_snapshot(self) -> list[LogRecord]:
        """Records newest first; positions match ``edit_entry``."""
        return self.store.display_snapshot()

    def record_activity(self, label: str) -> list[LogRecord]:
        return self.store.record_activity(label)

    def add_comment(self, text: str) -> list[LogRecord]:
        return self.store.add_comment_to_latest(text)

    def edit_entry(
        self, displayed_index: int, activity: str, comments_text: str | None = None
    ) -> list[LogRecord]:
        """Edit the entry at a newest-first position.

        ``comments_text`` of None keeps the entry's comments as stored.

        Raises:
            NoRecordsError: If the log is empty.
            RecordIndexError: If the position is out of range.
            InvalidActivity: If ``activity`` is blank.
        """
        with self.store.exclusive() as records:
            if not records:
                raise NoRecordsError("edit")
            stored_index = display_to_storage_index(displayed_index, len(records))
            return self.store.edit_at(stored_index, activity, comments_text)

    def export_and_maybe_clear(self, sink: ExportSink) -> ExportResult:
        """Export the whole log to ``sink``; the log is cleared once delivered."""
        return self.exporter.export_all(sink)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def get_config(self) -> ActivityConfig:
        """The active configuration."""
        return self.config_service.config

    def load_config(self) -> ActivityConfig:
        return self.config_service.load_config()

    def save_config(self, text: str) -> ActivityConfig:
        return self.config_service.save_config(text)

    def get_config_text(self) -> str:
        return self.config_service.config_text()

    def get_theme(self) -> Theme:
        return self.config_service.theme

    def set_theme(self, theme: Theme | str) -> Theme:
        return self.config_service.save_theme(theme)
