"""Data models for time-tracker."""

from time_tracker.models.config import ActivityConfig
from time_tracker.models.enums import Theme
from time_tracker.models.record import (
    LogRecord,
    append_comment,
    create_record,
    edit_record,
    format_display_timestamp,
    format_iso_timestamp,
    split_comments,
    utc_now,
)
from time_tracker.models.results import ExportResult

__all__ = [
    "ActivityConfig",
    "ExportResult",
    "LogRecord",
    "Theme",
    "append_comment",
    "create_record",
    "edit_record",
    "format_display_timestamp",
    "format_iso_timestamp",
    "split_comments",
    "utc_now",
]
