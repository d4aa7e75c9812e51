"""Services for time-tracker."""

from time_tracker.services.config_service import ConfigService
from time_tracker.services.export_service import (
    DirectorySink,
    ExportCoordinator,
    ExportSink,
    StreamSink,
)
from time_tracker.services.log_store import LogStore, display_to_storage_index
from time_tracker.services.storage import KeyValueStorage
from time_tracker.services.tracker_service import TrackerService

__all__ = [
    "ConfigService",
    "DirectorySink",
    "ExportCoordinator",
    "ExportSink",
    "KeyValueStorage",
    "LogStore",
    "StreamSink",
    "TrackerService",
    "display_to_storage_index",
]
