"""Command decorators shared by the CLI command modules.

``with_tracker`` builds an initialized TrackerService from the runtime
settings and injects it into the command, and turns domain errors into a
printed message and exit code 1 so commands only handle the happy path.
"""

from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar

import typer

from time_tracker.config.messages import ERROR_MESSAGES
from time_tracker.config.settings import get_export_settings, get_storage_settings
from time_tracker.exceptions import (
    ExportError,
    InvalidActivity,
    InvalidConfig,
    NoRecordsError,
    RecordIndexError,
    StoreWriteError,
    TimeTrackerError,
)
from time_tracker.services.tracker_service import TrackerService
from time_tracker.utils.console import print_error

F = TypeVar("F", bound=Callable[..., Any])


def build_tracker() -> TrackerService:
    """Create and initialize a TrackerService from environment settings."""
    storage_settings = get_storage_settings()
    export_settings = get_export_settings()
    tracker = TrackerService(
        storage_settings.data_dir,
        export_prefix=export_settings.file_prefix,
    )
    return tracker.init()


def error_message(error: TimeTrackerError) -> str:
    """User-facing text for a domain error."""
    if isinstance(error, NoRecordsError):
        return ERROR_MESSAGES["no_logs"]
    if isinstance(error, InvalidActivity):
        return ERROR_MESSAGES["invalid_activity"]
    if isinstance(error, RecordIndexError):
        return ERROR_MESSAGES["index_out_of_range"].format(index=error.index)
    if isinstance(error, InvalidConfig):
        return ERROR_MESSAGES["invalid_config"].format(error=error.reason)
    if isinstance(error, ExportError):
        return ERROR_MESSAGES["export_failed"].format(error=error)
    if isinstance(error, StoreWriteError):
        return ERROR_MESSAGES["storage_failed"].format(error=error.message)
    return ERROR_MESSAGES["generic_error"].format(error=error)


def with_tracker(func: F) -> F:
    """Inject an initialized ``tracker`` keyword argument into a command.

    The decorated function should accept ``tracker`` with a default of None:
        def my_command(tracker: TrackerService | None = None) -> None:
            assert tracker is not None
            ...

    Raises:
        typer.Exit: With code 1 when the command raises a TimeTrackerError.
    """

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            kwargs["tracker"] = build_tracker()
            return func(*args, **kwargs)
        except TimeTrackerError as e:
            print_error(error_message(e))
            raise typer.Exit(code=1) from e

    return wrapper  # type: ignore[return-value]
