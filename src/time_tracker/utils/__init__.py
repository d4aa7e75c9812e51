"""Utility helpers for time-tracker."""

from time_tracker.utils.console import (
    get_console,
    print_error,
    print_info,
    print_panel,
    print_success,
    print_warning,
)
from time_tracker.utils.file_utils import (
    delete_file,
    ensure_dir,
    file_exists,
    read_file,
    write_file_atomic,
)

__all__ = [
    "delete_file",
    "ensure_dir",
    "file_exists",
    "get_console",
    "print_error",
    "print_info",
    "print_panel",
    "print_success",
    "print_warning",
    "read_file",
    "write_file_atomic",
]
