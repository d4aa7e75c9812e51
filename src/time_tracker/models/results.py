"""Result types for services.

TypedDict definitions for values handed back to the presentation layer.
"""

from typing import TypedDict


class ExportResult(TypedDict):
    """Outcome of a completed export."""

    file_name: str
    record_count: int
    cleared: bool
