"""Export command: write the log as JSON and clear it."""

import sys
from pathlib import Path

import typer

from time_tracker.config.messages import SUCCESS_MESSAGES, WARNING_MESSAGES
from time_tracker.config.settings import get_export_settings
from time_tracker.services.export_service import DirectorySink, ExportSink, StreamSink
from time_tracker.services.tracker_service import TrackerService
from time_tracker.utils import print_success, print_warning
from time_tracker.utils.command_decorators import with_tracker


@with_tracker
def export_command(
    dest: Path | None = None,
    to_stdout: bool = False,
    tracker: TrackerService | None = None,
) -> None:
    """Export the whole log to a directory (or stdout) and clear it."""
    assert tracker is not None
    sink: ExportSink
    if to_stdout:
        sink = StreamSink(sys.stdout)
    else:
        sink = DirectorySink(dest or get_export_settings().directory)

    if not to_stdout and not tracker.get_snapshot():
        print_warning(WARNING_MESSAGES["empty_export"])

    result = tracker.export_and_maybe_clear(sink)
    if not to_stdout:
        print_success(
            SUCCESS_MESSAGES["exported"].format(
                count=result["record_count"], file_name=sink.describe(result["file_name"])
            )
        )


def register(app: typer.Typer) -> None:
    """Attach the export command to ``app``."""

    @app.command("export")
    def export(
        dest: Path | None = typer.Option(
            None, "--dest", "-d", help="Destination directory (default: TT_EXPORT_DIRECTORY or cwd)"
        ),
        to_stdout: bool = typer.Option(
            False, "--stdout", help="Write the JSON to standard output instead of a file"
        ),
    ) -> None:
        """Export the log as JSON and clear it once written."""
        export_command(dest=dest, to_stdout=to_stdout)
