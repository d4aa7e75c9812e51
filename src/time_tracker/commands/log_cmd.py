"""Logging commands: record activities, comment, list and edit entries."""

import typer
from rich.markup import escape
from rich.table import Table

from time_tracker.config.messages import INFO_MESSAGES, SUCCESS_MESSAGES, WARNING_MESSAGES
from time_tracker.models.record import format_display_timestamp
from time_tracker.services.tracker_service import TrackerService
from time_tracker.utils import get_console, print_info, print_success, print_warning
from time_tracker.utils.command_decorators import with_tracker


@with_tracker
def log_command(activity: str, tracker: TrackerService | None = None) -> None:
    """Record ``activity`` now."""
    assert tracker is not None
    if activity.strip() and activity.strip() not in tracker.get_config().activities:
        print_warning(WARNING_MESSAGES["unconfigured_activity"].format(activity=activity.strip()))
    records = tracker.record_activity(activity)
    latest = records[-1]
    print_success(
        SUCCESS_MESSAGES["recorded"].format(
            activity=latest.activity, timestamp=format_display_timestamp(latest)
        )
    )


@with_tracker
def comment_command(text: str, tracker: TrackerService | None = None) -> None:
    """Add a comment to the latest activity."""
    assert tracker is not None
    records = tracker.add_comment(text)
    print_success(SUCCESS_MESSAGES["comment_added"].format(activity=records[-1].activity))


@with_tracker
def list_command(tracker: TrackerService | None = None) -> None:
    """Print the log newest first with the positions ``edit`` accepts."""
    assert tracker is not None
    records = tracker.get_display_snapshot()
    if not records:
        print_info(INFO_MESSAGES["empty_log"])
        return

    table = Table(title="Activity Log")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Time (UTC)", style="cyan")
    table.add_column("Activity", style="bold")
    table.add_column("Comments")
    for index, record in enumerate(records):
        comments = "\n".join(f"• {escape(c)}" for c in record.comments)
        table.add_row(str(index), format_display_timestamp(record), escape(record.activity), comments)
    get_console().print(table)


@with_tracker
def edit_command(
    index: int,
    activity: str | None = None,
    comments: str | None = None,
    tracker: TrackerService | None = None,
) -> None:
    """Edit the entry shown at ``index`` by ``tt list``.

    Omitted values keep the current activity or comments.
    """
    assert tracker is not None
    if activity is None:
        current = tracker.get_display_snapshot()
        if 0 <= index < len(current):
            activity = current[index].activity
    tracker.edit_entry(index, activity or "", comments)
    print_success(SUCCESS_MESSAGES["entry_updated"].format(index=index))


@with_tracker
def activities_command(tracker: TrackerService | None = None) -> None:
    """Print the configured activities."""
    assert tracker is not None
    for label in tracker.get_config().activities:
        get_console().print(f"  [cyan]{escape(label)}[/cyan]")


def register(app: typer.Typer) -> None:
    """Attach the logging commands to ``app``."""

    @app.command("log")
    def log(activity: str = typer.Argument(..., help="Activity to record")) -> None:
        """Record an activity with the current time."""
        log_command(activity)

    @app.command("comment")
    def comment(text: str = typer.Argument(..., help="Comment text")) -> None:
        """Add a comment to the most recent activity."""
        comment_command(text)

    @app.command("list")
    def list_entries() -> None:
        """Show the log, newest first."""
        list_command()

    @app.command("edit")
    def edit(
        index: int = typer.Argument(..., help="Position shown by 'tt list' (0 is newest)"),
        activity: str | None = typer.Option(None, "--activity", "-a", help="New activity"),
        comments: str | None = typer.Option(
            None, "--comments", "-c", help="Comma separated comments (replaces existing)"
        ),
    ) -> None:
        """Replace the activity and comments of an entry."""
        edit_command(index, activity=activity, comments=comments)

    @app.command("activities")
    def activities() -> None:
        """List the configured activities."""
        activities_command()
