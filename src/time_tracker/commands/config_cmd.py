"""Configuration commands: activity list and theme."""

from pathlib import Path

import typer

from time_tracker.config.messages import ERROR_MESSAGES, INFO_MESSAGES, SUCCESS_MESSAGES
from time_tracker.models.enums import Theme
from time_tracker.services.tracker_service import TrackerService
from time_tracker.utils import get_console, print_error, print_info, print_success, read_file
from time_tracker.utils.command_decorators import with_tracker

config_app = typer.Typer(
    name="config",
    help="Show or change the activity configuration",
    no_args_is_help=True,
)


@with_tracker
def config_show_command(tracker: TrackerService | None = None) -> None:
    assert tracker is not None
    get_console().print(tracker.get_config_text(), markup=False, highlight=False, end="")


@with_tracker
def config_save_command(text: str, tracker: TrackerService | None = None) -> None:
    """Validate and save configuration text."""
    assert tracker is not None
    config = tracker.save_config(text)
    print_success(SUCCESS_MESSAGES["config_saved"].format(count=len(config.activities)))


@with_tracker
def config_edit_command(tracker: TrackerService | None = None) -> None:
    """Open the configuration in $EDITOR and save the result."""
    assert tracker is not None
    original = tracker.get_config_text()
    edited = typer.edit(original, extension=".yaml")
    if edited is None or edited == original:
        print_info(INFO_MESSAGES["config_unchanged"])
        return
    config = tracker.save_config(edited)
    print_success(SUCCESS_MESSAGES["config_saved"].format(count=len(config.activities)))


@with_tracker
def theme_command(value: str | None = None, tracker: TrackerService | None = None) -> None:
    """Show the theme, or set it when ``value`` is given."""
    assert tracker is not None
    if value is None:
        print_info(INFO_MESSAGES["current_theme"].format(theme=tracker.get_theme().value))
        return
    if value.lower() not in Theme.values():
        print_error(ERROR_MESSAGES["invalid_theme"].format(theme=value))
        raise typer.Exit(code=1)
    theme = tracker.set_theme(value.lower())
    print_success(SUCCESS_MESSAGES["theme_saved"].format(theme=theme.value))


@config_app.command("show")
def config_show() -> None:
    """Print the activity configuration as YAML."""
    config_show_command()


@config_app.command("set")
def config_set(
    file: Path = typer.Argument(..., help="YAML file with an 'activities' list"),
) -> None:
    """Replace the configuration with the contents of a YAML file."""
    try:
        text = read_file(file)
    except FileNotFoundError:
        print_error(ERROR_MESSAGES["config_file_missing"].format(path=file))
        raise typer.Exit(code=1) from None
    config_save_command(text)


@config_app.command("edit")
def config_edit() -> None:
    """Edit the configuration in your editor."""
    config_edit_command()


def register(app: typer.Typer) -> None:
    """Attach the configuration commands to ``app``."""
    app.add_typer(config_app, name="config")

    @app.command("theme")
    def theme(
        value: str | None = typer.Argument(None, help="light or dark (omit to show)"),
    ) -> None:
        """Show or change the display theme."""
        theme_command(value)
