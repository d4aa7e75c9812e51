"""Main CLI entry point for time-tracker.

The CLI is a thin presentation layer over TrackerService; all state and
validation live in the services.
"""

import sys
from pathlib import Path

import typer
from dotenv import load_dotenv

from time_tracker import __version__
from time_tracker.commands import config_cmd, export_cmd, log_cmd
from time_tracker.config.messages import ERROR_MESSAGES, HELP_TEXT, PROJECT_TAGLINE
from time_tracker.config.paths import LOG_FILE_NAME
from time_tracker.config.settings import get_logging_settings, get_storage_settings
from time_tracker.utils import get_console, print_error, print_panel
from time_tracker.utils.log_setup import configure_logging

# Load .env file from current directory if it exists
load_dotenv(Path.cwd() / ".env", verbose=False)

app = typer.Typer(
    name="tt",
    help=PROJECT_TAGLINE,
    no_args_is_help=False,
    add_completion=False,
    rich_markup_mode="rich",
)

log_cmd.register(app)
export_cmd.register(app)
config_cmd.register(app)


@app.command("version")
def version() -> None:
    """Show version information."""
    print_panel(
        f"[bold cyan]time-tracker[/bold cyan] version [green]{__version__}[/green]\n\n"
        f"{PROJECT_TAGLINE}",
        title="Version",
        style="cyan",
    )


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Enable debug logging (also written to the data directory)",
    ),
    version_flag: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version information",
        is_eager=True,
    ),
) -> None:
    """time-tracker - log activities and export them as JSON."""
    log_settings = get_logging_settings()
    if verbose:
        log_file = log_settings.file or get_storage_settings().data_dir / LOG_FILE_NAME
        configure_logging("DEBUG", log_file)
    else:
        configure_logging(log_settings.level, log_settings.file)

    if version_flag:
        version()
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        get_console().print(HELP_TEXT)
        raise typer.Exit()


def cli_main() -> None:
    """Entry point for the ``tt`` console script."""
    try:
        app()
    except KeyboardInterrupt:
        get_console().print("\n[yellow]Cancelled by user[/yellow]")
        sys.exit(130)
    except Exception as e:
        if isinstance(e, typer.Exit):
            sys.exit(e.exit_code)

        print_error(ERROR_MESSAGES["generic_error"].format(error=str(e)))

        if "--verbose" in sys.argv:
            import traceback

            get_console().print("\n[dim]Traceback:[/dim]")
            traceback.print_exc()

        sys.exit(1)


if __name__ == "__main__":
    cli_main()
