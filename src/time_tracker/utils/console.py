"""Rich console helpers shared by the command modules.

Messages are escaped before printing; only the surrounding decoration
uses rich markup.
"""

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

_console = Console()
_err_console = Console(stderr=True)


def get_console() -> Console:
    return _console


def print_success(message: str) -> None:
    _console.print(f"[green]✓[/green] {escape(message)}")


def print_info(message: str) -> None:
    _console.print(f"[cyan]{escape(message)}[/cyan]")


def print_warning(message: str) -> None:
    _console.print(f"[yellow]⚠ {escape(message)}[/yellow]")


def print_error(message: str) -> None:
    _err_console.print(f"[red]✗ {escape(message)}[/red]")


def print_panel(content: str, title: str | None = None, style: str = "cyan") -> None:
    """Print ``content`` (rich markup allowed) inside a bordered panel."""
    _console.print(Panel(content, title=title, border_style=style))
