"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

import sys

from rich.console import Console
from rich.table import Table
from rich.theme import Theme

# Style names used in markup across the CLI
_STYLES: dict[str, str] = {
    "text": "#ffffff",
    "muted": "#b2bec3",
    "header": "#69B9A1",
    "bold_header": "bold #69B9A1",
    "border": "#29526d",
    "success": "#03b971",
    "warning": "#f5b332",
    "error": "bold #f53263",
    "info": "#0ec1c8",
    "dim": "#b2bec3",
    "kind.paths": "#c1ff62",
    "kind.procs": "#0e8ac8",
    "kind.extensions": "#faf870",
}


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


console = Console(theme=Theme(_STYLES), color_system=_detect_color_system())
err_console = Console(theme=Theme(_STYLES), stderr=True, color_system=_detect_color_system())


def create_summary_table(title: str) -> Table:
    """Create a pre-configured table for exclusion list summaries.

    Args:
        title: Table title.

    Returns:
        Rich Table with List, Entries and File columns.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("List", no_wrap=True)
    table.add_column("Entries", style="info", justify="right")
    table.add_column("File", style="muted", overflow="fold")
    return table


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")
