"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

import sys

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from shipgui.core.theme import get_theme


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances (theme loaded once at import)
console = Console(theme=get_theme(), color_system=_detect_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_detect_color_system())


def create_layers_table(title: str = "Active Prune Layers") -> Table:
    """Create a pre-configured table for displaying pattern layers.

    Args:
        title: Table title.

    Returns:
        Rich Table with Layer, Keep and Delete columns.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Layer", no_wrap=True)
    table.add_column("Keep", style="kept")
    table.add_column("Delete", style="pruned")
    return table


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{escape(message)}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {escape(message)}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {escape(message)}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{escape(message)}[/]")


def print_kept(path: str) -> None:
    """Print the log line of a kept file."""
    console.print(f"[kept]kept[/]   {escape(path)}", highlight=False)


def print_pruned(path: str) -> None:
    """Print the log line of a pruned file."""
    console.print(f"[pruned]pruned[/] {escape(path)}", highlight=False)
