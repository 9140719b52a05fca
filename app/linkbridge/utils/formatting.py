"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from linkbridge.core.theme import get_theme

if TYPE_CHECKING:
    from linkbridge.links.models import LinkRecord


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


def create_link_table(title: str = "Symlinks") -> Table:
    """Create a pre-configured table for displaying symlinks.

    Args:
        title: Table title.

    Returns:
        Rich Table configured for link display.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
        row_styles=["", "on grey7"],
    )
    table.add_column("Name", no_wrap=True, style="link_path")
    table.add_column("Target", style="link_target", overflow="fold")
    table.add_column("Path", style="muted", overflow="fold")
    return table


def format_link_row(record: LinkRecord) -> tuple[str, str, str]:
    """Format a link record as a table row.

    Args:
        record: The link record to format.

    Returns:
        Tuple of (name, target, path).
    """
    return (record.name, record.target, record.path)


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{escape(message)}[/]")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {escape(message)}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{escape(message)}[/]")
