"""Shared Rich display functions for batch results and links."""

import json

from rich.markup import escape
from rich.table import Table

from linkbridge.links.models import BatchOperation, BatchResult, LinkRecord
from linkbridge.utils.formatting import (
    console,
    create_link_table,
    format_link_row,
    print_info,
    print_success,
)

_VERBS: dict[BatchOperation, str] = {
    BatchOperation.ADD: "created",
    BatchOperation.REMOVE: "removed",
    BatchOperation.CLEAR: "removed",
}


def create_results_table(result: BatchResult) -> Table:
    """Create a Rich table displaying a batch result.

    Succeeded paths are listed with an "OK" status; every error message
    gets a "FAIL" row.

    Args:
        result: Batch result to display.

    Returns:
        Rich Table configured for results display.
    """
    table = Table(
        title="Results",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Status", width=8, justify="center")
    table.add_column("Detail", overflow="fold")

    for path in result.succeeded_paths:
        table.add_row("[success]OK[/success]", escape(path))
    for error in result.errors:
        table.add_row("[error]FAIL[/error]", f"[muted]{escape(error)}[/muted]")

    return table


def print_batch_result(result: BatchResult) -> None:
    """Print a batch result table followed by a summary line.

    Args:
        result: Batch result to display.
    """
    verb = _VERBS[result.operation]
    if not result.succeeded_paths and not result.errors:
        print_info(f"No symlinks {verb}.")
        return

    console.print(create_results_table(result))

    count = len(result.succeeded_paths)
    if not result.has_errors:
        print_success(f"{count} symlink(s) {verb}.")
    else:
        console.print(
            f"\n[success]{count} {verb}[/success], [error]{len(result.errors)} error(s)[/error]"
        )


def print_links(records: list[LinkRecord], directory: str) -> None:
    """Print links found in a directory as a table."""
    if not records:
        print_info(f"No symlinks found in {directory}")
        return

    table = create_link_table(title=f"Symlinks in {escape(directory)}")
    for record in records:
        table.add_row(*(escape(cell) for cell in format_link_row(record)))
    console.print(table)
    console.print(f"\n[dim]Found {len(records)} symlink(s)[/dim]")


def print_links_json(records: list[LinkRecord]) -> None:
    """Print links as JSON."""
    console.print_json(json.dumps([record.to_dict() for record in records]))
