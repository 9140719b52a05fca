"""Symlink management commands.

Runs link batches locally through the same coordinator the HTTP API
uses, including the catalog sync after `links add`.
"""

from collections.abc import Callable
from pathlib import Path
from typing import Annotated

import typer

from linkbridge.cli.display import print_batch_result, print_links, print_links_json
from linkbridge.cli.types import OutputFormat, get_coordinator
from linkbridge.core.errors import EnumerationError, InvalidRequestError
from linkbridge.links.models import BatchResult, LinkRequest
from linkbridge.links.store import LinkStore
from linkbridge.utils.formatting import print_error

app = typer.Typer(
    help="Create, remove and list symlinks.",
    no_args_is_help=True,
)


@app.command()
def add(
    ctx: typer.Context,
    sources: Annotated[
        list[str],
        typer.Argument(help="Media files to link."),
    ],
    target: Annotated[
        str | None,
        typer.Option(
            "--target",
            "-t",
            help="Directory to create links in (default: links.base_path).",
        ),
    ] = None,
    no_catalog: Annotated[
        bool,
        typer.Option("--no-catalog", help="Skip the catalog folder sync and refresh."),
    ] = False,
) -> None:
    """Create symlinks to media files."""
    coordinator = get_coordinator(ctx)
    items = [LinkRequest(source_path=source, target_directory=target) for source in sources]
    _finish(_run(lambda: coordinator.add_links(items, sync_catalog=not no_catalog)))


@app.command()
def remove(
    ctx: typer.Context,
    paths: Annotated[
        list[str],
        typer.Argument(help="Symlinks to remove."),
    ],
) -> None:
    """Remove symlinks. Paths that do not exist are ignored."""
    coordinator = get_coordinator(ctx)
    _finish(_run(lambda: coordinator.remove_links(paths)))


@app.command()
def clear(
    ctx: typer.Context,
    directory: Annotated[
        str | None,
        typer.Argument(help="Directory to clear (default: links.base_path)."),
    ] = None,
) -> None:
    """Remove every symlink in a directory."""
    coordinator = get_coordinator(ctx)
    _finish(_run(lambda: coordinator.clear_links(directory)))


@app.command("list")
def list_links(
    directory: Annotated[
        Path,
        typer.Argument(help="Directory to list."),
    ],
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """List symlinks in a directory."""
    try:
        records = LinkStore().list_links(str(directory))
    except EnumerationError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from None

    if output_format == OutputFormat.JSON:
        print_links_json(records)
        return

    print_links(records, str(directory))


# === Private helper functions ===


def _run(batch: Callable[[], BatchResult]) -> BatchResult:
    """Execute a batch callable, exiting on whole-call errors."""
    try:
        return batch()
    except (InvalidRequestError, EnumerationError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from None


def _finish(result: BatchResult) -> None:
    """Display a batch result and exit non-zero if it reported errors."""
    print_batch_result(result)
    if result.has_errors:
        raise typer.Exit(code=1)
