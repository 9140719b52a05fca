"""Catalog service commands.

Inspect and maintain the virtual folder that linked media shows up in.
"""

import json
from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from linkbridge.catalog.models import CatalogFolder
from linkbridge.cli.types import OutputFormat, require_catalog, require_config
from linkbridge.core.errors import CatalogError
from linkbridge.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Inspect and sync the catalog service.",
    no_args_is_help=True,
)


@app.command()
def folders(
    ctx: typer.Context,
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
    """List the catalog's virtual folders."""
    client = require_catalog(require_config(ctx))
    try:
        found = client.get_folders()
    except CatalogError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from None

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps([folder.model_dump() for folder in found]))
        return

    if not found:
        print_info("No virtual folders found.")
        return

    _print_folders(found)


@app.command()
def ensure(
    ctx: typer.Context,
    path: Annotated[
        str | None,
        typer.Argument(help="Path the folder must index (default: links.base_path)."),
    ] = None,
    refresh: Annotated[
        bool,
        typer.Option("--refresh/--no-refresh", help="Request a library refresh afterwards."),
    ] = True,
) -> None:
    """Make sure the configured virtual folder exists and indexes a path."""
    config = require_config(ctx)
    client = require_catalog(config)

    target_path = path or config.links.base_path
    if not target_path:
        print_error("No path given and links.base_path is not configured.")
        raise typer.Exit(code=1)

    name = config.links.virtual_folder_name
    try:
        outcome = client.ensure_folder(name, config.links.collection_type, target_path)
        if refresh:
            client.refresh_library()
    except CatalogError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from None

    if outcome.folder_created:
        print_success(f"Created virtual folder '{name}'.")
    if outcome.path_added:
        print_success(f"Added {target_path} to '{name}'.")
    if not outcome.changed:
        print_info(f"Virtual folder '{name}' already indexes {target_path}.")
    if refresh:
        print_info("Library refresh requested.")


@app.command()
def refresh(ctx: typer.Context) -> None:
    """Ask the catalog service to re-scan its libraries.

    The scan runs in the background on the catalog service; this command
    only confirms that the request was accepted.
    """
    client = require_catalog(require_config(ctx))
    try:
        client.refresh_library()
    except CatalogError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from None

    print_success("Library refresh requested.")


def _print_folders(found: list[CatalogFolder]) -> None:
    """Display virtual folders as a Rich table."""
    table = Table(
        title="Virtual Folders",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Name", no_wrap=True)
    table.add_column("Type", style="muted")
    table.add_column("Locations", overflow="fold")

    for folder in found:
        table.add_row(
            escape(folder.name),
            folder.collection_type or "-",
            escape("\n".join(folder.locations)) or "-",
        )

    console.print(table)
