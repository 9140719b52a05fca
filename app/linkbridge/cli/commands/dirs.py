"""Link directory commands."""

from typing import Annotated

import typer

from linkbridge.core.errors import DirectoryError, DirectoryNotEmptyError
from linkbridge.links.store import LinkStore
from linkbridge.utils.formatting import print_error, print_info, print_success

app = typer.Typer(
    help="Create and remove link directories.",
    no_args_is_help=True,
)


@app.command()
def create(
    directory: Annotated[str, typer.Argument(help="Directory to create.")],
) -> None:
    """Create a directory (and parents) if it does not exist."""
    try:
        created = LinkStore().ensure_directory(directory)
    except DirectoryError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from None

    if created:
        print_success(f"Directory created: {directory}")
    else:
        print_info(f"Directory already exists: {directory}")


@app.command()
def remove(
    directory: Annotated[str, typer.Argument(help="Directory to remove.")],
    force: Annotated[
        bool,
        typer.Option("--force", help="Remove the directory even if it is not empty."),
    ] = False,
) -> None:
    """Remove a directory. Refuses non-empty directories unless --force."""
    try:
        LinkStore().remove_directory(directory, force=force)
    except (DirectoryNotEmptyError, DirectoryError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from None

    print_success(f"Directory removed: {directory}")
