"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.logging import RichHandler

from linkbridge import __version__
from linkbridge.cli.commands import catalog, config, dirs, links, serve
from linkbridge.utils.formatting import err_console

# Create main Typer app
app = typer.Typer(
    name="linkbridge",
    help="Symlink-backed preview libraries for media catalogs.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"linkbridge version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Route log records to stderr through Rich.

    Args:
        verbose: Log INFO and above instead of WARNING and above.
    """
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to config.toml (default: ~/.config/linkbridge/config.toml).",
        ),
    ] = None,
) -> None:
    """linkbridge - symlink-backed preview libraries for media catalogs.

    Maintain a directory of symlinks that mirrors part of a media library
    and keep a catalog virtual folder pointed at it.
    """
    configure_logging(verbose)

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config_path"] = config_path


# Register commands
app.add_typer(serve.app, name="serve")
app.add_typer(links.app, name="links")
app.add_typer(dirs.app, name="dirs")
app.add_typer(catalog.app, name="catalog")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
