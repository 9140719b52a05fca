"""CLI package for linkbridge.

This package contains the Typer application and all subcommands.
"""

from linkbridge.cli.main import app

__all__ = ["app"]
