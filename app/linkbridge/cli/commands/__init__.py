"""CLI commands for linkbridge.

This package contains all subcommand implementations.
"""

from linkbridge.cli.commands import catalog, config, dirs, links, serve

__all__ = ["catalog", "config", "dirs", "links", "serve"]
