"""Shared types and helpers for CLI commands.

Commands never build collaborators from global state: the config path
chosen on the command line travels in the Typer context and every
command loads configuration and builds its store, client and
coordinator through the helpers below.
"""

from enum import Enum
from pathlib import Path

import typer

from linkbridge.catalog.client import CatalogClient
from linkbridge.core.config import BridgeConfig, load_config
from linkbridge.core.errors import ConfigError
from linkbridge.links.batch import BatchCoordinator
from linkbridge.utils.formatting import print_error


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


def _config_path(ctx: typer.Context) -> Path | None:
    obj = ctx.obj if isinstance(ctx.obj, dict) else {}
    return obj.get("config_path")


def require_config(ctx: typer.Context) -> BridgeConfig:
    """Load configuration or exit with an error.

    Args:
        ctx: Typer context carrying the --config option.

    Returns:
        Loaded BridgeConfig.

    Raises:
        typer.Exit: If the configuration cannot be loaded.
    """
    try:
        return load_config(_config_path(ctx))
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from None


def require_catalog(config: BridgeConfig) -> CatalogClient:
    """Build a catalog client or exit when none is configured.

    Args:
        config: Loaded configuration.

    Returns:
        CatalogClient for the configured service.

    Raises:
        typer.Exit: If the [catalog] section is not configured.
    """
    if not config.catalog.is_configured:
        print_error("Catalog service is not configured. Set [catalog] url in the config file.")
        raise typer.Exit(code=1)
    return CatalogClient.from_config(config.catalog)


def get_coordinator(ctx: typer.Context) -> BatchCoordinator:
    """Build a batch coordinator from the loaded configuration.

    Args:
        ctx: Typer context carrying the --config option.

    Returns:
        BatchCoordinator wired to the configured catalog, if any.
    """
    return BatchCoordinator.from_config(require_config(ctx))
