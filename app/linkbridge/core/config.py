"""Configuration model and loader.

Configuration is read from a TOML file (see core.paths.get_config_path)
and validated with Pydantic. linkbridge never writes this file; a missing
default file simply yields the built-in defaults.

Example config.toml:

    [server]
    host = "0.0.0.0"
    port = 8090

    [catalog]
    url = "http://jellyfin:8096"
    api_key = "..."

    [links]
    base_path = "/var/lib/jellyfin/leaving-soon"
    virtual_folder_name = "Leaving Soon"
"""

import logging
import tomllib
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from linkbridge.core.errors import ConfigError, ConfigNotFoundError, ConfigParseError
from linkbridge.core.paths import get_config_path

logger = logging.getLogger(__name__)

DEFAULT_FOLDER_NAME = "Leaving Soon"
DEFAULT_COLLECTION_TYPE = "mixed"


class ServerConfig(BaseModel):
    """HTTP server settings used by `linkbridge serve`."""

    model_config = ConfigDict(extra="forbid")

    host: str = "0.0.0.0"
    port: Annotated[int, Field(ge=1, le=65535)] = 8090


class CatalogConfig(BaseModel):
    """Connection settings for the catalog service.

    Attributes:
        url: Base URL of the catalog service. Empty disables catalog sync.
        api_key: Token sent with every catalog request.
        timeout_seconds: Fixed per-request timeout.
        settle_seconds: Wait after creating a folder before adding paths.
        enabled: Set to False to keep a URL configured but skip syncing.
    """

    model_config = ConfigDict(extra="forbid")

    url: str = ""
    api_key: str = ""
    timeout_seconds: Annotated[float, Field(gt=0, le=300)] = 30.0
    settle_seconds: Annotated[float, Field(ge=0, le=60)] = 2.0
    enabled: bool = True

    @field_validator("url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize the base URL so paths can be appended directly."""
        return v.strip().rstrip("/")

    @property
    def is_configured(self) -> bool:
        """Check if catalog sync should run."""
        return self.enabled and bool(self.url)


class LinksConfig(BaseModel):
    """Link placement and catalog folder settings.

    Attributes:
        base_path: Default directory for links when a request names none.
        virtual_folder_name: Catalog folder that add-batches sync into.
        collection_type: Collection type used when creating that folder.
    """

    model_config = ConfigDict(extra="forbid")

    base_path: str | None = None
    virtual_folder_name: Annotated[str, Field(min_length=1)] = DEFAULT_FOLDER_NAME
    collection_type: Annotated[str, Field(min_length=1)] = DEFAULT_COLLECTION_TYPE


class BridgeConfig(BaseModel):
    """Top-level linkbridge configuration."""

    model_config = ConfigDict(extra="forbid")

    server: ServerConfig = Field(default_factory=ServerConfig)
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    links: LinksConfig = Field(default_factory=LinksConfig)


def load_config(path: Path | None = None) -> BridgeConfig:
    """Load configuration from a TOML file.

    Args:
        path: Explicit config file. If None, the default location is used
            and a missing file falls back to defaults.

    Returns:
        Validated BridgeConfig object.

    Raises:
        ConfigNotFoundError: If an explicit path was given and does not exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the file cannot be read or does not match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        if path is not None:
            raise ConfigNotFoundError(f"Config file not found: {config_path}")
        logger.debug("No config file at %s, using defaults", config_path)
        return BridgeConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config {config_path}: {e}") from e

    try:
        config = BridgeConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid config content in {config_path}: {e}") from e

    logger.debug("Loaded config from %s", config_path)
    return config
