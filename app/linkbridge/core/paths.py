"""XDG-compliant path management for linkbridge.

XDG defaults:
- Config: ~/.config/linkbridge/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "linkbridge"

# Environment variable that points at an explicit config file
CONFIG_ENV_VAR = "LINKBRIDGE_CONFIG"


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/linkbridge/ (or XDG_CONFIG_HOME/linkbridge/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_config_path() -> Path:
    """Get the config file path.

    The LINKBRIDGE_CONFIG environment variable takes precedence over
    the XDG location.

    Returns:
        Path to the config.toml file.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return get_config_dir() / "config.toml"


def get_theme_path() -> Path:
    """Get the user theme override path.

    Returns:
        Path to ~/.config/linkbridge/theme.toml.
    """
    return get_config_dir() / "theme.toml"
