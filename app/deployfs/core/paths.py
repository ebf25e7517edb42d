"""XDG-compliant path management for deployfs.

Only the configuration directory is used: deployfs keeps no state or
cache of its own, it mutates directories owned by the application.

XDG default:
- Config: ~/.config/deployfs/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "deployfs"


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
        Path to ~/.config/deployfs/ (or XDG_CONFIG_HOME/deployfs/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_deploy_config_path() -> Path:
    """Get the default deployment configuration file path.

    Returns:
        Path to ~/.config/deployfs/deploy.toml.
    """
    return get_config_dir() / "deploy.toml"
