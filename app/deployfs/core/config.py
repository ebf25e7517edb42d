"""Deployment configuration and settings.

This module provides the configuration model and I/O functions for a
deployment: where the application lives, how to call its CLI, which
theme/locale pairs to build, and which directories to manage.

Configuration is stored in ~/.config/deployfs/deploy.toml
"""

import logging
import os
import re
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from deployfs.core.directories import DirectoryCode
from deployfs.core.paths import get_deploy_config_path

logger = logging.getLogger(__name__)

# Theme used for CSS deployment when a store has none configured
DEFAULT_THEME = "Magento/blank"

# Static-view entries that survive a cleanup
DEFAULT_STATIC_VIEW_EXCLUSIONS: tuple[str, ...] = (".htaccess", "deployed_version.txt")

# e.g. en_US, pt_BR, zh_Hans_CN
_LOCALE_PATTERN = re.compile(r"^[a-z]{2,3}(_[A-Z][a-z]{3})?_[A-Z]{2}$")


class StoreEntry(BaseModel):
    """A storefront variant to build static content for.

    Attributes:
        theme: Theme identifier (Vendor/name). None means the default theme.
        locale: Locale code such as en_US.
    """

    model_config = ConfigDict(extra="forbid")

    theme: str | None = None
    locale: str

    @field_validator("theme", mode="before")
    @classmethod
    def empty_theme_is_none(cls, v: object) -> object:
        """Treat a blank theme as not configured."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("locale")
    @classmethod
    def validate_locale(cls, v: str) -> str:
        """Validate the locale code format."""
        if not _LOCALE_PATTERN.match(v):
            msg = f"Invalid locale code: '{v}'"
            raise ValueError(msg)
        return v


class DeployConfig(BaseModel):
    """Configuration for a deployment run.

    Attributes:
        root: Application root directory.
        php_binary: Interpreter used to run the application CLI.
        cli_script: Application CLI script, relative to root.
        default_theme: Theme used for stores without one.
        timeout_seconds: Per-command timeout, None to wait indefinitely.
        static_view_exclusions: Glob patterns of static-view entries kept on cleanup.
        directories: Directory layout overrides, relative to root or absolute.
        stores: Theme/locale variants to deploy.
    """

    model_config = ConfigDict(extra="forbid")

    root: Annotated[
        Path,
        Field(description="Application root directory"),
    ] = Path(".")
    php_binary: Annotated[
        str,
        Field(min_length=1, description="PHP interpreter"),
    ] = "php"
    cli_script: Annotated[
        str,
        Field(min_length=1, description="Application CLI script relative to root"),
    ] = "bin/magento"
    default_theme: Annotated[
        str,
        Field(min_length=1, description="Fallback theme for CSS deployment"),
    ] = DEFAULT_THEME
    timeout_seconds: Annotated[
        Annotated[int, Field(ge=1, le=86400)] | None,
        Field(description="Per-command timeout in seconds (1-86400, None = no limit)"),
    ] = None
    static_view_exclusions: Annotated[
        list[str],
        Field(description="Static-view entries preserved on cleanup"),
    ] = Field(default_factory=lambda: list(DEFAULT_STATIC_VIEW_EXCLUSIONS))
    directories: Annotated[
        dict[DirectoryCode, str],
        Field(description="Directory layout overrides"),
    ] = Field(default_factory=dict)
    stores: Annotated[
        list[StoreEntry],
        Field(min_length=1, description="Theme/locale variants"),
    ] = Field(default_factory=lambda: [StoreEntry(locale="en_US")])

    @property
    def resolved_root(self) -> Path:
        """Absolute application root."""
        return self.root.expanduser().resolve()

    @property
    def cli_command(self) -> list[str]:
        """Command prefix that invokes the application CLI."""
        return [self.php_binary, "-f", str(self.resolved_root / self.cli_script)]


class DeployConfigError(Exception):
    """Base exception for deployment configuration errors."""


class DeployConfigNotFoundError(DeployConfigError):
    """Raised when the deployment config file is not found."""


class DeployConfigParseError(DeployConfigError):
    """Raised when the deployment config file cannot be parsed."""


def load_deploy_config(path: Path | None = None) -> DeployConfig:
    """Load deployment configuration from a TOML file.

    A relative ``root`` in the file is interpreted relative to the file's
    own directory.

    Args:
        path: Path to the config file. If None, uses default config path.

    Returns:
        Validated DeployConfig object.

    Raises:
        DeployConfigNotFoundError: If the config file doesn't exist.
        DeployConfigParseError: If the TOML syntax is invalid.
        DeployConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_deploy_config_path()

    if not config_path.exists():
        raise DeployConfigNotFoundError(f"Deploy config not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise DeployConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise DeployConfigError(f"Failed to read deploy config: {e}") from e

    try:
        config = DeployConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise DeployConfigError(f"Invalid deploy config content: {e}") from e

    if not config.root.expanduser().is_absolute():
        config = config.model_copy(update={"root": config_path.parent / config.root})

    logger.debug("Loaded deploy config from %s", config_path)
    return config


def save_deploy_config(config: DeployConfig, path: Path | None = None) -> Path:
    """Save deployment configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The DeployConfig object to save.
        path: Path to save the config. If None, uses default config path.

    Returns:
        Path where the config was saved.

    Raises:
        DeployConfigError: If the file cannot be written.
    """
    config_path = path or get_deploy_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = _config_to_dict(config)

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise DeployConfigError(f"Failed to write deploy config: {e}") from e

    return config_path


def _config_to_dict(config: DeployConfig) -> dict[str, object]:
    """Convert DeployConfig to a dictionary for TOML serialization.

    TOML has no null, so unset optional values are left out.

    Args:
        config: The DeployConfig to convert.

    Returns:
        Dictionary ready for TOML serialization.
    """
    result: dict[str, object] = {
        "root": str(config.root),
        "php_binary": config.php_binary,
        "cli_script": config.cli_script,
        "default_theme": config.default_theme,
        "static_view_exclusions": list(config.static_view_exclusions),
    }

    if config.timeout_seconds is not None:
        result["timeout_seconds"] = config.timeout_seconds

    if config.directories:
        result["directories"] = {code.value: path for code, path in config.directories.items()}

    stores: list[dict[str, str]] = []
    for store in config.stores:
        entry = {"locale": store.locale}
        if store.theme is not None:
            entry["theme"] = store.theme
        stores.append(entry)
    result["stores"] = stores

    return result


def get_default_config() -> DeployConfig:
    """Create a default DeployConfig.

    Returns:
        DeployConfig with default settings.
    """
    return DeployConfig()


def require_config(config_path: Path | None = None) -> DeployConfig:
    """Load deploy config or exit with helpful error message.

    An explicitly given path must exist. Without one, a missing default
    config falls back to built-in defaults for the current directory.

    Args:
        config_path: Optional custom config path.

    Returns:
        Loaded and validated DeployConfig.

    Raises:
        typer.Exit: If the config cannot be loaded.
    """
    import typer

    from deployfs.utils.formatting import print_error, print_info

    path = config_path or get_deploy_config_path()
    try:
        return load_deploy_config(path)
    except DeployConfigNotFoundError as e:
        if config_path is None:
            logger.info("No config at %s, using defaults", path)
            return get_default_config()
        print_error(f"Config not found: {path}")
        print_info("Run 'deployfs config init' to create one.")
        raise typer.Exit(code=1) from e
    except DeployConfigError as e:
        print_error(f"Failed to load config: {e}")
        raise typer.Exit(code=1) from e
