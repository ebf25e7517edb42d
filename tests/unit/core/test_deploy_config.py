"""Unit tests for DeployConfig and related functions.

Tests for the deployment configuration module that provides Pydantic
models and TOML I/O functions.
"""

import os
import tomllib
from pathlib import Path
from unittest.mock import patch

import pytest
import typer
from deployfs.core.config import (
    DEFAULT_STATIC_VIEW_EXCLUSIONS,
    DEFAULT_THEME,
    DeployConfig,
    DeployConfigError,
    DeployConfigNotFoundError,
    DeployConfigParseError,
    StoreEntry,
    get_default_config,
    load_deploy_config,
    require_config,
    save_deploy_config,
)
from deployfs.core.directories import DirectoryCode
from pydantic import ValidationError


class TestStoreEntry:
    """Tests for StoreEntry model."""

    def test_blank_theme_is_none(self) -> None:
        """An empty theme string means no theme configured."""
        assert StoreEntry(theme="", locale="en_US").theme is None
        assert StoreEntry(theme="   ", locale="en_US").theme is None

    def test_accepts_script_locale(self) -> None:
        """Locales with a script subtag are valid."""
        assert StoreEntry(locale="zh_Hans_CN").locale == "zh_Hans_CN"

    def test_rejects_invalid_locale(self) -> None:
        """Malformed locale codes are rejected."""
        with pytest.raises(ValidationError, match="Invalid locale code"):
            StoreEntry(locale="english")


class TestDeployConfig:
    """Tests for DeployConfig Pydantic model."""

    def test_default_values(self) -> None:
        """DeployConfig has correct default values."""
        config = DeployConfig()

        assert config.php_binary == "php"
        assert config.cli_script == "bin/magento"
        assert config.default_theme == DEFAULT_THEME == "Magento/blank"
        assert config.timeout_seconds is None
        assert config.static_view_exclusions == list(DEFAULT_STATIC_VIEW_EXCLUSIONS)
        assert config.directories == {}
        assert config.stores == [StoreEntry(locale="en_US")]

    def test_cli_command(self, tmp_path: Path) -> None:
        """cli_command runs the CLI script under the root with php -f."""
        config = DeployConfig(root=tmp_path)

        assert config.cli_command == ["php", "-f", str(tmp_path.resolve() / "bin" / "magento")]

    def test_directories_keys_are_codes(self) -> None:
        """Directory overrides are keyed by directory code."""
        config = DeployConfig.model_validate({"directories": {"di": "generated/metadata"}})

        assert config.directories == {DirectoryCode.DI: "generated/metadata"}

    def test_unknown_directory_code_rejected(self) -> None:
        """Unknown directory codes are rejected."""
        with pytest.raises(ValidationError):
            DeployConfig.model_validate({"directories": {"media": "pub/media"}})

    def test_timeout_bounds(self) -> None:
        """timeout_seconds must be within 1-86400."""
        with pytest.raises(ValidationError):
            DeployConfig(timeout_seconds=0)
        with pytest.raises(ValidationError):
            DeployConfig(timeout_seconds=86401)

    def test_requires_a_store(self) -> None:
        """At least one store must be configured."""
        with pytest.raises(ValidationError):
            DeployConfig(stores=[])

    def test_extra_fields_forbidden(self) -> None:
        """Unknown settings are rejected."""
        with pytest.raises(ValidationError):
            DeployConfig.model_validate({"unknown": True})


class TestLoadDeployConfig:
    """Tests for load_deploy_config function."""

    def test_missing_file(self, tmp_path: Path) -> None:
        """Raises DeployConfigNotFoundError when the file doesn't exist."""
        with pytest.raises(DeployConfigNotFoundError):
            load_deploy_config(tmp_path / "deploy.toml")

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Raises DeployConfigParseError on TOML syntax errors."""
        path = tmp_path / "deploy.toml"
        path.write_text("root = [unclosed")

        with pytest.raises(DeployConfigParseError, match="Invalid TOML syntax"):
            load_deploy_config(path)

    def test_invalid_content(self, tmp_path: Path) -> None:
        """Raises DeployConfigError when the schema doesn't match."""
        path = tmp_path / "deploy.toml"
        path.write_text('[[stores]]\nlocale = "nope"\n')

        with pytest.raises(DeployConfigError, match="Invalid deploy config content"):
            load_deploy_config(path)

    def test_loads_stores_and_directories(self, tmp_path: Path) -> None:
        """Stores and directory overrides are parsed."""
        path = tmp_path / "deploy.toml"
        path.write_text(
            'root = "/srv/shop"\n'
            "timeout_seconds = 900\n"
            "[directories]\n"
            'generation = "generated/code"\n'
            "[[stores]]\n"
            'theme = "Magento/luma"\n'
            'locale = "en_US"\n'
            "[[stores]]\n"
            'locale = "de_DE"\n'
        )

        config = load_deploy_config(path)

        assert config.root == Path("/srv/shop")
        assert config.timeout_seconds == 900
        assert config.directories == {DirectoryCode.GENERATION: "generated/code"}
        assert config.stores == [
            StoreEntry(theme="Magento/luma", locale="en_US"),
            StoreEntry(theme=None, locale="de_DE"),
        ]

    def test_relative_root_is_relative_to_config_file(self, tmp_path: Path) -> None:
        """A relative root is read relative to the config file's directory."""
        path = tmp_path / "conf" / "deploy.toml"
        path.parent.mkdir()
        path.write_text('root = "../shop"\n')

        config = load_deploy_config(path)

        assert config.resolved_root == (tmp_path / "shop").resolve()


class TestSaveDeployConfig:
    """Tests for save_deploy_config function."""

    def test_round_trip(self, tmp_path: Path) -> None:
        """A saved config loads back to the same settings."""
        path = tmp_path / "deploy.toml"
        config = DeployConfig(
            root=tmp_path / "shop",
            timeout_seconds=120,
            directories={DirectoryCode.DI: "generated/metadata"},
            stores=[StoreEntry(theme="Magento/luma", locale="en_US"), StoreEntry(locale="fr_FR")],
        )

        save_deploy_config(config, path)
        loaded = load_deploy_config(path)

        assert loaded == config

    def test_omits_unset_optionals(self, tmp_path: Path) -> None:
        """TOML output leaves out unset timeout, overrides and themes."""
        path = save_deploy_config(DeployConfig(root=tmp_path), tmp_path / "deploy.toml")

        with open(path, "rb") as f:
            data = tomllib.load(f)

        assert "timeout_seconds" not in data
        assert "directories" not in data
        assert data["default_theme"] == DEFAULT_THEME
        assert data["stores"] == [{"locale": "en_US"}]

    def test_creates_parent_directory(self, tmp_path: Path) -> None:
        """Missing parent directories are created."""
        path = tmp_path / "a" / "b" / "deploy.toml"

        save_deploy_config(get_default_config(), path)

        assert path.exists()

    def test_no_temp_file_left_behind(self, tmp_path: Path) -> None:
        """The atomic write leaves no .tmp files."""
        save_deploy_config(get_default_config(), tmp_path / "deploy.toml")

        assert not list(tmp_path.glob("*.tmp"))


class TestRequireConfig:
    """Tests for require_config function."""

    def test_defaults_when_default_path_missing(self, tmp_path: Path) -> None:
        """Falls back to defaults when no config exists at the default path."""
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}):
            config = require_config()

        assert config == get_default_config()

    def test_explicit_missing_path_exits(self, tmp_path: Path) -> None:
        """An explicit path that doesn't exist exits with code 1."""
        with pytest.raises(typer.Exit) as exc_info:
            require_config(tmp_path / "missing.toml")

        assert exc_info.value.exit_code == 1

    def test_invalid_config_exits(self, tmp_path: Path) -> None:
        """An invalid config exits with code 1."""
        path = tmp_path / "deploy.toml"
        path.write_text("bogus = 1\n")

        with pytest.raises(typer.Exit):
            require_config(path)
