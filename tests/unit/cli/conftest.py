"""Fixtures for CLI command tests."""

from collections.abc import Iterator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from deployfs.core.config import DeployConfig, StoreEntry, save_deploy_config


@pytest.fixture
def config_file(tmp_path: Path, app_root: Path) -> Path:
    """deploy.toml pointing at the temporary application root."""
    config = DeployConfig(
        root=app_root,
        stores=[StoreEntry(theme="Magento/luma", locale="en_US")],
    )
    return save_deploy_config(config, tmp_path / "conf" / "deploy.toml")


@pytest.fixture
def mock_executor() -> Iterator[MagicMock]:
    """Replace the process executor used by create_manager."""
    with patch("deployfs.core.deployer.ProcessExecutor") as mock_cls:
        executor = MagicMock()
        executor.run.return_value = "ok"
        mock_cls.return_value = executor
        yield executor
