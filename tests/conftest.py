"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import subprocess
from collections.abc import Callable
from pathlib import Path

import pytest
from deployfs.core.config import DeployConfig, StoreEntry
from deployfs.core.deployer import DeploymentFilesystemManager
from deployfs.core.directories import DirectoryRegistry
from deployfs.core.store import StoreConfiguration
from deployfs.filesystem.driver import FilesystemDriver
from deployfs.filesystem.writer import DirectoryWriter


class RecordingExecutor:
    """Process executor double that records commands instead of spawning them."""

    def __init__(self, output: str = "ok", fail_on: str | None = None) -> None:
        self.commands: list[list[str]] = []
        self.output = output
        self.fail_on = fail_on

    def run(self, args: list[str]) -> str:
        self.commands.append(list(args))
        if self.fail_on is not None and self.fail_on in args:
            raise subprocess.CalledProcessError(1, args, output="", stderr="boom")
        return self.output


class ListOutput:
    """Output sink that keeps every line in memory."""

    def __init__(self) -> None:
        self.lines: list[str] = []

    def write_line(self, text: str) -> None:
        self.lines.append(text)


@pytest.fixture
def app_root(tmp_path: Path) -> Path:
    """Application root with populated cache, generated-code and static directories."""
    root = tmp_path / "app"
    for rel in ("var/cache", "var/generation", "var/di"):
        directory = root / rel
        (directory / "nested").mkdir(parents=True)
        (directory / "entry.txt").write_text("stale")
        (directory / "nested" / "deep.txt").write_text("stale")

    static = root / "pub" / "static"
    static.mkdir(parents=True)
    (static / "a.txt").write_text("asset")
    (static / ".htaccess").write_text("Options -Indexes")
    (static / "deployed_version.txt").write_text("1700000000")
    (static / "frontend" / "Magento").mkdir(parents=True)
    (static / "frontend" / "Magento" / "styles.css").write_text("body {}")

    (root / "bin").mkdir()
    (root / "bin" / "magento").write_text("<?php\n")
    return root


@pytest.fixture
def deploy_config(app_root: Path) -> DeployConfig:
    """Config pointing at the temporary application root with one store."""
    return DeployConfig(
        root=app_root,
        stores=[StoreEntry(theme="Magento/luma", locale="en_US")],
    )


@pytest.fixture
def executor() -> RecordingExecutor:
    """Executor that records commands and returns fixed output."""
    return RecordingExecutor()


@pytest.fixture
def output() -> ListOutput:
    """In-memory output sink."""
    return ListOutput()


def _make_manager(
    config: DeployConfig,
    executor: RecordingExecutor,
) -> DeploymentFilesystemManager:
    registry = DirectoryRegistry(config.resolved_root, config.directories)
    driver = FilesystemDriver()
    return DeploymentFilesystemManager(
        config=config,
        registry=registry,
        driver=driver,
        writer=DirectoryWriter(registry, driver),
        store=StoreConfiguration(config.stores),
        executor=executor,  # type: ignore[arg-type]
    )


@pytest.fixture
def manager(
    deploy_config: DeployConfig, executor: RecordingExecutor
) -> DeploymentFilesystemManager:
    """Manager over the temporary application root."""
    return _make_manager(deploy_config, executor)


@pytest.fixture
def make_manager() -> Callable[[DeployConfig, RecordingExecutor], DeploymentFilesystemManager]:
    """Factory wiring a manager over the real filesystem with a recording executor."""
    return _make_manager
