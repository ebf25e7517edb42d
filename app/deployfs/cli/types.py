"""Shared types and utilities for CLI commands.

This module provides the helpers every command uses to load its
configuration, wire the deployment manager, and turn failures into
exit codes.
"""

import subprocess
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import typer
from rich.markup import escape

from deployfs.core.config import DeployConfig, require_config
from deployfs.core.deployer import DeploymentFilesystemManager, create_manager
from deployfs.utils.formatting import err_console, print_error
from deployfs.utils.shell import format_command


def get_config(ctx: typer.Context) -> DeployConfig:
    """Load the deploy config selected by the global --config option."""
    config_path: Path | None = None
    if ctx.obj:
        config_path = ctx.obj.get("config_path")
    return require_config(config_path)


def get_manager(ctx: typer.Context) -> DeploymentFilesystemManager:
    """Create a manager wired for the configured application."""
    return create_manager(get_config(ctx))


@contextmanager
def deployment_errors() -> Iterator[None]:
    """Report a failed deployment step and exit with status 1.

    Nothing is retried or rolled back; the error is printed as-is.

    Raises:
        typer.Exit: If the wrapped block raised a process or filesystem error.
    """
    try:
        yield
    except subprocess.CalledProcessError as e:
        print_error(f"Command failed with exit code {e.returncode}: {escape(_cmd(e.cmd))}")
        if e.stdout:
            err_console.print(e.stdout.rstrip(), markup=False, highlight=False)
        if e.stderr:
            err_console.print(e.stderr.rstrip(), markup=False, highlight=False)
        raise typer.Exit(code=1) from e
    except subprocess.TimeoutExpired as e:
        print_error(f"Command timed out after {e.timeout}s: {escape(_cmd(e.cmd))}")
        raise typer.Exit(code=1) from e
    except OSError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=1) from e


def _cmd(cmd: object) -> str:
    if isinstance(cmd, list | tuple):
        return format_command([str(part) for part in cmd])
    return str(cmd)
