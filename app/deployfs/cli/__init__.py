"""CLI package for deployfs.

This package contains the Typer application and all subcommands.
"""

from deployfs.cli.main import app

__all__ = ["app"]
