"""CLI commands for deployfs.

This package contains all subcommand implementations.
"""

from deployfs.cli.commands import clean, config, dirs, lock, regenerate

__all__ = ["clean", "config", "dirs", "lock", "regenerate"]
