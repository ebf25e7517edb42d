"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from pathlib import Path
from typing import Annotated

import typer

from deployfs import __version__
from deployfs.cli.commands import clean, config, dirs, lock, regenerate

# Create main Typer app
app = typer.Typer(
    name="deployfs",
    help="Regenerate static content and generated code for a deployment.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"deployfs version {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool, quiet: bool) -> None:
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to deploy.toml (default: ~/.config/deployfs/deploy.toml).",
        ),
    ] = None,
) -> None:
    """deployfs - Deployment filesystem manager.

    Cleans cache and generated code, redeploys static content through
    the application CLI, and locks permissions on generated output.
    """
    _configure_logging(verbose, quiet)

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = config_path


# Register commands
app.add_typer(regenerate.app, name="regenerate")
app.add_typer(clean.app, name="clean")
app.add_typer(lock.app, name="lock")
app.add_typer(dirs.app, name="dirs")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
