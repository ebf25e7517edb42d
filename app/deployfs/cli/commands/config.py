"""Deploy configuration commands.

Provides commands to inspect the effective configuration and to write
a default configuration file.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from deployfs.cli.types import get_config
from deployfs.core.config import DeployConfigError, get_default_config, save_deploy_config
from deployfs.core.paths import get_deploy_config_path
from deployfs.utils.formatting import (
    console,
    create_table,
    print_error,
    print_info,
    print_success,
)

app = typer.Typer(
    help="Inspect and create the deploy configuration.",
    invoke_without_command=True,
    no_args_is_help=True,
)


@app.command()
def show(ctx: typer.Context) -> None:
    """Show the effective deploy configuration."""
    config = get_config(ctx)

    table = create_table("Deploy Configuration")
    table.add_column("Setting", style="info")
    table.add_column("Value")

    table.add_row("root", escape(str(config.resolved_root)))
    table.add_row("cli", escape(" ".join(config.cli_command)))
    table.add_row("default_theme", escape(config.default_theme))
    timeout = f"{config.timeout_seconds}s" if config.timeout_seconds else "none"
    table.add_row("timeout", timeout)
    table.add_row("static_view_exclusions", escape(", ".join(config.static_view_exclusions)))
    for code, path in config.directories.items():
        table.add_row(f"directories.{code.value}", escape(path))

    console.print(table)

    stores = create_table("Stores")
    stores.add_column("Theme")
    stores.add_column("Locale")
    for store in config.stores:
        if store.theme:
            theme = escape(store.theme)
        else:
            theme = f"[muted]{escape(config.default_theme)}[/muted]"
        stores.add_row(theme, store.locale)

    console.print(stores)


@app.command()
def init(
    ctx: typer.Context,
    root: Annotated[
        Path | None,
        typer.Option(
            "--root",
            "-r",
            help="Application root to record (default: current directory).",
        ),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Write a default deploy configuration file."""
    path: Path = (ctx.obj or {}).get("config_path") or get_deploy_config_path()

    if path.exists() and not force:
        print_error(f"Config already exists: {path}")
        print_info("Use --force to overwrite it.")
        raise typer.Exit(code=1)

    # A relative root would be read back relative to the config file
    app_root = (root or Path.cwd()).expanduser().resolve()
    config = get_default_config().model_copy(update={"root": app_root})

    try:
        saved = save_deploy_config(config, path)
    except DeployConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Config written to {saved}")
