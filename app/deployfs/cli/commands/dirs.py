"""Dirs command implementation.

Shows where each managed directory resolves to.
"""

import typer
from rich.markup import escape

from deployfs.cli.types import get_config
from deployfs.core.directories import DirectoryRegistry
from deployfs.utils.formatting import console, create_table, format_mode

app = typer.Typer(
    help="Show managed directories.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def dirs(ctx: typer.Context) -> None:
    """List each directory code with its resolved path and mode."""
    if ctx.invoked_subcommand is not None:
        return

    config = get_config(ctx)
    registry = DirectoryRegistry(config.resolved_root, config.directories)

    table = create_table(f"Managed Directories ({escape(str(registry.root))})")
    table.add_column("Code", style="info", no_wrap=True)
    table.add_column("Path", style="path")
    table.add_column("Mode", justify="right", no_wrap=True)

    for code, path in registry.items():
        if path.exists():
            mode = format_mode(path.stat().st_mode & 0o7777)
        else:
            mode = "[muted]missing[/muted]"
        table.add_row(code.value, escape(str(path)), mode)

    console.print(table)
