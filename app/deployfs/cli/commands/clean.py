"""Clean command implementation.

Empties managed directories by code.
"""

from typing import Annotated

import typer

from deployfs.cli.types import deployment_errors, get_manager
from deployfs.core.deployer import REGENERATE_CLEANUP
from deployfs.core.directories import DirectoryCode
from deployfs.utils.formatting import print_success

app = typer.Typer(
    help="Empty cache and generated-code directories.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def clean(
    ctx: typer.Context,
    codes: Annotated[
        list[DirectoryCode] | None,
        typer.Option(
            "--dir",
            "-d",
            help="Directory to clean, repeatable (default: all regeneration targets).",
            case_sensitive=False,
            show_default=False,
        ),
    ] = None,
) -> None:
    """Empty directories, keeping the directories themselves.

    The static_view directory keeps its configured marker files.
    """
    if ctx.invoked_subcommand is not None:
        return

    selected = codes or list(REGENERATE_CLEANUP)
    manager = get_manager(ctx)

    with deployment_errors():
        manager.cleanup_filesystem(selected)

    print_success(f"Cleaned: {', '.join(code.value for code in selected)}")
