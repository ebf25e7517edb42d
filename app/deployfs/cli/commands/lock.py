"""Lock command implementation."""

import typer

from deployfs.cli.types import deployment_errors, get_manager
from deployfs.core.deployer import LOCKED_DIRECTORIES, PERMISSIONS_DIR, PERMISSIONS_FILE
from deployfs.utils.formatting import format_mode, print_success

app = typer.Typer(
    help="Lock permissions on generated directories.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def lock(ctx: typer.Context) -> None:
    """Set generated directories to read-only permissions for group."""
    if ctx.invoked_subcommand is not None:
        return

    manager = get_manager(ctx)

    with deployment_errors():
        manager.lock_static_resources()

    print_success(
        f"Locked {', '.join(code.value for code in LOCKED_DIRECTORIES)} "
        f"(dirs {format_mode(PERMISSIONS_DIR)}, files {format_mode(PERMISSIONS_FILE)})"
    )
