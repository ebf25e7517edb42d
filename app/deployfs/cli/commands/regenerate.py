"""Regenerate command implementation.

Runs the full static-content regeneration sequence.
"""

from typing import Annotated

import typer
from rich.markup import escape

from deployfs.cli.types import deployment_errors, get_config
from deployfs.core.deployer import PlannedStep, create_manager
from deployfs.core.output import ConsoleOutput
from deployfs.utils.formatting import (
    console,
    create_table,
    print_info,
    print_success,
    print_warning,
)
from deployfs.utils.shell import command_exists

app = typer.Typer(
    help="Regenerate static content and generated code.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def regenerate(
    ctx: typer.Context,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show the planned steps without running them."),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Clean, redeploy static content and CSS, compile, then lock permissions.

    Steps run in order and the first failure stops the run. Steps that
    already finished are not undone.

    Examples:
        deployfs regenerate --dry-run    # Preview steps and commands
        deployfs regenerate --yes        # Run without confirmation
    """
    if ctx.invoked_subcommand is not None:
        return

    config = get_config(ctx)
    manager = create_manager(config)
    steps = manager.plan()

    _print_plan(steps, dry_run)

    if not command_exists(config.php_binary):
        print_warning(f"{config.php_binary!r} was not found on PATH.")

    if dry_run:
        return

    if not yes:
        confirmed = typer.confirm(
            "\nThis empties cache, generated code and static view directories. Continue?",
            default=False,
        )
        if not confirmed:
            print_info("Aborted.")
            raise typer.Exit(code=0)

    with deployment_errors():
        manager.regenerate_static(ConsoleOutput(console))

    print_success("Static content regenerated.")


def _print_plan(steps: list[PlannedStep], dry_run: bool) -> None:
    title = "Regeneration Plan (Dry Run)" if dry_run else "Regeneration Plan"
    table = create_table(title)
    table.add_column("#", justify="right", width=3)
    table.add_column("Step", style="step", no_wrap=True)
    table.add_column("Command", style="command", overflow="fold")

    for index, step in enumerate(steps, start=1):
        table.add_row(str(index), step.description, escape(step.command or "-"))

    console.print(table)
