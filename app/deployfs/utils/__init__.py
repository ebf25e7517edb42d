"""Utility modules for deployfs.

This module exports commonly used utility functions.
"""

from deployfs.utils.formatting import (
    console,
    create_table,
    err_console,
    format_mode,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from deployfs.utils.shell import (
    CommandResult,
    ProcessExecutor,
    command_exists,
    format_command,
    run_command,
)

__all__ = [
    "CommandResult",
    "ProcessExecutor",
    "command_exists",
    "console",
    "create_table",
    "err_console",
    "format_command",
    "format_mode",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
    "run_command",
]
