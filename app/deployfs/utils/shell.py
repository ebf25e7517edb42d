"""Shell execution utilities.

Provides subprocess execution with captured output. Application CLI
commands are always run in a child process so that no in-memory state
of the calling process leaks into them.
"""

import logging
import shlex
import shutil
import subprocess
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Result of a shell command execution.

    Attributes:
        stdout: Standard output from the command.
        stderr: Standard error from the command.
        returncode: Exit code of the command.
    """

    stdout: str
    stderr: str
    returncode: int

    @property
    def success(self) -> bool:
        """Check if command executed successfully."""
        return self.returncode == 0


def run_command(
    args: list[str],
    *,
    check: bool = False,
    timeout: float | None = 60.0,
    cwd: str | None = None,
    merge_stderr: bool = False,
) -> CommandResult:
    """Execute a shell command and return the result.

    Args:
        args: Command and arguments to execute.
        check: If True, raise CalledProcessError on non-zero exit.
        timeout: Maximum time in seconds to wait for command.
        cwd: Working directory for the command. If None, uses current directory.
        merge_stderr: If True, stderr is interleaved into stdout, as with 2>&1,
            and the result's stderr is empty.

    Returns:
        CommandResult with stdout, stderr, and returncode.

    Raises:
        subprocess.CalledProcessError: If check=True and command fails.
        subprocess.TimeoutExpired: If command exceeds timeout.
        FileNotFoundError: If command executable is not found.
    """
    result = subprocess.run(
        args,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT if merge_stderr else subprocess.PIPE,
        text=True,
        check=check,
        timeout=timeout,
        cwd=cwd,
    )
    return CommandResult(
        stdout=result.stdout,
        stderr=result.stderr or "",
        returncode=result.returncode,
    )


def command_exists(name: str) -> bool:
    """Check if a command exists in the system PATH.

    Args:
        name: Command name to check.

    Returns:
        True if command exists, False otherwise.
    """
    return shutil.which(name) is not None


def format_command(args: list[str]) -> str:
    """Render an argument list as a single shell-quoted command line."""
    return shlex.join(args)


class ProcessExecutor:
    """Runs external commands synchronously in isolated child processes.

    Each call blocks until the child exits. There is no retry; a failing
    command raises and the caller decides what to do with it.

    Attributes:
        _timeout: Seconds to wait for each command, None to wait forever.
        _cwd: Working directory for every spawned command.
    """

    def __init__(self, timeout: float | None = None, cwd: str | None = None) -> None:
        """Initialize the executor.

        Args:
            timeout: Maximum time in seconds per command. None disables the limit.
            cwd: Working directory for spawned commands.
        """
        self._timeout = timeout
        self._cwd = cwd

    def run(self, args: list[str]) -> str:
        """Run a command and return its combined output.

        Standard error is merged into standard output, so warnings a
        successful command prints still reach the caller.

        Args:
            args: Command and arguments to execute.

        Returns:
            Combined stdout and stderr with the trailing newline removed.

        Raises:
            subprocess.CalledProcessError: If the command exits non-zero.
            subprocess.TimeoutExpired: If the command exceeds the timeout.
            FileNotFoundError: If the executable is not found.
        """
        logger.debug("Executing: %s", format_command(args))
        result = run_command(args, timeout=self._timeout, cwd=self._cwd, merge_stderr=True)
        if not result.success:
            logger.debug("Command exited with %d", result.returncode)
            raise subprocess.CalledProcessError(result.returncode, args, output=result.stdout)
        return result.stdout.rstrip("\n")
