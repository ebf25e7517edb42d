"""Output sinks for deployment progress and forwarded command output."""

from typing import Protocol

from rich.console import Console


class OutputSink(Protocol):
    """Anything that accepts lines of text."""

    def write_line(self, text: str) -> None: ...


class ConsoleOutput:
    """Writes lines to a Rich console verbatim.

    Command output is arbitrary text, so markup and highlighting are off.
    """

    def __init__(self, console: Console) -> None:
        self._console = console

    def write_line(self, text: str) -> None:
        self._console.print(text, markup=False, highlight=False)
