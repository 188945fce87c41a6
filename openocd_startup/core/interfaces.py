"""Contracts between the option processor and the surrounding tool.

The command interpreter that eventually runs queued configuration commands
lives outside this package; the option processor only needs the entry
points below.
"""

from typing import Protocol, runtime_checkable


__all__ = ["CommandContext", "OutputHandler"]


class OutputHandler(Protocol):
    """Callable receiving text produced by a command."""

    def __call__(self, context: "CommandContext", line: str) -> None: ...


@runtime_checkable
class CommandContext(Protocol):
    """Entry points the option processor drives while parsing."""

    def run_line(self, line: str) -> bool:
        """Execute a directive line synchronously.

        Returns:
            True if every command on the line succeeded
        """
        ...

    def add_config_command(self, line: str) -> None:
        """Queue a directive for execution after parsing completes."""
        ...

    def add_script_search_dir(self, path: str) -> None:
        """Register a directory consulted when resolving script names."""
        ...
