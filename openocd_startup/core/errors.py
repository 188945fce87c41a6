"""Exceptions raised by the startup option processor."""

from typing import Any


class StartupError(Exception):
    """Base exception for startup processing errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class CommandError(StartupError):
    """An immediate directive could not be executed."""

    def __init__(self, command: str, message: str) -> None:
        super().__init__(message=message, details={"command": command})
        self.command = command


class UnknownCommandError(CommandError):
    """The directive names a command with no registered handler."""

    def __init__(self, command: str) -> None:
        super().__init__(command, f"invalid command name \"{command}\"")
