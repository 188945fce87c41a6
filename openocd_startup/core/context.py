"""In-process command context used when no external interpreter is attached."""

import shlex
from collections.abc import Callable

from openocd_startup.core.errors import CommandError, UnknownCommandError
from openocd_startup.core.interfaces import CommandContext, OutputHandler
from openocd_startup.core.logging import (
    get_logger,
    redirect_log_output,
    set_debug_level,
    user_output,
)


__all__ = ["DefaultCommandContext", "CommandHandler", "configuration_output_handler"]

logger = get_logger(__name__)

CommandHandler = Callable[["DefaultCommandContext", list[str]], str | None]


def configuration_output_handler(context: CommandContext, line: str) -> None:
    """Forward command output to the user without adding a newline."""
    user_output(line, newline=False)


def _debug_level(context: "DefaultCommandContext", args: list[str]) -> str | None:
    if not args and context.debug_level is not None:
        return f"debug_level: {context.debug_level}\n"
    if len(args) != 1:
        raise CommandError("debug_level", "usage: debug_level <0-4>")
    try:
        level = int(args[0])
        set_debug_level(level)
    except ValueError as e:
        raise CommandError("debug_level", str(e)) from e
    context.debug_level = level
    return None


def _log_output(context: "DefaultCommandContext", args: list[str]) -> str | None:
    if len(args) != 1:
        raise CommandError("log_output", "usage: log_output <name>")
    try:
        redirect_log_output(args[0])
    except OSError as e:
        raise CommandError("log_output", f"cannot open {args[0]}: {e}") from e
    context.log_output = args[0]
    return None


def _gdb_port(context: "DefaultCommandContext", args: list[str]) -> str | None:
    if len(args) != 1:
        raise CommandError("gdb_port", "usage: gdb_port <port|pipe|disabled>")
    port = args[0]
    if port not in ("pipe", "disabled") and not port.isdigit():
        raise CommandError("gdb_port", f"invalid gdb port: {port}")
    context.gdb_port = port
    return None


class DefaultCommandContext:
    """Minimal command context holding the queue and search path list.

    Only the commands the option processor itself issues are built in;
    the embedding tool adds more with :meth:`register_handler`.
    """

    def __init__(self, output_handler: OutputHandler | None = None) -> None:
        self.config_commands: list[str] = []
        self.script_search_dirs: list[str] = []
        self.output_handler = output_handler or configuration_output_handler
        self.debug_level: int | None = None
        self.log_output: str | None = None
        self.gdb_port: str | None = None
        self._handlers: dict[str, CommandHandler] = {
            "debug_level": _debug_level,
            "log_output": _log_output,
            "gdb_port": _gdb_port,
        }

    def register_handler(self, name: str, handler: CommandHandler) -> None:
        """Register or replace the handler for command ``name``."""
        self._handlers[name] = handler

    def execute(self, command: str) -> None:
        """Execute a single command.

        Text returned by the handler goes to the output handler.

        Raises:
            UnknownCommandError: No handler is registered for the command
            CommandError: The handler rejected its arguments
        """
        try:
            words = shlex.split(command)
        except ValueError as e:
            raise CommandError(command, str(e)) from e
        if not words:
            return
        handler = self._handlers.get(words[0])
        if handler is None:
            raise UnknownCommandError(words[0])
        logger.debug("command_execute", command=words[0], args=words[1:])
        output = handler(self, words[1:])
        if output:
            self.output_handler(self, output)

    def run_line(self, line: str) -> bool:
        for command in line.split(";"):
            try:
                self.execute(command.strip())
            except CommandError as e:
                logger.error(
                    "command_failed", command=e.command, error=e.message, line=line
                )
                return False
        return True

    def add_config_command(self, line: str) -> None:
        self.config_commands.append(line)

    def add_script_search_dir(self, path: str) -> None:
        logger.debug("script_search_dir_added", path=path)
        self.script_search_dirs.append(path)
