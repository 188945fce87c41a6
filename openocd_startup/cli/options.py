"""Command-line option grammar and its translation into startup actions.

Parsing only records what was requested, one entry per option occurrence
in command-line order. :func:`to_action` then decides whether each request
runs immediately, is queued for the command interpreter, or only sets a
flag; the dispatcher applies the result.
"""

import argparse
from collections.abc import Sequence
from enum import Enum
from typing import Any, NamedTuple

import structlog

from openocd_startup.config import constants
from openocd_startup.config.settings import Settings, get_settings


logger = structlog.get_logger(__name__)


class OptionTag(str, Enum):
    """Recognized startup options."""

    HELP = "help"
    VERSION = "version"
    FILE = "file"
    SEARCH = "search"
    DEBUG = "debug"
    LOG_OUTPUT = "log_output"
    COMMAND = "command"
    PIPE = "pipe"


class ParsedOption(NamedTuple):
    """One option occurrence with its argument, if any."""

    tag: OptionTag
    argument: str | None = None


class ActionKind(str, Enum):
    """When and how a requested action takes effect."""

    HELP = "help"
    VERSION = "version"
    RUN = "run"
    QUEUE = "queue"
    SEARCH = "search"


class Action(NamedTuple):
    """A startup action produced from a parsed option."""

    kind: ActionKind
    value: str | None = None
    deprecation: str | None = None


# (long, short, nargs) per tag; nargs follows argparse conventions
OPTION_GRAMMAR: dict[OptionTag, tuple[str, str, int | str | None]] = {
    OptionTag.HELP: ("--help", "-h", 0),
    OptionTag.VERSION: ("--version", "-v", 0),
    OptionTag.DEBUG: ("--debug", "-d", "?"),
    OptionTag.FILE: ("--file", "-f", None),
    OptionTag.SEARCH: ("--search", "-s", None),
    OptionTag.LOG_OUTPUT: ("--log_output", "-l", "?"),
    OptionTag.COMMAND: ("--command", "-c", None),
    OptionTag.PIPE: ("--pipe", "-p", 0),
}


class _RecordOption(argparse.Action):
    """Append a :class:`ParsedOption` to the shared, ordered option list."""

    def __init__(
        self, option_strings: list[str], dest: str, tag: OptionTag, **kwargs: Any
    ):
        self.tag = tag
        super().__init__(option_strings, dest, **kwargs)

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: Any,
        option_string: str | None = None,
    ) -> None:
        recorded = getattr(namespace, self.dest, None)
        if recorded is None:
            recorded = []
            setattr(namespace, self.dest, recorded)
        argument = values if isinstance(values, str) else None
        recorded.append(ParsedOption(self.tag, argument))


def build_parser(prog: str = "openocd") -> argparse.ArgumentParser:
    """Build the argument parser for the startup options.

    Help is handled as an ordinary option so that the rest of the command
    line is still validated before usage text is shown.
    """
    parser = argparse.ArgumentParser(prog=prog, add_help=False, allow_abbrev=True)
    for tag, (long_opt, short_opt, nargs) in OPTION_GRAMMAR.items():
        parser.add_argument(
            short_opt,
            long_opt,
            action=_RecordOption,
            dest="options",
            tag=tag,
            nargs=nargs,
            default=None,
            help=argparse.SUPPRESS,
        )
    return parser


def parse_options(
    args: Sequence[str], parser: argparse.ArgumentParser | None = None
) -> list[ParsedOption]:
    """Parse ``args`` (without the program name) into option occurrences.

    Non-option words are ignored, and so is everything after a literal
    ``--``. An unrecognized option is fatal and follows argparse's error
    contract: usage on stderr, exit status 2.
    """
    parser = parser or build_parser()
    args = list(args)
    trailing: list[str] = []
    if "--" in args:
        cut = args.index("--")
        args, trailing = args[:cut], args[cut + 1 :]

    namespace, extras = parser.parse_known_args(args)

    unknown = [arg for arg in extras if arg.startswith("-") and arg != "-"]
    if unknown:
        parser.error(f"unrecognized arguments: {' '.join(unknown)}")
    if extras or trailing:
        logger.debug("non_option_arguments_ignored", arguments=extras + trailing)

    return list(namespace.options or [])


def to_action(option: ParsedOption, settings: Settings | None = None) -> Action | None:
    """Translate a parsed option into the action it requests.

    Returns:
        The action, or None when the option requests nothing
    """
    settings = settings or get_settings()
    tag, argument = option

    if tag is OptionTag.HELP:
        return Action(ActionKind.HELP)
    if tag is OptionTag.VERSION:
        return Action(ActionKind.VERSION)
    if tag is OptionTag.FILE:
        directive = constants.SCRIPT_DIRECTIVE.format(path=argument)
        return Action(ActionKind.QUEUE, directive)
    if tag is OptionTag.SEARCH:
        return Action(ActionKind.SEARCH, argument)
    if tag is OptionTag.DEBUG:
        level = argument if argument is not None else str(settings.default_debug_level)
        directive = constants.DEBUG_LEVEL_DIRECTIVE.format(level=level)
        return Action(ActionKind.RUN, directive)
    if tag is OptionTag.LOG_OUTPUT:
        if not argument:
            return None
        directive = constants.LOG_OUTPUT_DIRECTIVE.format(path=argument)
        return Action(ActionKind.RUN, directive)
    if tag is OptionTag.COMMAND:
        if argument is None:
            return None
        return Action(ActionKind.QUEUE, argument)
    if tag is OptionTag.PIPE:
        # Runs synchronously: a delayed warning would overflow gdb's stdin
        return Action(
            ActionKind.RUN,
            constants.PIPE_DIRECTIVE.format(tool_name=settings.tool_name),
            deprecation=constants.PIPE_DEPRECATION.format(tool_name=settings.tool_name),
        )
    raise ValueError(f"Unhandled option: {tag}")


def to_actions(
    options: Sequence[ParsedOption], settings: Settings | None = None
) -> list[Action]:
    """Translate options in order, dropping those that request nothing."""
    actions = []
    for option in options:
        action = to_action(option, settings)
        if action is not None:
            actions.append(action)
    return actions
