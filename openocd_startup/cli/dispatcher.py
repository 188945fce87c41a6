"""Application of startup actions and the end-of-parse termination policy."""

from collections.abc import Sequence
from dataclasses import dataclass, field

import structlog
from rich.console import Console

from openocd_startup.cli.options import Action, ActionKind
from openocd_startup.config import constants
from openocd_startup.config.settings import Settings, get_settings
from openocd_startup.core.interfaces import CommandContext
from openocd_startup.core.logging import console as default_console
from openocd_startup.paths.search_dirs import add_default_dirs


logger = structlog.get_logger(__name__)


@dataclass
class ParseResult:
    """Outcome of applying the command line to a command context."""

    help_requested: bool = False
    version_requested: bool = False
    immediate: list[str] = field(default_factory=list)
    deferred: list[str] = field(default_factory=list)
    search_dirs: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)


def dispatch(context: CommandContext, actions: Sequence[Action]) -> ParseResult:
    """Apply ``actions`` to ``context`` in order.

    Immediate directives run now through ``context.run_line``; deferred ones
    are only appended to the configuration queue.
    """
    result = ParseResult()

    for action in actions:
        if action.kind is ActionKind.HELP:
            result.help_requested = True
        elif action.kind is ActionKind.VERSION:
            result.version_requested = True
        elif action.kind is ActionKind.SEARCH:
            context.add_script_search_dir(action.value)
            result.search_dirs.append(action.value)
        elif action.kind is ActionKind.QUEUE:
            context.add_config_command(action.value)
            result.deferred.append(action.value)
        elif action.kind is ActionKind.RUN:
            result.immediate.append(action.value)
            if not context.run_line(action.value):
                logger.warning("immediate_directive_failed", directive=action.value)
                result.failed.append(action.value)
            if action.deprecation:
                logger.warning("deprecated_option", message=action.deprecation)

    return result


def print_usage(settings: Settings, console: Console | None = None) -> None:
    console = console or default_console
    text = constants.USAGE_TEXT.format(app_name=settings.app_name)
    console.print(text, markup=False, highlight=False, end="")


def apply_termination_policy(
    result: ParseResult,
    context: CommandContext,
    settings: Settings | None = None,
    console: Console | None = None,
) -> None:
    """Stop the process for help or version, otherwise add default dirs.

    Help wins over every other option and discards queued commands.

    Raises:
        SystemExit: With status -1 after usage text, or 0 for version
    """
    settings = settings or get_settings()

    if result.help_requested:
        print_usage(settings, console)
        raise SystemExit(constants.EXIT_HELP)

    if result.version_requested:
        # The version banner is printed before parsing starts
        raise SystemExit(constants.EXIT_VERSION)

    # Paths given on the command line take precedence over these
    add_default_dirs(context, settings)
