"""Main entry point for the startup option processor."""

import sys
from collections.abc import Sequence

import structlog

from openocd_startup._version import __version__
from openocd_startup.cli.dispatcher import (
    ParseResult,
    apply_termination_policy,
    dispatch,
)
from openocd_startup.cli.options import build_parser, parse_options, to_actions
from openocd_startup.config import constants
from openocd_startup.config.settings import (
    ConfigurationError,
    Settings,
    get_settings,
)
from openocd_startup.core.context import DefaultCommandContext
from openocd_startup.core.interfaces import CommandContext
from openocd_startup.core.logging import setup_logging, user_output


logger = structlog.get_logger(__name__)


def parse_cmdline_args(
    context: CommandContext,
    args: Sequence[str],
    settings: Settings | None = None,
) -> ParseResult:
    """Apply the command line to ``context``.

    Immediate options run while the result is applied, file and command
    options are queued, and the built-in search directories are added once
    the whole command line has been consumed.

    Args:
        context: Command context receiving directives and search dirs
        args: Arguments without the program name
        settings: Settings; loaded from the environment when omitted

    Returns:
        The parse result; help and version never return

    Raises:
        SystemExit: 2 on a usage error, -1 after help, 0 for version
    """
    settings = settings or get_settings()
    parser = build_parser(prog=settings.tool_name)

    options = parse_options(args, parser)
    result = dispatch(context, to_actions(options, settings))
    apply_termination_policy(result, context, settings)
    return result


def main(argv: Sequence[str] | None = None) -> int:
    """Console script entry point."""
    argv = sys.argv[1:] if argv is None else argv

    try:
        settings = get_settings()
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        setup_logging(
            level=settings.logging.level,
            json_logs=settings.logging.format == "json",
            log_file=settings.logging.file,
        )
    except OSError as e:
        print(
            f"Error: cannot open log file {settings.logging.file}: {e}",
            file=sys.stderr,
        )
        return 1

    user_output(constants.BANNER.format(version=__version__))

    context = DefaultCommandContext()
    parse_cmdline_args(context, argv, settings)

    for command in context.config_commands:
        user_output(f"config: {command}")
    for path in context.script_search_dirs:
        user_output(f"search: {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
