"""structlog configuration, debug levels and log redirection.

The tool speaks in OpenOCD debug levels (0-4); they are mapped onto stdlib
levels and applied by swapping structlog's filtering wrapper class. Log
redirection swaps the logger factory so that every later line is appended
to the named file.
"""

import logging
import sys
from pathlib import Path
from typing import Any, TextIO

import structlog
from rich.console import Console


__all__ = [
    "DEBUG_LEVELS",
    "console",
    "get_logger",
    "redirect_log_output",
    "reset_logging",
    "set_debug_level",
    "setup_logging",
    "user_output",
]


DEBUG_LEVELS: dict[int, int] = {
    0: logging.ERROR,
    1: logging.WARNING,
    2: logging.INFO,
    3: logging.DEBUG,
    4: logging.DEBUG,
}

# User-visible output (usage text, banner, command output)
console = Console(highlight=False, soft_wrap=True)

_json_logs = False
_log_file: TextIO | None = None


def _build_processors(json_logs: bool, colors: bool) -> list[Any]:
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="%H:%M:%S"),
    ]
    if json_logs:
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=colors))
    return processors


def setup_logging(
    level: str | int = "INFO",
    json_logs: bool = False,
    log_file: str | Path | None = None,
) -> None:
    """Configure structlog for the process.

    Args:
        level: Stdlib level name or number
        json_logs: Render JSON lines instead of human-readable ones
        log_file: Append to this file instead of writing to stderr
    """
    global _json_logs

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {level}")

    _json_logs = json_logs
    structlog.configure(
        processors=_build_processors(json_logs, colors=log_file is None),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
    if log_file is not None:
        redirect_log_output(log_file)


def set_debug_level(debug_level: int) -> int:
    """Apply an OpenOCD debug level (0-4) and return the stdlib level used."""
    if debug_level not in DEBUG_LEVELS:
        raise ValueError(f"debug level must be between 0 and 4, got {debug_level}")

    level = DEBUG_LEVELS[debug_level]
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(level))
    return level


def redirect_log_output(path: str | Path) -> None:
    """Append all subsequent log output to ``path``."""
    global _log_file

    handle = open(path, "a", encoding="utf-8")  # noqa: SIM115
    if _log_file is not None:
        _log_file.close()
    _log_file = handle

    structlog.configure(
        processors=_build_processors(_json_logs, colors=False),
        logger_factory=structlog.PrintLoggerFactory(file=handle),
    )


def user_output(text: str, newline: bool = True) -> None:
    """Write text the user asked to see, bypassing level filtering."""
    console.print(text, markup=False, end="\n" if newline else "")


def get_logger(name: str | None = None) -> Any:
    """Get a structlog logger bound to ``name``."""
    return structlog.get_logger(name)


def reset_logging() -> None:
    """Close any redirected log file and restore structlog defaults."""
    global _json_logs, _log_file

    if _log_file is not None:
        _log_file.close()
        _log_file = None
    _json_logs = False
    structlog.reset_defaults()
