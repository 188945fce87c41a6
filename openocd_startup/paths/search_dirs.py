"""Built-in script search directories.

The directory holding the vendor-supplied scripts is listed last in the
built-in search order, so site-specific copies override it.
"""

import os
import sys
from collections.abc import Mapping
from typing import Any

import structlog

from openocd_startup.config.settings import Settings, get_settings
from openocd_startup.core.interfaces import CommandContext
from openocd_startup.paths.executable import locate_executable


logger = structlog.get_logger(__name__)


def find_suffix(text: str, suffix: str) -> int | None:
    """Return the index where ``suffix`` ends ``text``, or None.

    An empty suffix matches at the end of the text.
    """
    if not suffix:
        return len(text)
    if len(suffix) > len(text) or not text.endswith(suffix):
        return None
    return len(text) - len(suffix)


def run_prefix(exe_dir: str, bindir: str) -> str:
    """Strip the install binary directory from the executable directory."""
    end = find_suffix(exe_dir, bindir)
    if end is None:
        return exe_dir
    return exe_dir[:end]


def build_default_search_dirs(
    install_bindir: str,
    install_pkgdatadir: str,
    *,
    exe_dir: str | None = None,
    environ: Mapping[str, str] | None = None,
    platform: str | None = None,
    settings: Settings | None = None,
) -> list[str]:
    """Build the built-in script search directories in search order.

    Args:
        install_bindir: Configured install binary directory
        install_pkgdatadir: Configured install data directory
        exe_dir: Executable directory; located when not given
        environ: Environment to read; defaults to ``os.environ``
        platform: Platform name overriding ``sys.platform``
        settings: Settings naming the tool and its environment variable

    Returns:
        Directories from user overrides down to vendor scripts
    """
    settings = settings or get_settings()
    environ = os.environ if environ is None else environ
    platform = platform or sys.platform
    if exe_dir is None:
        exe_dir = locate_executable(settings, platform=platform)

    prefix = run_prefix(exe_dir, install_bindir)
    logger.debug("bindir", bindir=install_bindir)
    logger.debug("pkgdatadir", pkgdatadir=install_pkgdatadir)
    logger.debug("run_prefix", run_prefix=prefix)

    dirs: list[str] = []

    home = environ.get("HOME")
    if home is not None:
        dirs.append(f"{home}/.{settings.tool_name}")

    scripts = environ.get(settings.scripts_env_var)
    if scripts is not None:
        dirs.append(scripts)

    if platform == "win32":
        appdata = environ.get("APPDATA")
        if appdata is not None:
            dirs.append(f"{appdata}/{settings.app_name}")

    dirs.append(f"{prefix}{install_pkgdatadir}/site")
    dirs.append(f"{prefix}{install_pkgdatadir}/scripts")
    return dirs


def add_default_dirs(
    context: CommandContext,
    settings: Settings | None = None,
    **kwargs: Any,
) -> list[str]:
    """Register the built-in search directories with ``context``.

    Directories registered earlier (e.g. from ``-s``) keep precedence.
    Extra keyword arguments are passed to :func:`build_default_search_dirs`.
    """
    settings = settings or get_settings()
    dirs = build_default_search_dirs(
        settings.bindir, settings.pkgdatadir, settings=settings, **kwargs
    )
    for path in dirs:
        context.add_script_search_dir(path)
    return dirs
