"""Resolution of the directory holding the running executable."""

import os
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

import psutil
import structlog


if TYPE_CHECKING:
    from openocd_startup.config.settings import Settings

logger = structlog.get_logger(__name__)


class SelfPathResolver(Protocol):
    """Strategy asking the host for the running binary's path."""

    name: str

    def resolve(self) -> str | None:
        """Return the absolute path of the running binary, or None."""
        ...


class EntryScriptResolver:
    """Path of the console script the process was started through.

    An installed console script runs on the Python interpreter, so the
    process image lives wherever the interpreter does. The launcher named by
    ``sys.argv[0]`` sits in the install bindir instead. Runs through
    ``python -m``, a ``.py`` file or the interpreter itself yield None.
    """

    name = "script"

    def __init__(self, argv0: str | None = None, interpreter: str | None = None):
        self.argv0 = argv0
        self.interpreter = interpreter

    def resolve(self) -> str | None:
        argv0 = self.argv0 if self.argv0 is not None else next(iter(sys.argv), "")
        if not argv0 or argv0 == "-c" or argv0.endswith(".py"):
            return None
        try:
            path = Path(argv0).resolve(strict=True)
        except (OSError, RuntimeError):
            logger.debug("self_path_query_failed", resolver=self.name, argv0=argv0)
            return None

        interpreter = self.interpreter or sys.executable
        if not path.is_file():
            return None
        if interpreter and path == Path(interpreter).resolve():
            return None
        return str(path)


class ProcessPathResolver:
    """Process-path query through psutil.

    psutil uses GetModuleFileNameEx on Windows, proc_pidpath on macOS and
    sysctl(KERN_PROC_PATHNAME) on the BSDs.
    """

    name = "process"

    def resolve(self) -> str | None:
        try:
            path = psutil.Process().exe()
        except (psutil.Error, OSError) as e:
            logger.debug("self_path_query_failed", resolver=self.name, error=str(e))
            return None
        return path or None


class ProcSelfLinkResolver:
    """Resolve a ``/proc`` self-link, trying each candidate in order."""

    name = "proc"

    CANDIDATES = (
        "/proc/self/exe",  # Linux, Cygwin
        "/proc/self/path/a.out",  # Solaris
        "/proc/curproc/file",  # FreeBSD
    )

    def __init__(self, candidates: tuple[str, ...] | None = None):
        self.candidates = candidates or self.CANDIDATES

    def resolve(self) -> str | None:
        for candidate in self.candidates:
            try:
                return str(Path(candidate).resolve(strict=True))
            except (OSError, RuntimeError):
                continue
        logger.debug("self_path_query_failed", resolver=self.name)
        return None


def select_resolvers(platform: str | None = None) -> list[SelfPathResolver]:
    """Return the resolver chain for ``platform`` (default: this host)."""
    platform = platform or sys.platform

    if platform in ("win32", "darwin"):
        return [EntryScriptResolver(), ProcessPathResolver()]
    if "bsd" in platform or platform.startswith("dragonfly"):
        return [
            EntryScriptResolver(),
            ProcessPathResolver(),
            ProcSelfLinkResolver(),
        ]
    return [EntryScriptResolver(), ProcSelfLinkResolver(), ProcessPathResolver()]


def _strip_file_component(path: str) -> str:
    head, sep, _ = path.rpartition("/")
    if not sep:
        return path
    return head or "/"


def _fallback_bindir(bindir: str, platform: str) -> str:
    logger.warning(
        "executable_path_unknown",
        message="Could not determine executable path, using configured BINDIR.",
    )
    logger.debug("configured_bindir", bindir=bindir)

    if platform == "win32":
        return bindir
    return os.path.realpath(bindir)


def locate_executable(
    settings: "Settings | None" = None,
    resolvers: list[SelfPathResolver] | None = None,
    platform: str | None = None,
) -> str:
    """Return the canonical directory of the running executable.

    The path is absolute, uses ``/`` as separator and has symlinks resolved.
    When the host cannot report the executable, the configured install
    binary directory is used instead.

    Args:
        settings: Settings providing the configured bindir
        resolvers: Resolver chain overriding the platform default
        platform: Platform name overriding ``sys.platform``

    Returns:
        Directory path without a trailing file component
    """
    if settings is None:
        from openocd_startup.config.settings import get_settings

        settings = get_settings()

    platform = platform or sys.platform
    chain = resolvers if resolvers is not None else select_resolvers(platform)

    for resolver in chain:
        exepath = resolver.resolve()
        if exepath:
            exepath = exepath.replace("\\", "/")
            logger.debug("executable_located", resolver=resolver.name, path=exepath)
            return _strip_file_component(exepath)

    return _fallback_bindir(settings.bindir, platform).replace("\\", "/")
