"""Shared test fixtures for the startup option processor tests.

Fixtures isolate each test from the host: environment variables that feed
the search path are cleared, the cached settings are dropped, and
structlog is returned to its defaults after every test.
"""

from collections.abc import Generator
from unittest.mock import patch

import pytest

from openocd_startup.config.settings import Settings, get_settings
from openocd_startup.core.logging import reset_logging


class RecordingContext:
    """Command context that records every call instead of executing it."""

    def __init__(self, run_line_result: bool = True) -> None:
        self.run_line_result = run_line_result
        self.calls: list[tuple[str, str]] = []
        self.executed: list[str] = []
        self.config_commands: list[str] = []
        self.script_search_dirs: list[str] = []

    def run_line(self, line: str) -> bool:
        self.calls.append(("run_line", line))
        self.executed.append(line)
        return self.run_line_result

    def add_config_command(self, line: str) -> None:
        self.calls.append(("add_config_command", line))
        self.config_commands.append(line)

    def add_script_search_dir(self, path: str) -> None:
        self.calls.append(("add_script_search_dir", path))
        self.script_search_dirs.append(path)


@pytest.fixture(autouse=True)
def isolated_environment(
    monkeypatch: pytest.MonkeyPatch,
) -> Generator[None, None, None]:
    """Clear search-path environment variables and reset global state."""
    for name in ("HOME", "APPDATA", "OPENOCD_SCRIPTS"):
        monkeypatch.delenv(name, raising=False)
    for name in ("OPENOCD_BINDIR", "OPENOCD_PKGDATADIR", "OPENOCD_TOOL_NAME"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    reset_logging()


@pytest.fixture
def settings() -> Settings:
    """Settings for a standard /usr/local installation."""
    return Settings(
        tool_name="openocd",
        app_name="OpenOCD",
        bindir="/usr/local/bin",
        pkgdatadir="/usr/local/share/openocd",
    )


@pytest.fixture
def recording_context() -> RecordingContext:
    return RecordingContext()


@pytest.fixture
def installed_executable() -> Generator[str, None, None]:
    """Pretend the executable lives in /opt/ocd/usr/local/bin."""
    exe_dir = "/opt/ocd/usr/local/bin"
    with patch(
        "openocd_startup.paths.search_dirs.locate_executable", return_value=exe_dir
    ):
        yield exe_dir
