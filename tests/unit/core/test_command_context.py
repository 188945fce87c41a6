"""Unit tests for the default in-process command context."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from structlog.testing import capture_logs

from openocd_startup.core.context import (
    DefaultCommandContext,
    configuration_output_handler,
)
from openocd_startup.core.errors import CommandError, UnknownCommandError
from openocd_startup.core.interfaces import CommandContext


@pytest.mark.unit
class TestDefaultCommandContext:
    """Test DefaultCommandContext class."""

    def test_satisfies_protocol(self):
        assert isinstance(DefaultCommandContext(), CommandContext)

    def test_queue_and_search_dirs_keep_order(self):
        context = DefaultCommandContext()

        context.add_config_command("script {a.cfg}")
        context.add_config_command("init")
        context.add_script_search_dir("/a")
        context.add_script_search_dir("/b")

        assert context.config_commands == ["script {a.cfg}", "init"]
        assert context.script_search_dirs == ["/a", "/b"]

    @patch("openocd_startup.core.context.set_debug_level")
    def test_debug_level(self, mock_set_debug_level):
        context = DefaultCommandContext()

        assert context.run_line("debug_level 2") is True

        mock_set_debug_level.assert_called_once_with(2)
        assert context.debug_level == 2

    def test_debug_level_out_of_range_fails(self):
        context = DefaultCommandContext()

        with capture_logs() as logs:
            assert context.run_line("debug_level 9") is False

        assert logs[-1]["event"] == "command_failed"
        assert logs[-1]["log_level"] == "error"
        assert context.debug_level is None

    def test_debug_level_not_a_number_fails(self):
        assert DefaultCommandContext().run_line("debug_level high") is False

    def test_pipe_directive_runs_both_commands(self, tmp_path: Path):
        context = DefaultCommandContext()
        log_file = tmp_path / "openocd.log"

        assert context.run_line(f"gdb_port pipe; log_output {log_file}") is True

        assert context.gdb_port == "pipe"
        assert context.log_output == str(log_file)
        assert log_file.exists()

    def test_log_output_unwritable_fails(self, tmp_path: Path):
        context = DefaultCommandContext()
        target = tmp_path / "missing" / "ocd.log"

        assert context.run_line(f"log_output {target}") is False
        assert context.log_output is None

    @pytest.mark.parametrize("port", ["3333", "pipe", "disabled"])
    def test_gdb_port_values(self, port):
        context = DefaultCommandContext()
        assert context.run_line(f"gdb_port {port}") is True
        assert context.gdb_port == port

    def test_gdb_port_rejects_garbage(self):
        assert DefaultCommandContext().run_line("gdb_port nowhere") is False

    def test_unknown_command_fails(self):
        context = DefaultCommandContext()

        with capture_logs() as logs:
            assert context.run_line("reset halt") is False

        failure = logs[-1]
        assert failure["command"] == "reset"
        assert failure["error"] == 'invalid command name "reset"'

    def test_stops_at_first_failure(self):
        context = DefaultCommandContext()
        assert context.run_line("bogus; gdb_port pipe") is False
        assert context.gdb_port is None

    def test_execute_raises(self):
        context = DefaultCommandContext()

        with pytest.raises(UnknownCommandError):
            context.execute("bogus")
        with pytest.raises(CommandError):
            context.execute('log_output "unterminated')

    def test_empty_commands_are_skipped(self):
        assert DefaultCommandContext().run_line(" ; ") is True

    def test_register_handler(self):
        context = DefaultCommandContext()
        handler = MagicMock(return_value=None)
        context.register_handler("init", handler)

        assert context.run_line("init now") is True

        handler.assert_called_once_with(context, ["now"])

    def test_handler_output_goes_to_output_handler(self):
        output_handler = MagicMock()
        context = DefaultCommandContext(output_handler=output_handler)
        context.register_handler("version", lambda ctx, args: "0.12.0\n")

        assert context.run_line("version") is True

        output_handler.assert_called_once_with(context, "0.12.0\n")

    @patch("openocd_startup.core.context.set_debug_level")
    def test_debug_level_query_reports_current_level(self, mock_set_debug_level):
        output_handler = MagicMock()
        context = DefaultCommandContext(output_handler=output_handler)

        assert context.run_line("debug_level 2; debug_level") is True

        output_handler.assert_called_once_with(context, "debug_level: 2\n")

    def test_debug_level_query_before_any_level_fails(self):
        output_handler = MagicMock()
        context = DefaultCommandContext(output_handler=output_handler)

        assert context.run_line("debug_level") is False
        output_handler.assert_not_called()

    def test_silent_commands_produce_no_output(self):
        output_handler = MagicMock()
        context = DefaultCommandContext(output_handler=output_handler)

        assert context.run_line("gdb_port 3333") is True
        output_handler.assert_not_called()


@pytest.mark.unit
class TestConfigurationOutputHandler:
    """Test configuration_output_handler function."""

    def test_writes_without_newline(self, capsys):
        context = DefaultCommandContext()

        configuration_output_handler(context, "partial")
        configuration_output_handler(context, " line")

        assert capsys.readouterr().out == "partial line"

    def test_default_output_handler(self):
        assert DefaultCommandContext().output_handler is configuration_output_handler

    @patch("openocd_startup.core.context.set_debug_level")
    def test_default_handler_prints_command_output(self, mock_set_debug_level, capsys):
        context = DefaultCommandContext()

        context.run_line("debug_level 1; debug_level")

        assert "debug_level: 1" in capsys.readouterr().out
