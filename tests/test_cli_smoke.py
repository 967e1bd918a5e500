"""Smoke tests for CLI commands.

Commands run against in-memory MIDI ports injected through the click
context object, so no hardware is needed.
"""

from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from conftest import MINI_MK3_OUT, FakeBackend
from launchgrid.cli.main import cli

MK3_HEADER = [0xF0, 0x00, 0x20, 0x29, 0x02, 0x0D]


@pytest.fixture
def runner():
    """Create a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def invoke(runner, tmp_path: Path):
    """Invoke the CLI with a given backend, an isolated config and no log file."""
    def _invoke(args, backend=None, config_path=None):
        config_path = config_path or tmp_path / "missing.json"
        with patch("launchgrid.cli.main.setup_logging", return_value=tmp_path / "launchgrid.log"):
            return runner.invoke(
                cli, ["--config", str(config_path), *args], obj={"backend": backend}
            )
    return _invoke


@pytest.mark.integration
class TestCLIHelp:
    """Test that all commands have working help text."""

    def test_main_help(self, runner):
        result = runner.invoke(cli, ['--help'])
        assert result.exit_code == 0
        assert 'drive a Novation Launchpad' in result.output

    def test_version_flag(self, runner):
        result = runner.invoke(cli, ['--version'])
        assert result.exit_code == 0
        assert '0.1.0' in result.output

    @pytest.mark.parametrize(
        "command", ["ports", "devices", "mode", "text", "stop-text", "clock", "clear", "fill", "monitor"]
    )
    def test_command_help(self, invoke, command):
        result = invoke([command, "--help"])
        assert result.exit_code == 0


@pytest.mark.integration
class TestListing:
    """Test port and device listing."""

    def test_ports(self, invoke, mini_mk3_backend):
        result = invoke(["ports"], mini_mk3_backend)

        assert result.exit_code == 0
        assert "MIDI Input Ports" in result.output
        assert MINI_MK3_OUT in result.output

    def test_ports_empty(self, invoke):
        result = invoke(["ports"], FakeBackend())

        assert result.exit_code == 0
        assert "No MIDI input ports found." in result.output

    def test_devices(self, invoke, mini_mk3_backend):
        result = invoke(["devices"], mini_mk3_backend)

        assert result.exit_code == 0
        assert "[0]" in result.output
        assert "Launchpad Mini MK3" in result.output

    def test_no_devices(self, invoke):
        result = invoke(["devices"], FakeBackend())

        assert result.exit_code == 0
        assert "No Launchpad found." in result.output


@pytest.mark.integration
class TestDeviceCommands:
    """Test commands that connect to a Launchpad."""

    def test_fill(self, invoke, mini_mk3_backend):
        result = invoke(["fill", "21"], mini_mk3_backend)

        assert result.exit_code == 0
        output = mini_mk3_backend.opened_outputs[MINI_MK3_OUT]
        # programmer mode is set first
        assert output.sysex_packets == [[*MK3_HEADER, 0x0E, 1, 0xF7]]
        assert len(output.notes) == 64
        assert not output.is_open

    def test_clear(self, invoke, legacy_backend):
        result = invoke(["clear"], legacy_backend)

        assert result.exit_code == 0
        output = legacy_backend.opened_outputs["Launchpad Mini"]
        assert len(output.sysex_packets) == 2

    def test_mode_live(self, invoke, mini_mk3_backend):
        result = invoke(["mode", "live"], mini_mk3_backend)

        assert result.exit_code == 0
        assert "Mode set to live" in result.output
        output = mini_mk3_backend.opened_outputs[MINI_MK3_OUT]
        assert output.sysex_packets[-1] == [*MK3_HEADER, 0x0E, 0, 0xF7]

    def test_text_rgb(self, invoke, mini_mk3_backend):
        result = invoke(["text", "Hi", "--rgb", "127", "0", "0", "--loop"], mini_mk3_backend)

        assert result.exit_code == 0
        output = mini_mk3_backend.opened_outputs[MINI_MK3_OUT]
        assert output.sysex_packets[-1] == [*MK3_HEADER, 0x07, 1, 7, 1, 127, 0, 0, 72, 105, 0xF7]

    def test_text_speed_from_config(self, invoke, mini_mk3_backend, tmp_path):
        config_path = tmp_path / "config.json"
        config_path.write_text('{"text_scroll_speed": 3}')

        result = invoke(["text", "A"], mini_mk3_backend, config_path=config_path)

        assert result.exit_code == 0
        output = mini_mk3_backend.opened_outputs[MINI_MK3_OUT]
        assert output.sysex_packets[-1] == [*MK3_HEADER, 0x07, 0, 3, 0, 21, 65, 0xF7]

    def test_stop_text(self, invoke, legacy_backend):
        result = invoke(["stop-text"], legacy_backend)

        assert result.exit_code == 0
        output = legacy_backend.opened_outputs["Launchpad Mini"]
        assert output.sysex_packets[-1][-2:] == [0x14, 0xF7]

    def test_clock(self, invoke, mini_mk3_backend):
        with patch("launchgrid.devices.launchpad.controller.time.sleep"):
            result = invoke(["clock", "120"], mini_mk3_backend)

        assert result.exit_code == 0
        output = mini_mk3_backend.opened_outputs[MINI_MK3_OUT]
        assert len(output.sysex_packets) == 12

    def test_monitor(self, invoke, mini_mk3_backend):
        result = invoke(["monitor", "--duration", "0"], mini_mk3_backend)

        assert result.exit_code == 0
        assert "Monitoring key events" in result.output


@pytest.mark.integration
class TestErrors:
    """Test error display and exit codes."""

    def test_no_launchpad(self, invoke):
        result = invoke(["fill", "21"], FakeBackend())

        assert result.exit_code == 1
        assert "ERROR: No Launchpad found." in result.output

    def test_bad_device_index(self, invoke, mini_mk3_backend):
        result = invoke(["fill", "21", "--device", "5"], mini_mk3_backend)

        assert result.exit_code == 2
        assert "out of range" in result.output

    def test_bpm_out_of_range(self, invoke, mini_mk3_backend):
        result = invoke(["clock", "300"], mini_mk3_backend)

        assert result.exit_code == 1
        assert "bpm cannot be more than 240" in result.output

    def test_invalid_velocity(self, invoke, mini_mk3_backend):
        result = invoke(["fill", "200"], mini_mk3_backend)

        assert result.exit_code == 1
        assert "velocity cannot be more than 127" in result.output

    def test_invalid_config(self, invoke, mini_mk3_backend, tmp_path):
        config_path = tmp_path / "config.json"
        config_path.write_text('{"text_scroll_speed": 1,}')

        result = invoke(["devices"], mini_mk3_backend, config_path=config_path)

        assert result.exit_code == 1
        assert "ERROR: Configuration file has" in result.output

    def test_open_failure(self, invoke):
        from conftest import MINI_MK3_IN

        backend = FakeBackend(
            inputs=[MINI_MK3_IN], outputs=[MINI_MK3_OUT], fail_outputs=[MINI_MK3_OUT]
        )
        result = invoke(["clear"], backend)

        assert result.exit_code == 1
        assert "Could not open" in result.output
