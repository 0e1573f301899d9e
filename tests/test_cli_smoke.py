"""Smoke tests for CLI commands.

Tests that CLI commands parse correctly and don't crash. Uses Click's
CliRunner for testing without actually running the full application.
"""

import json
from pathlib import Path
from unittest.mock import Mock, patch

import pytest
from click.testing import CliRunner

from weatherdialog.cli.main import cli
from weatherdialog.exceptions import SpeechEngineError


@pytest.fixture
def runner():
    """Create a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    return tmp_path / "config.json"


@pytest.mark.integration
class TestCLIHelp:
    """Test that all commands have working help text."""

    def test_main_help(self, runner):
        result = runner.invoke(cli, ['--help'])
        assert result.exit_code == 0
        assert 'Weather Dialog' in result.output
        assert '--no-midi' in result.output

    def test_version_flag(self, runner):
        result = runner.invoke(cli, ['--version'])
        assert result.exit_code == 0
        assert '0.1.0' in result.output

    @pytest.mark.parametrize("command", ["run", "config", "midi"])
    def test_subcommand_help(self, runner, command):
        result = runner.invoke(cli, [command, '--help'])
        assert result.exit_code == 0

    def test_invalid_log_level(self, runner):
        result = runner.invoke(cli, ['--log-level', 'LOUD', 'midi', 'list'])
        assert result.exit_code != 0


@pytest.mark.integration
class TestConfigCommands:
    """config path / init / show."""

    def test_path(self, runner, config_file):
        result = runner.invoke(cli, ['--config', str(config_file), 'config', 'path'])
        assert result.exit_code == 0
        assert result.output.strip() == str(config_file)

    def test_init_writes_defaults(self, runner, config_file):
        result = runner.invoke(cli, ['--config', str(config_file), 'config', 'init'])
        assert result.exit_code == 0
        data = json.loads(config_file.read_text())
        assert data["dialog"]["long_press_threshold_ms"] == 3000

    def test_init_refuses_to_overwrite(self, runner, config_file):
        config_file.write_text("{}")
        result = runner.invoke(cli, ['--config', str(config_file), 'config', 'init'])
        assert result.exit_code == 1
        assert "already exists" in result.output
        assert config_file.read_text() == "{}"

    def test_init_force_keeps_backup(self, runner, config_file):
        config_file.write_text("{}")
        result = runner.invoke(cli, ['--config', str(config_file), 'config', 'init', '--force'])
        assert result.exit_code == 0
        assert config_file.with_suffix(".json.bak").read_text() == "{}"

    def test_show_defaults(self, runner, config_file):
        result = runner.invoke(cli, ['--config', str(config_file), 'config', 'show'])
        assert result.exit_code == 0
        assert "defaults (no config file)" in result.output
        assert '"exit_press_count": 4' in result.output

    def test_show_section(self, runner, config_file):
        result = runner.invoke(cli, ['--config', str(config_file), 'config', 'show', '-f', 'speech'])
        assert result.exit_code == 0
        assert '"speech"' in result.output
        assert '"dialog"' not in result.output

    def test_show_unknown_section(self, runner, config_file):
        result = runner.invoke(cli, ['--config', str(config_file), 'config', 'show', '-f', 'audio'])
        assert result.exit_code != 0

    def test_show_invalid_file(self, runner, config_file):
        config_file.write_text('{"dialog": {"exit_button": 42}}')
        result = runner.invoke(cli, ['--config', str(config_file), 'config', 'show'])
        assert result.exit_code == 1
        assert "ERROR: Invalid configuration value for 'dialog.exit_button'" in result.output


@pytest.mark.integration
class TestMidiCommands:
    """midi list."""

    @patch("weatherdialog.cli.commands.midi.MidiManager.list_ports")
    def test_list(self, mock_list, runner):
        mock_list.return_value = {"input": ["Launchpad Mini MK3 MIDI"], "output": []}
        result = runner.invoke(cli, ['midi', 'list'])
        assert result.exit_code == 0
        assert "[0] Launchpad Mini MK3 MIDI" in result.output
        assert "No MIDI output ports found." in result.output


@pytest.mark.integration
class TestRunApplication:
    """Default command and headless run, with the orchestrator mocked."""

    @patch("weatherdialog.tui.DialogSimulator")
    @patch("weatherdialog.orchestration.Orchestrator")
    @patch("weatherdialog.cli.main.setup_logging")
    def test_default_starts_simulator(self, mock_logging, mock_orch, mock_tui, runner, config_file, tmp_path):
        mock_logging.return_value = tmp_path / "log.txt"
        result = runner.invoke(cli, ['--config', str(config_file), '--no-midi'])

        assert result.exit_code == 0, result.output
        config = mock_orch.call_args.kwargs["config"]
        assert config.midi.enabled is False
        assert mock_orch.call_args.kwargs["headless"] is False
        orchestrator = mock_orch.return_value
        orchestrator.register_ui.assert_called_once_with(mock_tui.return_value)
        orchestrator.run.assert_called_once()
        orchestrator.shutdown.assert_called_once()

    @patch("weatherdialog.orchestration.Orchestrator")
    @patch("weatherdialog.cli.commands.run.setup_logging")
    def test_run_is_headless(self, mock_logging, mock_orch, runner, config_file, tmp_path):
        mock_logging.return_value = tmp_path / "log.txt"
        result = runner.invoke(cli, ['--config', str(config_file), 'run', '--speech', 'espeak'])

        assert result.exit_code == 0, result.output
        assert mock_orch.call_args.kwargs["headless"] is True
        assert mock_orch.call_args.kwargs["config"].speech.engine == "espeak"
        assert mock_logging.call_args.kwargs["console"] is True

    @patch("weatherdialog.orchestration.Orchestrator")
    @patch("weatherdialog.cli.commands.run.setup_logging")
    def test_run_error_is_reported(self, mock_logging, mock_orch, runner, config_file, tmp_path):
        mock_logging.return_value = tmp_path / "log.txt"
        orchestrator = Mock()
        orchestrator.run.side_effect = SpeechEngineError("espeak", "not found")
        mock_orch.return_value = orchestrator

        result = runner.invoke(cli, ['--config', str(config_file), 'run'])

        assert result.exit_code == 1
        assert "Speech engine 'espeak' is not available" in result.output
        assert "apt install espeak" in result.output
        orchestrator.shutdown.assert_called_once()

    @patch("weatherdialog.orchestration.Orchestrator")
    @patch("weatherdialog.cli.main.setup_logging")
    def test_invalid_config_stops_early(self, mock_logging, mock_orch, runner, config_file, tmp_path):
        mock_logging.return_value = tmp_path / "log.txt"
        config_file.write_text("{oops")
        result = runner.invoke(cli, ['--config', str(config_file)])

        assert result.exit_code == 1
        assert "invalid syntax" in result.output
        mock_orch.assert_not_called()
