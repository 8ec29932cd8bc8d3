"""Tests for monday.cli module."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from monday import cli
from monday.cli import main
from monday.config import CONFIG_FILE, MondayConfig


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a CLI runner."""
    return CliRunner()


@pytest.fixture
def task_file(temp_project: Path) -> Path:
    """Path of the default task file in the temp project."""
    return temp_project / "data" / "monday.txt"


class TestMainGroup:
    """Tests for main CLI group."""

    def test_version(self, cli_runner: CliRunner) -> None:
        """Test --version option."""
        result = cli_runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "monday" in result.output
        assert "0.1.0" in result.output

    def test_help(self, cli_runner: CliRunner) -> None:
        """Test --help option."""
        result = cli_runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "grumpy task tracker" in result.output


class TestRunCommand:
    """Tests for run command."""

    def test_add_and_list(self, cli_runner: CliRunner, task_file: Path) -> None:
        """Test commands run in order and are saved."""
        result = cli_runner.invoke(
            main, ["run", "todo read book", "deadline return book /by 2019-12-02 1800", "list"]
        )
        assert result.exit_code == 0, result.output
        assert "read book" in result.output
        assert task_file.read_text().splitlines() == [
            "T | 0 | read book",
            "D | 0 | return book | by: 2019-12-02 18:00",
        ]

    def test_persists_between_runs(self, cli_runner: CliRunner, task_file: Path) -> None:
        """Test a later run sees earlier changes."""
        cli_runner.invoke(main, ["run", "todo read book"])
        result = cli_runner.invoke(main, ["run", "mark 1"])
        assert result.exit_code == 0, result.output
        assert task_file.read_text() == "T | 1 | read book\n"

    def test_user_error_exit_code(self, cli_runner: CliRunner, task_file: Path) -> None:
        """Test a failed command sets a non-zero exit code."""
        result = cli_runner.invoke(main, ["run", "mark 1"])
        assert result.exit_code == 1
        assert "Skeptical" in result.output

    def test_stops_at_bye(self, cli_runner: CliRunner, task_file: Path) -> None:
        """Test commands after bye are not run."""
        result = cli_runner.invoke(main, ["run", "bye", "todo never"])
        assert result.exit_code == 0
        assert task_file.read_text() == ""

    def test_corrupted_file_rewritten(self, cli_runner: CliRunner, task_file: Path) -> None:
        """Test the notice is shown and corrupted lines are dropped."""
        task_file.parent.mkdir()
        task_file.write_text("T | 0 | keep\nbroken line\n")

        result = cli_runner.invoke(main, ["run", "list"])

        assert result.exit_code == 0, result.output
        assert "corrupted line" in result.output
        assert task_file.read_text() == "T | 0 | keep\n"
        assert (task_file.parent / "monday.txt.corrupted").read_text() == "broken line\n"

    def test_data_dir_and_file_options(self, cli_runner: CliRunner, temp_project: Path) -> None:
        """Test storage location overrides."""
        result = cli_runner.invoke(
            main, ["--data-dir", "store", "--file", "tasks.txt", "run", "todo x"]
        )
        assert result.exit_code == 0, result.output
        assert (temp_project / "store" / "tasks.txt").read_text() == "T | 0 | x\n"

    def test_config_file(self, cli_runner: CliRunner, temp_project: Path) -> None:
        """Test settings come from the config file."""
        config = temp_project / "monday.json"
        config.write_text(json.dumps({"storage": {"data_dir": "from-config"}}))
        result = cli_runner.invoke(main, ["--config", str(config), "run", "todo x"])
        assert result.exit_code == 0, result.output
        assert (temp_project / "from-config" / "monday.txt").exists()


class TestChatCommand:
    """Tests for the interactive chat."""

    def test_chat_until_bye(self, cli_runner: CliRunner, task_file: Path) -> None:
        """Test a short conversation."""
        result = cli_runner.invoke(main, ["chat"], input="todo read book\nlist\nbye\n")
        assert result.exit_code == 0, result.output
        assert "It's Monday" in result.output
        assert "1. [T][ ] read book" in result.output
        assert "Don't come back too soon" in result.output
        assert task_file.read_text() == "T | 0 | read book\n"

    def test_default_is_chat(self, cli_runner: CliRunner, task_file: Path) -> None:
        """Test running without a subcommand starts chatting."""
        result = cli_runner.invoke(main, [], input="bye\n")
        assert result.exit_code == 0, result.output
        assert "Don't come back too soon" in result.output

    def test_end_of_input_exits(self, cli_runner: CliRunner, task_file: Path) -> None:
        """Test EOF ends the chat like bye."""
        result = cli_runner.invoke(main, ["chat"], input="todo read book\n")
        assert result.exit_code == 0, result.output
        assert "Don't come back too soon" in result.output

    def test_errors_do_not_end_chat(self, cli_runner: CliRunner, task_file: Path) -> None:
        """Test bad commands are reported and the chat continues."""
        result = cli_runner.invoke(main, ["chat"], input="dance\nmark 5\nbye\n")
        assert result.exit_code == 0, result.output
        assert "I don't understand 'dance'" in result.output
        assert "Don't come back too soon" in result.output

    def test_ctrl_c_exits(self, cli_runner: CliRunner, task_file: Path) -> None:
        """Test Ctrl-C says bye and still rewrites a corrupted file."""
        task_file.parent.mkdir()
        task_file.write_text("T | 0 | keep\nbroken line\n")

        with patch.object(cli.console, "input", side_effect=KeyboardInterrupt):
            result = cli_runner.invoke(main, ["chat"])

        assert result.exit_code == 0, result.output
        assert "Don't come back too soon" in result.output
        assert task_file.read_text() == "T | 0 | keep\n"


class TestInitCommand:
    """Tests for init command."""

    def test_writes_default_config(self, cli_runner: CliRunner, temp_project: Path) -> None:
        """Test init saves the settings to .monday/config.json."""
        result = cli_runner.invoke(main, ["init"])
        assert result.exit_code == 0, result.output
        assert "Config saved" in result.output
        assert MondayConfig.load(CONFIG_FILE) == MondayConfig()

    def test_includes_storage_options(self, cli_runner: CliRunner, temp_project: Path) -> None:
        """Test --data-dir given to monday ends up in the config."""
        cli_runner.invoke(main, ["--data-dir", "tasks", "init"])
        data = json.loads(CONFIG_FILE.read_text())
        assert data["storage"]["data_dir"] == "tasks"

        # Later runs use the saved directory
        cli_runner.invoke(main, ["run", "todo x"])
        assert (temp_project / "tasks" / "monday.txt").read_text() == "T | 0 | x\n"

    def test_existing_config_kept(self, cli_runner: CliRunner, temp_project: Path) -> None:
        """Test init refuses to overwrite without --force."""
        cli_runner.invoke(main, ["--data-dir", "tasks", "init"])

        result = cli_runner.invoke(main, ["init"])
        assert "already exists" in result.output
        assert json.loads(CONFIG_FILE.read_text())["storage"]["data_dir"] == "tasks"

        cli_runner.invoke(main, ["--data-dir", "other", "init", "--force"])
        assert json.loads(CONFIG_FILE.read_text())["storage"]["data_dir"] == "other"

    def test_custom_config_path(self, cli_runner: CliRunner, temp_project: Path) -> None:
        """Test --config chooses where init writes."""
        path = temp_project / "monday.json"
        result = cli_runner.invoke(main, ["--config", str(path), "init"])
        assert result.exit_code == 0, result.output
        assert path.exists()
        assert not CONFIG_FILE.exists()
