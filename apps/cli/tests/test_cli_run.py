"""Tests for the gitsim CLI group and run command.

Execution Context:
    Test module - run via pytest

Dependencies:
    - pytest: Test framework
    - click.testing: CLI invocation
    - gitsim_cli.main: Module under test
"""
from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from gitsim_cli import __version__
from gitsim_cli.commands.run import read_script
from gitsim_cli.main import cli
from gitsim_core.config import SimulatorConfig


@pytest.fixture
def runner(
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
) -> CliRunner:
    """CliRunner in an empty directory without GITSIM_* variables."""
    monkeypatch.chdir(tmp_path)
    for name in ("GITSIM_REPO_PATH", "GITSIM_DEFAULT_BRANCH", "GITSIM_USER_NAME", "GITSIM_PROMPT"):
        monkeypatch.delenv(name, raising=False)
    return CliRunner()


# ---- Group Tests --------------------------------------------------------------------------------------------


class TestGroup:
    """Tests for global options."""

    def test_version(self, runner: CliRunner) -> None:
        """Test --version prints the package version."""
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_lists_commands(self, runner: CliRunner) -> None:
        """Test the group help lists both commands."""
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "shell" in result.output
        assert "run" in result.output

    def test_config_file(self, runner: CliRunner, tmp_path: Path) -> None:
        """Test --config settings reach the simulator."""
        config_path = tmp_path / "gitsim.json"
        SimulatorConfig(repo_path="/demo/.git/").save(config_path)

        result = runner.invoke(cli, ["--config", str(config_path), "run", "git init"])

        assert result.exit_code == 0
        assert "Initialized empty Git repository in /demo/.git/" in result.output

    def test_bad_config_file(self, runner: CliRunner, tmp_path: Path) -> None:
        """Test an unreadable config file fails cleanly."""
        config_path = tmp_path / "broken.json"
        config_path.write_text("{oops")

        result = runner.invoke(cli, ["--config", str(config_path), "run", "git init"])

        assert result.exit_code == 1
        assert "Failed to load config" in result.output

    def test_dotenv_in_working_directory(
            self,
            runner: CliRunner,
            tmp_path: Path,
            monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test a .env file in the working directory configures the prompt."""
        # registered with monkeypatch so the loaded value is undone
        monkeypatch.setenv("GITSIM_PROMPT", "placeholder")
        (tmp_path / ".env").write_text('GITSIM_PROMPT="sim> "\n')

        result = runner.invoke(cli, ["run", "ls"])

        assert result.exit_code == 0
        assert "sim> ls" in result.output


# ---- Run Command Tests --------------------------------------------------------------------------------------


class TestRun:
    """Tests for gitsim run."""

    def test_runs_commands_in_order(self, runner: CliRunner) -> None:
        """Test each command is echoed with its result."""
        result = runner.invoke(cli, ["run", "git init", "touch a.txt", "ls"])

        assert result.exit_code == 0
        output = result.output
        assert "$ git init" in output
        assert "Initialized empty Git repository" in output
        assert output.index("$ touch a.txt") < output.index("Created file: a.txt")
        assert output.index("Created file: a.txt") < output.index("$ ls")

    def test_brackets_are_not_markup(self, runner: CliRunner) -> None:
        """Test git output with brackets is printed verbatim."""
        result = runner.invoke(
            cli,
            ["run", "git init", "touch a", "git add a", 'git commit -m "first"'],
        )
        assert result.exit_code == 0
        assert "[main " in result.output
        assert "] first" in result.output

    def test_errors_do_not_stop_the_run(self, runner: CliRunner) -> None:
        """Test failing commands are shown and later commands still run."""
        result = runner.invoke(cli, ["run", "git status", "git init"])
        assert result.exit_code == 0
        assert "not a git repository" in result.output
        assert "Initialized empty Git repository" in result.output

    def test_no_commands(self, runner: CliRunner) -> None:
        """Test running nothing is an error."""
        result = runner.invoke(cli, ["run"])
        assert result.exit_code == 1
        assert "No commands given" in result.output

    def test_strict_fails_on_errors(self, runner: CliRunner) -> None:
        """Test --strict turns failed commands into a non-zero exit."""
        result = runner.invoke(cli, ["run", "--strict", "git init", "cat ghost"])
        assert result.exit_code == 1
        assert "1 command(s) failed" in result.output

    def test_strict_passes_without_errors(self, runner: CliRunner) -> None:
        """Test --strict exits cleanly when every command succeeds."""
        result = runner.invoke(cli, ["run", "--strict", "git init", "ls"])
        assert result.exit_code == 0

    def test_json_state(self, runner: CliRunner) -> None:
        """Test --json prints only the final state."""
        result = runner.invoke(
            cli,
            ["run", "--json", "git init", "touch a.txt", "edit a.txt hi", "git add ."],
        )

        assert result.exit_code == 0
        state = json.loads(result.output)
        assert state["is_initialized"] is True
        assert state["files"]["a.txt"] == {"content": "hi", "modified": True}
        assert list(state["staged"]) == ["a.txt"]
        assert state["branches"] == {"main": None}

    def test_script_and_state(self, runner: CliRunner, tmp_path: Path) -> None:
        """Test --script runs before arguments and --state shows tables."""
        script = tmp_path / "lesson.txt"
        script.write_text(
            "# first lesson\n"
            "git init\n"
            "\n"
            "touch a.txt\n"
            "git add a.txt\n"
        )

        result = runner.invoke(
            cli,
            ["run", "--script", str(script), "--state", 'git commit -m "c1"'],
        )

        assert result.exit_code == 0
        output = result.output
        assert "first lesson" not in output
        assert output.index("$ git add a.txt") < output.index("$ git commit")
        assert "Working Files" in output
        assert "Branches" in output
        assert "Commits" in output

    def test_missing_script(self, runner: CliRunner) -> None:
        """Test a missing script file is a usage error."""
        result = runner.invoke(cli, ["run", "--script", "nope.txt"])
        assert result.exit_code == 2


class TestReadScript:
    """Tests for read_script."""

    def test_skips_comments_and_blanks(self, tmp_path: Path) -> None:
        """Test only command lines are returned."""
        script = tmp_path / "script.txt"
        script.write_text("  git init  \n# comment\n\n\ttouch a\n")
        assert read_script(script) == ["git init", "touch a"]
