"""Tests for simulator configuration module.

Execution Context:
    Test module - run via pytest

Dependencies:
    - pytest: Test framework
    - gitsim_core.config: Module under test
"""
from __future__ import annotations

import json
from pathlib import Path

import pytest

from gitsim_core.config import DEFAULT_BRANCH
from gitsim_core.config import DEFAULT_REPO_PATH
from gitsim_core.config import ENV_DEFAULT_BRANCH
from gitsim_core.config import ENV_REPO_PATH
from gitsim_core.config import ENV_USER_NAME
from gitsim_core.config import SimulatorConfig
from gitsim_core.config import get_config
from gitsim_core.config import load_environment


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove GITSIM_* variables so tests see defaults."""
    for name in (ENV_REPO_PATH, ENV_DEFAULT_BRANCH, ENV_USER_NAME, "GITSIM_PROMPT"):
        monkeypatch.delenv(name, raising=False)


class TestSimulatorConfig:
    """Tests for SimulatorConfig dataclass."""

    def test_defaults(self) -> None:
        """Test default settings."""
        config = SimulatorConfig()
        assert config.repo_path == DEFAULT_REPO_PATH == "/project/.git/"
        assert config.default_branch == DEFAULT_BRANCH == "main"
        assert config.user_name == ""

    def test_from_dict_ignores_unknown_keys(self) -> None:
        """Test unknown keys are dropped and missing keys defaulted."""
        config = SimulatorConfig.from_dict({"user_name": "Ada", "colour": "blue"})
        assert config.user_name == "Ada"
        assert config.default_branch == "main"

    def test_from_dict_empty_branch_falls_back(self) -> None:
        """Test an empty default branch falls back to main."""
        assert SimulatorConfig.from_dict({"default_branch": ""}).default_branch == "main"

    def test_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test settings are read from GITSIM_* variables."""
        monkeypatch.setenv(ENV_USER_NAME, "Grace")
        monkeypatch.setenv(ENV_DEFAULT_BRANCH, "trunk")
        config = SimulatorConfig.from_env()
        assert config.user_name == "Grace"
        assert config.default_branch == "trunk"
        assert config.repo_path == DEFAULT_REPO_PATH

    def test_save_and_load(self, tmp_path: Path) -> None:
        """Test a saved config loads back unchanged."""
        config = SimulatorConfig(repo_path="/demo/.git/", user_name="Ada")
        config_path = tmp_path / "gitsim.json"
        config.save(config_path)
        assert json.loads(config_path.read_text())["user_name"] == "Ada"
        assert SimulatorConfig.load(config_path) == config

    def test_load_invalid_file(self, tmp_path: Path) -> None:
        """Test unreadable config raises RuntimeError."""
        config_path = tmp_path / "broken.json"
        config_path.write_text("{not json")
        with pytest.raises(RuntimeError, match="Failed to load config"):
            SimulatorConfig.load(config_path)


class TestModuleFunctions:
    """Tests for load_environment and get_config."""

    def test_load_environment_missing_file(self, tmp_path: Path) -> None:
        """Test a missing .env file is reported, not raised."""
        assert load_environment(tmp_path / ".env") is False

    def test_load_environment_sets_variables(
            self,
            tmp_path: Path,
            monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test .env values reach the config."""
        # registered with monkeypatch so the loaded value is undone
        monkeypatch.setenv(ENV_USER_NAME, "placeholder")
        env_path = tmp_path / ".env"
        env_path.write_text(f"{ENV_USER_NAME}=Linus\n")
        assert load_environment(env_path) is True
        assert SimulatorConfig.from_env().user_name == "Linus"

    def test_get_config_from_file(self, tmp_path: Path) -> None:
        """Test an explicit config file wins."""
        config_path = tmp_path / "gitsim.json"
        SimulatorConfig(user_name="Ada").save(config_path)
        assert get_config(config_path).user_name == "Ada"

    def test_get_config_from_env(
            self,
            tmp_path: Path,
            monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test environment settings are used without a config file."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv(ENV_REPO_PATH, "/env/.git/")
        assert get_config().repo_path == "/env/.git/"
