"""Simulator configuration for GitSim.

Loads settings from a JSON config file or from ``GITSIM_*`` environment
variables, optionally read from a .env file.

Execution Context:
    Library module - imported by the command processor and CLI

Dependencies:
    - python-dotenv: Load environment variables from .env file

Metadata:
    Version: 0.1.0
    Author: GitSim Team
"""
from __future__ import annotations

import json
import os
from dataclasses import asdict
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from dotenv import load_dotenv


# ---- Constants ----------------------------------------------------------------------------------------------


DEFAULT_REPO_PATH = "/project/.git/"
DEFAULT_BRANCH = "main"
DEFAULT_PROMPT = "$ "

ENV_REPO_PATH = "GITSIM_REPO_PATH"
ENV_DEFAULT_BRANCH = "GITSIM_DEFAULT_BRANCH"
ENV_USER_NAME = "GITSIM_USER_NAME"
ENV_PROMPT = "GITSIM_PROMPT"


# ---- Config Class -------------------------------------------------------------------------------------------


@dataclass
class SimulatorConfig:
    """Settings for a simulated repository session.

    Attributes:
        repo_path: Path shown in init messages.
        default_branch: Branch created by ``git init``.
        user_name: Author recorded on commits.
        prompt: Prompt string used by interactive front ends.
    """

    repo_path: str = DEFAULT_REPO_PATH
    default_branch: str = DEFAULT_BRANCH
    user_name: str = ""
    prompt: str = DEFAULT_PROMPT

    def to_dict(
            self,
    ) -> dict[str, Any]:
        """Convert config to dictionary for JSON serialization.

        Returns:
            Dictionary representation.
        """
        return asdict(self)

    @classmethod
    def from_dict(
            cls,
            data: dict[str, Any],
    ) -> SimulatorConfig:
        """Create config from dictionary, ignoring unknown keys.

        Args:
            data: Dictionary with config fields.

        Returns:
            SimulatorConfig instance.
        """
        return cls(
            repo_path=data.get("repo_path", DEFAULT_REPO_PATH),
            default_branch=data.get("default_branch", DEFAULT_BRANCH) or DEFAULT_BRANCH,
            user_name=data.get("user_name", ""),
            prompt=data.get("prompt", DEFAULT_PROMPT),
        )

    @classmethod
    def from_env(
            cls,
    ) -> SimulatorConfig:
        """Create config from ``GITSIM_*`` environment variables.

        Returns:
            SimulatorConfig instance with defaults for unset variables.
        """
        return cls.from_dict({
            "repo_path": os.environ.get(ENV_REPO_PATH, DEFAULT_REPO_PATH),
            "default_branch": os.environ.get(ENV_DEFAULT_BRANCH, DEFAULT_BRANCH),
            "user_name": os.environ.get(ENV_USER_NAME, ""),
            "prompt": os.environ.get(ENV_PROMPT, DEFAULT_PROMPT),
        })

    def save(
            self,
            config_path: Path,
    ) -> None:
        """Save config to file.

        Args:
            config_path: Path to the JSON config file.
        """
        config_path.write_text(json.dumps(self.to_dict(), indent=2))

    @classmethod
    def load(
            cls,
            config_path: Path,
    ) -> SimulatorConfig:
        """Load config from file.

        Args:
            config_path: Path to the JSON config file.

        Returns:
            SimulatorConfig instance.

        Raises:
            RuntimeError: If config file cannot be loaded.
        """
        try:
            data = json.loads(config_path.read_text())
            return cls.from_dict(data)
        except Exception as file_error:
            msg = f"Failed to load config from {config_path}: {file_error}"
            raise RuntimeError(msg) from file_error


# ---- Module Functions ---------------------------------------------------------------------------------------


def load_environment(
        env_path: Path | None = None,
) -> bool:
    """Load environment variables from a .env file.

    Args:
        env_path: Explicit path to a .env file. Defaults to ``.env`` in
            the current working directory.

    Returns:
        True if a .env file was found and loaded.
    """
    path = env_path or Path.cwd() / ".env"
    if not path.exists():
        return False
    return load_dotenv(path, override=True)


def get_config(
        config_path: Path | str | None = None,
) -> SimulatorConfig:
    """Resolve the simulator configuration.

    Args:
        config_path: JSON config file. When omitted, settings come from
            the environment (after loading any .env file).

    Returns:
        SimulatorConfig instance.
    """
    if config_path:
        return SimulatorConfig.load(Path(config_path))

    load_environment()
    return SimulatorConfig.from_env()
