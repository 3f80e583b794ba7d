"""GitSim Core Library.

Provides an in-memory git simulator: a command interpreter that accepts
git-like command lines and mutates a simulated repository of files,
staging area, commits, branches, and merge state.

Execution Context:
    Library package - imported by the CLI and other front ends

Dependencies:
    - python-dotenv: Environment-based configuration

Metadata:
    Version: 0.1.0
    Author: GitSim Team
"""
from __future__ import annotations

from gitsim_core.commands import CommandProcessor
from gitsim_core.config import SimulatorConfig
from gitsim_core.models import CommandResult
from gitsim_core.models import Commit
from gitsim_core.models import FileEntry
from gitsim_core.models import MergeConflict
from gitsim_core.models import RepositoryState
from gitsim_core.models import ResultType
from gitsim_core.repository import Repository
from gitsim_core.repository import RepositoryError

__version__ = "0.1.0"

__all__ = [
    "CommandProcessor",
    "CommandResult",
    "Commit",
    "FileEntry",
    "MergeConflict",
    "Repository",
    "RepositoryError",
    "RepositoryState",
    "ResultType",
    "SimulatorConfig",
    "__version__",
]
