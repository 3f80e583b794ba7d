"""Data models for the GitSim repository simulator.

Defines the in-memory structures for working files, commits, merge
conflicts, repository state, and command results used throughout the
GitSim engine.

Execution Context:
    Library module - imported by other gitsim_core modules

Dependencies:
    - dataclasses: Data class decorators
    - enum: Result type discriminants

Metadata:
    Version: 0.1.0
    Author: GitSim Team
"""
from __future__ import annotations

from dataclasses import asdict
from dataclasses import dataclass
from dataclasses import field
from datetime import datetime
from enum import Enum
from typing import Any


# ---- File and Commit Classes --------------------------------------------------------------------------------


@dataclass
class FileEntry:
    """A single file in the working set, staging area, or a commit.

    Attributes:
        content: Full text content of the file.
        modified: Whether the file changed since it was last committed.
    """

    content: str = ""
    modified: bool = False

    def copy(
            self,
            modified: bool | None = None,
    ) -> FileEntry:
        """Return an independent copy of this file.

        Args:
            modified: Override for the copy's modified flag.

        Returns:
            New FileEntry with the same content.
        """
        return FileEntry(
            content=self.content,
            modified=self.modified if modified is None else modified,
        )


@dataclass
class Commit:
    """Immutable snapshot of the repository files with metadata.

    Attributes:
        id: Unique commit identifier (16 hex characters).
        message: Commit message.
        files: Complete file snapshot at commit time.
        parent: Parent commit ID (None for the root commit).
        timestamp: ISO 8601 formatted timestamp.
        is_merge_commit: Whether this commit concluded a merge.
        parent2: Incoming commit ID for merge commits.
        author: Author name, empty when not configured.
    """

    id: str
    message: str
    files: dict[str, FileEntry] = field(default_factory=dict)
    parent: str | None = None
    timestamp: str = ""
    is_merge_commit: bool = False
    parent2: str | None = None
    author: str = ""

    @classmethod
    def create(
            cls,
            commit_id: str,
            message: str,
            files: dict[str, FileEntry],
            parent: str | None = None,
            is_merge_commit: bool = False,
            parent2: str | None = None,
            author: str = "",
    ) -> Commit:
        """Create a new commit with the current timestamp.

        The given files are copied so later changes to the caller's
        mapping never reach the commit.

        Args:
            commit_id: Unique identifier for the commit.
            message: Commit message.
            files: Files to snapshot.
            parent: Parent commit ID.
            is_merge_commit: Whether the commit concludes a merge.
            parent2: Second parent for merge commits.
            author: Author name.

        Returns:
            New Commit instance.
        """
        return cls(
            id=commit_id,
            message=message,
            files={name: entry.copy() for name, entry in files.items()},
            parent=parent,
            timestamp=datetime.now().isoformat(),
            is_merge_commit=is_merge_commit,
            parent2=parent2,
            author=author,
        )

    @property
    def short_id(
            self,
    ) -> str:
        """Abbreviated commit ID as shown in commit summaries."""
        return self.id[:7]

    def formatted_date(
            self,
    ) -> str:
        """Format the timestamp the way ``git log`` prints dates.

        Returns:
            Date string such as ``Mon Oct 19 14:03:11 2026``.
        """
        try:
            return datetime.fromisoformat(self.timestamp).strftime("%a %b %d %H:%M:%S %Y")
        except ValueError:
            return self.timestamp


@dataclass
class MergeConflict:
    """A file changed differently on both sides of a merge.

    Attributes:
        filename: Name of the conflicting file.
        current_content: Content on the current branch.
        merge_content: Content on the branch being merged.
    """

    filename: str
    current_content: str
    merge_content: str


# ---- Repository State ---------------------------------------------------------------------------------------


@dataclass
class RepositoryState:
    """Complete mutable state of a simulated repository.

    Attributes:
        is_initialized: Whether ``git init`` has run.
        files: Working set keyed by filename.
        staged: Staging area keyed by filename.
        commits: All commits, oldest first.
        branches: Branch table mapping names to commit IDs.
        current_branch: Name of the checked out branch.
        head: Commit ID the current branch points to.
        merge_conflicts: Outstanding merge conflicts.
        merge_in_progress: Whether unresolved conflicts exist.
        merge_head: Incoming commit ID of an unconcluded conflicted merge.
        merge_branch: Incoming branch name of an unconcluded conflicted merge.
    """

    is_initialized: bool = False
    files: dict[str, FileEntry] = field(default_factory=dict)
    staged: dict[str, FileEntry] = field(default_factory=dict)
    commits: list[Commit] = field(default_factory=list)
    branches: dict[str, str | None] = field(default_factory=lambda: {"main": None})
    current_branch: str = "main"
    head: str | None = None
    merge_conflicts: list[MergeConflict] = field(default_factory=list)
    merge_in_progress: bool = False
    merge_head: str | None = None
    merge_branch: str | None = None

    @property
    def conflicted_files(
            self,
    ) -> list[str]:
        """Names of files with outstanding merge conflicts."""
        return [conflict.filename for conflict in self.merge_conflicts]

    def to_dict(
            self,
    ) -> dict[str, Any]:
        """Convert state to a deep, JSON-ready dictionary.

        Returns:
            Dictionary representation detached from the live state.
        """
        return asdict(self)


# ---- Command Results ----------------------------------------------------------------------------------------


class ResultType(str, Enum):
    """Display category of a command result."""

    SYSTEM = "system"
    CLEAR = "clear"
    OUTPUT = "output"
    SUCCESS = "success"
    ERROR = "error"


@dataclass
class CommandResult:
    """Outcome of processing one command line.

    Attributes:
        type: Display category.
        content: Text to show to the user.
        is_help: Whether the content is the help screen.
    """

    type: ResultType
    content: str = ""
    is_help: bool = False

    @classmethod
    def success(
            cls,
            content: str,
    ) -> CommandResult:
        return cls(ResultType.SUCCESS, content)

    @classmethod
    def error(
            cls,
            content: str,
    ) -> CommandResult:
        return cls(ResultType.ERROR, content)

    @classmethod
    def output(
            cls,
            content: str,
    ) -> CommandResult:
        return cls(ResultType.OUTPUT, content)

    @classmethod
    def system(
            cls,
            content: str,
            is_help: bool = False,
    ) -> CommandResult:
        return cls(ResultType.SYSTEM, content, is_help=is_help)

    @classmethod
    def clear(
            cls,
    ) -> CommandResult:
        return cls(ResultType.CLEAR, "")

    @property
    def is_error(
            self,
    ) -> bool:
        """Check if the command failed."""
        return self.type is ResultType.ERROR

    def to_dict(
            self,
    ) -> dict[str, Any]:
        """Convert result to the record shape consumed by terminal UIs.

        Returns:
            Dictionary with ``type`` and ``content``, plus ``isHelp``
            for the help screen.
        """
        result: dict[str, Any] = {
            "type": self.type.value,
            "content": self.content,
        }
        if self.is_help:
            result["isHelp"] = True
        return result
