"""In-memory repository state machine for GitSim.

Holds the working set, staging area, commit list, branch table and
merge state of one simulated repository, and implements the version
control operations on top of them. Precondition violations raise
RepositoryError carrying a git-like diagnostic.

Execution Context:
    Library module - imported by the command processor

Dependencies:
    - gitsim_core.models: Data models
    - gitsim_core.merge: Snapshot merging

Metadata:
    Version: 0.1.0
    Author: GitSim Team
"""
from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from dataclasses import field

from gitsim_core.config import SimulatorConfig
from gitsim_core.merge import MergeResult
from gitsim_core.merge import format_unmerged_paths
from gitsim_core.merge import has_conflict_markers
from gitsim_core.merge import merge_snapshots
from gitsim_core.models import Commit
from gitsim_core.models import FileEntry
from gitsim_core.models import RepositoryState

logger = logging.getLogger(__name__)


# ---- Constants ----------------------------------------------------------------------------------------------


COMMIT_ID_BYTES = 8

NOT_A_REPOSITORY = "fatal: not a git repository (or any of the parent directories): .git"

NO_COMMIT_HINT = (
    "fatal: Not a valid object name: '{branch}'\n"
    "\n"
    "Hint: Before creating branches, you need at least one commit.\n"
    "Try these commands first:\n"
    "  1. git init\n"
    "  2. touch README.md\n"
    "  3. git add README.md\n"
    '  4. git commit -m "Initial commit"'
)


# ---- Exceptions ---------------------------------------------------------------------------------------------


class RepositoryError(RuntimeError):
    """A command's preconditions do not hold for the current state."""


# ---- Outcome Classes ----------------------------------------------------------------------------------------


@dataclass
class StageOutcome:
    """Result of a ``git add`` call.

    Attributes:
        added: Files copied into the staging area.
        not_found: Requested names missing from the working set.
        unresolved: Conflicted files that still contain conflict markers.
        conflicts_resolved: Whether this call cleared the last conflict.
    """

    added: list[str] = field(default_factory=list)
    not_found: list[str] = field(default_factory=list)
    unresolved: list[str] = field(default_factory=list)
    conflicts_resolved: bool = False


# ---- Module Functions ---------------------------------------------------------------------------------------


def generate_commit_id() -> str:
    """Generate a random 16 character hexadecimal commit ID."""
    return secrets.token_hex(COMMIT_ID_BYTES)


# ---- Repository Class ---------------------------------------------------------------------------------------


class Repository:
    """Manages the state of one simulated repository.

    Attributes:
        state: The mutable repository state.
        config: Simulator settings.
    """

    def __init__(
            self,
            state: RepositoryState | None = None,
            config: SimulatorConfig | None = None,
    ) -> None:
        """Wrap an existing state or start a fresh, uninitialized one.

        Args:
            state: State to operate on.
            config: Simulator settings.
        """
        self.config = config or SimulatorConfig()
        self.state = state or RepositoryState(
            branches={self.config.default_branch: None},
            current_branch=self.config.default_branch,
        )

    # ---- Preconditions --------------------------------------------------------------------------------------

    def require_initialized(
            self,
    ) -> None:
        """Raise unless ``git init`` has run.

        Raises:
            RepositoryError: If the repository is not initialized.
        """
        if not self.state.is_initialized:
            raise RepositoryError(NOT_A_REPOSITORY)

    def require_branch(
            self,
            name: str,
    ) -> None:
        """Raise unless the branch exists.

        Raises:
            RepositoryError: If the branch is not in the branch table.
        """
        if name not in self.state.branches:
            msg = f"error: pathspec '{name}' did not match any file(s) known to git"
            raise RepositoryError(msg)

    def require_no_merge(
            self,
    ) -> None:
        """Raise if a merge is unresolved or resolved but not committed.

        Raises:
            RepositoryError: If a merge is still pending.
        """
        if self.state.merge_in_progress:
            raise RepositoryError(
                "error: Merging is not possible because you have unmerged files.\n"
                'hint: Fix them up in the work tree, and then use "git add <file>"\n'
                "hint: as appropriate to mark resolution and make a commit."
            )
        if self.state.merge_head is not None:
            raise RepositoryError(
                "fatal: You have not concluded your merge (MERGE_HEAD exists).\n"
                "Please, commit your changes before you merge."
            )

    # ---- Initialization -------------------------------------------------------------------------------------

    def init(
            self,
    ) -> bool:
        """Initialize the repository.

        Re-running init on an initialized repository leaves every
        commit and branch in place.

        Returns:
            True if the repository was newly initialized.
        """
        if self.state.is_initialized:
            logger.debug("Repository already initialized")
            return False

        default_branch = self.config.default_branch
        self.state.is_initialized = True
        self.state.branches = {default_branch: None}
        self.state.current_branch = default_branch
        self.state.head = None
        logger.debug("Initialized repository on branch %s", default_branch)
        return True

    # ---- Working Set Operations -----------------------------------------------------------------------------

    def list_files(
            self,
    ) -> list[str]:
        """List working-set filenames in creation order."""
        return list(self.state.files)

    def touch(
            self,
            name: str,
    ) -> None:
        """Create a file, or truncate an existing one, in the working set."""
        self.state.files[name] = FileEntry(content="", modified=True)

    def _get_file(
            self,
            name: str,
    ) -> FileEntry:
        entry = self.state.files.get(name)
        if entry is None:
            msg = f"File {name} does not exist"
            raise RepositoryError(msg)
        return entry

    def edit(
            self,
            name: str,
            content: str,
    ) -> None:
        """Replace a working file's content.

        Args:
            name: Existing filename.
            content: New content.

        Raises:
            RepositoryError: If the file is missing or content is empty.
        """
        entry = self._get_file(name)
        if not content:
            raise RepositoryError("Content is required")
        entry.content = content
        entry.modified = True

    def read_file(
            self,
            name: str,
    ) -> str:
        """Return a working file's content.

        Raises:
            RepositoryError: If the file is missing.
        """
        return self._get_file(name).content

    # ---- Index Operations -----------------------------------------------------------------------------------

    def stage_all(
            self,
    ) -> StageOutcome:
        """Stage every modified working file.

        Returns:
            StageOutcome for the call.
        """
        names = [name for name, entry in self.state.files.items() if entry.modified]
        return self._stage(names, StageOutcome())

    def stage(
            self,
            filenames: list[str],
    ) -> StageOutcome:
        """Stage the named working files.

        Names missing from the working set are collected in
        ``not_found``; the remaining names are still staged.

        Args:
            filenames: Files to stage.

        Returns:
            StageOutcome for the call.
        """
        outcome = StageOutcome()
        present = []
        for name in filenames:
            if name in self.state.files:
                present.append(name)
            else:
                outcome.not_found.append(name)
        return self._stage(present, outcome)

    def _stage(
            self,
            names: list[str],
            outcome: StageOutcome,
    ) -> StageOutcome:
        had_conflicts = bool(self.state.merge_conflicts)

        for name in names:
            entry = self.state.files[name]
            self.state.staged[name] = entry.copy()
            outcome.added.append(name)

            if not self.state.merge_in_progress or name not in self.state.conflicted_files:
                continue
            if has_conflict_markers(entry.content):
                outcome.unresolved.append(name)
                continue
            self.state.merge_conflicts = [
                conflict for conflict in self.state.merge_conflicts
                if conflict.filename != name
            ]
            logger.debug("Resolved merge conflict in %s", name)

        if self.state.merge_in_progress and not self.state.merge_conflicts:
            self.state.merge_in_progress = False
            outcome.conflicts_resolved = had_conflicts

        return outcome

    def has_uncommitted_changes(
            self,
    ) -> bool:
        """Check for staged files or modified working files."""
        if self.state.staged:
            return True
        return any(entry.modified for entry in self.state.files.values())

    # ---- Commit Operations ----------------------------------------------------------------------------------

    def get_commit(
            self,
            commit_id: str | None,
    ) -> Commit | None:
        """Find a commit by ID.

        Returns:
            Commit object or None if not found.
        """
        if commit_id is None:
            return None
        for commit in self.state.commits:
            if commit.id == commit_id:
                return commit
        return None

    def _generate_commit_id(
            self,
    ) -> str:
        existing = {commit.id for commit in self.state.commits}
        commit_id = generate_commit_id()
        while commit_id in existing:
            commit_id = generate_commit_id()
        return commit_id

    @property
    def is_concluding_merge(
            self,
    ) -> bool:
        """Check if the next commit concludes a conflicted merge."""
        return self.state.merge_head is not None and not self.state.merge_conflicts

    def create_commit(
            self,
            message: str,
            message_given: bool = True,
    ) -> Commit:
        """Create a commit from the staging area.

        The snapshot is a copy of the staging area and nothing else.

        Args:
            message: Commit message.
            message_given: Whether a message option was supplied. When
                it was not and the commit concludes a merge, a default
                message is used.

        Returns:
            Created Commit object.

        Raises:
            RepositoryError: If conflicts remain, nothing is staged, or
                the message is empty.
        """
        self.require_initialized()

        if self.state.merge_in_progress and self.state.merge_conflicts:
            raise RepositoryError(format_unmerged_paths(self.state.conflicted_files))

        if not self.state.staged:
            raise RepositoryError("nothing to commit, working tree clean")

        is_merge_commit = self.is_concluding_merge
        if not message_given and is_merge_commit:
            message = f"Merge branch '{self.state.merge_branch}'"
        if not message:
            raise RepositoryError("Aborting commit due to empty commit message")

        commit = Commit.create(
            commit_id=self._generate_commit_id(),
            message=message,
            files=self.state.staged,
            parent=self.state.head,
            is_merge_commit=is_merge_commit,
            parent2=self.state.merge_head if is_merge_commit else None,
            author=self.config.user_name,
        )

        self.state.commits.append(commit)
        self.state.head = commit.id
        self.state.branches[self.state.current_branch] = commit.id

        for name in self.state.staged:
            entry = self.state.files.get(name)
            if entry is not None:
                entry.modified = False
        self.state.staged = {}

        if is_merge_commit:
            self.state.merge_in_progress = False
            self.state.merge_conflicts = []
            self.state.merge_head = None
            self.state.merge_branch = None

        logger.debug(
            "Created commit %s on %s (%d file(s))",
            commit.id, self.state.current_branch, len(commit.files),
        )
        return commit

    def get_commit_history(
            self,
            start_commit: str | None = None,
    ) -> list[Commit]:
        """Walk the parent chain from a commit.

        Args:
            start_commit: Starting commit ID (defaults to HEAD).

        Returns:
            List of commits in reverse chronological order.
        """
        commits = []
        seen = set()
        current_id = start_commit or self.state.head

        while current_id and current_id not in seen:
            commit = self.get_commit(current_id)
            if not commit:
                break
            seen.add(current_id)
            commits.append(commit)
            current_id = commit.parent

        return commits

    # ---- Branch Operations ----------------------------------------------------------------------------------

    def list_branches(
            self,
    ) -> list[str]:
        """List branch names in creation order."""
        return list(self.state.branches)

    def create_branch(
            self,
            name: str,
    ) -> None:
        """Create a branch pointing at HEAD.

        Raises:
            RepositoryError: If the branch exists or there are no commits.
        """
        if name in self.state.branches:
            msg = f"fatal: A branch named '{name}' already exists"
            raise RepositoryError(msg)

        if self.state.head is None:
            raise RepositoryError(NO_COMMIT_HINT.format(branch=self.state.current_branch))

        self.state.branches[name] = self.state.head
        logger.debug("Created branch %s at %s", name, self.state.head)

    def checkout_branch(
            self,
            name: str,
            command: str = "checkout",
    ) -> None:
        """Switch to an existing branch and load its files.

        The working set is replaced by the branch commit's snapshot.
        When the branch's commit cannot be found the working set is
        left untouched.

        Args:
            name: Branch name.
            command: Command name used in the uncommitted-changes error.

        Raises:
            RepositoryError: If the branch is missing or there are
                uncommitted changes.
        """
        self.require_branch(name)

        if self.has_uncommitted_changes():
            msg = (
                f"error: Your local changes would be overwritten by {command}.\n"
                "Please commit your changes or stash them before you switch branches."
            )
            raise RepositoryError(msg)

        self.state.current_branch = name
        self.state.head = self.state.branches[name]

        commit = self.get_commit(self.state.head)
        if commit:
            self.state.files = {
                filename: entry.copy(modified=False)
                for filename, entry in commit.files.items()
            }
        logger.debug("Switched to branch %s", name)

    def create_and_checkout_branch(
            self,
            name: str,
    ) -> None:
        """Create a branch at HEAD and make it current.

        The working set and staging area are carried over unchanged.

        Raises:
            RepositoryError: If the branch cannot be created.
        """
        self.create_branch(name)
        self.state.current_branch = name
        logger.debug("Switched to new branch %s", name)

    # ---- Merge Operations -----------------------------------------------------------------------------------

    def merge_branch(
            self,
            name: str,
    ) -> MergeResult:
        """Merge a branch into the current branch.

        Conflicting files receive conflict markers and the repository
        enters the merge-in-progress state. Without conflicts the
        current branch is moved to the incoming commit.

        Args:
            name: Existing branch to merge, other than the current one.

        Returns:
            MergeResult describing the outcome.

        Raises:
            RepositoryError: If either branch has no resolvable commit.
        """
        current_id = self.state.branches.get(self.state.current_branch)
        incoming_id = self.state.branches.get(name)

        if not current_id or not incoming_id:
            raise RepositoryError("Cannot merge branches without commits")

        current_commit = self.get_commit(current_id)
        incoming_commit = self.get_commit(incoming_id)
        if not current_commit or not incoming_commit:
            raise RepositoryError("Cannot find commit objects for branches")

        if current_id == incoming_id:
            return MergeResult(up_to_date=True)

        result = merge_snapshots(current_commit.files, incoming_commit.files, name)
        self.state.files.update(result.working_updates)

        if result.has_conflicts:
            self.state.merge_in_progress = True
            self.state.merge_conflicts = result.conflicts
            self.state.merge_head = incoming_id
            self.state.merge_branch = name
            logger.debug("Merge of %s stopped on %d conflict(s)", name, len(result.conflicts))
            return result

        self.state.head = incoming_id
        self.state.branches[self.state.current_branch] = incoming_id
        logger.debug("Fast-forwarded %s to %s", self.state.current_branch, incoming_id)
        return result
