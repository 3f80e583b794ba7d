"""Command processing for GitSim.

Parses a terminal command line, routes it to a file handler or a git
sub-command handler, and turns every outcome into a CommandResult.
Repository errors never escape ``process``: they become ERROR results
and the simulator stays usable.

Execution Context:
    Library module - the entry point used by terminal front ends

Dependencies:
    - gitsim_core.repository: Repository state machine
    - gitsim_core.models: Data models

Metadata:
    Version: 0.1.0
    Author: GitSim Team
"""
from __future__ import annotations

import logging
import re
from typing import Any
from typing import Callable

from gitsim_core.config import SimulatorConfig
from gitsim_core.help import GIT_USAGE
from gitsim_core.help import HELP_TEXT
from gitsim_core.merge import format_conflict_report
from gitsim_core.models import CommandResult
from gitsim_core.models import RepositoryState
from gitsim_core.repository import Repository
from gitsim_core.repository import RepositoryError

logger = logging.getLogger(__name__)

Handler = Callable[[list[str]], CommandResult]

_SURROUNDING_QUOTE = re.compile(r"^[\"']|[\"']$")


# ---- Command Processor --------------------------------------------------------------------------------------


class CommandProcessor:
    """Interprets terminal commands against one simulated repository.

    Attributes:
        config: Simulator settings.
        repo: Repository the commands operate on.
    """

    def __init__(
            self,
            config: SimulatorConfig | None = None,
            state: RepositoryState | None = None,
    ) -> None:
        self.config = config or SimulatorConfig()
        self.repo = Repository(state=state, config=self.config)

        self._commands: dict[str, Handler] = {
            "help": self._cmd_help,
            "clear": self._cmd_clear,
            "ls": self._cmd_ls,
            "touch": self._cmd_touch,
            "edit": self._cmd_edit,
            "cat": self._cmd_cat,
            "git": self._cmd_git,
        }
        self._git_commands: dict[str, Handler] = {
            "init": self._git_init,
            "status": self._git_status,
            "add": self._git_add,
            "commit": self._git_commit,
            "log": self._git_log,
            "branch": self._git_branch,
            "checkout": self._git_checkout,
            "switch": self._git_switch,
            "merge": self._git_merge,
            "help": self._cmd_help,
        }

    @property
    def state(
            self,
    ) -> RepositoryState:
        """Live repository state. Mutate it only through ``process``."""
        return self.repo.state

    def snapshot(
            self,
    ) -> dict[str, Any]:
        """Return a detached, JSON-ready copy of the repository state."""
        return self.state.to_dict()

    # ---- Dispatch -------------------------------------------------------------------------------------------

    def process(
            self,
            command_line: str,
    ) -> CommandResult:
        """Run one command line.

        Args:
            command_line: Raw text typed by the user.

        Returns:
            CommandResult for display.
        """
        args = command_line.split()
        command = args[0].lower() if args else ""

        handler = self._commands.get(command)
        if handler is None:
            return CommandResult.error(
                f"Command not found: {command}. Type 'help' for available commands."
            )

        logger.debug("Processing command: %s", command_line.strip())
        try:
            return handler(args[1:])
        except RepositoryError as repo_error:
            return CommandResult.error(str(repo_error))

    async def process_async(
            self,
            command_line: str,
    ) -> CommandResult:
        """Coroutine form of ``process`` for async callers.

        The command runs to completion without suspending.
        """
        return self.process(command_line)

    def _cmd_git(
            self,
            args: list[str],
    ) -> CommandResult:
        if not args:
            return CommandResult.output(GIT_USAGE)

        git_command = args[0].lower()
        handler = self._git_commands.get(git_command)
        if handler is None:
            return CommandResult.error(
                f"git: '{git_command}' is not a git command. See 'git help'."
            )
        return handler(args[1:])

    # ---- Terminal Commands ----------------------------------------------------------------------------------

    def _cmd_help(
            self,
            args: list[str],
    ) -> CommandResult:
        return CommandResult.system(HELP_TEXT, is_help=True)

    def _cmd_clear(
            self,
            args: list[str],
    ) -> CommandResult:
        return CommandResult.clear()

    # ---- File Commands --------------------------------------------------------------------------------------

    def _cmd_ls(
            self,
            args: list[str],
    ) -> CommandResult:
        files = self.repo.list_files()
        return CommandResult.output("  ".join(files) if files else "No files found")

    def _cmd_touch(
            self,
            args: list[str],
    ) -> CommandResult:
        if not args:
            return CommandResult.error("File name is required")
        self.repo.touch(args[0])
        return CommandResult.success(f"Created file: {args[0]}")

    def _cmd_edit(
            self,
            args: list[str],
    ) -> CommandResult:
        if not args:
            return CommandResult.error("File name is required")
        self.repo.edit(args[0], " ".join(args[1:]))
        return CommandResult.success(f"Updated file: {args[0]}")

    def _cmd_cat(
            self,
            args: list[str],
    ) -> CommandResult:
        if not args:
            return CommandResult.error("File name is required")
        content = self.repo.read_file(args[0])
        return CommandResult.output(content or "(empty file)")

    # ---- Git Commands ---------------------------------------------------------------------------------------

    def _git_init(
            self,
            args: list[str],
    ) -> CommandResult:
        repo_path = self.config.repo_path
        if not self.repo.init():
            return CommandResult.output(f"Reinitialized existing Git repository in {repo_path}")
        return CommandResult.success(f"Initialized empty Git repository in {repo_path}")

    def _git_status(
            self,
            args: list[str],
    ) -> CommandResult:
        self.repo.require_initialized()
        state = self.state

        staged_files = list(state.staged)
        untracked_files = [
            name for name, entry in state.files.items()
            if entry.modified and name not in state.staged
        ]

        output = f"On branch {state.current_branch}\n"
        if not state.commits:
            output += "No commits yet\n"

        if state.merge_conflicts:
            output += "You have unmerged paths.\n  (fix conflicts and run \"git commit\")\n"
            output += "\nUnmerged paths:\n  (use \"git add <file>...\" to mark resolution)\n"
            for name in state.conflicted_files:
                output += f"\tboth modified:   {name}\n"

        if not staged_files and not untracked_files:
            output += "nothing to commit, working tree clean"
            return CommandResult.output(output)

        if staged_files:
            output += "\nChanges to be committed:\n  (use \"git restore --staged <file>...\" to unstage)\n"
            for name in staged_files:
                output += f"\t new file:   {name}\n"

        if untracked_files:
            output += "\nUntracked files:\n  (use \"git add <file>...\" to include in what will be committed)\n"
            for name in untracked_files:
                output += f"\t{name}\n"

        return CommandResult.output(output)

    def _git_add(
            self,
            args: list[str],
    ) -> CommandResult:
        self.repo.require_initialized()

        if not args:
            return CommandResult.error("Nothing specified, nothing added.")

        if args[0] == ".":
            outcome = self.repo.stage_all()
            summary = "Added all files to staging area"
        else:
            outcome = self.repo.stage(args)
            summary = f"Added {len(outcome.added)} file(s) to staging area"

        if outcome.not_found:
            return CommandResult.error(
                f"pathspec '{', '.join(outcome.not_found)}' did not match any files"
            )

        if outcome.unresolved:
            return CommandResult.error("\n".join(
                f"error: Conflict markers still present in '{name}'"
                for name in outcome.unresolved
            ))

        if outcome.conflicts_resolved:
            summary += "\nAll merge conflicts resolved. You can now commit the changes."
        return CommandResult.success(summary)

    def _git_commit(
            self,
            args: list[str],
    ) -> CommandResult:
        message = ""
        message_given = "-m" in args
        if message_given:
            tail = args[args.index("-m") + 1:]
            message = _SURROUNDING_QUOTE.sub("", " ".join(tail))

        commit = self.repo.create_commit(message, message_given=message_given)
        return CommandResult.success(
            f"[{self.state.current_branch} {commit.short_id}] {commit.message}"
        )

    def _git_log(
            self,
            args: list[str],
    ) -> CommandResult:
        self.repo.require_initialized()

        if not self.state.commits:
            return CommandResult.output("No commits yet")

        blocks = []
        for commit in self.repo.get_commit_history():
            lines = [f"commit {commit.id}"]
            if commit.is_merge_commit and commit.parent and commit.parent2:
                lines.append(f"Merge: {commit.parent[:7]} {commit.parent2[:7]}")
            if commit.author:
                lines.append(f"Author: {commit.author}")
            lines.append(f"Date: {commit.formatted_date()}")
            lines.append("")
            lines.append(f"    {commit.message}")
            blocks.append("\n".join(lines))

        return CommandResult.output("\n\n".join(blocks))

    def _git_branch(
            self,
            args: list[str],
    ) -> CommandResult:
        self.repo.require_initialized()

        if not args:
            lines = [
                f"* {name}" if name == self.state.current_branch else f"  {name}"
                for name in self.repo.list_branches()
            ]
            return CommandResult.output("\n".join(lines) or "No branches")

        self.repo.create_branch(args[0])
        return CommandResult.success(f"Created branch '{args[0]}'")

    def _switch_branch(
            self,
            args: list[str],
            command: str,
            create_flag: str,
    ) -> CommandResult:
        self.repo.require_initialized()

        if not args:
            return CommandResult.error("You must specify a branch name")

        if args[0] == create_flag:
            if len(args) < 2:
                return CommandResult.error(f"error: switch `{create_flag[1:]}' requires a value")
            self.repo.create_and_checkout_branch(args[1])
            return CommandResult.success(f"Switched to a new branch '{args[1]}'")

        self.repo.checkout_branch(args[0], command=command)
        return CommandResult.success(f"Switched to branch '{args[0]}'")

    def _git_checkout(
            self,
            args: list[str],
    ) -> CommandResult:
        return self._switch_branch(args, command="checkout", create_flag="-b")

    def _git_switch(
            self,
            args: list[str],
    ) -> CommandResult:
        return self._switch_branch(args, command="switch", create_flag="-c")

    def _git_merge(
            self,
            args: list[str],
    ) -> CommandResult:
        self.repo.require_initialized()
        self.repo.require_no_merge()

        if not args:
            return CommandResult.error("You must specify a branch name to merge")

        branch_name = args[0]
        self.repo.require_branch(branch_name)

        current_branch = self.state.current_branch
        if branch_name == current_branch:
            return CommandResult.output(
                f"Already up to date. '{branch_name}' is the current branch."
            )

        result = self.repo.merge_branch(branch_name)
        if result.up_to_date:
            return CommandResult.output("Already up to date.")
        if result.has_conflicts:
            return CommandResult.error(format_conflict_report(result.conflicts))
        return CommandResult.success(f"Merged branch '{branch_name}' into {current_branch}")
