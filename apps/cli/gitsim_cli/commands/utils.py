"""Rendering helpers for GitSim CLI commands.

Turns command results and repository state into rich renderables,
styling each result by its type.

Execution Context:
    CLI command utilities - imported by command modules

Dependencies:
    - rich: Terminal formatting

Metadata:
    Version: 0.1.0
    Author: GitSim Team
"""
from __future__ import annotations

from rich.console import Console
from rich.table import Table
from rich.text import Text

from gitsim_core.models import CommandResult
from gitsim_core.models import RepositoryState
from gitsim_core.models import ResultType


RESULT_STYLES = {
    ResultType.SYSTEM: "cyan",
    ResultType.CLEAR: "",
    ResultType.OUTPUT: "",
    ResultType.SUCCESS: "green",
    ResultType.ERROR: "red",
}

PREVIEW_LENGTH = 40


def render_result(
        console: Console,
        result: CommandResult,
) -> None:
    """Print a command result styled by its type.

    Content is printed as plain text so brackets in git output are
    never read as markup.

    Args:
        console: Console to print to.
        result: Result to render.
    """
    if result.type is ResultType.CLEAR or not result.content:
        return
    console.print(Text(result.content, style=RESULT_STYLES[result.type]))


def _preview(
        content: str,
) -> str:
    first_line = content.splitlines()[0] if content else ""
    if len(first_line) > PREVIEW_LENGTH:
        return first_line[:PREVIEW_LENGTH - 3] + "..."
    return first_line


def render_state(
        console: Console,
        state: RepositoryState,
) -> None:
    """Print the working set, branches, and commit list as tables.

    Args:
        console: Console to print to.
        state: Repository state to display.
    """
    if not state.is_initialized:
        console.print("[dim]Repository not initialized[/dim]")

    files_table = Table(title="Working Files")
    files_table.add_column("File", style="cyan")
    files_table.add_column("Status")
    files_table.add_column("Content")
    conflicted = set(state.conflicted_files)
    for name, entry in state.files.items():
        if name in conflicted:
            status = Text("conflict", style="red")
        elif name in state.staged:
            status = Text("staged", style="green")
        elif entry.modified:
            status = Text("modified", style="yellow")
        else:
            status = Text("clean", style="dim")
        files_table.add_row(name, status, Text(_preview(entry.content)))
    console.print(files_table)

    branch_table = Table(title="Branches")
    branch_table.add_column("", width=1)
    branch_table.add_column("Branch", style="cyan")
    branch_table.add_column("Commit")
    for name, commit_id in state.branches.items():
        marker = "*" if name == state.current_branch else ""
        branch_table.add_row(marker, name, commit_id[:7] if commit_id else "-")
    console.print(branch_table)

    commit_table = Table(title="Commits")
    commit_table.add_column("Commit", style="yellow")
    commit_table.add_column("Parent")
    commit_table.add_column("Message")
    commit_table.add_column("Files", justify="right")
    for commit in reversed(state.commits):
        parents = " ".join(p[:7] for p in (commit.parent, commit.parent2) if p)
        commit_table.add_row(
            commit.short_id,
            parents or "-",
            Text(commit.message),
            str(len(commit.files)),
        )
    console.print(commit_table)

    if state.merge_in_progress:
        console.print(Text.assemble(
            ("Merge in progress: ", "red"),
            ", ".join(state.conflicted_files),
        ))
