"""File-level merge logic for GitSim.

Merges two commit snapshots treating each file as an atomic unit:
a file present on both sides with different content is a conflict,
and no line-level merging is attempted.

Execution Context:
    Library module - imported by the repository state machine

Dependencies:
    - gitsim_core.models: Data models

Metadata:
    Version: 0.1.0
    Author: GitSim Team
"""
from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field

from gitsim_core.models import FileEntry
from gitsim_core.models import MergeConflict


# ---- Constants ----------------------------------------------------------------------------------------------


MARKER_OURS = "<<<<<<< HEAD"
MARKER_SEPARATOR = "======="
MARKER_THEIRS = ">>>>>>>"


# ---- Data Classes -------------------------------------------------------------------------------------------


@dataclass
class MergeResult:
    """Result of merging two snapshots.

    Attributes:
        conflicts: Files that differ on both sides.
        working_updates: Files to write into the working set.
        up_to_date: Whether both sides already point at the same commit.
    """

    conflicts: list[MergeConflict] = field(default_factory=list)
    working_updates: dict[str, FileEntry] = field(default_factory=dict)
    up_to_date: bool = False

    @property
    def has_conflicts(
            self,
    ) -> bool:
        """Check if there are unresolved conflicts."""
        return len(self.conflicts) > 0


# ---- Merge Functions ----------------------------------------------------------------------------------------


def merge_snapshots(
        ours: dict[str, FileEntry],
        theirs: dict[str, FileEntry],
        branch_name: str,
) -> MergeResult:
    """Merge the incoming snapshot into the current one.

    Files on both sides with different content become conflicts and
    their working copy is replaced by a conflict-marker block. Files
    only on the incoming side are added unmodified. Files only on our
    side, or identical on both, need no working-set change.

    Args:
        ours: Snapshot of the current branch's commit.
        theirs: Snapshot of the incoming branch's commit.
        branch_name: Incoming branch name, used in the closing marker.

    Returns:
        MergeResult describing conflicts and working-set updates.
    """
    result = MergeResult()

    filenames = list(ours) + [name for name in theirs if name not in ours]

    for filename in filenames:
        current_file = ours.get(filename)
        merge_file = theirs.get(filename)

        if current_file is not None and merge_file is not None:
            if current_file.content == merge_file.content:
                continue
            result.conflicts.append(MergeConflict(
                filename=filename,
                current_content=current_file.content,
                merge_content=merge_file.content,
            ))
            result.working_updates[filename] = FileEntry(
                content=conflict_block(current_file.content, merge_file.content, branch_name),
                modified=True,
            )
        elif merge_file is not None:
            result.working_updates[filename] = merge_file.copy(modified=False)

    return result


def conflict_block(
        current_content: str,
        merge_content: str,
        branch_name: str,
) -> str:
    """Build the conflict-marker block written into a conflicting file.

    Args:
        current_content: Content on the current branch.
        merge_content: Content on the incoming branch.
        branch_name: Incoming branch name.

    Returns:
        File content with both versions between conflict markers.
    """
    return (
        f"{MARKER_OURS}\n{current_content}\n"
        f"{MARKER_SEPARATOR}\n{merge_content}\n"
        f"{MARKER_THEIRS} {branch_name}\n"
    )


def has_conflict_markers(
        content: str,
) -> bool:
    """Check whether a file still carries all three conflict markers."""
    return (
        MARKER_OURS in content
        and MARKER_SEPARATOR in content
        and MARKER_THEIRS in content
    )


# ---- Formatting Functions -----------------------------------------------------------------------------------


def format_conflict_report(
        conflicts: list[MergeConflict],
) -> str:
    """Format the message returned when a merge stops on conflicts.

    Args:
        conflicts: Conflicts found by the merge.

    Returns:
        Multi-line message naming the files and the resolution steps.
    """
    filenames = ", ".join(conflict.filename for conflict in conflicts)
    lines = [
        "Auto-merging failed, fix conflicts and then commit the result.",
        f"Merge conflict in {filenames}",
        "",
        "Automatic merge failed; fix conflicts and then commit the result.",
        "To resolve conflicts:",
        "1. Edit the files to fix the conflicts (look for the conflict markers)",
        "2. Use 'git add <file>' to mark them as resolved",
        "3. Then commit the result with 'git commit'",
    ]
    return "\n".join(lines)


def format_unmerged_paths(
        filenames: list[str],
) -> str:
    """Format the message returned when committing with unmerged files.

    Args:
        filenames: Files with outstanding conflicts.

    Returns:
        Multi-line error message listing the unmerged paths.
    """
    lines = [
        "error: Committing is not possible because you have unmerged files.",
        'hint: Fix them up in the work tree, and then use "git add <file>"',
        "hint: as appropriate to mark resolution and make a commit.",
        "",
        "Unmerged paths:",
    ]
    lines.extend(f"\t{filename}" for filename in filenames)
    return "\n".join(lines)
