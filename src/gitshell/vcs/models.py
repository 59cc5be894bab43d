"""Models for git operations."""

from typing import TYPE_CHECKING, NamedTuple

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from gitshell.vcs.git.repository import GitRepository

CURRENT_BRANCH_MARKER = "*"
WORKTREE_BRANCH_MARKER = "+"


class Branch(BaseModel):
    """A branch parsed from one line of ``git branch`` output."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Branch name")
    is_current: bool = Field(default=False, description="Whether this branch is checked out")

    @classmethod
    def from_line(cls, line: str) -> "Branch":
        """Parse a single listing line.

        The checked-out branch is prefixed with ``* ``. Branches checked out in
        another worktree are prefixed with ``+ `` and are not current here.

        Args:
            line: Raw line from ``git branch``

        Returns:
            Parsed branch
        """
        line = line.strip()
        if line.startswith(CURRENT_BRANCH_MARKER):
            return cls(name=line[len(CURRENT_BRANCH_MARKER) :].strip(), is_current=True)
        if line.startswith(WORKTREE_BRANCH_MARKER + " "):
            return cls(name=line[len(WORKTREE_BRANCH_MARKER) :].strip())
        return cls(name=line)


class GitCommand(BaseModel):
    """A git command built by a repository operation."""

    model_config = ConfigDict(frozen=True)

    args: list[str] = Field(description="Argument vector passed to the git executable")
    text: str = Field(description="Interpolated template text, for logs and errors")


class OpenedRepository(NamedTuple):
    """Result of opening a repository."""

    repository: "GitRepository"
    created: bool = False
