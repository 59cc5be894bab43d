"""Version control operations for gitshell.

This module exposes the repository handle, discovery helpers and the
exceptions raised by failed git invocations.
"""

from gitshell.vcs.exceptions import (
    GitCommandError,
    NotARepositoryError,
    RepositoryInitError,
    VCSError,
    VCSOperationError,
)
from gitshell.vcs.factory import init_repository, is_repository, open_repository
from gitshell.vcs.git import GitRepository
from gitshell.vcs.models import Branch, GitCommand, OpenedRepository
from gitshell.vcs.templating import escape_quotes, fill_arguments, fill_placeholders
from gitshell.vcs.utils import CommandResult

__all__ = [
    "Branch",
    "CommandResult",
    "GitCommand",
    "GitCommandError",
    "GitRepository",
    "NotARepositoryError",
    "OpenedRepository",
    "RepositoryInitError",
    "VCSError",
    "VCSOperationError",
    "escape_quotes",
    "fill_arguments",
    "fill_placeholders",
    "init_repository",
    "is_repository",
    "open_repository",
]
