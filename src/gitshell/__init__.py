"""gitshell: asyncio wrapper around the git command line."""

from gitshell.vcs import (
    Branch,
    CommandResult,
    GitCommandError,
    GitRepository,
    NotARepositoryError,
    RepositoryInitError,
    VCSError,
    init_repository,
    is_repository,
    open_repository,
)

__version__ = "0.1.0"

__all__ = [
    "Branch",
    "CommandResult",
    "GitCommandError",
    "GitRepository",
    "NotARepositoryError",
    "RepositoryInitError",
    "VCSError",
    "__version__",
    "init_repository",
    "is_repository",
    "open_repository",
]
