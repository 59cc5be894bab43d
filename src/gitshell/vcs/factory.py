"""Repository discovery and creation.

Opens an existing working directory as a ``GitRepository`` or initializes a
new one with ``git init``.
"""

import logging
from pathlib import Path

from gitshell.config import GitShellConfig
from gitshell.vcs.exceptions import GitCommandError, NotARepositoryError, RepositoryInitError
from gitshell.vcs.git.repository import GitRepository
from gitshell.vcs.models import OpenedRepository

logger = logging.getLogger(__name__)


def is_repository(repo_path: str | Path, marker: str = ".git") -> bool:
    """Check whether a path holds an initialized repository.

    Only the given directory is checked; parent directories are not searched.
    A marker that exists but is a file (as in worktrees and submodules)
    does not count.

    Args:
        repo_path: Directory to check
        marker: Name of the marker directory

    Returns:
        True if the marker directory exists
    """
    return (Path(repo_path) / marker).is_dir()


async def init_repository(
    repo_path: str | Path,
    config: GitShellConfig | None = None,
) -> GitRepository:
    """Run ``git init`` in a directory.

    The directory must already exist; it is not created.

    Args:
        repo_path: Directory to initialize
        config: Configuration (default: loaded from environment)

    Returns:
        Handle bound to the directory

    Raises:
        RepositoryInitError: If the directory is missing or ``git init`` fails;
            the handle is kept on the error
    """
    config = config or GitShellConfig()
    repo = GitRepository(repo_path, git_executable=config.git_executable)

    if not repo.path.is_dir():
        msg = f"Cannot initialize repository: directory does not exist: {repo.path}"
        raise RepositoryInitError(msg, command="init", repository=repo)

    try:
        await repo.run("init")
    except GitCommandError as e:
        message = e.stderr.strip() or str(e)
        raise RepositoryInitError(
            message,
            command=e.command,
            repository=repo,
            exit_code=e.exit_code,
            stdout=e.stdout,
            stderr=e.stderr,
        ) from e

    logger.info(f"Initialized repository at {repo.path}")
    return repo


async def open_repository(
    repo_path: str | Path,
    auto_create: bool = False,
    config: GitShellConfig | None = None,
) -> OpenedRepository:
    """Get a handle for an existing repository, optionally creating it.

    No git process is spawned when the repository already exists or when
    the path is rejected.

    Args:
        repo_path: Directory to open
        auto_create: Run ``git init`` if the directory is not a repository
        config: Configuration (default: loaded from environment)

    Returns:
        The handle and whether it was newly initialized

    Raises:
        NotARepositoryError: If the path is not a repository and auto_create is off
        RepositoryInitError: If auto-creation fails
    """
    config = config or GitShellConfig()

    if is_repository(repo_path, marker=config.repository_marker):
        return OpenedRepository(GitRepository(repo_path, git_executable=config.git_executable), created=False)

    if not auto_create:
        msg = f"Not a git repository: {repo_path}"
        raise NotARepositoryError(msg)

    logger.debug(f"{repo_path} is not a repository, initializing")
    repo = await init_repository(repo_path, config=config)
    return OpenedRepository(repo, created=True)
