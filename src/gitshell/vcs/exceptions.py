"""Common VCS exceptions for gitshell.

Every failed git invocation surfaces as a single structured error,
``GitCommandError``, carrying the command, exit status and both output streams.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gitshell.vcs.git.repository import GitRepository


class VCSError(Exception):
    """Base exception for all VCS-related errors."""


class NotARepositoryError(VCSError):
    """Raised when a directory is not a valid repository."""


class VCSOperationError(VCSError):
    """Raised when a VCS operation fails."""


class GitCommandError(VCSOperationError):
    """Raised when a git invocation exits non-zero or cannot be spawned."""

    def __init__(
        self,
        message: str,
        command: str,
        exit_code: int | None = None,
        stdout: str = "",
        stderr: str = "",
    ) -> None:
        """Initialize the error.

        Args:
            message: Human-readable description
            command: Command text that was run (without the executable)
            exit_code: Process exit status, or None if the process never started
            stdout: Buffered standard output
            stderr: Buffered standard error
        """
        super().__init__(message)
        self.command = command
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr

    @property
    def spawn_failed(self) -> bool:
        """Check if the process could not be started at all.

        Returns:
            True if there is no exit status
        """
        return self.exit_code is None


class RepositoryInitError(GitCommandError):
    """Raised when ``git init`` fails.

    The already-constructed handle is kept on ``repository`` so callers can
    still inspect the path that was targeted.
    """

    def __init__(
        self,
        message: str,
        command: str,
        repository: "GitRepository",
        exit_code: int | None = None,
        stdout: str = "",
        stderr: str = "",
    ) -> None:
        super().__init__(message, command, exit_code=exit_code, stdout=stdout, stderr=stderr)
        self.repository = repository
