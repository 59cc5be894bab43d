"""Git implementation for gitshell."""

from gitshell.vcs.git.repository import GitRepository

__all__ = [
    "GitRepository",
]
