"""Git repository handle."""

import logging
from pathlib import Path

from gitshell.vcs.exceptions import GitCommandError, VCSOperationError
from gitshell.vcs.models import Branch, GitCommand
from gitshell.vcs.templating import escape_quotes, fill_arguments, fill_placeholders
from gitshell.vcs.utils import CommandResult, run_command

logger = logging.getLogger(__name__)


class GitRepository:
    """Runs git commands against a single working directory.

    Each operation spawns one git process with the repository path as its
    working directory and waits for it to exit. Operations are not
    coordinated with each other; running several at once against the same
    directory is left to git itself.
    """

    def __init__(self, repo_path: str | Path, git_executable: str = "git") -> None:
        """Initialize the handle.

        Args:
            repo_path: Path to the working directory (resolved to an absolute path)
            git_executable: Name or path of the git binary
        """
        self._path = Path(repo_path).resolve()
        self._git_executable = git_executable

    @property
    def path(self) -> Path:
        """Absolute path this handle operates on."""
        return self._path

    @property
    def git_executable(self) -> str:
        """Git binary invoked for every operation."""
        return self._git_executable

    def __repr__(self) -> str:
        return f"GitRepository({str(self._path)!r})"

    def build_command(self, template: str, values: list[str] | None = None) -> GitCommand:
        """Build a command from a template.

        Args:
            template: Command template with ``?`` markers
            values: Substitution values, in order

        Returns:
            Command with both the argument vector and the rendered text

        Raises:
            VCSOperationError: If the template has unbalanced quotes
        """
        try:
            args = fill_arguments(template, values)
        except ValueError as e:
            msg = f"Invalid command template {template!r}: {e}"
            raise VCSOperationError(msg) from e

        return GitCommand(args=args, text=fill_placeholders(template, values))

    async def execute(self, command: GitCommand, check: bool = True) -> CommandResult:
        """Run a built command.

        Args:
            command: Command to run
            check: If True, raise on a non-zero exit status

        Returns:
            Outcome of the git process

        Raises:
            GitCommandError: If git cannot be spawned, or exits non-zero and ``check`` is set
        """
        logger.debug(f"Running: git {command.text} (cwd={self._path})")

        try:
            result = await run_command([self._git_executable, *command.args], cwd=self._path)
        except OSError as e:
            msg = f"Failed to run git {command.text}: {e}"
            raise GitCommandError(msg, command=command.text) from e

        if check and not result.success:
            logger.debug(f"git {command.text} exited with {result.exit_code}: {result.stderr.strip()}")
            msg = f"git {command.text} failed with exit code {result.exit_code}: {result.stderr.strip()}"
            raise GitCommandError(
                msg,
                command=command.text,
                exit_code=result.exit_code,
                stdout=result.stdout,
                stderr=result.stderr,
            )

        return result

    async def run(
        self,
        template: str,
        args: list[str] | None = None,
        check: bool = True,
    ) -> CommandResult:
        """Run an arbitrary git command.

        Each substitution value becomes exactly one argument, so values are
        never re-split or interpreted by a shell.

        Args:
            template: Command template, e.g. ``"log -n ? --format=?"``
            args: Substitution values
            check: If True, raise on a non-zero exit status

        Returns:
            Outcome of the git process, passed through unchanged
        """
        return await self.execute(self.build_command(template, args), check=check)

    async def add(self, files: str | list[str]) -> CommandResult:
        """Stage files.

        Args:
            files: A single pathspec, or a list of them

        Returns:
            Outcome of ``git add``

        Raises:
            VCSOperationError: If an empty list is given
        """
        if isinstance(files, str):
            return await self.run("add ?", [files])

        if not files:
            msg = "No files to add"
            raise VCSOperationError(msg)

        command = GitCommand(
            args=["add", *files],
            text=fill_placeholders("add ?", [" ".join(files)]),
        )
        return await self.execute(command)

    def _commit_command(self, flags: str, message: str) -> GitCommand:
        template = f"commit {flags} -m '?'"
        return GitCommand(
            args=["commit", flags, "-m", message],
            text=fill_placeholders(template, [escape_quotes(message)]),
        )

    async def commit(self, message: str) -> CommandResult:
        """Commit staged changes (``git commit -v -m``).

        Args:
            message: Commit message

        Returns:
            Outcome of ``git commit``
        """
        return await self.execute(self._commit_command("-v", message))

    async def commit_all(self, message: str) -> CommandResult:
        """Commit all tracked changes (``git commit -av -m``).

        Args:
            message: Commit message

        Returns:
            Outcome of ``git commit``
        """
        return await self.execute(self._commit_command("-av", message))

    async def clone_to(self, target: str | Path) -> CommandResult:
        """Clone this repository with ``git clone --local``.

        A relative ``target`` is resolved against the repository path, since
        that is git's working directory.

        Args:
            target: Destination directory

        Returns:
            Outcome of ``git clone``
        """
        return await self.run("clone --local ? ?", [str(self._path), str(target)])

    async def clean(self, dirs: bool = False) -> CommandResult:
        """Remove untracked files (``git clean``, plus ``-d`` for directories).

        Args:
            dirs: Also remove untracked directories

        Returns:
            Outcome of ``git clean``
        """
        return await self.run("clean" + (" -d" if dirs else ""))

    async def _output_lines(self, template: str) -> list[str]:
        result = await self.run(template)
        return [line.strip() for line in result.stdout.splitlines() if line.strip()]

    async def list_branches(self, give_objects: bool = False) -> list[Branch] | list[str]:
        """List local branches.

        Args:
            give_objects: Return Branch records instead of bare names

        Returns:
            Branch names, or Branch records flagging the checked-out branch
        """
        branches = [Branch.from_line(line) for line in await self._output_lines("branch")]
        if give_objects:
            return branches
        return [branch.name for branch in branches]

    async def current_branch(self) -> str | None:
        """Get the checked-out branch.

        Returns:
            Name of the branch marked current, or None if there is none
                (e.g. a fresh repository without commits)
        """
        for line in await self._output_lines("branch"):
            branch = Branch.from_line(line)
            if branch.is_current:
                return branch.name
        return None

    async def list_remotes(self) -> list[str]:
        """List configured remotes.

        Returns:
            Remote names
        """
        return await self._output_lines("remote")

    async def remote_exists(self, name: str) -> bool:
        """Check if a remote is configured.

        Args:
            name: Remote name, matched exactly

        Returns:
            True if the remote exists
        """
        return name in await self.list_remotes()

    async def create_branch(self, name: str) -> CommandResult:
        """Create a branch at HEAD without checking it out.

        Args:
            name: Branch name

        Returns:
            Outcome of ``git branch``
        """
        return await self.run("branch ?", [name])

    async def delete_branch(self, name: str, force: bool = False) -> CommandResult:
        """Delete a branch.

        Args:
            name: Branch name
            force: Use ``-D`` to delete even if unmerged

        Returns:
            Outcome of ``git branch -d``/``-D``
        """
        return await self.run("branch -? ?", ["D" if force else "d", name])

    async def checkout(self, name: str) -> CommandResult:
        """Check out a branch or revision.

        Args:
            name: Branch name or revision

        Returns:
            Outcome of ``git checkout``
        """
        return await self.run("checkout ?", [name])
