"""Tests for CLI commands."""

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from typer.testing import CliRunner

from gitshell.cli import app
from gitshell.config import GitShellConfig, InvalidConfigurationError
from gitshell.vcs import (
    Branch,
    CommandResult,
    GitCommandError,
    GitRepository,
    NotARepositoryError,
    OpenedRepository,
    RepositoryInitError,
)

runner = CliRunner()

OK = CommandResult(success=True, stdout="", stderr="", exit_code=0)


@pytest.fixture
def mock_config() -> MagicMock:
    """Create a configuration mock with auto-create disabled."""
    config = MagicMock(spec=GitShellConfig)
    config.auto_create = False
    return config


@pytest.fixture
def mock_repo() -> MagicMock:
    """Create a repository mock whose operations succeed."""
    repo = MagicMock(spec=GitRepository)
    repo.path = Path("/work/project")
    for name in (
        "run",
        "add",
        "commit",
        "commit_all",
        "clone_to",
        "clean",
        "create_branch",
        "delete_branch",
        "checkout",
    ):
        setattr(repo, name, AsyncMock(return_value=OK))
    repo.list_branches = AsyncMock(return_value=[])
    repo.current_branch = AsyncMock(return_value="main")
    repo.list_remotes = AsyncMock(return_value=[])
    repo.remote_exists = AsyncMock(return_value=True)
    return repo


@pytest.fixture
def mock_open(mock_repo: MagicMock, mock_config: MagicMock):
    """Patch configuration loading and repository opening in the CLI."""
    with (
        patch("gitshell.cli.GitShellConfig", return_value=mock_config),
        patch(
            "gitshell.cli.open_repository",
            new_callable=AsyncMock,
            return_value=OpenedRepository(mock_repo, created=False),
        ) as mock_open_repository,
    ):
        yield mock_open_repository


class TestRepositoryCommands:
    """Tests for commands that operate on an opened repository."""

    def test_add(self, mock_open: AsyncMock, mock_repo: MagicMock, mock_config: MagicMock) -> None:
        """Test add passes every file through."""
        result = runner.invoke(app, ["add", "a.py", "b.py", "--repo", "/work/project"])

        assert result.exit_code == 0
        mock_repo.add.assert_awaited_once_with(["a.py", "b.py"])
        mock_open.assert_awaited_once_with("/work/project", auto_create=False, config=mock_config)

    def test_auto_create_flag(self, mock_open: AsyncMock, mock_repo: MagicMock) -> None:
        """Test --auto-create is forwarded and creation is reported."""
        mock_open.return_value = OpenedRepository(mock_repo, created=True)

        result = runner.invoke(app, ["add", "a.py", "--auto-create"])

        assert result.exit_code == 0
        assert mock_open.call_args.kwargs["auto_create"] is True
        assert "Initialized empty repository" in result.stdout

    def test_auto_create_from_config(self, mock_open: AsyncMock, mock_config: MagicMock) -> None:
        """Test the configured default enables auto-create."""
        mock_config.auto_create = True

        result = runner.invoke(app, ["add", "a.py"])

        assert result.exit_code == 0
        assert mock_open.call_args.kwargs["auto_create"] is True

    def test_commit(self, mock_open: AsyncMock, mock_repo: MagicMock) -> None:
        """Test commit uses staged changes by default."""
        result = runner.invoke(app, ["commit", "Fix it"])

        assert result.exit_code == 0
        mock_repo.commit.assert_awaited_once_with("Fix it")
        mock_repo.commit_all.assert_not_awaited()

    def test_commit_all(self, mock_open: AsyncMock, mock_repo: MagicMock) -> None:
        """Test --all switches to commit_all."""
        result = runner.invoke(app, ["commit", "Fix it", "--all"])

        assert result.exit_code == 0
        mock_repo.commit_all.assert_awaited_once_with("Fix it")

    def test_clone(self, mock_open: AsyncMock, mock_repo: MagicMock) -> None:
        """Test clone target is forwarded."""
        result = runner.invoke(app, ["clone", "/tmp/copy"])

        assert result.exit_code == 0
        mock_repo.clone_to.assert_awaited_once_with("/tmp/copy")

    def test_clean_dirs(self, mock_open: AsyncMock, mock_repo: MagicMock) -> None:
        """Test --dirs is forwarded."""
        result = runner.invoke(app, ["clean", "--dirs"])

        assert result.exit_code == 0
        mock_repo.clean.assert_awaited_once_with(True)

    def test_branches(self, mock_open: AsyncMock, mock_repo: MagicMock) -> None:
        """Test listing marks the current branch."""
        mock_repo.list_branches.return_value = [
            Branch(name="main", is_current=False),
            Branch(name="topic", is_current=True),
        ]

        result = runner.invoke(app, ["branches"])

        assert result.exit_code == 0
        mock_repo.list_branches.assert_awaited_once_with(give_objects=True)
        assert "  main" in result.stdout
        assert "* topic" in result.stdout

    def test_branches_current(self, mock_open: AsyncMock, mock_repo: MagicMock) -> None:
        """Test --current prints only the checked-out branch."""
        result = runner.invoke(app, ["branches", "--current"])

        assert result.exit_code == 0
        assert result.stdout.strip() == "main"

    def test_branches_current_none(self, mock_open: AsyncMock, mock_repo: MagicMock) -> None:
        """Test --current fails when nothing is checked out."""
        mock_repo.current_branch.return_value = None

        result = runner.invoke(app, ["branches", "--current"])

        assert result.exit_code == 1

    def test_create_branch(self, mock_open: AsyncMock, mock_repo: MagicMock) -> None:
        """Test create-branch."""
        result = runner.invoke(app, ["create-branch", "topic"])

        assert result.exit_code == 0
        mock_repo.create_branch.assert_awaited_once_with("topic")

    def test_delete_branch_force(self, mock_open: AsyncMock, mock_repo: MagicMock) -> None:
        """Test delete-branch --force."""
        result = runner.invoke(app, ["delete-branch", "topic", "--force"])

        assert result.exit_code == 0
        mock_repo.delete_branch.assert_awaited_once_with("topic", force=True)

    def test_checkout(self, mock_open: AsyncMock, mock_repo: MagicMock) -> None:
        """Test checkout."""
        result = runner.invoke(app, ["checkout", "main"])

        assert result.exit_code == 0
        mock_repo.checkout.assert_awaited_once_with("main")

    def test_remotes(self, mock_open: AsyncMock, mock_repo: MagicMock) -> None:
        """Test remote listing."""
        mock_repo.list_remotes.return_value = ["origin", "upstream"]

        result = runner.invoke(app, ["remotes"])

        assert result.exit_code == 0
        assert result.stdout.split() == ["origin", "upstream"]

    def test_remotes_exists(self, mock_open: AsyncMock, mock_repo: MagicMock) -> None:
        """Test --exists exit status."""
        result = runner.invoke(app, ["remotes", "--exists", "origin"])
        assert result.exit_code == 0
        mock_repo.remote_exists.assert_awaited_with("origin")

        mock_repo.remote_exists.return_value = False
        result = runner.invoke(app, ["remotes", "--exists", "other"])
        assert result.exit_code == 1

    def test_run(self, mock_open: AsyncMock, mock_repo: MagicMock) -> None:
        """Test run prints the captured output."""
        mock_repo.run.return_value = CommandResult(success=True, stdout="abc123\n", stderr="", exit_code=0)

        result = runner.invoke(app, ["run", "log -n ? --format=?", "1", "%h"])

        assert result.exit_code == 0
        mock_repo.run.assert_awaited_once_with("log -n ? --format=?", ["1", "%h"])
        assert "abc123" in result.stdout


class TestErrorHandling:
    """Tests for error reporting."""

    def test_git_failure_prints_output(self, mock_open: AsyncMock, mock_repo: MagicMock) -> None:
        """Test a failed invocation shows stderr and exits 1."""
        mock_repo.checkout.side_effect = GitCommandError(
            "git checkout nope failed with exit code 1",
            command="checkout nope",
            exit_code=1,
            stdout="",
            stderr="error: pathspec 'nope' did not match\n",
        )

        result = runner.invoke(app, ["checkout", "nope"])

        assert result.exit_code == 1
        assert "did not match" in result.stdout

    def test_not_a_repository(self, mock_open: AsyncMock) -> None:
        """Test opening a plain directory exits 1."""
        mock_open.side_effect = NotARepositoryError("Not a git repository: /work/project")

        result = runner.invoke(app, ["branches"])

        assert result.exit_code == 1
        assert "Not a git repository" in result.stdout

    def test_configuration_error(self) -> None:
        """Test configuration errors exit 1."""
        with patch("gitshell.cli.GitShellConfig", side_effect=InvalidConfigurationError("bad value")):
            result = runner.invoke(app, ["remotes"])

        assert result.exit_code == 1
        assert "Configuration error" in result.stdout


class TestInitCommand:
    """Tests for init."""

    @patch("gitshell.cli.init_repository", new_callable=AsyncMock)
    @patch("gitshell.cli.GitShellConfig")
    def test_init(self, mock_config_class: MagicMock, mock_init: AsyncMock) -> None:
        """Test init reports the initialized path."""
        mock_config = MagicMock(spec=GitShellConfig)
        mock_config_class.return_value = mock_config
        repo = MagicMock(spec=GitRepository)
        repo.path = Path("/work/new")
        mock_init.return_value = repo

        result = runner.invoke(app, ["init", "/work/new"])

        assert result.exit_code == 0
        mock_init.assert_awaited_once_with("/work/new", config=mock_config)
        assert "Initialized repository" in result.stdout

    @patch("gitshell.cli.init_repository", new_callable=AsyncMock)
    @patch("gitshell.cli.GitShellConfig")
    def test_init_failure(self, mock_config_class: MagicMock, mock_init: AsyncMock) -> None:
        """Test init failures exit 1 with stderr."""
        mock_init.side_effect = RepositoryInitError(
            "fatal: cannot mkdir",
            command="init",
            repository=MagicMock(spec=GitRepository),
            exit_code=128,
            stderr="fatal: cannot mkdir\n",
        )

        result = runner.invoke(app, ["init", "/nope"])

        assert result.exit_code == 1
        assert "cannot mkdir" in result.stdout


def test_version() -> None:
    """Test version command."""
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert "gitshell version" in result.stdout
