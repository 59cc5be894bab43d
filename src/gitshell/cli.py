"""Command-line interface for gitshell."""

import asyncio
import logging
import sys
from collections.abc import Awaitable, Callable
from typing import TypeVar, cast

import typer
from rich.console import Console
from rich.logging import RichHandler

from gitshell import __version__
from gitshell.config import ConfigurationError, GitShellConfig
from gitshell.vcs import (
    Branch,
    CommandResult,
    GitCommandError,
    GitRepository,
    VCSError,
    init_repository,
    open_repository,
)

T = TypeVar("T")

app = typer.Typer(
    name="gitshell",
    help="Run common git operations through an asyncio wrapper",
    add_completion=False,
)
console = Console()

# Help text constants
REPO_HELP = "Path to the repository (default: current directory)"
AUTO_CREATE_HELP = "Initialize the repository if it does not exist yet"
ENV_FILE_HELP = "Path to custom environment file (default: .env.gitshell or .env)"
VERBOSE_OUTPUT_HELP = "Verbose output"


def setup_logging(verbose: bool) -> None:
    """Setup logging configuration.

    Args:
        verbose: If True, enable debug logging
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def _print_result(result: CommandResult) -> None:
    """Print the captured output of a git process.

    Args:
        result: Outcome to display
    """
    if result.stdout.strip():
        console.print(result.stdout.rstrip(), markup=False, highlight=False)
    if result.stderr.strip():
        console.print(f"[dim]{result.stderr.rstrip()}[/dim]", highlight=False)


def _print_command_error(error: GitCommandError) -> None:
    """Print a failed git invocation with everything it captured.

    Args:
        error: The failure to display
    """
    console.print(f"[red]Error: {error}[/red]", highlight=False)
    if error.stdout.strip():
        console.print("[bold]stdout:[/bold]")
        console.print(error.stdout.rstrip(), markup=False, highlight=False)
    if error.stderr.strip():
        console.print("[bold]stderr:[/bold]")
        console.print(error.stderr.rstrip(), markup=False, highlight=False)


def _with_repository(
    action: Callable[[GitRepository], Awaitable[T]],
    repo: str,
    auto_create: bool,
    env_file: str | None,
    verbose: bool,
) -> T:
    """Open the repository, run an action against it and handle errors.

    Args:
        action: Coroutine function receiving the opened repository
        repo: Repository path
        auto_create: Initialize the repository if missing
        env_file: Optional custom env file
        verbose: Enable debug logging

    Returns:
        Whatever the action returns

    Raises:
        SystemExit: On any error
    """
    setup_logging(verbose)

    try:
        config = GitShellConfig(env_file=env_file)

        async def _main() -> T:
            opened = await open_repository(repo, auto_create=auto_create or config.auto_create, config=config)
            if opened.created:
                console.print(f"[blue]Initialized empty repository in {opened.repository.path}[/blue]")
            return await action(opened.repository)

        return asyncio.run(_main())

    except ConfigurationError as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        sys.exit(1)
    except GitCommandError as e:
        _print_command_error(e)
        sys.exit(1)
    except VCSError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        if verbose:
            console.print_exception()
        sys.exit(1)


@app.command()
def init(
    path: str = typer.Argument(".", help="Directory to initialize"),
    env_file: str | None = typer.Option(None, "--env-file", help=ENV_FILE_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help=VERBOSE_OUTPUT_HELP),
) -> None:
    """Initialize a repository."""
    setup_logging(verbose)

    try:
        config = GitShellConfig(env_file=env_file)
        repo = asyncio.run(init_repository(path, config=config))
        console.print(f"[green]Initialized repository in {repo.path}[/green]")

    except ConfigurationError as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        sys.exit(1)
    except GitCommandError as e:
        _print_command_error(e)
        sys.exit(1)


@app.command()
def add(
    files: list[str] = typer.Argument(..., help="Files to stage"),
    repo: str = typer.Option(".", "--repo", "-C", help=REPO_HELP),
    auto_create: bool = typer.Option(False, "--auto-create", help=AUTO_CREATE_HELP),
    env_file: str | None = typer.Option(None, "--env-file", help=ENV_FILE_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help=VERBOSE_OUTPUT_HELP),
) -> None:
    """Stage files."""
    result = _with_repository(lambda r: r.add(files), repo, auto_create, env_file, verbose)
    _print_result(result)


@app.command()
def commit(
    message: str = typer.Argument(..., help="Commit message"),
    all_changes: bool = typer.Option(False, "--all", "-a", help="Commit all tracked changes"),
    repo: str = typer.Option(".", "--repo", "-C", help=REPO_HELP),
    auto_create: bool = typer.Option(False, "--auto-create", help=AUTO_CREATE_HELP),
    env_file: str | None = typer.Option(None, "--env-file", help=ENV_FILE_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help=VERBOSE_OUTPUT_HELP),
) -> None:
    """Commit staged (or, with --all, all tracked) changes."""

    async def _commit(r: GitRepository) -> CommandResult:
        if all_changes:
            return await r.commit_all(message)
        return await r.commit(message)

    _print_result(_with_repository(_commit, repo, auto_create, env_file, verbose))


@app.command()
def clone(
    target: str = typer.Argument(..., help="Destination directory"),
    repo: str = typer.Option(".", "--repo", "-C", help=REPO_HELP),
    env_file: str | None = typer.Option(None, "--env-file", help=ENV_FILE_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help=VERBOSE_OUTPUT_HELP),
) -> None:
    """Clone the repository locally."""
    result = _with_repository(lambda r: r.clone_to(target), repo, False, env_file, verbose)
    _print_result(result)


@app.command()
def clean(
    dirs: bool = typer.Option(False, "--dirs", "-d", help="Also remove untracked directories"),
    repo: str = typer.Option(".", "--repo", "-C", help=REPO_HELP),
    env_file: str | None = typer.Option(None, "--env-file", help=ENV_FILE_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help=VERBOSE_OUTPUT_HELP),
) -> None:
    """Remove untracked files."""
    result = _with_repository(lambda r: r.clean(dirs), repo, False, env_file, verbose)
    _print_result(result)


@app.command()
def branches(
    current: bool = typer.Option(False, "--current", help="Only print the checked-out branch"),
    repo: str = typer.Option(".", "--repo", "-C", help=REPO_HELP),
    env_file: str | None = typer.Option(None, "--env-file", help=ENV_FILE_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help=VERBOSE_OUTPUT_HELP),
) -> None:
    """List local branches."""
    if current:
        name = _with_repository(lambda r: r.current_branch(), repo, False, env_file, verbose)
        if name is None:
            console.print("[yellow]No current branch[/yellow]")
            sys.exit(1)
        console.print(name, markup=False, highlight=False)
        return

    listing = cast(
        list[Branch],
        _with_repository(lambda r: r.list_branches(give_objects=True), repo, False, env_file, verbose),
    )
    for branch in listing:
        if branch.is_current:
            console.print(f"* [green]{branch.name}[/green]", highlight=False)
        else:
            console.print(f"  {branch.name}", markup=False, highlight=False)


@app.command("create-branch")
def create_branch(
    name: str = typer.Argument(..., help="Branch name"),
    repo: str = typer.Option(".", "--repo", "-C", help=REPO_HELP),
    env_file: str | None = typer.Option(None, "--env-file", help=ENV_FILE_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help=VERBOSE_OUTPUT_HELP),
) -> None:
    """Create a branch at HEAD."""
    result = _with_repository(lambda r: r.create_branch(name), repo, False, env_file, verbose)
    _print_result(result)


@app.command("delete-branch")
def delete_branch(
    name: str = typer.Argument(..., help="Branch name"),
    force: bool = typer.Option(False, "--force", "-D", help="Delete even if not merged"),
    repo: str = typer.Option(".", "--repo", "-C", help=REPO_HELP),
    env_file: str | None = typer.Option(None, "--env-file", help=ENV_FILE_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help=VERBOSE_OUTPUT_HELP),
) -> None:
    """Delete a branch."""
    result = _with_repository(lambda r: r.delete_branch(name, force=force), repo, False, env_file, verbose)
    _print_result(result)


@app.command()
def checkout(
    name: str = typer.Argument(..., help="Branch or revision"),
    repo: str = typer.Option(".", "--repo", "-C", help=REPO_HELP),
    env_file: str | None = typer.Option(None, "--env-file", help=ENV_FILE_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help=VERBOSE_OUTPUT_HELP),
) -> None:
    """Check out a branch or revision."""
    result = _with_repository(lambda r: r.checkout(name), repo, False, env_file, verbose)
    _print_result(result)


@app.command()
def remotes(
    exists: str | None = typer.Option(None, "--exists", help="Exit 0 if this remote exists, 1 otherwise"),
    repo: str = typer.Option(".", "--repo", "-C", help=REPO_HELP),
    env_file: str | None = typer.Option(None, "--env-file", help=ENV_FILE_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help=VERBOSE_OUTPUT_HELP),
) -> None:
    """List configured remotes."""
    if exists is not None:
        found = _with_repository(lambda r: r.remote_exists(exists), repo, False, env_file, verbose)
        if not found:
            console.print(f"[yellow]Remote '{exists}' does not exist[/yellow]")
            sys.exit(1)
        console.print(f"[green]Remote '{exists}' exists[/green]")
        return

    for name in _with_repository(lambda r: r.list_remotes(), repo, False, env_file, verbose):
        console.print(name, markup=False, highlight=False)


@app.command()
def run(
    template: str = typer.Argument(..., help="Git command template, with ? for each argument"),
    args: list[str] | None = typer.Argument(None, help="Values substituted into the template"),
    repo: str = typer.Option(".", "--repo", "-C", help=REPO_HELP),
    auto_create: bool = typer.Option(False, "--auto-create", help=AUTO_CREATE_HELP),
    env_file: str | None = typer.Option(None, "--env-file", help=ENV_FILE_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help=VERBOSE_OUTPUT_HELP),
) -> None:
    """Run an arbitrary git command, e.g. gitshell run 'log -n ?' 5."""
    result = _with_repository(lambda r: r.run(template, args or []), repo, auto_create, env_file, verbose)
    _print_result(result)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"gitshell version {__version__}")


if __name__ == "__main__":
    app()
