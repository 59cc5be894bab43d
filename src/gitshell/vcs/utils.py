"""Subprocess invocation adapter."""

import asyncio
from pathlib import Path
from typing import NamedTuple


class CommandResult(NamedTuple):
    """Result of an external command."""

    success: bool
    stdout: str
    stderr: str
    exit_code: int | None = None


async def run_command(
    cmd: list[str],
    cwd: Path,
) -> CommandResult:
    """Run an external command and capture its output.

    Waits for the process to exit and buffers both output streams. Output is
    decoded as UTF-8 with undecodable bytes replaced by U+FFFD. There is no
    timeout; a process that never exits blocks the caller.

    Args:
        cmd: The command to execute, as a list of strings.
        cwd: Working directory for the process.

    Returns:
        A CommandResult with the outcome.

    Raises:
        OSError: If the process cannot be spawned (e.g. executable not found).
    """
    process = await asyncio.create_subprocess_exec(
        *cmd,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
        cwd=cwd,
    )

    stdout_bytes, stderr_bytes = await process.communicate()

    stdout = stdout_bytes.decode(errors="replace") if stdout_bytes else ""
    stderr = stderr_bytes.decode(errors="replace") if stderr_bytes else ""

    return CommandResult(
        success=process.returncode == 0,
        stdout=stdout,
        stderr=stderr,
        exit_code=process.returncode,
    )
