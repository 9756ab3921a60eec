"""Subprocess runner for hexo CLI commands."""

from __future__ import annotations

import asyncio
import shlex
import shutil
import sys
from dataclasses import dataclass
from pathlib import Path

from loguru import logger

MAX_OUTPUT_CHARS = 20000


class CommandError(Exception):
    """Raised when a command cannot be started, times out, or exits non-zero."""


@dataclass(slots=True)
class CommandResult:
    """Captured output of a finished command."""

    command: str
    returncode: int
    stdout: str
    stderr: str


def split_command(command: str) -> list[str]:
    """Split a command line on whitespace, adding ``.cmd`` for bare names on Windows."""
    parts = command.split()
    if not parts:
        raise CommandError("command must not be empty")
    if sys.platform == "win32" and "." not in parts[0]:
        parts[0] = f"{parts[0]}.cmd"
    return parts


class CommandRunner:
    """Run commands in the blog root and collect their output."""

    def __init__(self, cwd: Path):
        self.cwd = cwd

    async def run(self, argv: list[str], *, timeout: float) -> CommandResult:
        display = shlex.join(argv)
        if shutil.which(argv[0]) is None:
            raise CommandError(f"Command not found: {argv[0]}")

        try:
            process = await asyncio.create_subprocess_exec(
                *argv,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=str(self.cwd),
            )
        except OSError as exc:
            raise CommandError(f"Failed to start {display}: {exc}") from exc

        try:
            stdout_raw, stderr_raw = await asyncio.wait_for(process.communicate(), timeout=timeout)
        except asyncio.TimeoutError:
            process.kill()
            await process.communicate()
            raise CommandError(f"{display} timed out after {timeout:g} seconds") from None

        stdout = _truncate(stdout_raw.decode("utf-8", errors="replace"))
        stderr = _truncate(stderr_raw.decode("utf-8", errors="replace").strip())

        if process.returncode != 0:
            logger.warning("Command {} exited with code {}", display, process.returncode)
            detail = stderr or stdout.strip() or f"exit code {process.returncode}"
            raise CommandError(f"{display} failed: {detail}")

        logger.info("Command {} finished", display)
        return CommandResult(command=display, returncode=process.returncode, stdout=stdout, stderr=stderr)


def _truncate(text: str) -> str:
    if len(text) <= MAX_OUTPUT_CHARS:
        return text
    return text[:MAX_OUTPUT_CHARS] + "\n... (truncated)"
