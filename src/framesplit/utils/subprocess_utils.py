"""Async subprocess runner for external tools (ffmpeg, ffprobe)."""

from __future__ import annotations

import asyncio
import logging
import subprocess
from collections.abc import Callable
from dataclasses import dataclass

logger = logging.getLogger(__name__)


async def _kill(process: asyncio.subprocess.Process) -> None:
    """Kill and reap a child that is still running."""
    if process.returncode is not None:
        return
    try:
        process.kill()
    except ProcessLookupError:
        pass
    await process.wait()


@dataclass
class CommandResult:
    returncode: int
    stdout: str
    stderr: str


async def run_command(
    cmd: list[str],
    timeout: float | None = 3600,
    check: bool = True,
    on_spawn: Callable[[asyncio.subprocess.Process], None] | None = None,
) -> CommandResult:
    """Run an external command with logging and error handling.

    ``on_spawn`` receives the process handle once started so callers can
    terminate it. Raises ``FileNotFoundError`` when the executable is
    missing and ``subprocess.TimeoutExpired`` after killing a process that
    outlived ``timeout``. If the awaiting task is cancelled the child is
    killed and reaped before the cancellation propagates.
    """
    cmd_str = " ".join(cmd)
    logger.info(f"Running: {cmd_str}")

    process = await asyncio.create_subprocess_exec(
        *cmd,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    if on_spawn is not None:
        on_spawn(process)

    try:
        stdout_b, stderr_b = await asyncio.wait_for(process.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        await _kill(process)
        raise subprocess.TimeoutExpired(cmd_str, timeout)
    except asyncio.CancelledError:
        logger.info(f"Cancelled, killing: {cmd_str}")
        await _kill(process)
        raise

    result = CommandResult(
        returncode=process.returncode,
        stdout=stdout_b.decode(errors="replace"),
        stderr=stderr_b.decode(errors="replace"),
    )

    if result.stdout:
        logger.debug(f"stdout: {result.stdout[-500:]}")
    if result.stderr:
        logger.debug(f"stderr: {result.stderr[-500:]}")

    if check and result.returncode != 0:
        raise subprocess.CalledProcessError(result.returncode, cmd_str, result.stdout, result.stderr)
    return result
