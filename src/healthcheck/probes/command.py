"""Async wrapper around external command-line tools."""

from __future__ import annotations

import asyncio
import shutil
from dataclasses import dataclass
from typing import Optional, Sequence

from .errors import CapabilityMissingError, ProbeExecutionError


@dataclass(frozen=True)
class CommandOutput:
    returncode: int
    stdout: str
    stderr: str


def require_tool(tool: str) -> str:
    """Return the resolved path of *tool* or raise when it is not installed."""

    resolved = shutil.which(tool)
    if resolved is None:
        raise CapabilityMissingError(f"{tool} is not installed on this host")
    return resolved


async def run_command(
    args: Sequence[str],
    *,
    timeout_seconds: float,
    stdin_data: Optional[bytes] = None,
) -> CommandOutput:
    """
    Run a command and capture its output.

    Args:
        args: Command and arguments
        timeout_seconds: Upper bound on the whole invocation
        stdin_data: Optional bytes written to the command's stdin

    Returns:
        CommandOutput with decoded stdout/stderr

    Raises:
        ProbeExecutionError: If the command cannot be started or times out
    """
    try:
        proc = await asyncio.create_subprocess_exec(
            *args,
            stdin=asyncio.subprocess.PIPE if stdin_data is not None else asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as exc:
        raise ProbeExecutionError(f"Unable to start {args[0]}: {exc}") from exc

    try:
        stdout, stderr = await asyncio.wait_for(proc.communicate(stdin_data), timeout=timeout_seconds)
    except asyncio.TimeoutError as exc:
        proc.kill()
        await proc.wait()
        raise ProbeExecutionError.timed_out(args[0], timeout_seconds) from exc

    return CommandOutput(
        returncode=proc.returncode if proc.returncode is not None else -1,
        stdout=stdout.decode("utf-8", errors="replace"),
        stderr=stderr.decode("utf-8", errors="replace").strip(),
    )


__all__ = ["CommandOutput", "require_tool", "run_command"]
