"""Exceptions raised inside probes and contained by the runner."""

from __future__ import annotations


class ProbeError(RuntimeError):
    """Base class for expected probe failures."""


class ProbeExecutionError(ProbeError):
    """An external call (network, command, database) failed."""

    @classmethod
    def command_failed(cls, command: str, returncode: int, stderr: str = "") -> "ProbeExecutionError":
        """Create error for a non-zero command exit."""
        msg = f"{command} exited with status {returncode}"
        if stderr:
            msg += f": {stderr}"
        return cls(msg)

    @classmethod
    def timed_out(cls, operation: str, timeout_seconds: float) -> "ProbeExecutionError":
        """Create error for an operation that exceeded its timeout."""
        return cls(f"{operation} timed out after {timeout_seconds:g}s")


class CapabilityMissingError(ProbeError):
    """An optional external tool or client library is unavailable."""


__all__ = ["CapabilityMissingError", "ProbeError", "ProbeExecutionError"]
