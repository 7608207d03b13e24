from __future__ import annotations

"""File lock that keeps scheduled monitor runs from overlapping."""

import os
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

try:
    import fcntl
except ImportError:  # pragma: no cover - fcntl unavailable on non-POSIX platforms  # policy_guard: allow-silent-handler
    fcntl = None

LOCK_FILE_NAME = "healthcheck.lock"


class RunInProgressError(RuntimeError):
    """Raised when another monitor run already holds the lock."""


class RunLock:
    """Non-blocking exclusive lock on ``<lock_dir>/healthcheck.lock``; the directory must exist."""

    def __init__(self, lock_dir: Path) -> None:
        self.lock_dir = lock_dir
        self.lock_path = self.lock_dir / LOCK_FILE_NAME
        self._fd: Optional[int] = None

    @property
    def held(self) -> bool:
        return self._fd is not None

    def acquire(self) -> None:
        """Attempt to acquire the lock; raises if already held."""

        if fcntl is None:  # pragma: no cover - non-POSIX platforms
            raise RunInProgressError("Run overlap protection requires fcntl on this platform.")

        fd = os.open(self.lock_path, os.O_RDWR | os.O_CREAT, 0o664)
        try:
            fcntl.flock(fd, fcntl.LOCK_EX | fcntl.LOCK_NB)
        except BlockingIOError as exc:
            existing_pid = _read_pid(fd)
            os.close(fd)
            suffix = f" (PID {existing_pid})" if existing_pid else ""
            raise RunInProgressError(f"Another health check run is in progress{suffix}") from exc

        os.ftruncate(fd, 0)
        os.write(fd, str(os.getpid()).encode("utf-8"))
        os.fsync(fd)
        self._fd = fd

    def release(self) -> None:
        """Release the lock; the lock file is left for the next run."""

        if self._fd is None:
            return
        try:
            if fcntl is not None:
                fcntl.flock(self._fd, fcntl.LOCK_UN)
        finally:
            os.close(self._fd)
            self._fd = None


def _read_pid(fd: int) -> Optional[str]:
    try:
        data = os.pread(fd, 32, 0).decode("utf-8", errors="replace").strip()
    except OSError:  # Best-effort PID inspection  # policy_guard: allow-silent-handler
        return None
    return data or None


@contextmanager
def single_run_guard(lock_dir: Path) -> Iterator[RunLock]:
    """Context manager enforcing one monitor run at a time."""

    lock = RunLock(lock_dir)
    lock.acquire()
    try:
        yield lock
    finally:
        lock.release()


__all__ = ["LOCK_FILE_NAME", "RunInProgressError", "RunLock", "single_run_guard"]
