"""Application log error scan."""

from __future__ import annotations

import re
from collections import deque
from pathlib import Path
from typing import Deque

from ..config import Configuration
from .base import Probe
from .types import ProbeResult

ERROR_PATTERN = re.compile(r"error|critical|exception", re.IGNORECASE)
LOG_NOT_MOUNTED = "log not mounted"


def tail_lines(path: Path, count: int) -> Deque[str]:
    """Return the last *count* lines of *path*."""

    with path.open("r", encoding="utf-8", errors="replace") as handle:
        return deque(handle, maxlen=count)


def count_error_lines(lines) -> int:
    return sum(1 for line in lines if ERROR_PATTERN.search(line))


class LogErrorScanProbe(Probe):
    """
    Counts error lines in the tail of the application log.

    The count only drives alerting: the outcome stays OK even above the
    threshold. A missing log file means the log directory is not mounted
    from the container and is not a failure.
    """

    name = "app_logs"

    async def run(self, config: Configuration) -> ProbeResult:
        config.require_valid("LOG_ERROR_THRESHOLD", "LOG_TAIL_LINES")
        app_log = config.app_log_path
        if not app_log.is_file():
            self.logger.info("Log file not found (probably not mounted from the container)")
            return self.ok(LOG_NOT_MOUNTED)

        try:
            errors = count_error_lines(tail_lines(app_log, config.log_tail_lines))
        except OSError as exc:
            self.logger.warning("Unable to read %s: %s", app_log, exc)
            return self.warn(f"log unreadable: {exc}")

        self.logger.info("Errors in logs: %d", errors)
        alerts = []
        if errors > config.log_error_threshold:
            alerts.append(f"Found {errors} errors in the last {config.log_tail_lines} application log lines")
        return self.ok(f"{errors} error lines in last {config.log_tail_lines}", alerts=alerts)
