"""Filesystem usage check."""

from __future__ import annotations

import psutil

from ..config import Configuration
from .base import Probe
from .errors import ProbeExecutionError
from .types import ProbeResult


class DiskSpaceProbe(Probe):
    """Fails and alerts when filesystem usage exceeds the configured percentage."""

    name = "disk_space"

    async def run(self, config: Configuration) -> ProbeResult:
        config.require_valid("DISK_THRESHOLD")
        try:
            usage = psutil.disk_usage(config.disk_path)
        except OSError as exc:
            raise ProbeExecutionError(f"Unable to read disk usage for {config.disk_path}: {exc}") from exc

        percent = usage.percent
        threshold = config.disk_threshold_percent
        self.logger.info("Disk usage: %.1f%%", percent)

        if percent > threshold:
            self.logger.warning("High disk usage: %.1f%%", percent)
            return self.fail(
                f"{percent:.1f}% used (threshold {threshold}%)",
                alerts=[f"Disk {config.disk_path} is {percent:.1f}% full (threshold: {threshold}%)"],
            )
        return self.ok(f"{percent:.1f}% used")
