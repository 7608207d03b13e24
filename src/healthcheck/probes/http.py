"""HTTP-based probes for the application root and a specific endpoint."""

from __future__ import annotations

import asyncio
import time
from abc import abstractmethod
from typing import FrozenSet, Tuple

import aiohttp
from aiohttp import ClientError, ClientTimeout

from ..config import Configuration
from .base import Probe
from .types import ProbeResult

UNREACHABLE_STATUS = "000"
ROOT_TIMEOUT_SECONDS = 10.0
ENDPOINT_TIMEOUT_SECONDS = 5.0


class HttpProbe(Probe):
    """GETs a URL and passes when the status code is in ``accepted_statuses``."""

    accepted_statuses: FrozenSet[int] = frozenset({200})
    timeout_seconds: float = ENDPOINT_TIMEOUT_SECONDS

    @abstractmethod
    def target_url(self, config: Configuration) -> str:
        """Return the URL this probe requests."""

    async def fetch_status(self, url: str) -> Tuple[str, float]:
        """
        Issue a single GET without following redirects.

        Args:
            url: Target URL

        Returns:
            Tuple of (status code as string, elapsed seconds); the status is
            ``"000"`` when the server could not be reached
        """
        start_time = time.monotonic()
        try:
            async with aiohttp.ClientSession() as session:
                timeout = ClientTimeout(total=self.timeout_seconds)
                async with session.get(url, timeout=timeout, allow_redirects=False) as response:
                    status = str(response.status)
        except asyncio.TimeoutError:  # policy_guard: allow-silent-handler
            self.logger.warning("HTTP request to %s timed out after %ss", url, self.timeout_seconds)
            status = UNREACHABLE_STATUS
        except (ClientError, OSError, ValueError) as exc:  # policy_guard: allow-silent-handler
            self.logger.warning("HTTP request to %s failed: %s", url, exc)
            status = UNREACHABLE_STATUS
        return status, time.monotonic() - start_time

    def is_accepted(self, status: str) -> bool:
        return status.isdigit() and int(status) in self.accepted_statuses


class HttpRootProbe(HttpProbe):
    """Application root must answer 200 or 302; slow answers raise an alert only."""

    name = "http_status"
    pace_after = True
    accepted_statuses = frozenset({200, 302})
    timeout_seconds = ROOT_TIMEOUT_SECONDS

    def target_url(self, config: Configuration) -> str:
        return config.app_url

    async def run(self, config: Configuration) -> ProbeResult:
        config.require_valid("RESPONSE_TIME_THRESHOLD")
        url = self.target_url(config)
        self.logger.info("Checking HTTP status (%s)...", url)
        status, elapsed = await self.fetch_status(url)

        if not self.is_accepted(status):
            self.logger.error("HTTP: %s (FAILED)", status)
            return self.fail(
                f"HTTP {status}",
                duration=elapsed,
                alerts=[f"Web server unavailable. HTTP code: {status}"],
            )

        self.logger.info("HTTP: %s (OK), response time: %.2fs", status, elapsed)
        alerts = []
        threshold = config.response_time_threshold_seconds
        if elapsed > threshold:
            alerts.append(f"Slow response: {elapsed:.2f}s (threshold: {threshold:g}s)")
        return self.ok(f"HTTP {status}", duration=elapsed, alerts=alerts)


class HttpEndpointProbe(HttpProbe):
    """A specific application path must answer exactly 200."""

    name = "app_endpoint"
    pace_after = True
    accepted_statuses = frozenset({200})
    timeout_seconds = ENDPOINT_TIMEOUT_SECONDS

    def target_url(self, config: Configuration) -> str:
        return config.endpoint_url

    async def run(self, config: Configuration) -> ProbeResult:
        path = config.endpoint_path
        self.logger.info("Checking endpoint %s...", path)
        status, elapsed = await self.fetch_status(self.target_url(config))

        if self.is_accepted(status):
            self.logger.info("%s is available (HTTP %s)", path, status)
            return self.ok(f"HTTP {status}", duration=elapsed)

        self.logger.error("%s is unavailable (HTTP %s)", path, status)
        return self.fail(
            f"HTTP {status}",
            duration=elapsed,
            alerts=[f"Endpoint {path} unavailable. HTTP code: {status}"],
        )
