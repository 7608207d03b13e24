from __future__ import annotations

"""External notification channels for alerts."""

import asyncio
from abc import ABC, abstractmethod
from typing import List

import aiohttp

from ..config import Configuration
from ..probes.command import require_tool, run_command
from ..probes.errors import ProbeError
from .models import Alert, AlertDeliveryError

MAIL_SUBJECT = "Flask App Health Alert"
FORWARD_TIMEOUT_SECONDS = 10.0

_HTTP_OK_MIN = 200
_HTTP_OK_MAX = 300


class AlertForwarder(ABC):
    """A best-effort delivery channel."""

    channel: str = "forwarder"

    @abstractmethod
    async def forward(self, alert: Alert) -> None:
        """Deliver *alert*; raise AlertDeliveryError on failure."""


class MailForwarder(AlertForwarder):
    """Pipes the alert text to the local ``mail`` command."""

    channel = "mail"

    def __init__(self, address: str, *, timeout_seconds: float = FORWARD_TIMEOUT_SECONDS) -> None:
        self.address = address
        self.timeout_seconds = timeout_seconds

    async def forward(self, alert: Alert) -> None:
        try:
            mail = require_tool("mail")
            output = await run_command(
                [mail, "-s", MAIL_SUBJECT, self.address],
                timeout_seconds=self.timeout_seconds,
                stdin_data=alert.message.encode("utf-8"),
            )
        except ProbeError as exc:
            raise AlertDeliveryError(f"mail to {self.address} failed: {exc}") from exc
        if output.returncode != 0:
            raise AlertDeliveryError(f"mail to {self.address} exited with status {output.returncode}")


class WebhookForwarder(AlertForwarder):
    """POSTs the alert as JSON to a webhook URL."""

    channel = "webhook"

    def __init__(self, url: str, *, timeout_seconds: float = FORWARD_TIMEOUT_SECONDS) -> None:
        self.url = url
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    @property
    def timeout(self) -> aiohttp.ClientTimeout:
        return self._timeout

    async def forward(self, alert: Alert) -> None:
        payload = {
            "text": alert.message,
            "emitted_at": alert.emitted_at.isoformat(timespec="seconds"),
            "category": alert.category.value,
            "severity": alert.severity.value,
            "probe": alert.probe,
        }
        try:
            async with aiohttp.ClientSession(timeout=self._timeout) as session:
                async with session.post(self.url, json=payload) as response:
                    if not _HTTP_OK_MIN <= response.status < _HTTP_OK_MAX:
                        body = await response.text()
                        raise AlertDeliveryError(f"webhook returned HTTP {response.status}: {body[:200]}")
        except (aiohttp.ClientError, OSError, asyncio.TimeoutError) as exc:
            raise AlertDeliveryError(f"webhook delivery failed: {exc}") from exc


def build_forwarders(config: Configuration) -> List[AlertForwarder]:
    """Return the forwarders enabled by configuration (possibly none)."""

    forwarders: List[AlertForwarder] = []
    if config.alert_email:
        forwarders.append(MailForwarder(config.alert_email))
    if config.alert_webhook_url:
        forwarders.append(WebhookForwarder(config.alert_webhook_url))
    return forwarders


__all__ = ["AlertForwarder", "MailForwarder", "WebhookForwarder", "build_forwarders"]
