"""Durable alert log plus best-effort forwarding."""

import logging
from typing import Iterable, List, Optional

from ..logging_config import ALERT_LOGGER_NAME
from .forwarders import AlertForwarder
from .models import Alert, AlertCategory, AlertDeliveryError

logger = logging.getLogger(__name__)


class AlertSink:
    """
    Records every alert in the alert log and forwards it to configured channels.

    The alert log is the durable record; forwarding failures are logged and
    never escalate. There is no deduplication: each call produces one alert.
    """

    def __init__(
        self,
        forwarders: Iterable[AlertForwarder] = (),
        *,
        alert_logger: Optional[logging.Logger] = None,
    ):
        self.forwarders = list(forwarders)
        self.alert_logger = alert_logger or logging.getLogger(ALERT_LOGGER_NAME)
        self.emitted: List[Alert] = []

    async def emit(
        self,
        message: str,
        *,
        category: AlertCategory = AlertCategory.PROBE_FAILURE,
        probe: Optional[str] = None,
    ) -> Alert:
        """
        Emit one alert.

        Args:
            message: Human-readable alert text
            category: Why the alert was raised
            probe: Name of the originating probe, if any

        Returns:
            The recorded Alert
        """
        alert = Alert(message=message, category=category, probe=probe)
        self.alert_logger.critical(message)
        self.emitted.append(alert)

        for forwarder in self.forwarders:
            try:
                await forwarder.forward(alert)
            except AlertDeliveryError as exc:  # policy_guard: allow-silent-handler
                logger.warning("Alert forwarding via %s failed: %s", forwarder.channel, exc)

        return alert
