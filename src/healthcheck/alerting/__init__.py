"""Alerting support for the health monitor."""

from .forwarders import AlertForwarder, MailForwarder, WebhookForwarder, build_forwarders
from .models import Alert, AlertCategory, AlertDeliveryError, AlerterError, AlertSeverity
from .sink import AlertSink

__all__ = [
    "Alert",
    "AlertCategory",
    "AlertDeliveryError",
    "AlertForwarder",
    "AlertSeverity",
    "AlertSink",
    "AlerterError",
    "MailForwarder",
    "WebhookForwarder",
    "build_forwarders",
]
