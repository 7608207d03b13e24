from __future__ import annotations

"""Shared data structures for monitor alerting."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class AlerterError(RuntimeError):
    """Base exception for alerting failures."""


class AlertDeliveryError(AlerterError):
    """Raised when a forwarding channel fails to deliver an alert."""


class AlertSeverity(Enum):
    """Alert severity; the monitor raises every alert at one uniform level."""

    CRITICAL = "critical"


class AlertCategory(Enum):
    """Why an alert was raised."""

    PROBE_FAILURE = "probe_failure"
    THRESHOLD = "threshold"


@dataclass(frozen=True)
class Alert:
    """Simple alert data structure."""

    message: str
    category: AlertCategory = AlertCategory.PROBE_FAILURE
    probe: Optional[str] = None
    severity: AlertSeverity = AlertSeverity.CRITICAL
    emitted_at: datetime = field(default_factory=datetime.now)
