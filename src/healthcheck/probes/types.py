"""Type definitions for health probes."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple


class ProbeOutcome(Enum):
    """Outcome of a single probe invocation"""

    OK = "ok"
    FAIL = "fail"
    WARN = "warn"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class ProbeResult:
    """Probe outcome plus the alerts it wants raised for this run"""

    name: str
    outcome: ProbeOutcome
    detail: str
    measured_at: datetime = field(default_factory=datetime.now)
    duration: Optional[float] = None
    alerts: Tuple[str, ...] = ()

    @property
    def failed(self) -> bool:
        return self.outcome == ProbeOutcome.FAIL
