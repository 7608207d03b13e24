"""Fold probe results into a single run verdict."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Iterable, Optional, Tuple

from .probes.types import ProbeResult


class OverallStatus(Enum):
    """Overall health of one monitoring pass"""

    HEALTHY = "HEALTHY"
    UNHEALTHY = "UNHEALTHY"


@dataclass(frozen=True)
class RunReport:
    """Summary of one complete monitoring pass"""

    timestamp: datetime
    overall_status: OverallStatus
    failed_probes: Tuple[str, ...] = ()
    results: Tuple[ProbeResult, ...] = field(default=(), compare=False)

    @property
    def healthy(self) -> bool:
        return self.overall_status == OverallStatus.HEALTHY

    @property
    def exit_code(self) -> int:
        return 0 if self.healthy else 1


def aggregate(results: Iterable[ProbeResult], timestamp: Optional[datetime] = None) -> RunReport:
    """
    Build the run report; any FAIL makes the run UNHEALTHY.

    WARN and SKIPPED results never contribute to failure. ``failed_probes``
    keeps the order of *results* and lists each name once.

    Args:
        results: Probe results in declared probe order
        timestamp: Report time (defaults to now)

    Returns:
        RunReport for the pass
    """
    ordered = tuple(results)
    failed = tuple(dict.fromkeys(result.name for result in ordered if result.failed))
    status = OverallStatus.UNHEALTHY if failed else OverallStatus.HEALTHY
    return RunReport(
        timestamp=timestamp or datetime.now(),
        overall_status=status,
        failed_probes=failed,
        results=ordered,
    )


__all__ = ["OverallStatus", "RunReport", "aggregate"]
