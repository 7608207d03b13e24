"""Shared probe contract."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Iterable, Optional

from ..config import Configuration
from .types import ProbeOutcome, ProbeResult


class Probe(ABC):
    """Abstract base for a single independent health check."""

    name: str = "probe"
    pace_after: bool = False

    def __init__(self) -> None:
        self.logger = logging.getLogger(f"{__name__}.{self.name}")

    @abstractmethod
    async def run(self, config: Configuration) -> ProbeResult:
        """Perform the check and return exactly one result."""

    def ok(self, detail: str, *, duration: Optional[float] = None, alerts: Iterable[str] = ()) -> ProbeResult:
        return self._build_result(ProbeOutcome.OK, detail, duration=duration, alerts=alerts)

    def fail(self, detail: str, *, duration: Optional[float] = None, alerts: Iterable[str] = ()) -> ProbeResult:
        return self._build_result(ProbeOutcome.FAIL, detail, duration=duration, alerts=alerts)

    def warn(self, detail: str, *, alerts: Iterable[str] = ()) -> ProbeResult:
        return self._build_result(ProbeOutcome.WARN, detail, alerts=alerts)

    def skipped(self, detail: str) -> ProbeResult:
        return self._build_result(ProbeOutcome.SKIPPED, detail)

    def _build_result(
        self,
        outcome: ProbeOutcome,
        detail: str,
        *,
        duration: Optional[float] = None,
        alerts: Iterable[str] = (),
    ) -> ProbeResult:
        return ProbeResult(name=self.name, outcome=outcome, detail=detail, duration=duration, alerts=tuple(alerts))
