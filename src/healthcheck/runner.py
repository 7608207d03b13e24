"""Probe execution: declared order, pacing and error containment."""

import asyncio
import logging
from typing import Awaitable, Callable, List, Optional, Sequence

from aiohttp import ClientError

from .config import Configuration, ConfigurationError
from .probes import CapabilityMissingError, Probe, ProbeError, ProbeResult, default_probes

logger = logging.getLogger(__name__)

# Expected failure modes; anything else escaping a probe is a programming error.
CONTAINED_ERRORS = (
    ConfigurationError,
    ProbeError,
    OSError,
    asyncio.TimeoutError,
    ClientError,
)


class ProbeRunner:
    """Runs the probe battery and returns one result per probe, in declared order."""

    def __init__(
        self,
        probes: Optional[Sequence[Probe]] = None,
        *,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.probes = list(probes) if probes is not None else default_probes()
        self._sleep = sleep

    async def run_probe(self, probe: Probe, config: Configuration) -> ProbeResult:
        """Run one probe, converting expected failures into a result."""
        try:
            return await probe.run(config)
        except CapabilityMissingError as exc:
            logger.warning("%s skipped: %s", probe.name, exc)
            return probe.skipped(str(exc))
        except CONTAINED_ERRORS as exc:
            logger.error("%s failed: %s", probe.name, exc)
            return probe.fail(str(exc), alerts=[f"Health check '{probe.name}' failed: {exc}"])

    async def run_all(self, config: Configuration) -> List[ProbeResult]:
        """
        Run every probe.

        Sequential mode pauses ``config.pacing_seconds`` after each paced probe.
        Parallel mode runs all probes at once; results keep declared order.
        """
        if config.parallel:
            results = await asyncio.gather(*(self.run_probe(probe, config) for probe in self.probes))
            return list(results)

        results = []
        for probe in self.probes:
            results.append(await self.run_probe(probe, config))
            if probe.pace_after and config.pacing_seconds > 0:
                await self._sleep(config.pacing_seconds)
        return results


__all__ = ["CONTAINED_ERRORS", "ProbeRunner"]
