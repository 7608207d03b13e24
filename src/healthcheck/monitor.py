"""
Health monitor entry point.

Intended for periodic invocation by a scheduler, e.g.::

    */10 * * * * /opt/app/.venv/bin/healthcheck >> /var/log/healthcheck-cron.log 2>&1

Exit status is 0 when every probe passed and 1 otherwise.
"""

import asyncio
import logging
import sys
from typing import Optional

from .aggregator import RunReport, aggregate
from .alerting import AlertCategory, AlertSink, build_forwarders
from .config import Configuration, ConfigurationError, load_configuration
from .instance_lock import RunInProgressError, single_run_guard
from .logging_config import REPORT_LOGGER_NAME, monitor_logging
from .report import render_report
from .runner import ProbeRunner

logger = logging.getLogger(__name__)


async def run_monitor(
    config: Configuration,
    *,
    runner: Optional[ProbeRunner] = None,
    sink: Optional[AlertSink] = None,
) -> RunReport:
    """
    Execute one monitoring pass.

    Args:
        config: Run configuration
        runner: Probe runner (defaults to the standard probe battery)
        sink: Alert sink (defaults to one forwarding per configuration)

    Returns:
        RunReport for the pass
    """
    runner = runner or ProbeRunner()
    sink = sink or AlertSink(build_forwarders(config))

    logger.info("========== Health check started ==========")
    results = await runner.run_all(config)

    for result in results:
        category = AlertCategory.PROBE_FAILURE if result.failed else AlertCategory.THRESHOLD
        for message in result.alerts:
            await sink.emit(message, category=category, probe=result.name)

    report = aggregate(results)
    if report.healthy:
        logger.info("All checks passed")
    else:
        logger.error("Failed checks: %s", " ".join(report.failed_probes))
    logging.getLogger(REPORT_LOGGER_NAME).info(render_report(report))
    return report


def main() -> int:
    """Run one monitoring pass and return the process exit status."""
    try:
        config = load_configuration()
    except ConfigurationError as exc:
        sys.stderr.write(f"healthcheck: invalid configuration: {exc}\n")
        return 1

    try:
        with monitor_logging(config.log_dir):
            with single_run_guard(config.log_dir):
                report = asyncio.run(run_monitor(config))
    except RunInProgressError as exc:
        sys.stderr.write(f"healthcheck: {exc}; skipping this run\n")
        return 0

    return report.exit_code


if __name__ == "__main__":
    sys.exit(main())
