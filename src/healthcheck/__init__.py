"""
Deployment health monitor.

Runs a fixed battery of probes (container, HTTP root, HTTP endpoint, database,
disk, application logs) against a deployed application, records results and
alerts in append-only logs and reports overall health through the exit status.
"""

from .aggregator import OverallStatus, RunReport, aggregate
from .config import Configuration, ConfigurationError, load_configuration
from .monitor import main, run_monitor
from .probes import ProbeOutcome, ProbeResult
from .report import render_report

__all__ = [
    "Configuration",
    "ConfigurationError",
    "OverallStatus",
    "ProbeOutcome",
    "ProbeResult",
    "RunReport",
    "aggregate",
    "load_configuration",
    "main",
    "render_report",
    "run_monitor",
]
