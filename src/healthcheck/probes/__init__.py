"""Health probes: one independent check per aspect of the deployment."""

from typing import List

from .base import Probe
from .container import ContainerLivenessProbe
from .database import DatabaseProbe
from .disk import DiskSpaceProbe
from .errors import CapabilityMissingError, ProbeError, ProbeExecutionError
from .http import HttpEndpointProbe, HttpRootProbe
from .logs import LogErrorScanProbe
from .types import ProbeOutcome, ProbeResult


def default_probes() -> List[Probe]:
    """Return the probe battery in its declared execution order."""
    return [
        ContainerLivenessProbe(),
        HttpRootProbe(),
        HttpEndpointProbe(),
        DatabaseProbe(),
        DiskSpaceProbe(),
        LogErrorScanProbe(),
    ]


__all__ = [
    "CapabilityMissingError",
    "ContainerLivenessProbe",
    "DatabaseProbe",
    "DiskSpaceProbe",
    "HttpEndpointProbe",
    "HttpRootProbe",
    "LogErrorScanProbe",
    "Probe",
    "ProbeError",
    "ProbeExecutionError",
    "ProbeOutcome",
    "ProbeResult",
    "default_probes",
]
