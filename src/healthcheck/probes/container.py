"""Container liveness check via the docker CLI."""

from __future__ import annotations

from ..config import Configuration
from .base import Probe
from .command import require_tool, run_command
from .errors import CapabilityMissingError, ProbeExecutionError
from .types import ProbeResult

DOCKER_TIMEOUT_SECONDS = 10.0
_SHORT_ID_LENGTH = 12


class ContainerLivenessProbe(Probe):
    """Checks that the application container is listed as running."""

    name = "docker_container"
    pace_after = True

    async def run(self, config: Configuration) -> ProbeResult:
        container = config.container_name
        self.logger.info("Checking Docker container '%s'...", container)

        try:
            docker = require_tool("docker")
        except CapabilityMissingError:
            self.logger.error("Docker is not installed on this host")
            return self.fail(
                "docker not installed",
                alerts=["Docker not found; unable to check the application container"],
            )

        try:
            running = await self._is_running(docker, container)
        except ProbeExecutionError as exc:
            self.logger.error("Docker query failed: %s", exc)
            return self.fail(str(exc), alerts=[f"Docker container '{container}' could not be queried: {exc}"])

        if not running:
            self.logger.error("Container '%s' is not running or does not exist", container)
            return self.fail(
                f"container '{container}' not running",
                alerts=[f"Docker container '{container}' is not running"],
            )

        container_id = await self._short_id(docker, container)
        self.logger.info("Container is running (ID: %s)", container_id)
        return self.ok(f"running (ID: {container_id})")

    async def _is_running(self, docker: str, container: str) -> bool:
        output = await run_command(
            [docker, "ps", "-f", f"name={container}", "-f", "status=running", "--format", "{{.Names}}"],
            timeout_seconds=DOCKER_TIMEOUT_SECONDS,
        )
        if output.returncode != 0:
            raise ProbeExecutionError.command_failed("docker ps", output.returncode, output.stderr)
        # The name filter is a substring match; require the exact name.
        return container in (line.strip() for line in output.stdout.splitlines())

    async def _short_id(self, docker: str, container: str) -> str:
        try:
            output = await run_command(
                [docker, "inspect", "--format={{.Id}}", container],
                timeout_seconds=DOCKER_TIMEOUT_SECONDS,
            )
        except ProbeExecutionError:  # policy_guard: allow-silent-handler
            return "unknown"
        if output.returncode != 0:
            return "unknown"
        return output.stdout.strip()[:_SHORT_ID_LENGTH] or "unknown"
