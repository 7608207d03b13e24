"""PostgreSQL connectivity check."""

from __future__ import annotations

import asyncio

try:  # pragma: no cover - optional dependency
    import asyncpg
except ImportError:  # pragma: no cover - asyncpg not installed on some monitoring hosts
    asyncpg = None

from ..config import Configuration, ConfigurationError
from .base import Probe
from .types import ProbeResult

DATABASE_TIMEOUT_SECONDS = 10.0

DATABASE_ERRORS = (OSError, asyncio.TimeoutError) + ((asyncpg.PostgresError, asyncpg.InterfaceError) if asyncpg else ())


class DatabaseProbe(Probe):
    """Runs ``SELECT 1`` against the configured database."""

    name = "database"

    async def run(self, config: Configuration) -> ProbeResult:
        self.logger.info("Checking PostgreSQL connectivity...")
        config.require_valid("DB_PORT")
        try:
            settings = config.require_database()
        except ConfigurationError as exc:
            self.logger.error("Database settings missing: %s", exc)
            return self.fail(str(exc), alerts=["PostgreSQL environment variables are not set"])

        if asyncpg is None:
            self.logger.warning("PostgreSQL client (asyncpg) not installed, database check skipped")
            return self.skipped("asyncpg not installed")

        target = f"{settings.host}:{settings.port}"
        try:
            await self._select_one(settings)
        except DATABASE_ERRORS as exc:
            self.logger.error("PostgreSQL error: %s", exc)
            return self.fail(f"{target}: {exc}", alerts=[f"Unable to connect to PostgreSQL at {target}"])

        self.logger.info("PostgreSQL: OK (%s)", target)
        return self.ok(target)

    async def _select_one(self, settings) -> None:
        connection = await asyncpg.connect(
            host=settings.host,
            port=settings.port,
            user=settings.user,
            password=settings.password,
            database=settings.name,
            timeout=DATABASE_TIMEOUT_SECONDS,
        )
        try:
            await asyncio.wait_for(connection.fetchval("SELECT 1"), timeout=DATABASE_TIMEOUT_SECONDS)
        finally:
            await connection.close()
