"""Root pytest configuration and shared fixtures."""

from __future__ import annotations

import dataclasses
from typing import Any, Callable
from unittest.mock import AsyncMock, MagicMock

import pytest

from healthcheck.config import Configuration
from healthcheck.probes import Probe, ProbeOutcome, ProbeResult


@pytest.fixture
def config_factory(tmp_path) -> Callable[..., Configuration]:
    """Provide a factory for configurations isolated under ``tmp_path``."""

    base = Configuration(
        app_url="http://app.test:5000",
        db_host="db.test",
        db_user="monitor",
        db_password="secret",
        db_name="app",
        app_log_path=tmp_path / "app" / "logs" / "app.log",
        log_dir=tmp_path / "logs",
        pacing_seconds=0,
    )

    def factory(**overrides: Any) -> Configuration:
        return dataclasses.replace(base, **overrides)

    return factory


@pytest.fixture
def config(config_factory) -> Configuration:
    return config_factory()


def make_result(name: str, outcome: ProbeOutcome = ProbeOutcome.OK, *alerts: str) -> ProbeResult:
    """Build a ProbeResult with a generic detail string."""
    return ProbeResult(name=name, outcome=outcome, detail=outcome.value, alerts=tuple(alerts))


@pytest.fixture
def result_factory():
    return make_result


class StubProbe(Probe):
    """Probe double returning a canned result or raising a canned error."""

    def __init__(self, name: str, result: ProbeResult | None = None, error: BaseException | None = None, pace_after: bool = False):
        self.name = name
        self.pace_after = pace_after
        super().__init__()
        self._canned = result if result is not None else make_result(name)
        self._error = error
        self.calls = 0

    async def run(self, config: Configuration) -> ProbeResult:
        self.calls += 1
        if self._error is not None:
            raise self._error
        return self._canned


@pytest.fixture
def stub_probe_factory():
    return StubProbe


def mock_http_session(*, status: int | None = None, error: BaseException | None = None) -> MagicMock:
    """Build an ``aiohttp.ClientSession`` replacement answering every request."""

    mock_response = MagicMock()
    mock_response.status = status
    mock_response.text = AsyncMock(return_value="body")

    request_cm = MagicMock()
    if error is not None:
        request_cm.__aenter__ = AsyncMock(side_effect=error)
    else:
        request_cm.__aenter__ = AsyncMock(return_value=mock_response)
    request_cm.__aexit__ = AsyncMock(return_value=None)

    mock_session = MagicMock()
    mock_session.__aenter__ = AsyncMock(return_value=mock_session)
    mock_session.__aexit__ = AsyncMock(return_value=None)
    mock_session.get = MagicMock(return_value=request_cm)
    mock_session.post = MagicMock(return_value=request_cm)
    return mock_session


@pytest.fixture
def http_session_factory():
    return mock_http_session
