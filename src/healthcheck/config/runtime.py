from __future__ import annotations

"""Deployment configuration loaded once per monitoring run."""


import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Mapping, Optional, Tuple, TypeVar

from .dotenv_loader import DotenvLoader
from .errors import ConfigurationError

_TRUE_VALUES = {"1", "true", "t", "yes", "y", "on"}
_FALSE_VALUES = {"0", "false", "f", "no", "n", "off"}

PROJECT_ROOT = Path(__file__).resolve().parents[3]

DEFAULT_APP_URL = "http://localhost:5000"
DEFAULT_ENDPOINT_PATH = "/register"
DEFAULT_CONTAINER_NAME = "flask-application"
DEFAULT_DB_PORT = 5432
DEFAULT_DISK_THRESHOLD_PERCENT = 80
DEFAULT_RESPONSE_TIME_THRESHOLD_SECONDS = 5.0
DEFAULT_LOG_ERROR_THRESHOLD = 10
DEFAULT_LOG_TAIL_LINES = 100
DEFAULT_PACING_SECONDS = 1.0

_DATABASE_KEYS = ("DB_HOST", "DB_USER", "DB_NAME")

T = TypeVar("T")


@dataclass(frozen=True)
class DatabaseSettings:
    host: str
    port: int
    user: str
    name: str
    password: Optional[str] = None


@dataclass(frozen=True)
class Configuration:
    """Read-only deployment parameters shared by every probe."""

    app_url: str = DEFAULT_APP_URL
    endpoint_path: str = DEFAULT_ENDPOINT_PATH
    container_name: str = DEFAULT_CONTAINER_NAME
    db_host: Optional[str] = None
    db_port: int = DEFAULT_DB_PORT
    db_user: Optional[str] = None
    db_password: Optional[str] = None
    db_name: Optional[str] = None
    disk_path: str = "/"
    disk_threshold_percent: int = DEFAULT_DISK_THRESHOLD_PERCENT
    response_time_threshold_seconds: float = DEFAULT_RESPONSE_TIME_THRESHOLD_SECONDS
    log_error_threshold: int = DEFAULT_LOG_ERROR_THRESHOLD
    log_tail_lines: int = DEFAULT_LOG_TAIL_LINES
    app_log_path: Path = PROJECT_ROOT / "flask-auth-example" / "logs" / "app.log"
    log_dir: Path = PROJECT_ROOT / "logs"
    alert_email: Optional[str] = None
    alert_webhook_url: Optional[str] = None
    pacing_seconds: float = DEFAULT_PACING_SECONDS
    parallel: bool = False
    invalid_parameters: Tuple[Tuple[str, str], ...] = ()

    def require_valid(self, *names: str) -> None:
        """
        Raise for the first of *names* that held a malformed value at load time.

        Probe-specific parameters are validated when the probe that reads them
        runs, so one bad value fails only that probe.

        Raises:
            ConfigurationError: With the original parse error message
        """
        invalid = dict(self.invalid_parameters)
        for name in names:
            if name in invalid:
                raise ConfigurationError(invalid[name])

    @property
    def endpoint_url(self) -> str:
        return f"{self.app_url.rstrip('/')}/{self.endpoint_path.lstrip('/')}"

    def require_database(self) -> DatabaseSettings:
        """Return database settings or raise when required keys are absent."""

        values = {"DB_HOST": self.db_host, "DB_USER": self.db_user, "DB_NAME": self.db_name}
        missing = [key for key in _DATABASE_KEYS if not values[key]]
        if missing:
            raise ConfigurationError.missing_value(", ".join(missing), "PostgreSQL settings are not configured")
        self.require_valid("DB_PORT")
        assert self.db_host and self.db_user and self.db_name
        return DatabaseSettings(
            host=self.db_host,
            port=self.db_port,
            user=self.db_user,
            name=self.db_name,
            password=self.db_password,
        )


class _ParameterReader:
    """Typed lookups over a merged parameter mapping."""

    def __init__(self, values: Mapping[str, str]) -> None:
        self._values = values
        self.invalid: Dict[str, str] = {}

    def text(self, name: str, or_value: Optional[str] = None) -> Optional[str]:
        value = self._values.get(name)
        if value is None:
            return or_value
        value = value.strip()
        if value == "":
            return or_value
        return value

    def text_or(self, name: str, or_value: str) -> str:
        value = self.text(name)
        return or_value if value is None else value

    def integer(self, name: str, or_value: int) -> int:
        raw = self.text(name)
        if raw is None:
            return or_value
        try:
            return int(raw)
        except ValueError as exc:
            raise ConfigurationError.invalid_format(name, raw, "an integer") from exc

    def number(self, name: str, or_value: float) -> float:
        raw = self.text(name)
        if raw is None:
            return or_value
        try:
            return float(raw)
        except ValueError as exc:
            raise ConfigurationError.invalid_format(name, raw, "a number") from exc

    def flag(self, name: str, or_value: bool) -> bool:
        raw = self.text(name)
        if raw is None:
            return or_value
        lowered = raw.lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        raise ConfigurationError.invalid_format(name, raw, "a boolean")

    def non_negative(self, name: str, value):
        if value < 0:
            raise ConfigurationError.invalid_value(name, value, "Must be non-negative")
        return value

    def non_negative_integer(self, name: str, or_value: int) -> int:
        return self.non_negative(name, self.integer(name, or_value))

    def non_negative_number(self, name: str, or_value: float) -> float:
        return self.non_negative(name, self.number(name, or_value))

    def deferred(self, name: str, or_value: T, read: Callable[[str, T], T]) -> T:
        """Read a probe-specific value; a malformed one is recorded and replaced by *or_value*."""
        try:
            return read(name, or_value)
        except ConfigurationError as exc:
            self.invalid[name] = str(exc)
            return or_value


def _resolve_path(raw: Optional[str], base: Path, fallback: Path) -> Path:
    if raw is None:
        return fallback
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = base / path
    return path


def load_configuration(
    env_file: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Configuration:
    """
    Build the run configuration from a .env file and the process environment.

    Environment values take precedence; the .env file supplies the rest. Neither
    source is modified.

    Args:
        env_file: Path to the deployment .env file (defaults to ``<APP_DIR>/.env``)
        environ: Environment mapping (defaults to ``os.environ``)

    Returns:
        Immutable Configuration

    Raises:
        ConfigurationError: If the file is unreadable or a run-wide value is malformed
    """
    environment = dict(os.environ if environ is None else environ)
    app_dir = _resolve_path(environment.get("APP_DIR"), PROJECT_ROOT, PROJECT_ROOT / "flask-auth-example")
    if env_file is None:
        env_file = app_dir / ".env"

    merged = DotenvLoader.load_from_file(env_file)
    merged.update(environment)
    reader = _ParameterReader(merged)

    # Run-wide values are validated here; probe-specific ones are deferred.
    pacing_seconds = reader.non_negative_number("PROBE_PACING_SECONDS", DEFAULT_PACING_SECONDS)
    parallel = reader.flag("HEALTHCHECK_PARALLEL", False)

    return Configuration(
        app_url=reader.text_or("APP_URL", DEFAULT_APP_URL),
        endpoint_path=reader.text_or("APP_ENDPOINT", DEFAULT_ENDPOINT_PATH),
        container_name=reader.text_or("CONTAINER_NAME", DEFAULT_CONTAINER_NAME),
        db_host=reader.text("DB_HOST"),
        db_port=reader.deferred("DB_PORT", DEFAULT_DB_PORT, reader.integer),
        db_user=reader.text("DB_USER"),
        db_password=reader.text("DB_PASSWORD"),
        db_name=reader.text("DB_NAME"),
        disk_path=reader.text_or("DISK_PATH", "/"),
        disk_threshold_percent=reader.deferred(
            "DISK_THRESHOLD", DEFAULT_DISK_THRESHOLD_PERCENT, reader.non_negative_integer
        ),
        response_time_threshold_seconds=reader.deferred(
            "RESPONSE_TIME_THRESHOLD", DEFAULT_RESPONSE_TIME_THRESHOLD_SECONDS, reader.non_negative_number
        ),
        log_error_threshold=reader.deferred(
            "LOG_ERROR_THRESHOLD", DEFAULT_LOG_ERROR_THRESHOLD, reader.non_negative_integer
        ),
        log_tail_lines=reader.deferred("LOG_TAIL_LINES", DEFAULT_LOG_TAIL_LINES, reader.non_negative_integer),
        app_log_path=_resolve_path(reader.text("APP_LOG_PATH"), app_dir, app_dir / "logs" / "app.log"),
        log_dir=_resolve_path(reader.text("HEALTHCHECK_LOG_DIR"), PROJECT_ROOT, PROJECT_ROOT / "logs"),
        alert_email=reader.text("ALERT_EMAIL"),
        alert_webhook_url=reader.text("ALERT_WEBHOOK_URL"),
        pacing_seconds=pacing_seconds,
        parallel=parallel,
        invalid_parameters=tuple(reader.invalid.items()),
    )


__all__ = [
    "Configuration",
    "ConfigurationError",
    "DatabaseSettings",
    "PROJECT_ROOT",
    "load_configuration",
]
