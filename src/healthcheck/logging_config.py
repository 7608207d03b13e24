"""
Logging configuration for a single monitoring run.

A run writes to two append-only files in the log directory:
- healthcheck.log: leveled lines from every component plus the final report block
- healthcheck_alerts.log: one timestamped line per alert

Handlers are installed for the duration of ``monitor_logging`` and always
flushed and closed on exit, including when the run aborts.
"""

import logging
import logging.handlers
import sys
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List

# Thread-safe lock for logging configuration
_config_lock = threading.Lock()

PRIMARY_LOG_NAME = "healthcheck.log"
ALERT_LOG_NAME = "healthcheck_alerts.log"
ALERT_LOGGER_NAME = "healthcheck.alerts"
REPORT_LOGGER_NAME = "healthcheck.report"

_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_LINE_FORMAT = "[%(asctime)s] [%(levelname)s] %(message)s"
_ALERT_FORMAT = "[%(asctime)s] ALERT: %(message)s"
_REPORT_FORMAT = "%(message)s"


class LogSetupError(RuntimeError):
    """Raised when the log directory or files cannot be prepared."""


@dataclass
class MonitorLogs:
    """Paths and handlers owned by one monitoring run."""

    log_dir: Path
    primary_path: Path
    alert_path: Path
    handlers: List[tuple] = field(default_factory=list)
    saved_state: List[tuple] = field(default_factory=list)


def _build_file_handler(path: Path, fmt: str) -> logging.Handler:
    handler_cls = getattr(logging.handlers, "WatchedFileHandler", logging.FileHandler)
    handler = handler_cls(path, mode="a", encoding="utf-8")
    handler.setFormatter(logging.Formatter(fmt, _DATE_FORMAT))
    handler.setLevel(logging.INFO)
    return handler


def _build_console_handler() -> logging.Handler:
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter(_LINE_FORMAT, _DATE_FORMAT))
    console_handler.setLevel(logging.WARNING)
    return console_handler


def _suppress_noisy_third_parties() -> None:
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("aiohttp").setLevel(logging.WARNING)
    logging.getLogger("asyncpg").setLevel(logging.WARNING)


def _attach(logs: MonitorLogs, logger: logging.Logger, handler: logging.Handler) -> None:
    logger.addHandler(handler)
    logs.handlers.append((logger, handler))


def _close_handlers(logs: MonitorLogs) -> None:
    """Detach, flush and close every handler installed for the run."""
    for logger, handler in reversed(logs.handlers):
        logger.removeHandler(handler)
        try:
            handler.flush()
        finally:
            handler.close()
    logs.handlers.clear()


def _restore_loggers(logs: MonitorLogs) -> None:
    for logger, propagate, level in reversed(logs.saved_state):
        logger.propagate = propagate
        logger.setLevel(level)
    logs.saved_state.clear()


def _isolate(logs: MonitorLogs, logger: logging.Logger) -> logging.Logger:
    logs.saved_state.append((logger, logger.propagate, logger.level))
    logger.propagate = False
    logger.setLevel(logging.INFO)
    return logger


@contextmanager
def monitor_logging(log_dir: Path, *, console: bool = True) -> Iterator[MonitorLogs]:
    """
    Install primary, alert and report handlers for one run.

    Args:
        log_dir: Directory holding the log files (created if missing)
        console: Also echo WARNING and above to stderr

    Yields:
        MonitorLogs describing the files in use

    Raises:
        LogSetupError: If the directory or files cannot be created
    """
    logs = MonitorLogs(
        log_dir=log_dir,
        primary_path=log_dir / PRIMARY_LOG_NAME,
        alert_path=log_dir / ALERT_LOG_NAME,
    )
    root_logger = logging.getLogger()
    previous_level = root_logger.level

    with _config_lock:
        try:
            log_dir.mkdir(parents=True, exist_ok=True)
            _attach(logs, root_logger, _build_file_handler(logs.primary_path, _LINE_FORMAT))
            _attach(logs, _isolate(logs, logging.getLogger(ALERT_LOGGER_NAME)), _build_file_handler(logs.alert_path, _ALERT_FORMAT))
            _attach(logs, _isolate(logs, logging.getLogger(REPORT_LOGGER_NAME)), _build_file_handler(logs.primary_path, _REPORT_FORMAT))
        except OSError as exc:
            _close_handlers(logs)
            _restore_loggers(logs)
            raise LogSetupError(f"Unable to prepare log directory {log_dir}") from exc

        if console:
            _attach(logs, root_logger, _build_console_handler())
        root_logger.setLevel(logging.INFO)
        _suppress_noisy_third_parties()

    try:
        yield logs
    finally:
        with _config_lock:
            _close_handlers(logs)
            _restore_loggers(logs)
            root_logger.setLevel(previous_level)


__all__ = [
    "ALERT_LOGGER_NAME",
    "ALERT_LOG_NAME",
    "LogSetupError",
    "MonitorLogs",
    "PRIMARY_LOG_NAME",
    "REPORT_LOGGER_NAME",
    "monitor_logging",
]
