"""Tests for per-run logging setup."""

import logging

import pytest

from healthcheck.logging_config import (
    ALERT_LOG_NAME,
    ALERT_LOGGER_NAME,
    PRIMARY_LOG_NAME,
    REPORT_LOGGER_NAME,
    LogSetupError,
    monitor_logging,
)


def _read(path):
    return path.read_text(encoding="utf-8") if path.exists() else ""


def test_creates_directory_and_files(tmp_path):
    log_dir = tmp_path / "nested" / "logs"

    with monitor_logging(log_dir, console=False) as logs:
        assert logs.primary_path == log_dir / PRIMARY_LOG_NAME
        assert logs.alert_path == log_dir / ALERT_LOG_NAME

    assert (log_dir / PRIMARY_LOG_NAME).exists()
    assert (log_dir / ALERT_LOG_NAME).exists()


def test_primary_line_format(tmp_path):
    with monitor_logging(tmp_path, console=False) as logs:
        logging.getLogger("healthcheck.probes.base.disk_space").warning("High disk usage: %.1f%%", 91.0)

    content = _read(logs.primary_path)
    assert "] [WARNING] High disk usage: 91.0%" in content
    assert content.startswith("[")


def test_alerts_go_only_to_alert_log(tmp_path):
    with monitor_logging(tmp_path, console=False) as logs:
        logging.getLogger(ALERT_LOGGER_NAME).critical("Disk / is 91.0% full (threshold: 80%)")

    alert_lines = _read(logs.alert_path).splitlines()
    assert len(alert_lines) == 1
    assert alert_lines[0].endswith("] ALERT: Disk / is 91.0% full (threshold: 80%)")
    assert "ALERT" not in _read(logs.primary_path)


def test_report_block_written_verbatim(tmp_path):
    with monitor_logging(tmp_path, console=False) as logs:
        logging.getLogger(REPORT_LOGGER_NAME).info("=====\nOverall status: HEALTHY")

    assert "=====\nOverall status: HEALTHY\n" in _read(logs.primary_path)
    assert _read(logs.alert_path) == ""


def test_files_are_appended_across_runs(tmp_path):
    for run in range(2):
        with monitor_logging(tmp_path, console=False):
            logging.getLogger("healthcheck.monitor").info("run %d", run)

    content = _read(tmp_path / PRIMARY_LOG_NAME)
    assert "run 0" in content
    assert "run 1" in content


def test_handlers_removed_on_exit(tmp_path):
    root_logger = logging.getLogger()
    before = list(root_logger.handlers)
    previous_level = root_logger.level

    with monitor_logging(tmp_path) as logs:
        installed = list(logs.handlers)
        assert len(root_logger.handlers) == len(before) + 2

    assert root_logger.handlers == before
    assert root_logger.level == previous_level
    for logger, handler in installed:
        assert handler not in logger.handlers


def test_handlers_closed_when_run_aborts(tmp_path):
    with pytest.raises(RuntimeError):
        with monitor_logging(tmp_path, console=False) as logs:
            installed = list(logs.handlers)
            raise RuntimeError("boom")

    assert logs.handlers == []
    for logger, handler in installed:
        assert handler not in logger.handlers


def test_isolated_loggers_restored_on_exit(tmp_path):
    alert_logger = logging.getLogger(ALERT_LOGGER_NAME)
    alert_logger.propagate = True
    alert_logger.setLevel(logging.NOTSET)

    with monitor_logging(tmp_path, console=False):
        assert alert_logger.propagate is False
        assert alert_logger.level == logging.INFO

    assert alert_logger.propagate is True
    assert alert_logger.level == logging.NOTSET
    report_logger = logging.getLogger(REPORT_LOGGER_NAME)
    assert report_logger.propagate is True


def test_unusable_directory_raises(tmp_path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("", encoding="utf-8")

    with pytest.raises(LogSetupError, match="Unable to prepare log directory"):
        with monitor_logging(blocker / "logs"):
            pass
