import dataclasses
import os
from pathlib import Path

import pytest

from healthcheck.config import Configuration, ConfigurationError, load_configuration
from healthcheck.config.runtime import PROJECT_ROOT

_CONST_80 = 80
_CONST_100 = 100
_DEFAULT_DB_PORT = 5432


def test_defaults_when_no_parameters(tmp_path):
    config = load_configuration(env_file=tmp_path / "missing.env", environ={})

    assert config.app_url == "http://localhost:5000"
    assert config.endpoint_url == "http://localhost:5000/register"
    assert config.container_name == "flask-application"
    assert config.db_port == _DEFAULT_DB_PORT
    assert config.db_host is None
    assert config.disk_threshold_percent == _CONST_80
    assert config.response_time_threshold_seconds == pytest.approx(5.0)
    assert config.log_tail_lines == _CONST_100
    assert config.alert_email is None
    assert config.alert_webhook_url is None
    assert config.parallel is False
    assert config.log_dir == PROJECT_ROOT / "logs"
    assert config.app_log_path == PROJECT_ROOT / "flask-auth-example" / "logs" / "app.log"


def test_env_file_values_are_loaded(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("DB_HOST=db\nDB_USER=app\nDB_NAME=appdb\nDB_PORT = 6000\nALERT_EMAIL=ops@example.com\n", encoding="utf-8")

    config = load_configuration(env_file=env_file, environ={})

    settings = config.require_database()
    assert (settings.host, settings.port, settings.user, settings.name) == ("db", 6000, "app", "appdb")
    assert settings.password is None
    assert config.alert_email == "ops@example.com"


def test_environment_overrides_env_file(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("DB_HOST=from-file\nDISK_THRESHOLD=70\n", encoding="utf-8")

    config = load_configuration(env_file=env_file, environ={"DB_HOST": "from-env"})

    assert config.db_host == "from-env"
    assert config.disk_threshold_percent == 70


def test_loading_does_not_touch_process_environment(tmp_path, monkeypatch):
    monkeypatch.delenv("DB_HOST", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("DB_HOST=db\n", encoding="utf-8")

    load_configuration(env_file=env_file)

    assert "DB_HOST" not in os.environ


def test_env_file_defaults_to_app_dir(tmp_path):
    app_dir = tmp_path / "app"
    app_dir.mkdir()
    (app_dir / ".env").write_text("CONTAINER_NAME=web\n", encoding="utf-8")

    config = load_configuration(environ={"APP_DIR": str(app_dir)})

    assert config.container_name == "web"
    assert config.app_log_path == app_dir / "logs" / "app.log"


def test_relative_paths_resolve_against_roots(tmp_path):
    config = load_configuration(
        env_file=tmp_path / "none.env",
        environ={"APP_DIR": str(tmp_path), "APP_LOG_PATH": "var/app.log", "HEALTHCHECK_LOG_DIR": "monitor-logs"},
    )

    assert config.app_log_path == tmp_path / "var" / "app.log"
    assert config.log_dir == PROJECT_ROOT / "monitor-logs"


def test_blank_values_fall_back_to_defaults(tmp_path):
    config = load_configuration(env_file=tmp_path / "none.env", environ={"APP_URL": "  ", "ALERT_EMAIL": ""})

    assert config.app_url == "http://localhost:5000"
    assert config.alert_email is None


@pytest.mark.parametrize(
    ("key", "value", "message"),
    [
        ("HEALTHCHECK_PARALLEL", "maybe", "a boolean"),
        ("PROBE_PACING_SECONDS", "slow", "a number"),
        ("PROBE_PACING_SECONDS", "-1", "non-negative"),
    ],
)
def test_malformed_run_wide_values_raise(tmp_path, key, value, message):
    with pytest.raises(ConfigurationError, match=message):
        load_configuration(env_file=tmp_path / "none.env", environ={key: value})


@pytest.mark.parametrize(
    ("key", "value", "attribute", "default", "message"),
    [
        ("DB_PORT", "abc", "db_port", 5432, "an integer"),
        ("RESPONSE_TIME_THRESHOLD", "fast", "response_time_threshold_seconds", 5.0, "a number"),
        ("DISK_THRESHOLD", "-1", "disk_threshold_percent", 80, "non-negative"),
        ("LOG_ERROR_THRESHOLD", "many", "log_error_threshold", 10, "an integer"),
        ("LOG_TAIL_LINES", "-5", "log_tail_lines", 100, "non-negative"),
    ],
)
def test_malformed_per_check_values_are_deferred(tmp_path, key, value, attribute, default, message):
    config = load_configuration(env_file=tmp_path / "none.env", environ={key: value})

    assert getattr(config, attribute) == default
    config.require_valid("APP_URL")
    with pytest.raises(ConfigurationError, match=message):
        config.require_valid(key)


def test_require_database_rejects_malformed_port(tmp_path):
    config = load_configuration(
        env_file=tmp_path / "none.env",
        environ={"DB_HOST": "db", "DB_USER": "app", "DB_NAME": "appdb", "DB_PORT": "abc"},
    )

    with pytest.raises(ConfigurationError, match="DB_PORT has invalid format"):
        config.require_database()


def test_parallel_flag(tmp_path):
    config = load_configuration(env_file=tmp_path / "none.env", environ={"HEALTHCHECK_PARALLEL": "yes"})
    assert config.parallel is True


def test_require_database_names_missing_keys():
    config = Configuration(db_host="db")

    with pytest.raises(ConfigurationError, match="DB_USER, DB_NAME is missing or empty"):
        config.require_database()


def test_configuration_is_immutable():
    config = Configuration()

    with pytest.raises(dataclasses.FrozenInstanceError):
        config.app_url = "http://elsewhere"  # type: ignore[misc]


def test_endpoint_url_joins_slashes():
    config = Configuration(app_url="http://host:5000/", endpoint_path="register")
    assert config.endpoint_url == "http://host:5000/register"
    assert isinstance(config.log_dir, Path)
