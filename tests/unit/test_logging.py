"""Unit tests for logging configuration."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
import json
import logging
import sys

from devflow.core.config import Settings
from devflow.core.config import redact_database_url
from devflow.core.logging import JsonLogFormatter
from devflow.core.logging import build_formatter
from devflow.core.logging import configure_logging


def _settings(environment: str = "development", log_level: str = "INFO") -> Settings:
    return Settings(
        api_base_url="http://localhost:8000/api",
        database_url="postgresql+psycopg://devflow:hunter2@db:5432/devflow",
        environment=environment,
        log_level=log_level,
        http_timeout_seconds=5.0,
    )


@contextmanager
def _preserved_root_logger() -> Iterator[logging.Logger]:
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    try:
        yield root
    finally:
        root.handlers[:] = handlers
        root.setLevel(level)


def test_json_formatter_emits_single_line_with_extras() -> None:
    record = logging.LogRecord(
        name="devflow.test",
        level=logging.WARNING,
        pathname=__file__,
        lineno=10,
        msg="vote on %s",
        args=("q1",),
        exc_info=None,
    )
    record.user_id = "u1"

    line = JsonLogFormatter().format(record)
    entry = json.loads(line)

    assert "\n" not in line
    assert entry["level"] == "WARNING"
    assert entry["logger"] == "devflow.test"
    assert entry["message"] == "vote on q1"
    assert entry["user_id"] == "u1"
    assert "ts" in entry


def test_json_formatter_flattens_exception_info() -> None:
    try:
        raise ValueError("broken")
    except ValueError:
        record = logging.LogRecord(
            name="devflow.test",
            level=logging.ERROR,
            pathname=__file__,
            lineno=20,
            msg="failed",
            args=(),
            exc_info=sys.exc_info(),
        )

    entry = json.loads(JsonLogFormatter().format(record))

    assert "ValueError: broken" in entry["exc_info"]


def test_formatter_depends_on_environment() -> None:
    assert isinstance(build_formatter(_settings("production")), JsonLogFormatter)
    assert not isinstance(build_formatter(_settings("development")), JsonLogFormatter)


def test_configure_logging_installs_single_handler_and_level() -> None:
    with _preserved_root_logger() as root:
        configure_logging(_settings(log_level="DEBUG"), force=True)
        configure_logging(_settings(log_level="ERROR"))

        assert len(root.handlers) == 1
        assert root.level == logging.DEBUG
    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING


def test_unknown_log_level_falls_back_to_info() -> None:
    with _preserved_root_logger() as root:
        configure_logging(_settings(log_level="LOUD"), force=True)

        assert root.level == logging.INFO


def test_settings_redact_database_password() -> None:
    safe = _settings().safe_for_logging()

    assert "hunter2" not in safe["database_url"]
    assert safe["database_url"] == "postgresql+psycopg://devflow:<redacted>@db:5432/devflow"
    assert redact_database_url("sqlite:///:memory:") == "sqlite:///:memory:"
