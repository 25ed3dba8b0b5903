"""Root logger setup: readable lines in development, JSON lines in production."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime
from datetime import timezone
from typing import Any

from devflow.core.config import Settings

_RESERVED_ATTRS = frozenset(
    {
        "args",
        "asctime",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "message",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "taskName",
        "thread",
        "threadName",
    }
)

_PRETTY_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_configured = False


class JsonLogFormatter(logging.Formatter):
    """Serialize log records into single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname.upper(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRS or key.startswith("_") or value is None:
                continue
            entry[key] = _normalize_value(value)

        if record.exc_info:
            entry["exc_info"] = self.formatException(record.exc_info).replace("\n", " | ")

        return json.dumps(entry, ensure_ascii=True, separators=(",", ":"))


def _normalize_value(value: object) -> object:
    if isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, (list, dict)):
        try:
            json.dumps(value)
        except TypeError:
            return str(value)
        return value
    return str(value)


def _resolve_level(level_name: str) -> int:
    level = logging.getLevelName(level_name.upper())
    if isinstance(level, int):
        return level
    return logging.INFO


def build_formatter(settings: Settings) -> logging.Formatter:
    """Pick the formatter for the configured environment."""
    if settings.is_production:
        return JsonLogFormatter()
    return logging.Formatter(_PRETTY_FORMAT)


def configure_logging(settings: Settings, *, force: bool = False) -> None:
    """Configure the root logger once; ``force`` reinstalls the handler."""
    global _configured
    if _configured and not force:
        return

    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(build_formatter(settings))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(_resolve_level(settings.log_level))

    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.pool").setLevel(logging.WARNING)
    _configured = True
