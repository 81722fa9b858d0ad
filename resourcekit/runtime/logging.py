"""Logging setup for resource-loading hosts."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TextIO

from resourcekit.api.logging import LoggingConfig
from resourcekit.runtime.config import resolve_log_level_name
from resourcekit.runtime.json_codec import dumps_text

PACKAGE_LOGGER = "resourcekit"
_OWNED_HANDLER_ATTR = "_resourcekit_owned"

_STANDARD_RECORD_FIELDS = frozenset(
    {
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "message",
    }
)


class JsonFormatter(logging.Formatter):
    """JSON formatter with extra-field preservation."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "ts": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        extras = {
            k: _plain(v) for k, v in record.__dict__.items() if k not in _STANDARD_RECORD_FIELDS
        }
        if extras:
            payload["fields"] = extras
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return dumps_text(payload)


def configure_logging(config: LoggingConfig, *, stream: TextIO | None = None) -> logging.Handler:
    """Attach a console handler to the package logger and set its level.

    A handler installed by an earlier call is replaced. Handlers added by the
    host application stay in place, and records still propagate to the root.
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for existing in list(package_logger.handlers):
        if getattr(existing, _OWNED_HANDLER_ATTR, False):
            package_logger.removeHandler(existing)
            existing.close()

    handler = logging.StreamHandler(stream)
    handler.setFormatter(_resolve_formatter(config.console_format))
    setattr(handler, _OWNED_HANDLER_ATTR, True)
    package_logger.addHandler(handler)
    package_logger.setLevel(getattr(logging, config.level_name.upper(), logging.INFO))
    return handler


def setup_logging() -> None:
    """Install package logging unless the host already routes records somewhere."""
    if logging.getLogger().handlers or logging.getLogger(PACKAGE_LOGGER).handlers:
        return
    configure_logging(LoggingConfig(level_name=resolve_log_level_name(default="INFO")))


def _resolve_formatter(kind: str) -> logging.Formatter:
    if kind.strip().lower() == "json":
        return JsonFormatter()
    return logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")


def _plain(value: object) -> object:
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    return str(value)
