"""Structured JSON logging for the blanket advisor service layer.

The recommendation engine itself never logs. Store, weather, push and app code
log through :func:`get_logger` and attach fields either via ``extra`` or
:func:`log_event`. Owner identity and home location are scrubbed before a
record is serialised.
"""

from __future__ import annotations

import contextlib
import contextvars
import json
import logging
import os
import re
import sys
import time
import uuid
from typing import Any, Dict, Iterator, Mapping, TextIO

SERVICE_NAME = "blanket-advisor"
CORRELATION_ID: contextvars.ContextVar[str | None] = contextvars.ContextVar("correlation_id", default=None)

# Attributes every LogRecord carries; anything else arrived through ``extra``.
_RECORD_ATTRIBUTES = frozenset(vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))) | {
    "message",
    "asctime",
}

SENSITIVE_KEYS = frozenset(
    {
        "user_id",
        "email",
        "external_id",
        "api_key",
        "location_name",
        "latitude",
        "longitude",
        "location_lat",
        "location_lng",
    }
)
REDACTED = "[redacted]"
_EMAIL = re.compile(r"[\w.+\-]+@[\w\-]+(?:\.[\w\-]+)+")


class JsonFormatter(logging.Formatter):
    """One JSON object per line carrying the correlation id and extra fields."""

    def __init__(self, environment: str | None = None) -> None:
        super().__init__()
        self.environment = environment or os.getenv("APP_ENV")

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        message = record.getMessage()
        payload: Dict[str, Any] = {
            "timestamp": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S%z"),
            "level": record.levelname,
            "logger": record.name,
            "service": SERVICE_NAME,
            "message": message,
            "event": getattr(record, "event", message),
            "correlation_id": getattr(record, "correlation_id", None) or CORRELATION_ID.get(),
        }
        if self.environment:
            payload["environment"] = self.environment

        extras = {
            key: value
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRIBUTES and key not in payload
        }
        payload.update(redact_for_log(extras))
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def configure_logging(level: int | str | None = None, stream: TextIO | None = None) -> None:
    """Route the root logger through a single JSON handler.

    Calling this again replaces the previous JSON handler rather than stacking
    a second one; handlers installed by other tools are left alone.
    """

    root = logging.getLogger()
    for existing in list(root.handlers):
        if isinstance(existing.formatter, JsonFormatter):
            root.removeHandler(existing)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(JsonFormatter())
    root.addHandler(handler)
    root.setLevel(level or os.getenv("LOG_LEVEL", "INFO"))


def redact_for_log(payload: Any) -> Any:
    """Recursively mask sensitive keys and email addresses."""

    if isinstance(payload, Mapping):
        return {
            key: REDACTED if key in SENSITIVE_KEYS else redact_for_log(value)
            for key, value in payload.items()
        }
    if isinstance(payload, (list, tuple, set)):
        return [redact_for_log(item) for item in payload]
    if isinstance(payload, str):
        return _EMAIL.sub("[redacted-email]", payload)
    if payload is None or isinstance(payload, (bool, int, float)):
        return payload
    return str(payload)


def get_logger(name: str) -> logging.Logger:
    """Return a module logger, configuring JSON output on first use."""

    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name)


def new_correlation_id() -> str:
    return uuid.uuid4().hex


def ensure_correlation_id(correlation_id: str | None = None) -> str:
    """Adopt ``correlation_id``, else keep the current one, else mint one."""

    resolved = correlation_id or CORRELATION_ID.get() or new_correlation_id()
    CORRELATION_ID.set(resolved)
    return resolved


@contextlib.contextmanager
def correlation_context(correlation_id: str | None = None) -> Iterator[str]:
    """Temporarily set a correlation id, restoring the previous one on exit."""

    token = CORRELATION_ID.set(correlation_id or CORRELATION_ID.get() or new_correlation_id())
    try:
        yield CORRELATION_ID.get()
    finally:
        CORRELATION_ID.reset(token)


def log_event(logger: logging.Logger, level: int, event: str, **fields: Any) -> None:
    """Emit a named event with redacted fields and the active correlation id."""

    correlation_id = ensure_correlation_id(fields.pop("correlation_id", None))
    exc_info = fields.pop("exc_info", None)
    logger.log(
        level,
        event,
        exc_info=exc_info,
        extra={"event": event, "correlation_id": correlation_id, **redact_for_log(fields)},
    )


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


@contextlib.contextmanager
def operation_context(name: str, correlation_id: str | None = None) -> Iterator[str]:
    """Scope a correlation id around one service call and log how long it took."""

    logger = logging.getLogger("blanket_app.operations")
    with correlation_context(correlation_id) as scoped_id:
        started = time.perf_counter()
        try:
            yield scoped_id
        except Exception:
            logger.warning(
                "operation failed",
                extra={"event": "operation_failed", "operation": name, "duration_ms": _elapsed_ms(started)},
            )
            raise
        logger.debug(
            "operation completed",
            extra={"event": "operation_completed", "operation": name, "duration_ms": _elapsed_ms(started)},
        )


__all__ = [
    "CORRELATION_ID",
    "JsonFormatter",
    "configure_logging",
    "correlation_context",
    "ensure_correlation_id",
    "get_logger",
    "log_event",
    "new_correlation_id",
    "operation_context",
    "redact_for_log",
]
