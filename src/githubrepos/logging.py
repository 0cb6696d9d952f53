"""Structured logging configuration.

Uses standard library logging with a JSON formatter. Secret values are
masked both at the call site (via `mask_secret`) and by the formatter for
any `extra` key listed in `SENSITIVE_FIELDS`.
"""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Iterable
from datetime import UTC, datetime
from typing import Any

MASK = "***"

SENSITIVE_FIELDS: frozenset[str] = frozenset({"github_token", "token"})

_RESERVED_LOG_RECORD_ATTRS: set[str] = {
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


def mask_secret(value: str | None) -> str:
    """Return a fixed placeholder for a secret value.

    Empty values are returned as-is so "missing" stays distinguishable from
    "set" in debug output.
    """

    if not value:
        return ""
    return MASK


class JsonFormatter(logging.Formatter):
    """A minimal JSON formatter for logging records."""

    def __init__(self, masked_fields: Iterable[str] = SENSITIVE_FIELDS) -> None:
        super().__init__()
        self._masked_fields = frozenset(masked_fields)

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 (record)
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        extra = {
            key: MASK if key in self._masked_fields and value else value
            for key, value in record.__dict__.items()
            if key not in _RESERVED_LOG_RECORD_ATTRS and not key.startswith("_")
        }
        if extra:
            payload["extra"] = extra

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging(level: str) -> None:
    """Configure root logging with structured JSON output."""

    root = logging.getLogger()

    # Remove any existing handlers to avoid duplicate logs when re-configuring.
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(JsonFormatter())

    root.addHandler(handler)
    root.setLevel(level.upper())

    # Keep third-party loggers reasonably quiet unless explicitly configured.
    logging.getLogger("urllib3").setLevel(max(root.level, logging.INFO))
