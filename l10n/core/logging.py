"""Structured JSON logging.

Provides a JSON formatter that outputs one JSON object per line to
stdout.  Extra fields (``event``, ``source``, ``location``, etc.) are
merged into each log record automatically.

Usage::

    from l10n.core.logging import setup_logging
    setup_logging("INFO")
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone

# Extra fields emitted by the bundle loaders.
_EXTRA_FIELDS = (
    "event",
    "source",
    "location",
    "key_count",
    "status_code",
    "latency_ms",
    "error",
)


class JSONFormatter(logging.Formatter):
    """Format log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key in _EXTRA_FIELDS:
            value = getattr(record, key, None)
            if value is not None:
                payload[key] = value

        if record.exc_info and record.exc_info[1] is not None:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_logging(log_level: str | None = None) -> None:
    """Configure the root logger to emit JSON lines to stdout.

    Args:
        log_level: Minimum log level name (e.g. ``"INFO"``, ``"DEBUG"``).
            Defaults to ``L10N_LOG_LEVEL``.
    """
    if log_level is None:
        from l10n.core.config import get_settings

        log_level = get_settings().LOG_LEVEL

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(log_level.upper())

    # Silence noisy third-party loggers.
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
