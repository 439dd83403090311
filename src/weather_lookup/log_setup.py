"""JSON console logging for weather lookups."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import Any

# Search context attached through ``extra=``; copied into the event when present.
CONTEXT_FIELDS = ("city", "request_id", "error_kind", "status_code")


class JsonConsoleFormatter(logging.Formatter):
    """One JSON object per record, with search context lifted to top-level keys."""

    def format(self, record: logging.LogRecord) -> str:
        event: dict[str, Any] = {
            "ts": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                event[field] = value
        if record.exc_info:
            event["exception"] = self.formatException(record.exc_info)
        return json.dumps(event, default=str, ensure_ascii=False)


def setup_logger(
    level: int | str = logging.INFO, name: str = "weather_lookup"
) -> logging.Logger:
    """Configure the process logger at ``level`` (usually ``Settings.log_level``).

    Calling again only changes the level; the handler is installed once.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    handler.setFormatter(JsonConsoleFormatter())
    logger.addHandler(handler)
    return logger
