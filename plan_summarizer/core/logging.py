"""Centralized logging configuration.

Logs are one JSON object per line on stdout so CI runners and container
platforms can collect them without extra parsing. Plan text and generated
summaries are never attached to log records by the HTTP layer.
"""

from __future__ import annotations

import json
import logging
import logging.config
from datetime import UTC, datetime
from typing import Any

# `extra` keys copied into the JSON payload when a record carries them.
STRUCTURED_FIELDS = (
    "request_id",
    "http_method",
    "route",
    "status_code",
    "duration_ms",
    "plan_count",
    "summary_status",
)


class JsonFormatter(logging.Formatter):
    """Render a record as JSON; structured fields appear only when set."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in STRUCTURED_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                payload[field] = value

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO") -> None:
    """Configure application logging (JSON to stdout)."""

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "json": {"()": JsonFormatter},
            },
            "handlers": {
                "default": {
                    "class": "logging.StreamHandler",
                    "formatter": "json",
                    "stream": "ext://sys.stdout",
                }
            },
            "root": {
                "level": level.upper(),
                "handlers": ["default"],
            },
            # httpx logs every request line at INFO; keep it out of the service log.
            "loggers": {
                "httpx": {"level": "WARNING"},
            },
        }
    )
