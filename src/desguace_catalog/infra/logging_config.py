"""Structured JSON logging configuration."""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

from desguace_catalog.infra.config import log_level

# Attributes every LogRecord has; anything else came in through ``extra``.
_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__
) | {"message", "asctime", "taskName"}


class JSONFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Outputs one JSON object per record with:
    - timestamp (ISO 8601, UTC)
    - level, logger, message
    - every field passed through ``extra``
    - exception (formatted traceback) when present
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                log_data[key] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def configure_logging(level: str | None = None) -> None:
    """
    Install the JSON formatter on the root logger.

    Reads LOG_LEVEL from the environment (default: INFO) unless ``level``
    is given. Outputs to stderr.
    """
    level_name = (level or log_level()).upper()
    numeric_level = getattr(logging, level_name, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(JSONFormatter())
    root_logger.addHandler(console_handler)

    root_logger.info("Logging configured", extra={"log_level": level_name, "log_format": "json"})
