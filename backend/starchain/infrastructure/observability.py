"""Structured Logging — JSON formatter and setup for production observability.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (height, address, record_hash, error_code, path) surfaced when present
    - JSON format in production, human-readable in development

Design Decisions:
    - JSONFormatter over third-party libs: zero dependencies, full control
    - setup_logging called once on startup via lifespan; repeated calls replace
      the handler instead of stacking duplicates
"""

import logging
import json
from datetime import datetime, timezone

EXTRA_FIELDS = ("height", "address", "record_hash", "error_code", "path")

_handler: logging.Handler | None = None


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Configure logging for the application."""
    global _handler
    if _handler is not None:
        logging.root.removeHandler(_handler)
    _handler = logging.StreamHandler()
    if fmt == "json":
        _handler.setFormatter(JSONFormatter())
    else:
        _handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s - %(message)s",
        ))
    logging.root.addHandler(_handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
