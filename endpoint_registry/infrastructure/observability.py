"""Structured Logging - JSON formatter and setup for the registry service.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (identifier, store_key, error_code, request data) surfaced when present
    - Logs go to stderr; JSON by default, human-readable on request
"""

import logging
import json
import sys
from datetime import datetime, timezone

_EXTRA_KEYS = (
    "identifier", "store_key", "error_code", "category",
    "method", "path", "client", "status_code",
)


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_KEYS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Configure root logging once; repeated calls replace the handler."""
    handler = logging.StreamHandler(sys.stderr)
    handler.set_name("endpoint_registry")
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    for existing in list(logging.root.handlers):
        if existing.get_name() == "endpoint_registry":
            logging.root.removeHandler(existing)
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
