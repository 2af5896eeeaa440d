"""Structured Logging: JSON formatter and setup for launch/bootstrap observability.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (launch_id, step, error_code, genesis_url) surfaced when present
    - JSON format for operators' log pipelines, human-readable for local runs
    - setup_logging is idempotent: calling it twice never duplicates handlers

Design Decisions:
    - JSONFormatter over third-party libs: zero dependencies, full control
    - setup_logging called once by the wiring layer (chainlaunch.main.configure)
"""

import json
import logging
from datetime import datetime, timezone

_EXTRA_FIELDS = ("launch_id", "step", "error_code", "genesis_url", "event_status")


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Configure the chainlaunch logger tree."""
    root = logging.getLogger("chainlaunch")
    for existing in list(root.handlers):
        if getattr(existing, "_chainlaunch", False):
            root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler._chainlaunch = True
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s - %(message)s",
        ))
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
