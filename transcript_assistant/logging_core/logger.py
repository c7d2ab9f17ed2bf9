# transcript_assistant/logging_core/logger.py
"""
Centralized structured logging setup for the transcript assistant.

Provides a pre-configured logger that emits JSON lines with mandatory fields:
- timestamp (ISO)
- request_id
- component (optional, filled by caller)
- event_type (start/success/failure/request_start/request_end/...)
- level
- message
- metadata (dict)

All logs in the system MUST use the logger obtained from get_logger().
Secrets are never logged; API keys appear only as present/missing.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, MutableMapping, Optional, Tuple


ROOT_LOGGER_NAME = "transcript_assistant"


class JSONFormatter(logging.Formatter):
    """Custom formatter that outputs structured JSON lines."""

    def format(self, record: logging.LogRecord) -> str:
        log_record: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).replace(microsecond=0, tzinfo=None).isoformat() + "Z",
            "level": record.levelname,
            "message": record.getMessage(),
        }

        if getattr(record, "request_id", None):
            log_record["request_id"] = str(record.request_id)  # type: ignore[attr-defined]

        # Include optional structured fields
        for field in ("component", "event_type", "metadata"):
            value = getattr(record, field, None)
            if value is not None:
                log_record[field] = value

        if record.exc_info:
            log_record["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(log_record, ensure_ascii=False, default=str)


class RequestLogger(logging.LoggerAdapter):
    """Binds a request_id to every record while keeping per-call extra fields."""

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, MutableMapping[str, Any]]:
        kwargs["extra"] = {**(self.extra or {}), **(kwargs.get("extra") or {})}
        return msg, kwargs


def configure_logging(level: str | int = logging.INFO) -> logging.Logger:
    """
    Install the JSON stdout handler on the package logger.

    Idempotent: repeated calls only adjust the level.
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    logger.propagate = False

    # Avoid duplicate handlers
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JSONFormatter())
        logger.addHandler(handler)

    return logger


def get_logger(request_id: Optional[str] = None) -> RequestLogger:
    """Return a logger bound to the given request (or to no request for process-level events)."""
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    if not logger.handlers:
        configure_logging()
    return RequestLogger(logger, {"request_id": request_id})


def log_event(
    logger: logging.Logger | logging.LoggerAdapter,
    level: int,
    message: str,
    *,
    component: str | None = None,
    event_type: str,
    metadata: Dict[str, Any] | None = None,
) -> None:
    """
    Convenience wrapper for structured logging.

    Use this everywhere for consistency.
    """
    extra: Dict[str, Any] = {"event_type": event_type}
    if component:
        extra["component"] = component
    if metadata:
        extra["metadata"] = metadata

    logger.log(level, message, extra=extra)


# High-Level Intent
# One JSON line per event, machine-parsable in production and readable in dev.
# request_id ties the HTTP middleware, the resolver and each caption attempt together.

# Edge Cases & Failure Scenarios
# Logging before configure_logging() → get_logger() installs the default handler.
# Non-JSON-serializable metadata → rendered with str().
