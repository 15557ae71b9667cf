"""Structured JSON audit logging for outgoing API calls.

One JSON line per call on the `bunq.audit` logger, tagged with the
X-Bunq-Client-Request-Id of the call in flight. Optional file output via
AUDIT_LOG_FILE env var.

Every record passes through AuditRedactionFilter before any handler sees
it: audit fields named like credentials (see SENSITIVE_FIELD_SUFFIXES)
are replaced by REDACTED, nested mappings included.
"""

import json
import logging
import sys
import time
from collections.abc import Mapping
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any

from bunq_client.config.settings import Settings, get_settings

AUDIT_LOGGER_NAME = "bunq.audit"
REDACTED = "[REDACTED]"

# Field-name suffixes, matched case-insensitively so header names work too
SENSITIVE_FIELD_SUFFIXES = (
    "authentication",
    "token",
    "signature",
    "secret",
    "key",
)

# Correlation id of the call currently in flight (X-Bunq-Client-Request-Id)
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def is_sensitive_field(name: str) -> bool:
    return name.lower().endswith(SENSITIVE_FIELD_SUFFIXES)


def redact_audit_data(data: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of `data` with sensitive fields masked."""
    redacted: dict[str, Any] = {}
    for name, value in data.items():
        if is_sensitive_field(str(name)):
            redacted[name] = REDACTED
        elif isinstance(value, Mapping):
            redacted[name] = redact_audit_data(value)
        else:
            redacted[name] = value
    return redacted


class AuditRedactionFilter(logging.Filter):
    """Masks credential fields in `audit_data` before records are emitted."""

    def filter(self, record: logging.LogRecord) -> bool:
        audit_data = getattr(record, "audit_data", None)
        if isinstance(audit_data, Mapping):
            record.audit_data = redact_audit_data(audit_data)
        return True


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "event": record.getMessage(),
            "request_id": request_id_var.get(),
        }
        audit_data = getattr(record, "audit_data", None)
        if isinstance(audit_data, Mapping):
            entry.update(audit_data)
        if record.exc_info:
            entry["error_type"] = record.exc_info[0].__name__
            entry["traceback"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def get_audit_logger() -> logging.Logger:
    logger = logging.getLogger(AUDIT_LOGGER_NAME)
    if not any(isinstance(f, AuditRedactionFilter) for f in logger.filters):
        logger.addFilter(AuditRedactionFilter())
    return logger


def setup_logging(settings: Settings | None = None) -> logging.Logger:
    """Send the audit logger to stdout (and AUDIT_LOG_FILE) as JSON lines.

    A library should not configure logging on import; applications call
    this once at startup.
    """
    settings = settings or get_settings()

    logger = get_audit_logger()
    logger.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))
    logger.handlers.clear()

    formatter = JSONFormatter()
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if settings.audit_log_file:
        handlers.append(logging.FileHandler(settings.audit_log_file))
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.propagate = False
    return logger


class RequestTimer:
    """Wall-clock latency of one API round trip, in milliseconds."""

    def __init__(self):
        self.elapsed_ms: float = 0.0
        self._started: float = 0.0

    def __enter__(self):
        self._started = time.perf_counter()
        return self

    def __exit__(self, *exc_info):
        self.elapsed_ms = round((time.perf_counter() - self._started) * 1000, 2)
