"""Redacting, structured JSON logging for the DaData client.

Log records go to stdout as JSON lines; an optional file handler is added
when DADATA_LOG_FILE is set.

SecureLogger wraps any logger (or adapter) and redacts every message
before forwarding it, so credentials never reach a sink even when a
caller hands in their own logger.
"""

import json
import logging
import sys
import time
import uuid
from datetime import datetime, timezone
from collections.abc import Mapping
from contextvars import ContextVar

from dadata.security.redaction import sanitize_message

LOGGER_NAME = "dadata"

# Correlates every entry written by one submit() call, retries included
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class JSONFormatter(logging.Formatter):
    """Formats log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": sanitize_message(record.getMessage()),
            "request_id": request_id_var.get(""),
        }
        # Merge any extra fields passed via `extra={}` kwarg
        if hasattr(record, "audit_data"):
            log_entry.update(record.audit_data)
        return json.dumps(log_entry, default=str, ensure_ascii=False)


class SecureLogger(logging.LoggerAdapter):
    """Logger wrapper that redacts messages before they are emitted.

    Args are interpolated first so that a secret passed as a %-argument
    is redacted too. String values in an ``audit_data`` extra are redacted
    the same way.
    """

    def __init__(self, logger: logging.Logger | logging.LoggerAdapter):
        super().__init__(logger, {})

    def process(self, msg, kwargs):
        extra = kwargs.get("extra")
        if extra and isinstance(extra.get("audit_data"), dict):
            audit_data = {
                key: sanitize_message(value) if isinstance(value, str) else value
                for key, value in extra["audit_data"].items()
            }
            kwargs["extra"] = {**extra, "audit_data": audit_data}
        return sanitize_message(str(msg)), kwargs

    def log(self, level, msg, *args, **kwargs):
        if not self.isEnabledFor(level):
            return
        if len(args) == 1 and isinstance(args[0], Mapping) and args[0]:
            args = args[0]
        text = str(msg) % args if args else str(msg)
        text, kwargs = self.process(text, kwargs)
        self.logger.log(level, text, **kwargs)


def setup_logging(settings) -> logging.Logger:
    """Configure the library logger with JSON output."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))
    logger.handlers.clear()

    formatter = JSONFormatter()

    # Always log to stdout
    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setFormatter(formatter)
    logger.addHandler(stdout_handler)

    # Optional file output
    if settings.log_file:
        file_handler = logging.FileHandler(settings.log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    # Prevent propagation to root logger (avoids duplicate output)
    logger.propagate = False
    return logger


def get_logger() -> SecureLogger:
    return SecureLogger(logging.getLogger(LOGGER_NAME))


def wrap_logger(logger) -> SecureLogger:
    """Return ``logger`` wrapped in a SecureLogger unless it already is one."""
    if isinstance(logger, SecureLogger):
        return logger
    return SecureLogger(logger)


def generate_request_id() -> str:
    return uuid.uuid4().hex[:12]


class RequestTimer:
    """Context manager to measure request latency."""

    def __init__(self):
        self.start_time: float = 0
        self.elapsed_ms: float = 0

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, *args):
        self.elapsed_ms = round((time.perf_counter() - self.start_time) * 1000, 2)
