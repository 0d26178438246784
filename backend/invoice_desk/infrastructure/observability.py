"""Structured Logging — JSON lines for invoice mutations and their failures.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - INVOICE_LOG_FIELDS (mutation, invoice_id, error_code, path) surfaced when present
    - A record logged with an InvoiceDeskError in exc_info picks up that
      error's code and ErrorContext when the call site did not pass them
    - JSON format in production, human-readable in development

Design Decisions:
    - JSONFormatter over third-party libs: zero dependencies, full control
    - setup_logging replaces root handlers so a reloaded app never double-logs
"""

import logging
import json
from datetime import datetime, timezone

from invoice_desk.core.errors import InvoiceDeskError

INVOICE_LOG_FIELDS = ("mutation", "invoice_id", "error_code", "path")


def invoice_fields(record: logging.LogRecord) -> dict:
    """Invoice extras on the record, backfilled from an attached InvoiceDeskError."""
    fields = {
        key: record.__dict__[key]
        for key in INVOICE_LOG_FIELDS
        if record.__dict__.get(key) is not None
    }
    error = record.exc_info[1] if record.exc_info else None
    if isinstance(error, InvoiceDeskError):
        fields.setdefault("error_code", error.code)
        if error.context.mutation:
            fields.setdefault("mutation", error.context.mutation)
        if error.context.invoice_id:
            fields.setdefault("invoice_id", error.context.invoice_id)
    return fields


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log.update(invoice_fields(record))
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


class TextFormatter(logging.Formatter):
    """Development format: invoice fields appended as key=value."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")

    def formatMessage(self, record: logging.LogRecord) -> str:
        line = super().formatMessage(record)
        fields = invoice_fields(record)
        if fields:
            line += " " + " ".join(f"{k}={v}" for k, v in fields.items())
        return line


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Configure root logging for the application."""
    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter() if fmt == "json" else TextFormatter())
    logging.root.handlers = [handler]
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
