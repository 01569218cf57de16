"""Structured Logging: JSON formatter and setup for production observability.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Repository extras (resource_type, resource_id, error_code, operation, total)
      surfaced when present
    - A logged CmsError contributes its code, severity, http_status and context
      fields; explicit extras on the record win over the error's values
    - setup_logging is idempotent: calling it again replaces the handler it installed

Design Decisions:
    - setup_logging called once by the composition root (bootstrap.py); tests may
      bootstrap repeatedly without stacking handlers
"""

import logging
import json
from datetime import datetime, timezone

from cms_core.core.errors import CmsError

EXTRA_FIELDS = ("resource_type", "resource_id", "error_code", "operation", "total")


def _error_fields(error: CmsError) -> dict:
    ctx = error.context
    fields = {
        "error_code": error.code,
        "severity": error.severity.value,
        "http_status": error.http_status,
        "resource_type": ctx.resource_type,
        "resource_id": ctx.resource_id,
        "operation": ctx.operation,
    }
    return {k: v for k, v in fields.items() if v is not None}


class JSONFormatter(logging.Formatter):
    """Format logs as JSON, one object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            error = record.exc_info[1]
            if isinstance(error, CmsError):
                log.update(_error_fields(error))
            log["exception"] = self.formatException(record.exc_info)
        for key in EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        return json.dumps(log, ensure_ascii=False, default=str)


class _CmsHandler(logging.StreamHandler):
    """Marks the handler setup_logging owns."""


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the cms handler on the root logger, replacing a previous one."""
    handler = _CmsHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    for existing in list(logging.root.handlers):
        if isinstance(existing, _CmsHandler):
            logging.root.removeHandler(existing)
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
