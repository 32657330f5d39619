"""JSON log output for query compilation and execution.

Records are rendered as one JSON object per line. Anything passed through
``extra=`` (predicates, counts, import ids) lands as a top-level key next
to the timestamp, level and the active trace/span ids.
"""

from __future__ import annotations

import json
import logging
import logging.config
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from opentelemetry import trace

# Attributes every LogRecord carries; only the rest are caller extras.
_STANDARD_ATTRIBUTES = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", (), None).__dict__
) | {"asctime", "message"}


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def _trace_ids(record: logging.LogRecord) -> Dict[str, Optional[str]]:
    if hasattr(record, "otelTraceID"):
        return {"trace_id": record.otelTraceID, "span_id": getattr(record, "otelSpanID", None)}
    context = trace.get_current_span().get_span_context()
    if not context.is_valid:
        return {}
    return {"trace_id": format(context.trace_id, "032x"), "span_id": format(context.span_id, "016x")}


class CustomJsonFormatter(logging.Formatter):
    """Render a record, its extras and the current trace ids as JSON."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _STANDARD_ATTRIBUTES
        }
        payload.update(
            timestamp=datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            level=record.levelname,
            logger=record.name,
            message=record.getMessage(),
        )
        payload.update(_trace_ids(record))
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def setup_logging(level: Optional[str] = None) -> None:
    """Send JSON records for the whole process to stdout.

    Args:
        level: Root log level. Defaults to the ``LOG_LEVEL`` setting, and
            the ``APP_ENV`` setting is attached to every record as
            ``environment``.
    """
    from sheetquery.logging.filters import set_logging_context
    from sheetquery.settings import get_settings

    settings = get_settings()
    level = (level or settings.log_level).upper()
    set_logging_context(environment=settings.app_env)

    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {"()": "sheetquery.logging.logger.CustomJsonFormatter"},
        },
        "filters": {
            "context": {"()": "sheetquery.logging.filters.ContextFilter"},
        },
        "handlers": {
            "stdout": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "json",
                "filters": ["context"],
                "stream": "ext://sys.stdout",
            }
        },
        "root": {"level": level, "handlers": ["stdout"]},
    })
