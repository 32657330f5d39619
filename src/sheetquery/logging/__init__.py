"""Logging infrastructure for SheetQuery.

This module provides structured logging with JSON output, request context
tracking and OpenTelemetry trace correlation.
"""

from sheetquery.logging.filters import (
    ContextFilter,
    clear_request_context,
    set_logging_context,
    set_request_context,
)
from sheetquery.logging.logger import CustomJsonFormatter, get_logger, setup_logging

__all__ = [
    "get_logger",
    "setup_logging",
    "CustomJsonFormatter",
    "ContextFilter",
    "set_logging_context",
    "set_request_context",
    "clear_request_context",
]
