"""Utility functions and helpers for SheetQuery."""

from sheetquery.utils.decorators import (
    retry_with_backoff,
    traced,
)
from sheetquery.utils.numbers import coerce_number, format_number

__all__ = [
    # Decorators
    "retry_with_backoff",
    "traced",
    # Numbers
    "coerce_number",
    "format_number",
]
