"""Protocol definitions for SheetQuery collaborators."""

from sheetquery.protocols.storage import DocumentStore

__all__ = [
    "DocumentStore",
]
