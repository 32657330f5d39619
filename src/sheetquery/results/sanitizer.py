"""Removal of storage metadata from documents returned to callers."""

from typing import Any, Dict, Iterable, List, Mapping

from sheetquery.constants import DOCUMENT_ID_ATTRIBUTE, DOCUMENT_TYPE_ATTRIBUTE

_HIDDEN_KEYS = frozenset({DOCUMENT_ID_ATTRIBUTE, DOCUMENT_TYPE_ATTRIBUTE})


def sanitize_document(document: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a copy of ``document`` without internal attributes.

    Drops every key starting with ``_`` (system and partition attributes)
    plus ``id`` and ``documentType``. The input is left untouched and the
    retained keys keep their order.

    Example:
        >>> sanitize_document({"id": "1", "_rid": "x", "documentType": "excel-row", "Name": "A"})
        {'Name': 'A'}
    """
    return {
        key: value
        for key, value in document.items()
        if not (isinstance(key, str) and key.startswith("_")) and key not in _HIDDEN_KEYS
    }


def sanitize_documents(documents: Iterable[Mapping[str, Any]]) -> List[Dict[str, Any]]:
    return [sanitize_document(document) for document in documents]
