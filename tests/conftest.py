"""Shared fixtures: isolated settings and an in-memory document store."""

import os
from typing import Any, Iterable, List, Optional, Tuple

import pytest

from sheetquery.constants import PaginationMode
from sheetquery.settings import _reload_settings
from sheetquery.storage import BaseDocumentStore, set_document_store


class FakeDocumentStore(BaseDocumentStore):
    """Document store answering statements from canned responses.

    ``responses`` is a list of ``(marker, result)`` pairs; the first pair
    whose marker occurs in the statement wins. A result that is an
    exception instance is raised instead of returned. Unmatched statements
    return an empty list.
    """

    def __init__(
        self,
        responses: Optional[Iterable[Tuple[str, Any]]] = None,
        pagination_mode: PaginationMode = PaginationMode.IN_MEMORY,
        transient: Tuple[type, ...] = (),
        max_retries: int = 3,
    ):
        super().__init__(
            pagination_mode=pagination_mode,
            max_retries=max_retries,
            retry_delay=0.0,
            sleep=lambda _: None,
        )
        self.responses: List[Tuple[str, Any]] = list(responses or [])
        self.transient = transient
        self.statements: List[str] = []

    def _run_query(self, sql: str) -> List[Any]:
        self.statements.append(sql)
        for marker, result in self.responses:
            if marker in sql:
                if isinstance(result, Exception):
                    raise result
                return list(result)
        return []

    def _is_transient(self, exc: Exception) -> bool:
        return isinstance(exc, self.transient)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Settings built from a clean environment, reset after each test."""
    for name in list(os.environ):
        if name.upper().startswith(("COSMOS_", "QUERY_")):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("SHEETQUERY_TEST_MODE", "true")

    settings = _reload_settings()
    yield settings

    set_document_store(None)
    monkeypatch.undo()
    _reload_settings()


@pytest.fixture
def fake_store_factory():
    """Build FakeDocumentStore instances with the given responses."""
    return FakeDocumentStore
