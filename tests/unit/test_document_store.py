"""Unit tests for the document store base class."""

import pytest

from sheetquery.common import ErrorCode, SheetQueryError
from sheetquery.constants import PaginationMode
from sheetquery.protocols import DocumentStore

ROWS = [{"n": i} for i in range(5)]


class TransientError(Exception):
    pass


class TestExecute:

    def test_satisfies_protocol(self, fake_store_factory):
        assert isinstance(fake_store_factory(), DocumentStore)

    def test_returns_results(self, fake_store_factory):
        store = fake_store_factory([("SELECT", ROWS)])
        assert store.execute("SELECT * FROM c") == ROWS

    def test_failure_becomes_storage_query_error(self, fake_store_factory):
        store = fake_store_factory([("SELECT", RuntimeError("boom"))])
        with pytest.raises(SheetQueryError) as exc_info:
            store.execute("SELECT * FROM c")
        assert exc_info.value.error_code == ErrorCode.STORAGE_QUERY_ERROR
        assert exc_info.value.details["query"] == "SELECT * FROM c"
        assert len(store.statements) == 1

    def test_transient_failures_are_retried(self, fake_store_factory):
        class FlakyStore(fake_store_factory):
            def __init__(self, outcomes):
                super().__init__(transient=(TransientError,))
                self.outcomes = iter(outcomes)

            def _run_query(self, sql):
                self.statements.append(sql)
                outcome = next(self.outcomes)
                if isinstance(outcome, Exception):
                    raise outcome
                return outcome

        store = FlakyStore([TransientError("429"), TransientError("429"), ROWS])
        assert store.execute("SELECT * FROM c") == ROWS
        assert len(store.statements) == 3

    def test_exhausted_retries_are_marked_retryable(self, fake_store_factory):
        store = fake_store_factory([("SELECT", TransientError("503"))], transient=(TransientError,), max_retries=2)
        with pytest.raises(SheetQueryError) as exc_info:
            store.execute("SELECT * FROM c")
        assert len(store.statements) == 3
        assert exc_info.value.is_retryable is True


class TestFetchPage:

    def test_in_memory_slices_full_result(self, fake_store_factory):
        store = fake_store_factory([("COUNT(1)", [99]), ("SELECT *", ROWS)])
        items, total = store.fetch_page("SELECT * FROM c", "SELECT VALUE COUNT(1) FROM c", offset=1, limit=2)
        assert items == [{"n": 1}, {"n": 2}]
        assert total == 5
        assert store.statements == ["SELECT * FROM c"]

    def test_in_memory_without_limit(self, fake_store_factory):
        store = fake_store_factory([("SELECT *", ROWS)])
        items, total = store.fetch_page("SELECT * FROM c", "SELECT VALUE COUNT(1) FROM c", offset=3)
        assert items == [{"n": 3}, {"n": 4}]
        assert total == 5

    def test_push_down_appends_window_and_counts(self, fake_store_factory):
        store = fake_store_factory(
            [("COUNT(1)", [42]), ("OFFSET 10 LIMIT 2", ROWS[:2])],
            pagination_mode=PaginationMode.PUSH_DOWN,
        )
        items, total = store.fetch_page("SELECT * FROM c", "SELECT VALUE COUNT(1) FROM c", offset=10, limit=2)
        assert items == ROWS[:2]
        assert total == 42
        assert store.statements == ["SELECT VALUE COUNT(1) FROM c", "SELECT * FROM c OFFSET 10 LIMIT 2"]

    def test_push_down_without_limit_falls_back_to_slicing(self, fake_store_factory):
        store = fake_store_factory([("SELECT *", ROWS)], pagination_mode=PaginationMode.PUSH_DOWN)
        items, total = store.fetch_page("SELECT * FROM c", "SELECT VALUE COUNT(1) FROM c", offset=4)
        assert items == [{"n": 4}]
        assert total == 5
