"""Unit tests for distinct value extraction."""

from unittest.mock import Mock

import pytest

from sheetquery.common import ErrorCode, SheetQueryError
from sheetquery.results import DistinctValueExtractor, parse_field_list
from sheetquery.types import CompiledPredicate, FieldSpecRegistry

PREDICATE = CompiledPredicate(sql="c.documentType = 'excel-row'")


class TestParseFieldList:

    def test_comma_string(self):
        assert parse_field_list("Category, Year") == ["Category", "Year"]

    def test_list_with_unsafe_and_duplicate_names(self):
        assert parse_field_list(['Year"]', "Year", "!!!", "", "Source"]) == ["Year", "Source"]

    def test_none(self):
        assert parse_field_list(None) == []


class TestDistinctValueExtractor:

    def test_year_values_are_coerced_and_filtered(self, fake_store_factory):
        store = fake_store_factory([('c["Year"]', ["2020", "abc", "", None, "2021"])])
        result = DistinctValueExtractor(store).extract(PREDICATE, "Year")
        assert result == {"Year": [2020, 2021]}

    def test_string_values_drop_null_and_blank(self, fake_store_factory):
        store = fake_store_factory([('c["Category"]', ["A", None, "", "  ", "B", 0, False])])
        result = DistinctValueExtractor(store).extract(PREDICATE, ["Category"])
        assert result == {"Category": ["A", "B", 0, False]}

    def test_coerced_duplicates_collapse(self, fake_store_factory):
        store = fake_store_factory([('c["Year"]', [2020, "2020", "2020.0", 2021.5])])
        assert DistinctValueExtractor(store).extract(PREDICATE, "Year") == {"Year": [2020, 2021.5]}

    def test_one_statement_per_sanitized_field(self, fake_store_factory):
        store = fake_store_factory()
        result = DistinctValueExtractor(store).extract(PREDICATE, 'Category,Year,Category,"]')
        assert result == {"Category": [], "Year": []}
        assert store.statements == [
            'SELECT DISTINCT VALUE c["Category"] FROM c'
            " WHERE c.documentType = 'excel-row' AND IS_DEFINED(c[\"Category\"])",
            'SELECT DISTINCT VALUE c["Year"] FROM c'
            " WHERE c.documentType = 'excel-row' AND IS_DEFINED(c[\"Year\"])",
        ]

    def test_registry_decides_numeric_fields(self, fake_store_factory):
        store = fake_store_factory([('c["Amount"]', ["5", "x"]), ('c["Year"]', ["2020"])])
        extractor = DistinctValueExtractor(store, registry=FieldSpecRegistry(markers=("amount",)))
        assert extractor.extract(PREDICATE, "Amount,Year") == {"Amount": [5], "Year": ["2020"]}

    def test_empty_registry_is_kept(self, fake_store_factory):
        registry = FieldSpecRegistry(markers=("amount",))
        assert DistinctValueExtractor(fake_store_factory(), registry=registry).registry is registry

    def test_storage_failure_fails_whole_request(self, fake_store_factory):
        store = fake_store_factory([('c["Year"]', RuntimeError("boom")), ('c["Category"]', ["A"])])
        with pytest.raises(SheetQueryError) as exc_info:
            DistinctValueExtractor(store).extract(PREDICATE, "Category,Year")
        assert exc_info.value.error_code == ErrorCode.STORAGE_QUERY_ERROR
        assert exc_info.value.details["field"] == "Year"

    def test_plain_exception_from_protocol_store_is_wrapped(self):
        store = Mock()
        store.execute.side_effect = ValueError("bad")
        with pytest.raises(SheetQueryError) as exc_info:
            DistinctValueExtractor(store).extract(PREDICATE, "Category")
        assert exc_info.value.error_code == ErrorCode.STORAGE_QUERY_ERROR
        assert exc_info.value.details["field"] == "Category"
        assert isinstance(exc_info.value.cause, ValueError)
