"""Unit tests for field name sanitization."""

import pytest

from sheetquery.query_builder import document_path, sanitize_field_name


class TestSanitizeFieldName:
    """Allow-list stripping of user-supplied field names."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("Category", "Category"),
            ("Sub Category", "Sub Category"),
            ("fiscal_year-2", "fiscal_year-2"),
            ('Year"]) OR 1=1 --', "Year OR 11 --"),
            ("Price ($)", "Price "),
            ("Ünïcode", "ncode"),
            ("!!!", ""),
            ("", ""),
        ],
    )
    def test_strips_characters_outside_allow_list(self, raw, expected):
        assert sanitize_field_name(raw) == expected

    def test_none_yields_empty_string(self):
        assert sanitize_field_name(None) == ""

    def test_non_string_input_is_stringified(self):
        assert sanitize_field_name(2020) == "2020"

    def test_idempotent(self):
        once = sanitize_field_name('a"b\'c]d')
        assert sanitize_field_name(once) == once

    def test_output_never_contains_quote_or_bracket(self):
        for raw in ['"', "'", "]", "[", "\\", '"]; DROP']:
            cleaned = sanitize_field_name(raw)
            assert not set(cleaned) & set("\"'[]\\;")


class TestDocumentPath:

    def test_bracketed_path(self):
        assert document_path("Sub Category") == 'c["Sub Category"]'

    def test_path_is_sanitized(self):
        assert document_path('Name"]') == 'c["Name"]'
