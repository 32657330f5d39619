"""Unit tests for literal encoding."""

import re

import pytest

from sheetquery.constants import FieldType
from sheetquery.query_builder import ValueEncoder


class TestValueEncoder:

    @pytest.fixture
    def encoder(self):
        return ValueEncoder()

    def test_numeric_field_emits_bare_number(self, encoder):
        assert encoder.encode("2020", FieldType.NUMERIC) == "2020"

    def test_numeric_field_trims_before_parsing(self, encoder):
        assert encoder.encode(" 2020 ", FieldType.NUMERIC) == "2020"

    def test_numeric_field_keeps_fraction(self, encoder):
        assert encoder.encode("2020.5", FieldType.NUMERIC) == "2020.5"

    def test_numeric_field_falls_back_to_string_literal(self, encoder):
        assert encoder.encode("abc", FieldType.NUMERIC) == "'abc'"

    def test_numeric_field_never_emits_nan(self, encoder):
        assert encoder.encode("nan", FieldType.NUMERIC) == "'nan'"

    def test_string_field_quotes_digits(self, encoder):
        assert encoder.encode("2020", FieldType.STRING) == "'2020'"

    def test_field_type_as_plain_string(self, encoder):
        assert encoder.encode("7", "numeric") == "7"

    def test_single_quote_is_escaped(self, encoder):
        assert encoder.encode("O'Brien", FieldType.STRING) == r"'O\'Brien'"

    def test_backslash_escaped_before_quote(self, encoder):
        assert encoder.escape_string("a\\") == "a\\\\"
        assert encoder.escape_string("\\'") == r"\\\'"
        assert encoder.quote_string("end\\") == r"'end\\'"

    @pytest.mark.parametrize("value", ["plain", "O'Brien", "a\\'b", "end\\", "\\\\''", "'; DROP c --"])
    def test_escaping_reverses_to_original(self, encoder, value):
        literal = encoder.quote_string(value)
        inner = literal[1:-1]
        assert re.search(r"(?<!\\)(?:\\\\)*'", inner) is None
        assert re.sub(r"\\(.)", r"\1", inner) == value

    def test_encode_many(self, encoder):
        assert encoder.encode_many(["2020", "x"], FieldType.NUMERIC) == "2020,'x'"
        assert encoder.encode_many(["A", "B"], FieldType.STRING) == "'A','B'"

    @pytest.mark.parametrize(
        "value, expected",
        [
            (None, "null"),
            (True, "true"),
            (False, "false"),
            (5, "5"),
            (2.0, "2"),
            (2.5, "2.5"),
            ("5", "'5'"),
            ("it's", r"'it\'s'"),
        ],
    )
    def test_encode_literal_uses_value_type(self, encoder, value, expected):
        assert encoder.encode_literal(value) == expected

    @pytest.mark.parametrize(
        "value, expected",
        [(None, True), ("", True), ([], True), ((), True), (" ", False), ("0", False), (0, False), (["a"], False)],
    )
    def test_is_empty(self, encoder, value, expected):
        assert encoder.is_empty(value) is expected
