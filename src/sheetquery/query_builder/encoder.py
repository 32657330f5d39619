"""Literal encoding for filter values."""

from typing import Any, Iterable

from sheetquery.constants import FieldType
from sheetquery.utils.numbers import coerce_number, format_number


class ValueEncoder:
    """Escape scalar values for embedding in a statement.

    Numeric fields emit bare numbers when the value parses and fall back to
    a quoted string literal when it does not. String fields always emit a
    quoted literal.

    Example:
        >>> encoder = ValueEncoder()
        >>> encoder.encode("2020", FieldType.NUMERIC)
        '2020'
        >>> encoder.encode("O'Brien", FieldType.STRING)
        "'O\\\\'Brien'"
    """

    def encode(self, value: Any, field_type: FieldType) -> str:
        if field_type == FieldType.NUMERIC:
            number = coerce_number(value)
            if number is not None:
                return format_number(number)
        return self.quote_string(value)

    def encode_many(self, values: Iterable[Any], field_type: FieldType) -> str:
        """Encode each value and join them for an ``IN (...)`` list."""
        return ",".join(self.encode(value, field_type) for value in values)

    def encode_literal(self, value: Any) -> str:
        """Encode by the value's own type instead of the field's.

        Used for structured conditions whose values arrive already typed
        from JSON.
        """
        if value is None:
            return "null"
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (int, float)):
            number = coerce_number(value)
            if number is not None:
                return format_number(number)
        return self.quote_string(value)

    @staticmethod
    def escape_string(value: Any) -> str:
        """Escape backslashes and single quotes.

        Backslashes are escaped first so a value ending in ``\\`` cannot
        consume the closing quote. The original text is recovered by
        replacing every ``\\x`` pair with ``x``; undoing only the quote
        escaping is not enough for values that contain backslashes.
        """
        text = value if isinstance(value, str) else str(value)
        return text.replace("\\", "\\\\").replace("'", "\\'")

    @classmethod
    def quote_string(cls, value: Any) -> str:
        """Quote a string value for the statement."""
        return f"'{cls.escape_string(value)}'"

    @staticmethod
    def is_empty(value: Any) -> bool:
        """True for values that must not produce a clause.

        ``None``, the empty string and empty sequences are skipped so that an
        empty filter never turns into ``= ''`` and silently excludes
        documents that lack the field.
        """
        if value is None:
            return True
        if isinstance(value, str):
            return value == ""
        if isinstance(value, (list, tuple)):
            return len(value) == 0
        return False
