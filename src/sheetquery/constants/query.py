"""Query parameter and filter constants.

These values are shared by the clause builders, the distinct value
extractor and the query service operations.
"""

from enum import Enum
from typing import FrozenSet


class FieldType(str, Enum):
    """Inferred type of a filterable field.

    Values:
        NUMERIC: Values are emitted as bare numbers when they parse
        STRING: Values are always emitted as quoted literals
    """

    NUMERIC = "numeric"
    STRING = "string"


class FilterOperator(str, Enum):
    """Operators accepted in the structured ``filters`` parameter."""

    EQ = "="
    EQ_ALIAS = "=="
    NE = "!="
    NE_ALIAS = "<>"
    GT = ">"
    GE = ">="
    LT = "<"
    LE = "<="
    CONTAINS = "contains"
    NOT_CONTAINS = "!contains"
    LIKE = "like"
    STARTS_WITH = "startsWith"
    ENDS_WITH = "endsWith"
    IN = "in"
    NOT_IN = "notIn"
    BETWEEN = "between"
    EMPTY = "empty"
    NOT_EMPTY = "!empty"

    @classmethod
    def parse(cls, raw: str) -> "FilterOperator":
        """Map a raw operator string to an operator, defaulting to equality."""
        try:
            return cls(raw)
        except ValueError:
            return cls.EQ


# Request parameters that control the query and never act as filters
RESERVED_PARAMETERS: FrozenSet[str] = frozenset({"fileId", "token", "limit", "offset", "fields"})

FILE_ID_PARAM = "fileId"
FIELDS_PARAM = "fields"
LIMIT_PARAM = "limit"
OFFSET_PARAM = "offset"
PAGE_PARAM = "page"
PAGE_SIZE_PARAM = "pageSize"
CONDITIONS_PARAM = "filters"
SORT_PARAM = "sort"

# Descending sort marker, as in ``sort=-Amount``
SORT_DESCENDING_PREFIX = "-"

# Substring marking a field as numeric when no explicit spec exists
NUMERIC_FIELD_MARKER = "year"

# Allowed characters in a field name once sanitized
FIELD_NAME_PATTERN = r"[^a-zA-Z0-9 _\-]"
