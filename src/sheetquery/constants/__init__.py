"""Constants module for SheetQuery.

This module contains all constant values and enumerations used throughout
the package. It has no dependencies on other SheetQuery modules.

Organization:
    - documents: Document store layout and discriminators
    - query: Request parameters, field types and filter operators
"""

from sheetquery.constants.documents import (
    DocumentType,
    CosmosAuthMethod,
    PaginationMode,
    DEFAULT_CONTAINER,
    DEFAULT_PARTITION_KEY_PATH,
    DOCUMENT_TYPE_ATTRIBUTE,
    PARTITION_KEY_ATTRIBUTE,
    IMPORT_ID_ATTRIBUTE,
    DOCUMENT_ID_ATTRIBUTE,
    HEADERS_ATTRIBUTE,
    FILE_NAME_ATTRIBUTE,
    IMPORT_ID_PREFIX,
    IMPORTS_PARTITION,
    IMPORT_SUMMARY_ATTRIBUTES,
)

from sheetquery.constants.query import (
    FieldType,
    FilterOperator,
    RESERVED_PARAMETERS,
    FILE_ID_PARAM,
    FIELDS_PARAM,
    LIMIT_PARAM,
    OFFSET_PARAM,
    PAGE_PARAM,
    PAGE_SIZE_PARAM,
    CONDITIONS_PARAM,
    SORT_PARAM,
    SORT_DESCENDING_PREFIX,
    NUMERIC_FIELD_MARKER,
    FIELD_NAME_PATTERN,
)

__all__ = [
    # Documents
    "DocumentType",
    "CosmosAuthMethod",
    "PaginationMode",
    "DEFAULT_CONTAINER",
    "DEFAULT_PARTITION_KEY_PATH",
    "DOCUMENT_TYPE_ATTRIBUTE",
    "PARTITION_KEY_ATTRIBUTE",
    "IMPORT_ID_ATTRIBUTE",
    "DOCUMENT_ID_ATTRIBUTE",
    "HEADERS_ATTRIBUTE",
    "FILE_NAME_ATTRIBUTE",
    "IMPORT_ID_PREFIX",
    "IMPORTS_PARTITION",
    "IMPORT_SUMMARY_ATTRIBUTES",
    # Query
    "FieldType",
    "FilterOperator",
    "RESERVED_PARAMETERS",
    "FILE_ID_PARAM",
    "FIELDS_PARAM",
    "LIMIT_PARAM",
    "OFFSET_PARAM",
    "PAGE_PARAM",
    "PAGE_SIZE_PARAM",
    "CONDITIONS_PARAM",
    "SORT_PARAM",
    "SORT_DESCENDING_PREFIX",
    "NUMERIC_FIELD_MARKER",
    "FIELD_NAME_PATTERN",
]
