
from sheetquery.__version__ import __version__

from sheetquery.api import (
    query_file_rows,
    get_distinct_file_values,
    get_distinct_values,
    get_files_by_filters,
    get_import_metadata,
    list_fields,
    query_rows,
)

from sheetquery.common.exceptions import SheetQueryError, ErrorCode

from sheetquery.query_builder import (
    FilterClauseBuilder,
    QueryCompiler,
    ValueEncoder,
    normalize_import_id,
    sanitize_field_name,
)

from sheetquery.results import (
    DistinctValueExtractor,
    sanitize_document,
)

from sheetquery.types import FieldInfo, FieldSpec, FieldSpecRegistry, Page, FilePage


__all__ = [
    "__version__",

    # Exceptions (public API)
    "SheetQueryError",
    "ErrorCode",

    # Compilation
    "FilterClauseBuilder",
    "QueryCompiler",
    "ValueEncoder",
    "normalize_import_id",
    "sanitize_field_name",

    # Results
    "DistinctValueExtractor",
    "sanitize_document",

    # Types
    "FieldSpec",
    "FieldSpecRegistry",
    "Page",
    "FilePage",
    "FieldInfo",

    # API
    "query_file_rows",
    "get_distinct_file_values",
    "get_distinct_values",
    "get_files_by_filters",
    "get_import_metadata",
    "list_fields",
    "query_rows",
]
