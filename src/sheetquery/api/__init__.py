"""Public query operations.

These functions are the library's outer surface: an HTTP handler or CLI
passes the parsed request parameters straight through and serializes the
returned models with ``to_dict()``.
"""

from sheetquery.api.query import (
    get_distinct_file_values,
    get_distinct_values,
    get_files_by_filters,
    get_import_metadata,
    list_fields,
    query_file_rows,
    query_rows,
)

__all__ = [
    "query_file_rows",
    "query_rows",
    "get_distinct_file_values",
    "get_distinct_values",
    "get_files_by_filters",
    "get_import_metadata",
    "list_fields",
]
