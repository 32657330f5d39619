"""Post-processing of query results.

- sanitizer: strips storage metadata before documents leave the library
- distinct: per-field distinct values for filter pickers
- pagination: offset/limit and page-numbered windows, paging parameters
"""

from sheetquery.results.distinct import DistinctValueExtractor, parse_field_list
from sheetquery.results.pagination import paginate, paginate_pages, parse_int_param
from sheetquery.results.sanitizer import sanitize_document, sanitize_documents

__all__ = [
    "DistinctValueExtractor",
    "parse_field_list",
    "paginate",
    "paginate_pages",
    "parse_int_param",
    "sanitize_document",
    "sanitize_documents",
]
