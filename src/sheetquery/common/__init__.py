"""Common exceptions for SheetQuery.

Exception Design:
    The exception system uses error codes for categorization rather than
    numerous specific exception classes. All exceptions are SheetQueryError
    instances carrying an ErrorCode and structured details.

Degrade, don't reject:
    Malformed filter input never raises. Unsafe field names are sanitized,
    empty values are skipped and non-numeric values on numeric fields fall
    back to string literals. Only missing required parameters, unparseable
    paging parameters and storage failures surface as errors.
"""

from sheetquery.common.exceptions import (
    SheetQueryError,
    ErrorCode,
    # Helper functions
    configuration_error,
    validation_error,
    missing_parameter_error,
    storage_query_error,
    connection_error,
    resource_not_found_error,
)

__all__ = [
    # Base Exception and Error Codes
    "SheetQueryError",
    "ErrorCode",
    # Helper functions
    "configuration_error",
    "validation_error",
    "missing_parameter_error",
    "storage_query_error",
    "connection_error",
    "resource_not_found_error",
]
