"""Unit tests for the error model."""

from sheetquery.common import (
    ErrorCode,
    SheetQueryError,
    missing_parameter_error,
    storage_query_error,
)


class TestSheetQueryError:

    def test_to_dict(self):
        error = missing_parameter_error("fileId")
        assert error.to_dict() == {
            "type": "SheetQueryError",
            "message": "fileId parameter is required",
            "error_code": "VALIDATION_003",
            "error_name": "MISSING_PARAMETER",
            "details": {"parameter": "fileId"},
            "is_retryable": False,
        }

    def test_str_includes_cause(self):
        error = storage_query_error("SELECT * FROM c", RuntimeError("down"))
        assert str(error) == "[EXECUTION_001] Query execution failed: down (caused by: RuntimeError: down)"

    def test_long_queries_are_truncated(self):
        error = storage_query_error("x" * 600, RuntimeError("down"))
        assert error.details["query"] == "x" * 500 + "..."

    def test_storage_error_keeps_retryable_flag(self):
        error = storage_query_error("SELECT * FROM c", RuntimeError("busy"), is_retryable=True)
        assert error.error_code is ErrorCode.STORAGE_QUERY_ERROR
        assert error.is_retryable is True
        assert isinstance(error.cause, RuntimeError)

    def test_default_code_is_storage_query_error(self):
        error = SheetQueryError("x")
        assert error.error_code is ErrorCode.STORAGE_QUERY_ERROR
        assert error.details == {}
        assert str(error) == "[EXECUTION_001] x"
