from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(Enum):
    """Standard error codes for SheetQuery operations.

    This enum provides categorized error codes that can be used
    to identify error types without creating numerous exception classes.

    Attributes:
        CONFIG_*: Configuration-related errors
        VALIDATION_*: Caller input errors
        CONNECTION_*: Store client creation errors
        EXECUTION_*: Storage query errors
        RESOURCE_*: Missing documents
    """
    # Configuration errors
    CONFIG_ERROR = "CONFIG_001"

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_001"
    INVALID_ARGUMENT = "VALIDATION_002"
    MISSING_PARAMETER = "VALIDATION_003"

    # Connection errors
    CONNECTION_ERROR = "CONNECTION_001"

    # Execution errors
    STORAGE_QUERY_ERROR = "EXECUTION_001"

    # Resource errors
    RESOURCE_NOT_FOUND = "RESOURCE_001"


class SheetQueryError(Exception):
    """Base exception for all SheetQuery errors.

    Uses error codes for categorization instead of a deep exception
    hierarchy. Callers translate ``error_code`` into a transport-appropriate
    response; ``to_dict()`` gives a serializable body.

    Attributes:
        message: Error message
        error_code: Error code from ErrorCode enum
        details: Additional error details
        cause: Optional underlying exception
        is_retryable: Whether the error is transient and can be retried
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.STORAGE_QUERY_ERROR,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
        is_retryable: bool = False
    ):
        """Initialize SheetQuery error.

        Args:
            message: Error message
            error_code: Error code from ErrorCode enum
            details: Additional error details
            cause: Optional underlying exception
            is_retryable: Whether error is transient
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.cause = cause
        self.is_retryable = is_retryable

        # Lazy import to avoid circular dependency
        from sheetquery.logging import get_logger
        logger = get_logger(__name__)
        logger.error(
            message,
            extra={
                "error_code": error_code.value,
                "details": self.details,
                "is_retryable": is_retryable,
            },
            exc_info=cause is not None
        )

    def __str__(self) -> str:
        """String representation of the error."""
        msg = f"[{self.error_code.value}] {self.message}"
        if self.cause:
            msg = f"{msg} (caused by: {type(self.cause).__name__}: {str(self.cause)})"
        return msg

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        return {
            "type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code.value,
            "error_name": self.error_code.name,
            "details": self.details,
            "is_retryable": self.is_retryable
        }


def _truncate_query(query: str) -> str:
    return query[:500] + "..." if len(query) > 500 else query


# Helper functions for common error scenarios
def configuration_error(
    message: str,
    config_key: Optional[str] = None,
    **kwargs
) -> SheetQueryError:
    """Create a configuration error.

    Args:
        message: Error message
        config_key: Configuration key that caused the error
        **kwargs: Additional error details

    Returns:
        SheetQueryError with CONFIG_ERROR code
    """
    details = kwargs.get('details', {})
    if config_key:
        details["config_key"] = config_key

    return SheetQueryError(
        message=message,
        error_code=ErrorCode.CONFIG_ERROR,
        details=details,
        **{k: v for k, v in kwargs.items() if k != 'details'}
    )


def validation_error(
    message: str,
    field: Optional[str] = None,
    value: Any = None,
    **kwargs
) -> SheetQueryError:
    """Create a validation error for malformed caller input.

    Args:
        message: Error message
        field: Parameter that failed validation
        value: Invalid value
        **kwargs: Additional error details

    Returns:
        SheetQueryError with INVALID_ARGUMENT code
    """
    details = kwargs.get('details', {})
    if field:
        details["field"] = field
    if value is not None:
        details["value"] = str(value)

    return SheetQueryError(
        message=message,
        error_code=ErrorCode.INVALID_ARGUMENT,
        details=details,
        **{k: v for k, v in kwargs.items() if k != 'details'}
    )


def missing_parameter_error(parameter: str, **kwargs) -> SheetQueryError:
    """Create an error for a required request parameter that was not supplied."""
    details = kwargs.get('details', {})
    details["parameter"] = parameter

    return SheetQueryError(
        message=f"{parameter} parameter is required",
        error_code=ErrorCode.MISSING_PARAMETER,
        details=details,
        **{k: v for k, v in kwargs.items() if k != 'details'}
    )


def storage_query_error(
    query: str,
    original_error: Exception,
    **kwargs
) -> SheetQueryError:
    """Create a storage query error.

    Args:
        query: Statement that failed
        original_error: The underlying exception
        **kwargs: Additional error details

    Returns:
        SheetQueryError with STORAGE_QUERY_ERROR code
    """
    details = kwargs.get('details', {})
    details["query"] = _truncate_query(query)

    return SheetQueryError(
        message=f"Query execution failed: {str(original_error)}",
        error_code=ErrorCode.STORAGE_QUERY_ERROR,
        details=details,
        cause=original_error,
        **{k: v for k, v in kwargs.items() if k not in ['details', 'cause']}
    )


def connection_error(
    message: str,
    service: Optional[str] = None,
    host: Optional[str] = None,
    **kwargs
) -> SheetQueryError:
    """Create a connection error.

    Args:
        message: Error message
        service: Service that failed to connect
        host: Host/endpoint that failed
        **kwargs: Additional error details

    Returns:
        SheetQueryError with CONNECTION_ERROR code
    """
    details = kwargs.get('details', {})
    if service:
        details["service"] = service
    if host:
        details["host"] = host

    return SheetQueryError(
        message=message,
        error_code=ErrorCode.CONNECTION_ERROR,
        details=details,
        **{k: v for k, v in kwargs.items() if k != 'details'}
    )


def resource_not_found_error(
    message: str,
    resource_type: Optional[str] = None,
    resource_name: Optional[str] = None,
    **kwargs
) -> SheetQueryError:
    """Create a resource not found error.

    Args:
        message: Error message
        resource_type: Type of resource (import, row, ...)
        resource_name: Identifier of the missing resource
        **kwargs: Additional error details

    Returns:
        SheetQueryError with RESOURCE_NOT_FOUND code
    """
    details = kwargs.get('details', {})
    if resource_type:
        details["resource_type"] = resource_type
    if resource_name:
        details["resource_name"] = resource_name

    return SheetQueryError(
        message=message,
        error_code=ErrorCode.RESOURCE_NOT_FOUND,
        details=details,
        **{k: v for k, v in kwargs.items() if k != 'details'}
    )
