import functools
import time
from typing import Any, Callable, Dict, Optional, TypeVar

from opentelemetry.trace import Status, StatusCode

from sheetquery.telemetry import get_tracer


F = TypeVar('F', bound=Callable[..., Any])
T = TypeVar('T')

AttributeGetter = Callable[..., Optional[Dict[str, Any]]]

logger = None


def _get_logger():
    """Get logger instance lazily."""
    global logger
    if logger is None:
        from sheetquery.logging import get_logger
        logger = get_logger(__name__)
    return logger


def _span_attributes(getter: Optional[AttributeGetter], args, kwargs) -> Dict[str, Any]:
    if getter is None:
        return {}
    try:
        found = getter(*args, **kwargs) or {}
    except Exception as exc:
        _get_logger().warning("Span attribute getter failed: %s", exc)
        return {}
    return {key: value for key, value in found.items() if value is not None}


def traced(
    span_name: Optional[str] = None,
    *,
    attribute_getter: Optional[AttributeGetter] = None,
) -> Callable[[F], F]:
    """Run the decorated function inside an OpenTelemetry span.

    Args:
        span_name: Span name; defaults to ``module.qualname`` of the function.
        attribute_getter: Called with the function's arguments; the returned
            mapping (``None`` values skipped) becomes span attributes.

    Exceptions are recorded on the span, which is marked as failed, and
    then propagate unchanged.
    """

    def decorator(func: F) -> F:
        name = span_name or f"{func.__module__}.{func.__qualname__}"

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            with get_tracer(func.__module__).start_as_current_span(name) as span:
                for key, value in _span_attributes(attribute_getter, args, kwargs).items():
                    span.set_attribute(key, value)
                try:
                    return func(*args, **kwargs)
                except Exception as exc:
                    span.record_exception(exc)
                    span.set_status(Status(StatusCode.ERROR, str(exc)))
                    raise

        return wrapper  # type: ignore[return-value]

    return decorator


def retry_with_backoff(
    max_retries: int = 3,
    initial_delay: float = 1.0,
    max_delay: float = 30.0,
    retry_condition: Optional[Callable[[Exception], bool]] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Retry a callable on failure, doubling the wait after each attempt.

    Args:
        max_retries: Retries after the first attempt; 0 disables retrying.
        initial_delay: Seconds to wait before the first retry.
        max_delay: Upper bound for any single wait.
        retry_condition: Decides per exception whether another attempt is
            worth making. Without it every exception is retried.
        sleep: Waiting function, replaceable in tests.

    The last exception propagates once retries are exhausted or the
    condition rejects it.

    Example:
        >>> @retry_with_backoff(
        ...     max_retries=5,
        ...     retry_condition=lambda exc: getattr(exc, "status_code", None) == 429,
        ... )
        ... def run_query(container, sql):
        ...     return list(container.query_items(sql, enable_cross_partition_query=True))
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> T:
            delay = initial_delay
            attempt = 0
            while True:
                try:
                    return func(*args, **kwargs)
                except Exception as exc:
                    if retry_condition is not None and not retry_condition(exc):
                        raise
                    if attempt >= max_retries:
                        _get_logger().error(
                            "Giving up on %s after %d attempts", func.__name__, attempt + 1
                        )
                        raise
                    attempt += 1
                    _get_logger().warning(
                        "Attempt %d of %s failed: %s; retrying in %.2fs",
                        attempt, func.__name__, exc, delay,
                    )
                    sleep(delay)
                    delay = min(delay * 2, max_delay)

        return wrapper

    return decorator
