import time
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional, Tuple

from sheetquery.common import SheetQueryError, storage_query_error
from sheetquery.constants import PaginationMode
from sheetquery.logging import get_logger
from sheetquery.query_builder.compiler import QueryCompiler
from sheetquery.results.pagination import paginate
from sheetquery.utils import retry_with_backoff, traced

logger = get_logger(__name__)


class BaseDocumentStore(ABC):
    """Read-only statement execution with retries and paged reads.

    Subclasses only provide ``_run_query`` and, optionally, ``_is_transient``.
    This class wraps them with:
        - exponential backoff retries for transient failures
        - conversion of every other failure to STORAGE_QUERY_ERROR
        - OpenTelemetry spans and duration logging
        - paged reads according to the pagination mode

    Pagination modes:
        in_memory: the full result is materialized and sliced, and the
            total is its length
        push_down: ``OFFSET``/``LIMIT`` is appended to the statement and the
            total comes from the count statement

    Args:
        pagination_mode: How ``fetch_page`` windows results
        max_retries: Retries after the first attempt for transient failures
        retry_delay: Initial backoff delay in seconds
        max_retry_delay: Backoff delay cap in seconds
        sleep: Function used to wait between attempts
    """

    def __init__(
        self,
        pagination_mode: PaginationMode = PaginationMode.IN_MEMORY,
        max_retries: int = 3,
        retry_delay: float = 1.0,
        max_retry_delay: float = 30.0,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.pagination_mode = PaginationMode(pagination_mode)
        self._query_with_retry = retry_with_backoff(
            max_retries=max_retries,
            initial_delay=retry_delay,
            max_delay=max_retry_delay,
            retry_condition=self._is_transient,
            sleep=sleep,
        )(self._run_query)

    @abstractmethod
    def _run_query(self, sql: str) -> List[Any]:
        """Execute ``sql`` once and return every result."""

    def _is_transient(self, exc: Exception) -> bool:
        """Return True when ``exc`` is worth retrying."""
        return False

    def _span_attributes(self, sql: str, operation: str) -> Dict[str, Any]:
        statement = (sql or "").strip()
        if len(statement) > 4096:
            statement = f"{statement[:4093]}..."
        return {
            "db.system": "cosmosdb",
            "db.operation": operation,
            "db.statement": statement,
            "db.statement.length": len(statement),
        }

    @traced(
        span_name="sheetquery.storage.execute",
        attribute_getter=lambda self, sql: self._span_attributes(sql, "execute"),
    )
    def execute(self, sql: str) -> List[Any]:
        """Run a statement and return every result.

        Raises:
            SheetQueryError: STORAGE_QUERY_ERROR when the query fails
        """
        start_time = time.time()
        try:
            items = self._query_with_retry(sql)
        except SheetQueryError:
            raise
        except Exception as exc:
            duration = time.time() - start_time
            logger.error(
                "Document query failed",
                extra={"duration.seconds": f"{duration:.6f}", "error": str(exc)},
            )
            raise storage_query_error(sql, exc, is_retryable=self._is_transient(exc)) from exc

        duration = time.time() - start_time
        logger.info(
            "Document query executed",
            extra={"duration.seconds": f"{duration:.6f}", "result_count": len(items)},
        )
        return items

    def fetch_page(
        self,
        sql: str,
        count_sql: str,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> Tuple[List[Dict[str, Any]], int]:
        """Return one window of ``sql`` plus the total number of matches."""
        offset = max(offset, 0)

        if self.pagination_mode == PaginationMode.PUSH_DOWN and limit is not None:
            counts = self.execute(count_sql)
            total = int(counts[0]) if counts else 0
            items = self.execute(QueryCompiler.with_pagination(sql, offset, max(limit, 0)))
            return items, total

        page = paginate(self.execute(sql), offset, limit)
        return page.items, page.total
