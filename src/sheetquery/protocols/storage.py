"""Storage protocol definitions.

The compiler never talks to a database directly. Everything it produces
is handed to an object satisfying ``DocumentStore``.
"""

from typing import Any, Dict, List, Optional, Protocol, Tuple, runtime_checkable


@runtime_checkable
class DocumentStore(Protocol):
    """Read-only query capability over the records container.

    Implementations decide how paged reads are served: by pushing
    ``OFFSET``/``LIMIT`` into the statement or by slicing a fully
    materialized result.
    """

    def execute(self, sql: str) -> List[Any]:
        """Run a statement and return every result.

        Args:
            sql: Complete statement (``SELECT ... FROM c WHERE ...``)

        Returns:
            Documents, or bare values for ``SELECT VALUE`` statements

        Raises:
            SheetQueryError: With STORAGE_QUERY_ERROR when the query fails
        """
        ...

    def fetch_page(
        self,
        sql: str,
        count_sql: str,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> Tuple[List[Dict[str, Any]], int]:
        """Run a statement and return one window of it plus the total size.

        Args:
            sql: Statement selecting the documents
            count_sql: ``SELECT VALUE COUNT(1)`` statement with the same predicate
            offset: Number of leading results to skip
            limit: Maximum results to return, None for all

        Returns:
            Tuple of (documents in the window, total matching documents)
        """
        ...
