"""Document store adapters.

``BaseDocumentStore`` holds retries, error conversion, tracing and paged
reads; ``CosmosDocumentStore`` supplies the Cosmos DB query itself. The
Cosmos adapter is imported lazily so that the rest of the package does not
require ``azure-cosmos`` at import time.
"""

from sheetquery.storage.base import BaseDocumentStore
from sheetquery.storage.factory import get_document_store, set_document_store

__all__ = [
    "BaseDocumentStore",
    "get_document_store",
    "set_document_store",
]
