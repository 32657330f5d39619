"""Factory for the configured document store."""

from typing import Optional

from sheetquery.common import configuration_error
from sheetquery.logging import get_logger
from sheetquery.protocols import DocumentStore

logger = get_logger(__name__)

_store: Optional[DocumentStore] = None


def get_document_store(force_reload: bool = False) -> DocumentStore:
    """Get the singleton document store built from ``COSMOS_*`` settings.

    Raises:
        SheetQueryError: CONFIG_ERROR when no Cosmos DB endpoint is configured
            or when running in test mode
    """
    global _store

    if _store is None or force_reload:
        from sheetquery.settings import get_settings, is_test_mode

        settings = get_settings()
        if is_test_mode():
            raise configuration_error("No document store is created in test mode; pass one explicitly")
        if not settings.cosmos.is_configured:
            raise configuration_error("Cosmos DB endpoint is not configured", config_key="COSMOS_ENDPOINT")

        from sheetquery.storage.cosmos import CosmosDocumentStore

        logger.debug("Creating Cosmos DB document store", extra={"container": settings.cosmos.container})
        _store = CosmosDocumentStore(settings.cosmos)

    return _store


def set_document_store(store: Optional[DocumentStore]) -> None:
    """Replace the singleton store; None resets it."""
    global _store
    _store = store
