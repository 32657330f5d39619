"""Azure Cosmos DB document store."""

import time
from typing import Any, Callable, List, Optional

from azure.cosmos import CosmosClient
from azure.cosmos.exceptions import CosmosHttpResponseError

from sheetquery.common import configuration_error, connection_error
from sheetquery.constants import CosmosAuthMethod
from sheetquery.logging import get_logger
from sheetquery.settings import CosmosSettings
from sheetquery.storage.base import BaseDocumentStore

logger = get_logger(__name__)

TRANSIENT_STATUS_CODES = frozenset({408, 429, 449, 503})


class CosmosDocumentStore(BaseDocumentStore):
    """Query the records container of a Cosmos DB account.

    Every statement runs as a cross-partition query. The client is created
    lazily on first use; tests inject a container proxy directly.

    Example:
        >>> store = CosmosDocumentStore(get_settings().cosmos)
        >>> store.execute("SELECT VALUE COUNT(1) FROM c WHERE c.documentType = 'excel-row'")
        [1250]
    """

    def __init__(
        self,
        settings: CosmosSettings,
        container: Optional[Any] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        super().__init__(
            pagination_mode=settings.pagination_mode,
            max_retries=settings.max_retries,
            retry_delay=settings.retry_delay_seconds,
            max_retry_delay=settings.max_retry_delay_seconds,
            sleep=sleep,
        )
        self.settings = settings
        self._container = container
        self._client: Optional[CosmosClient] = None

    def _create_client(self) -> CosmosClient:
        if not self.settings.endpoint:
            raise configuration_error("Cosmos DB endpoint is not configured", config_key="COSMOS_ENDPOINT")

        try:
            if self.settings.auth_method == CosmosAuthMethod.MANAGED_IDENTITY:
                from azure.identity import DefaultAzureCredential

                return CosmosClient(self.settings.endpoint, credential=DefaultAzureCredential())

            if self.settings.key is None:
                raise configuration_error("Cosmos DB key is not configured", config_key="COSMOS_KEY")
            return CosmosClient(self.settings.endpoint, credential=self.settings.key.get_secret_value())
        except CosmosHttpResponseError as exc:
            raise connection_error(
                f"Failed to connect to Cosmos DB: {exc}",
                service="cosmosdb",
                host=self.settings.endpoint,
                cause=exc,
            ) from exc

    @property
    def container(self) -> Any:
        """Container proxy for the records container."""
        if self._container is None:
            self._client = self._create_client()
            database = self._client.get_database_client(self.settings.database)
            self._container = database.get_container_client(self.settings.container)
            logger.info(
                "Connected to Cosmos DB container",
                extra={"database": self.settings.database, "container": self.settings.container},
            )
        return self._container

    def _run_query(self, sql: str) -> List[Any]:
        options = {}
        if self.settings.max_item_count:
            options["max_item_count"] = self.settings.max_item_count
        return list(self.container.query_items(query=sql, enable_cross_partition_query=True, **options))

    def _is_transient(self, exc: Exception) -> bool:
        return isinstance(exc, CosmosHttpResponseError) and exc.status_code in TRANSIENT_STATUS_CODES
