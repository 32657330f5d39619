"""Cosmos DB configuration settings.

Connection details for the document store that holds uploaded
spreadsheet rows and import metadata records.
"""

from typing import Optional

from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import SettingsConfigDict

from sheetquery.constants import (
    CosmosAuthMethod,
    PaginationMode,
    DEFAULT_CONTAINER,
    DEFAULT_PARTITION_KEY_PATH,
)
from .base import SheetQueryBaseSettings, RetrySettingsMixin


class CosmosSettings(RetrySettingsMixin, SheetQueryBaseSettings):
    """Configuration settings for the Cosmos DB document store.

    Environment variables use the ``COSMOS_`` prefix, e.g.
    ``COSMOS_ENDPOINT``, ``COSMOS_KEY``, ``COSMOS_PAGINATION_MODE``.
    """

    model_config = SettingsConfigDict(
        env_prefix="COSMOS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    endpoint: Optional[str] = Field(
        None,
        description="Cosmos DB account endpoint (https://<account>.documents.azure.com:443/)"
    )
    key: Optional[SecretStr] = Field(
        None,
        description="Cosmos DB account key. Required when auth_method is access_key"
    )
    auth_method: CosmosAuthMethod = Field(
        default=CosmosAuthMethod.ACCESS_KEY,
        description="Authentication method: access_key or managed_identity"
    )
    database: str = Field(
        default="excel-data",
        description="Database holding the records container"
    )
    container: str = Field(
        default=DEFAULT_CONTAINER,
        description="Container holding row and import metadata documents"
    )
    partition_key_path: str = Field(
        default=DEFAULT_PARTITION_KEY_PATH,
        description="Partition key path of the records container"
    )
    pagination_mode: PaginationMode = Field(
        default=PaginationMode.IN_MEMORY,
        description=(
            "in_memory materializes the full filtered result and slices it; "
            "push_down appends OFFSET/LIMIT to the statement"
        )
    )
    max_item_count: Optional[int] = Field(
        default=None,
        ge=1,
        description="Page size requested from Cosmos DB while iterating results"
    )

    @field_validator("partition_key_path")
    @classmethod
    def validate_partition_key_path(cls, v: str) -> str:
        if not v.startswith("/"):
            raise ValueError(f"Partition key path must start with '/': {v}")
        return v

    @model_validator(mode="after")
    def validate_credentials(self) -> "CosmosSettings":
        if self.endpoint and self.auth_method == CosmosAuthMethod.ACCESS_KEY and self.key is None:
            raise ValueError("COSMOS_KEY is required when auth_method is access_key")
        return self

    @property
    def is_configured(self) -> bool:
        """True when an endpoint is available."""
        return bool(self.endpoint)
