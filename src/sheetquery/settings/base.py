from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SheetQueryBaseSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_nested_delimiter="__"
    )

    @staticmethod
    def split_csv(value: str) -> List[str]:
        """Split a comma-separated setting into trimmed, non-empty items."""
        return [item.strip() for item in value.split(",") if item.strip()]


class RetrySettingsMixin(BaseSettings):
    """Retry knobs shared by every component that talks to the store."""

    max_retries: int = Field(
        default=3,
        ge=0,
        le=10,
        description="Maximum number of retry attempts for transient storage failures"
    )
    retry_delay_seconds: float = Field(
        default=1.0,
        ge=0.0,
        le=60.0,
        description="Initial delay between retry attempts in seconds"
    )
    max_retry_delay_seconds: float = Field(
        default=30.0,
        ge=0.0,
        le=300.0,
        description="Upper bound for the exponential backoff delay"
    )
