import os
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import SettingsConfigDict

from .base import SheetQueryBaseSettings, RetrySettingsMixin
from .cosmos import CosmosSettings
from .query import QuerySettings


def is_test_mode() -> bool:
    """Check if the application is running in test mode.

    Test mode is controlled by the SHEETQUERY_TEST_MODE environment variable.
    In test mode no Cosmos client is created implicitly; callers must pass
    a store explicitly.

    Returns:
        bool: True if SHEETQUERY_TEST_MODE="true" (case-insensitive), False otherwise
    """
    return os.getenv("SHEETQUERY_TEST_MODE", "").lower() == "true"


class _Settings(RetrySettingsMixin, SheetQueryBaseSettings):

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_nested_delimiter="__"
    )

    app_env: str = Field(
        default="dev",
        description="Application deployment environment (e.g., dev, qa, prod, local)"
    )
    log_level: str = Field(
        default="INFO",
        description="Root log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    cosmos: CosmosSettings = Field(
        default_factory=CosmosSettings,
        description="Cosmos DB document store configuration"
    )
    query: QuerySettings = Field(
        default_factory=QuerySettings,
        description="Filter compilation configuration"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


# Singleton instance
_settings: Optional[_Settings] = None


def get_settings(force_reload: bool = False) -> _Settings:
    """Get the singleton settings instance for the application.

    Settings are loaded from environment variables (and ``.env``) on first
    access and reused afterwards.

    Args:
        force_reload: If True, creates a new Settings instance even if
                     one already exists. Useful for testing or when
                     environment variables have changed.

    Returns:
        Settings: The singleton Settings instance

    Example:
        ```python
        settings = get_settings()
        container = settings.cosmos.container

        new_settings = get_settings(force_reload=True)
        assert new_settings is not settings
        ```
    """
    global _settings

    if _settings is None or force_reload:
        _settings = _Settings()

    return _settings


def _reload_settings() -> _Settings:
    """Force reload of settings.

    This is primarily for testing purposes where you need to reset
    the singleton instance.
    """
    global _settings
    _settings = None
    return get_settings(force_reload=True)
