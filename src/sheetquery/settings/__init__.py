"""Settings module providing configuration management for SheetQuery.

Built on pydantic-settings. Each concern lives in its own file and reads
its own environment prefix:

    - cosmos.py: Cosmos DB connection, container and pagination mode (COSMOS_)
    - query.py: Field type inference and document discriminators (QUERY_)
    - main.py: Root settings aggregating the above, plus get_settings()

Configuration Sources (precedence order):
    1. Environment Variables (highest priority)
    2. ``.env`` file
    3. Default Values in code (lowest priority)

Quick Start:
    >>> from sheetquery.settings import get_settings
    >>> settings = get_settings()
    >>> settings.cosmos.container
    'excel-records'
"""

from .main import _Settings, get_settings, _reload_settings, is_test_mode
from .base import SheetQueryBaseSettings
from .cosmos import CosmosSettings
from .query import QuerySettings

__all__ = [
    "get_settings",
    "is_test_mode",
    "CosmosSettings",
    "QuerySettings",
]
