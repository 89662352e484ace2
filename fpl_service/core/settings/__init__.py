"""Modular settings with pydantic-settings.

One frozen settings class per domain, each with its own environment prefix:

- APP_*     application and HTTP server settings
- DB_*      PostgreSQL connection and pool settings
- GRAPHQL_* GraphQL endpoint settings
- LOG_*     logging settings
"""

from __future__ import annotations

from .app import AppSettings
from .graphql import GraphQLSettings
from .loader import (
    clear_all_caches,
    get_app_settings,
    get_db_settings,
    get_graphql_settings,
    get_logging_settings,
)
from .logs import LoggingSettings
from .postgres import PostgresSettings
from .unified import Settings, get_settings

__all__ = [
    "AppSettings",
    "GraphQLSettings",
    "LoggingSettings",
    "PostgresSettings",
    "Settings",
    "clear_all_caches",
    "get_app_settings",
    "get_db_settings",
    "get_graphql_settings",
    "get_logging_settings",
    "get_settings",
]
