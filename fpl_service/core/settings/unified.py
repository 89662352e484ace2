"""Unified settings composition for convenient access.

Usage:
    from fpl_service.core.settings import get_settings

    settings = get_settings()
    print(settings.app.port)
    print(settings.db.schema_name)

Each nested settings class still loads from its own environment prefix
(APP_, DB_, GRAPHQL_, LOG_). Code that only needs one domain should prefer
the individual get_*_settings() functions.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .app import AppSettings
from .graphql import GraphQLSettings
from .logs import LoggingSettings
from .postgres import PostgresSettings


class Settings(BaseSettings):
    """Unified settings composing all domain settings."""

    model_config = SettingsConfigDict(
        frozen=True,
        extra="ignore",
    )

    app: AppSettings = Field(default_factory=AppSettings)
    db: PostgresSettings = Field(default_factory=PostgresSettings)
    graphql: GraphQLSettings = Field(default_factory=GraphQLSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached unified settings instance."""
    return Settings()
