"""Router registry and setup."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fpl_service.core.settings import get_graphql_settings
from fpl_service.features.graphql.router import create_graphql_router
from fpl_service.features.health.router import router as health_router

if TYPE_CHECKING:
    from fastapi import FastAPI

    from fpl_service.core.settings import GraphQLSettings

logger = logging.getLogger(__name__)


def setup_routers(app: FastAPI, graphql_settings: GraphQLSettings | None = None) -> None:
    """Register the health and GraphQL routers."""
    graphql_settings = graphql_settings or get_graphql_settings()

    app.include_router(health_router)

    if graphql_settings.enabled:
        app.include_router(create_graphql_router(graphql_settings))
        logger.debug("GraphQL endpoint mounted", extra={"path": graphql_settings.path})
