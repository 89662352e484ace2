"""GraphQL router for FastAPI integration.

Provides:
- GraphQL endpoint at GRAPHQL_PATH
- GraphiQL IDE on GET when enabled
- Request context with repository and DataLoaders
"""

from __future__ import annotations

import logging
from typing import Annotated, Any, cast

from fastapi import APIRouter, BackgroundTasks, Depends, Request, Response
from strawberry.fastapi import GraphQLRouter

from fpl_service.core.settings import GraphQLSettings, get_db_settings, get_graphql_settings
from fpl_service.features.graphql.context import GraphQLContext
from fpl_service.features.graphql.dataloaders import create_dataloaders
from fpl_service.features.graphql.schema import schema
from fpl_service.features.stats.repository import StatsRepository
from fpl_service.infra.database import QueryExecutor, get_query_executor

logger = logging.getLogger(__name__)


async def get_graphql_context(
    request: Request,
    response: Response,
    background_tasks: BackgroundTasks,
    executor: Annotated[QueryExecutor, Depends(get_query_executor)],
) -> GraphQLContext:
    """Create the per-request GraphQL context.

    Runs once per GraphQL execution. It performs no I/O: the repository
    only holds the executor and the loaders are created empty, so every
    request gets its own batching boundary and cache.
    """
    repository = StatsRepository(executor, get_db_settings().schema_name)
    return GraphQLContext(
        request=request,
        response=response,
        background_tasks=background_tasks,
        repository=repository,
        loaders=create_dataloaders(repository),
        request_id=getattr(request.state, "request_id", None),
    )


def create_graphql_router(settings: GraphQLSettings | None = None) -> APIRouter:
    """Create the GraphQL router serving GET (IDE) and POST on the configured path."""
    settings = settings or get_graphql_settings()

    return GraphQLRouter(
        schema,
        context_getter=cast("Any", get_graphql_context),
        graphql_ide=settings.get_graphql_ide() or None,
        path=settings.path,
        tags=["graphql"],
    )


__all__ = ["create_graphql_router", "get_graphql_context"]
