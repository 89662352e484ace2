"""GraphQL context for request-scoped dependencies.

A new context is built for every GraphQL execution and carries:
- the StatsRepository bound to the shared query executor
- DataLoaders (one batching loader per request)
- the request id, for log correlation

See https://strawberry.rocks/docs/integrations/fastapi#context_getter
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from strawberry.fastapi import BaseContext

if TYPE_CHECKING:
    from starlette.background import BackgroundTasks
    from starlette.requests import Request
    from starlette.responses import Response
    from starlette.websockets import WebSocket

    from fpl_service.features.graphql.dataloaders import DataLoaders
    from fpl_service.features.stats.repository import StatsRepository


@dataclass
class GraphQLContext(BaseContext):
    """Request context for GraphQL operations.

    Example usage in resolver:
        @strawberry.field
        async def events(self, info: Info[GraphQLContext, None]) -> list[EventType] | None:
            rows = await info.context.repository.fetch_events()
            return [EventType.from_row(row) for row in rows]
    """

    # Standard Strawberry/FastAPI context fields
    request: Request | WebSocket | None = None
    response: Response | None = None
    background_tasks: BackgroundTasks | None = None

    repository: StatsRepository = field(default=None)  # type: ignore[assignment]
    loaders: DataLoaders = field(default=None)  # type: ignore[assignment]
    request_id: str | None = None


__all__ = ["GraphQLContext"]
