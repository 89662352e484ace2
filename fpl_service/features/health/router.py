"""Health check endpoints.

- ``GET /health``: liveness probe used by the load balancer. It answers
  without touching the database, so a slow store never takes the task out of
  rotation on its own.
- ``GET /health/ready``: readiness probe that runs ``SELECT 1`` through the
  shared pool.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from fpl_service.core.database.exceptions import DataSourceError
from fpl_service.core.exceptions import ServiceUnavailableException
from fpl_service.infra.database import QueryExecutor, get_query_executor

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_class=PlainTextResponse,
    summary="Liveness check",
    description="Returns 200 with body 'ok' while the process is serving requests",
)
async def health_check() -> str:
    return "ok"


@router.get(
    "/health/ready",
    response_class=PlainTextResponse,
    summary="Readiness check",
    description="Returns 200 'ready' when the database answers, 503 problem details otherwise",
)
async def readiness_check(
    executor: Annotated[QueryExecutor, Depends(get_query_executor)],
) -> str:
    try:
        await executor.ping()
    except DataSourceError as exc:
        logger.warning("Readiness check failed", extra={"error": str(exc)})
        raise ServiceUnavailableException(
            detail="Database is not reachable",
            extra={"dependency": "postgres"},
        ) from exc
    return "ready"
