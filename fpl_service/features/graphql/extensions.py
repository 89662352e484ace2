"""Strawberry extensions for the GraphQL schema.

- query depth limiting (GRAPHQL_MAX_QUERY_DEPTH)
- error classification and production masking

Extensions are registered as classes or factories, never as instances, so
strawberry builds fresh ones for each operation.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from strawberry.extensions import QueryDepthLimiter

from fpl_service.core.settings import get_graphql_settings
from fpl_service.features.graphql.error_handler import ErrorClassificationExtension

logger = logging.getLogger(__name__)


def depth_limiter_factory(max_depth: int) -> Callable[..., QueryDepthLimiter]:
    """Factory building a QueryDepthLimiter with ``max_depth``.

    strawberry calls it with ``execution_context=None``, which the limiter's
    own constructor does not accept.
    """

    def factory(**_: Any) -> QueryDepthLimiter:
        return QueryDepthLimiter(max_depth=max_depth)

    return factory


def get_extensions() -> list[Any]:
    """Extension classes and factories for the schema."""
    max_depth = get_graphql_settings().max_query_depth
    extensions: list[Any] = [
        depth_limiter_factory(max_depth),
        ErrorClassificationExtension,
    ]

    logger.debug("GraphQL extensions configured", extra={"max_query_depth": max_depth})
    return extensions


__all__ = ["depth_limiter_factory", "get_extensions"]
