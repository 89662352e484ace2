"""GraphQL schema assembly."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import strawberry
from strawberry.schema.config import StrawberryConfig

from fpl_service.features.graphql.error_handler import log_error
from fpl_service.features.graphql.extensions import get_extensions
from fpl_service.features.graphql.resolvers import Query

if TYPE_CHECKING:
    from graphql import GraphQLError
    from strawberry.types import ExecutionContext

logger = logging.getLogger(__name__)


class FplSchema(strawberry.Schema):
    """Schema that logs errors through the service's error handler."""

    def process_errors(
        self,
        errors: list[GraphQLError],
        execution_context: ExecutionContext | None = None,
    ) -> None:
        for error in errors:
            log_error(error, execution_context)


def create_schema() -> FplSchema:
    """Build the read-only schema.

    Field names keep the store's snake_case column names; arguments that
    clients send in camelCase declare their names explicitly.
    """
    return FplSchema(
        query=Query,
        extensions=get_extensions(),
        config=StrawberryConfig(auto_camel_case=False),
    )


schema = create_schema()

__all__ = ["FplSchema", "create_schema", "schema"]
