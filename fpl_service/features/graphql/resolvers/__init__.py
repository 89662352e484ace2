"""GraphQL resolvers."""

from fpl_service.features.graphql.resolvers.queries import Query

__all__ = ["Query"]
