"""Fixtures for executing operations against the schema directly."""

from __future__ import annotations

import pytest

from fpl_service.features.graphql.context import GraphQLContext
from fpl_service.features.graphql.dataloaders import create_dataloaders
from tests.fakes import FakeStatsRepository


def build_context(repository: FakeStatsRepository, request_id: str | None = None) -> GraphQLContext:
    return GraphQLContext(
        repository=repository,  # type: ignore[arg-type]
        loaders=create_dataloaders(repository),  # type: ignore[arg-type]
        request_id=request_id,
    )


@pytest.fixture
def graphql_context(repository: FakeStatsRepository) -> GraphQLContext:
    """A fresh context per test, as the router builds one per request."""
    return build_context(repository, request_id="test-request")
