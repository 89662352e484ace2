"""Tests for the per-request GraphQL context factory."""

from __future__ import annotations

import pytest
from fastapi import BackgroundTasks, Request, Response

from fpl_service.features.graphql.context import GraphQLContext
from fpl_service.features.graphql.router import get_graphql_context
from fpl_service.features.stats.repository import StatsRepository
from tests.fakes import FakeQueryExecutor


def make_request(request_id: str | None = None) -> Request:
    scope = {"type": "http", "method": "POST", "path": "/graphql", "headers": [], "state": {}}
    if request_id is not None:
        scope["state"]["request_id"] = request_id
    return Request(scope)


async def build(executor: FakeQueryExecutor, request: Request) -> GraphQLContext:
    return await get_graphql_context(request, Response(), BackgroundTasks(), executor)  # type: ignore[arg-type]


class TestGetGraphQLContext:
    """Context construction."""

    @pytest.mark.asyncio
    async def test_builds_repository_and_loaders_without_io(self):
        executor = FakeQueryExecutor()

        context = await build(executor, make_request("req-1"))

        assert isinstance(context.repository, StatsRepository)
        assert context.repository.schema_name == "test_schema_2025"
        assert context.loaders.player_gameweeks is not None
        assert context.request_id == "req-1"
        assert executor.queries == []

    @pytest.mark.asyncio
    async def test_each_call_gets_fresh_loaders(self):
        executor = FakeQueryExecutor()

        first = await build(executor, make_request())
        second = await build(executor, make_request())

        assert first.loaders is not second.loaders
        assert first.loaders.player_gameweeks is not second.loaders.player_gameweeks
        assert first.request_id is None

    @pytest.mark.asyncio
    async def test_schema_name_follows_settings(self, monkeypatch):
        monkeypatch.setenv("DB_SCHEMA_NAME", "season_2026")

        context = await build(FakeQueryExecutor(), make_request())

        assert context.repository.schema_name == "season_2026"
