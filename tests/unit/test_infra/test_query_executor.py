"""Tests for QueryExecutor error mapping."""

from __future__ import annotations

from contextlib import asynccontextmanager

import psycopg
import pytest
from psycopg.rows import dict_row
from psycopg_pool import PoolClosed, PoolTimeout

from fpl_service.core.database.exceptions import DataSourceError
from fpl_service.infra.database import QueryExecutor


class FakeCursor:
    def __init__(self, rows, error=None):
        self.rows = rows
        self.error = error
        self.executed = []

    async def execute(self, query, params=None):
        if self.error is not None:
            raise self.error
        self.executed.append((query, params))

    async def fetchall(self):
        return self.rows


class FakeConnection:
    def __init__(self, cursor):
        self._cursor = cursor
        self.row_factories = []

    @asynccontextmanager
    async def cursor(self, row_factory=None):
        self.row_factories.append(row_factory)
        yield self._cursor


class FakePool:
    def __init__(self, connection=None, acquire_error=None):
        self._connection = connection
        self._acquire_error = acquire_error

    @asynccontextmanager
    async def connection(self):
        if self._acquire_error is not None:
            raise self._acquire_error
        yield self._connection


def executor_for(pool: FakePool) -> QueryExecutor:
    async def provider():
        return pool

    return QueryExecutor(pool_provider=provider)


class TestQueryExecutor:
    """Tests for QueryExecutor.fetch_all and ping."""

    @pytest.mark.asyncio
    async def test_returns_dict_rows(self):
        cursor = FakeCursor([{"id": 1}])
        connection = FakeConnection(cursor)
        executor = executor_for(FakePool(connection))

        rows = await executor.fetch_all("SELECT id FROM t WHERE id = %s", [1])

        assert rows == [{"id": 1}]
        assert cursor.executed == [("SELECT id FROM t WHERE id = %s", [1])]
        assert connection.row_factories == [dict_row]

    @pytest.mark.asyncio
    async def test_pool_timeout_maps_to_data_source_error(self):
        executor = executor_for(FakePool(acquire_error=PoolTimeout("couldn't get a connection")))

        with pytest.raises(DataSourceError) as exc_info:
            await executor.fetch_all("SELECT 1", operation="mv_player_data")

        assert exc_info.value.message == "Timed out waiting for a database connection"
        assert exc_info.value.operation == "mv_player_data"
        assert isinstance(exc_info.value.__cause__, PoolTimeout)

    @pytest.mark.asyncio
    async def test_closed_pool_maps_to_data_source_error(self):
        executor = executor_for(FakePool(acquire_error=PoolClosed("pool is closed")))

        with pytest.raises(DataSourceError, match="pool is closed"):
            await executor.fetch_all("SELECT 1")

    @pytest.mark.asyncio
    async def test_driver_error_maps_to_data_source_error(self):
        cursor = FakeCursor([], error=psycopg.OperationalError("server closed the connection"))
        executor = executor_for(FakePool(FakeConnection(cursor)))

        with pytest.raises(DataSourceError) as exc_info:
            await executor.fetch_all("SELECT 1", operation="fpl_events")

        assert exc_info.value.message == "Database query failed"
        assert "server closed the connection" in exc_info.value.details["error"]

    @pytest.mark.asyncio
    async def test_os_error_maps_to_data_source_error(self):
        executor = executor_for(FakePool(acquire_error=ConnectionRefusedError("refused")))

        with pytest.raises(DataSourceError, match="Database unreachable"):
            await executor.fetch_all("SELECT 1")

    @pytest.mark.asyncio
    async def test_other_errors_propagate_unchanged(self):
        cursor = FakeCursor([], error=RuntimeError("bug"))
        executor = executor_for(FakePool(FakeConnection(cursor)))

        with pytest.raises(RuntimeError, match="bug"):
            await executor.fetch_all("SELECT 1")

    @pytest.mark.asyncio
    async def test_ping(self):
        executor = executor_for(FakePool(FakeConnection(FakeCursor([{"ok": 1}]))))

        assert await executor.ping() is True
