"""psycopg 3 connection pool and the query executor built on it.

One AsyncConnectionPool is shared by the whole process. It is opened by the
application lifespan (``init_pool``, retried with backoff) or lazily on the
first query (``get_db_pool``) and closed on shutdown (``close_pool``).

Usage:
    ```python
    executor = QueryExecutor()
    rows = await executor.fetch_all(
        sql.SQL("SELECT * FROM {}.fpl_events ORDER BY id").format(sql.Identifier(schema)),
    )
    ```
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import TYPE_CHECKING, Any

import psycopg
from psycopg import AsyncConnection, sql
from psycopg.rows import dict_row
from psycopg_pool import AsyncConnectionPool, PoolClosed, PoolTimeout

from fpl_service.core.database.exceptions import DataSourceError
from fpl_service.core.settings import get_db_settings
from fpl_service.utils.retry import retry

if TYPE_CHECKING:
    from fpl_service.core.settings.postgres import PostgresSettings

logger = logging.getLogger(__name__)

Query = str | sql.Composable
PoolProvider = Callable[[], Awaitable[AsyncConnectionPool]]

_pool: AsyncConnectionPool | None = None
_pool_lock: asyncio.Lock | None = None
_pool_lock_loop: asyncio.AbstractEventLoop | None = None


def _get_pool_lock() -> asyncio.Lock:
    """Lock guarding pool creation, bound to the running event loop.

    A new lock is created whenever the loop changes (each ``asyncio.run`` in
    the CLI, each test loop).
    """
    global _pool_lock, _pool_lock_loop

    loop = asyncio.get_running_loop()
    if _pool_lock is None or _pool_lock_loop is not loop:
        _pool_lock = asyncio.Lock()
        _pool_lock_loop = loop
    return _pool_lock


async def configure_connection(conn: AsyncConnection) -> None:
    """Configure each new connection handed out by the pool."""
    await conn.execute("SET timezone = 'UTC'")
    # configure runs inside a transaction; leave the connection idle
    await conn.commit()


def _build_pool(db_settings: PostgresSettings) -> AsyncConnectionPool:
    return AsyncConnectionPool(
        conninfo=db_settings.psycopg_url,
        open=False,
        configure=configure_connection,
        name=db_settings.application_name,
        **db_settings.psycopg_pool_kwargs(),
    )


async def _open_pool(db_settings: PostgresSettings, *, wait: bool) -> AsyncConnectionPool:
    logger.info(
        "Opening psycopg connection pool",
        extra={
            "db_host": db_settings.host,
            "db_name": db_settings.name,
            "min_size": db_settings.pg_min_size,
            "max_size": db_settings.pg_max_size,
            "sslmode": db_settings.sslmode,
        },
    )
    pool = _build_pool(db_settings)
    try:
        await pool.open(wait=wait, timeout=db_settings.pg_timeout)
    except Exception:
        await pool.close()
        raise
    return pool


async def init_pool(db_settings: PostgresSettings | None = None) -> AsyncConnectionPool:
    """Open the shared pool at startup, waiting until ``min_size`` connections exist.

    Retries with exponential backoff according to the ``startup_retry_*``
    settings. Returns the already open pool when called twice.

    Raises:
        RetryError: The database stayed unreachable for every attempt.
    """
    global _pool

    db_settings = db_settings or get_db_settings()

    opener = retry(
        max_attempts=db_settings.startup_retry_attempts,
        initial_delay=db_settings.startup_retry_delay,
        stop_after_delay=db_settings.startup_retry_timeout,
        exceptions=(psycopg.Error, OSError),
    )(_open_pool)

    async with _get_pool_lock():
        if _pool is None:
            _pool = await opener(db_settings, wait=True)
            logger.info("psycopg connection pool ready")
    return _pool


async def get_db_pool() -> AsyncConnectionPool:
    """Return the shared pool, opening it without waiting if needed.

    Connections are established in the background; the first query waits for
    one up to the pool's acquire timeout.
    """
    global _pool

    if _pool is not None:
        return _pool

    async with _get_pool_lock():
        if _pool is None:
            _pool = await _open_pool(get_db_settings(), wait=False)
    return _pool


async def close_pool() -> None:
    """Close the shared pool. Safe to call when no pool was opened."""
    global _pool

    async with _get_pool_lock():
        if _pool is not None:
            logger.info("Closing psycopg connection pool")
            await _pool.close()
            _pool = None


class QueryExecutor:
    """Runs parameterised read queries against the shared pool.

    The pool is resolved per call, so constructing an executor never touches
    the network. Every failure (acquire timeout, closed pool, driver or
    server error) is raised as DataSourceError chained to the original
    exception. Nothing is retried here.
    """

    def __init__(self, pool_provider: PoolProvider = get_db_pool) -> None:
        self._pool_provider = pool_provider

    async def fetch_all(
        self,
        query: Query,
        params: Sequence[Any] | None = None,
        *,
        operation: str | None = None,
    ) -> list[dict[str, Any]]:
        """Execute ``query`` and return every row as a column-name mapping."""
        try:
            pool = await self._pool_provider()
            async with pool.connection() as conn:
                async with conn.cursor(row_factory=dict_row) as cur:
                    await cur.execute(query, params)
                    return await cur.fetchall()
        except PoolTimeout as exc:
            raise DataSourceError(
                "Timed out waiting for a database connection",
                operation=operation,
                details={"error": str(exc)},
            ) from exc
        except PoolClosed as exc:
            raise DataSourceError(
                "Database connection pool is closed",
                operation=operation,
            ) from exc
        except psycopg.Error as exc:
            raise DataSourceError(
                "Database query failed",
                operation=operation,
                details={"error": str(exc), "sqlstate": getattr(exc, "sqlstate", None)},
            ) from exc
        except OSError as exc:
            raise DataSourceError(
                "Database unreachable",
                operation=operation,
                details={"error": str(exc)},
            ) from exc

    async def ping(self) -> bool:
        """Run ``SELECT 1``; raises DataSourceError when the database is unreachable."""
        rows = await self.fetch_all("SELECT 1 AS ok", operation="ping")
        return bool(rows) and rows[0].get("ok") == 1


_executor = QueryExecutor()


def get_query_executor() -> QueryExecutor:
    """FastAPI dependency returning the process-wide executor (override in tests)."""
    return _executor
