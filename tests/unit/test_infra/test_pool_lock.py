"""Tests for the pool lifecycle lock and close_pool."""

from __future__ import annotations

import asyncio

import pytest

from fpl_service.infra.database import close_pool
from fpl_service.infra.database import psycopg_pool


async def _contend_for_lock() -> asyncio.Lock:
    """Force the lock to bind to the running loop by making a task wait on it."""
    lock = psycopg_pool._get_pool_lock()
    async with lock:
        waiter = asyncio.create_task(lock.acquire())
        await asyncio.sleep(0)
    await waiter
    lock.release()
    return lock


class TestPoolLock:
    """The pool lock follows the running event loop."""

    def test_contended_lock_works_across_event_loops(self):
        first = asyncio.run(_contend_for_lock())
        second = asyncio.run(_contend_for_lock())

        assert first is not second

    @pytest.mark.asyncio
    async def test_same_loop_reuses_lock(self):
        assert psycopg_pool._get_pool_lock() is psycopg_pool._get_pool_lock()

    @pytest.mark.asyncio
    async def test_close_pool_without_pool_is_noop(self):
        await close_pool()

        assert psycopg_pool._pool is None
