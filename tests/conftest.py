"""Pytest configuration and shared fixtures.

Organization:
    - Environment: settings that keep the suite off real infrastructure
    - Application Fixtures: FastAPI app and HTTP client
    - Store Fixtures: in-memory repository and executor doubles
"""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

# Ensure tests run without external infrastructure
os.environ.setdefault("APP_ENVIRONMENT", "test")
os.environ.setdefault("DB_ENABLED", "false")
os.environ.setdefault("LOG_JSON", "false")
os.environ.setdefault("LOG_FILE_ENABLED", "false")

from fpl_service.core.settings import clear_all_caches  # noqa: E402
from tests.fakes import FakeQueryExecutor, FakeStatsRepository  # noqa: E402


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Reload settings for every test so monkeypatched env vars take effect."""
    clear_all_caches()
    yield
    clear_all_caches()


# ============================================================================
# Application Fixtures
# ============================================================================


@pytest.fixture
def fake_executor() -> FakeQueryExecutor:
    return FakeQueryExecutor()


@pytest.fixture
def app(fake_executor: FakeQueryExecutor):
    """FastAPI application whose store access goes to ``fake_executor``.

    The lifespan is not run by ASGITransport, so no pool is ever opened.
    """
    from fpl_service.app.main import create_app
    from fpl_service.infra.database import get_query_executor

    application = create_app()
    application.dependency_overrides[get_query_executor] = lambda: fake_executor
    return application


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient]:
    """Async HTTP client bound to the app.

    Example:
        async def test_health_check(client):
            response = await client.get("/health")
            assert response.status_code == 200
    """
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


# ============================================================================
# Store Fixtures
# ============================================================================


@pytest.fixture
def repository() -> FakeStatsRepository:
    return FakeStatsRepository()
