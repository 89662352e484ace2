"""Tests for the problem details exception handlers."""

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient


class TestExceptionHandlers:
    """Non-GraphQL errors are rendered as application/problem+json."""

    @pytest.mark.asyncio
    async def test_unknown_route_is_problem_json(self, client):
        response = await client.get("/does-not-exist")

        assert response.status_code == 404
        assert response.headers["content-type"].startswith("application/problem+json")
        body = response.json()
        assert body["status"] == 404
        assert body["title"] == "Not Found"
        assert body["instance"] == "/does-not-exist"
        assert body["request_id"] == response.headers["x-request-id"]

    @pytest.mark.asyncio
    async def test_unhandled_exception_hides_details(self, app):
        @app.get("/boom")
        async def boom() -> None:
            raise RuntimeError("connection string leaked")

        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            response = await ac.get("/boom")

        assert response.status_code == 500
        body = response.json()
        assert body["type"] == "internal-error"
        assert body["detail"] == "An unexpected error occurred"
        assert "leaked" not in response.text
        assert response.headers["x-request-id"] == body["request_id"]

    @pytest.mark.asyncio
    async def test_unhandled_exception_echoes_incoming_request_id(self, app):
        @app.get("/boom")
        async def boom() -> None:
            raise RuntimeError("boom")

        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            response = await ac.get("/boom", headers={"X-Request-ID": "trace-500"})

        assert response.status_code == 500
        assert response.headers["x-request-id"] == "trace-500"
        assert response.json()["request_id"] == "trace-500"

    @pytest.mark.asyncio
    async def test_handled_errors_carry_a_single_request_id_header(self, client):
        response = await client.get("/does-not-exist", headers={"X-Request-ID": "trace-404"})

        assert response.headers.get_list("x-request-id") == ["trace-404"]
