"""Tests for RequestIDMiddleware."""

from __future__ import annotations

import uuid

import pytest


class TestRequestIDMiddleware:
    """Request id propagation."""

    @pytest.mark.asyncio
    async def test_generates_uuid_when_missing(self, client):
        response = await client.get("/health")

        uuid.UUID(response.headers["x-request-id"])

    @pytest.mark.asyncio
    async def test_echoes_valid_incoming_id(self, client):
        response = await client.get("/health", headers={"X-Request-ID": "lb-1234.abc"})

        assert response.headers["x-request-id"] == "lb-1234.abc"

    @pytest.mark.asyncio
    async def test_replaces_invalid_incoming_id(self, client):
        response = await client.get("/health", headers={"X-Request-ID": "bad id with spaces"})

        assert response.headers["x-request-id"] != "bad id with spaces"
        uuid.UUID(response.headers["x-request-id"])


class TestCORS:
    """CORS behaviour."""

    @pytest.mark.asyncio
    async def test_allowed_origin_gets_cors_headers(self, client):
        response = await client.get("/health", headers={"Origin": "http://localhost:5173"})

        assert response.headers["access-control-allow-origin"] == "http://localhost:5173"
        assert "X-Request-ID" in response.headers["access-control-expose-headers"]

    @pytest.mark.asyncio
    async def test_request_without_origin_is_served(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert "access-control-allow-origin" not in response.headers

    @pytest.mark.asyncio
    async def test_preflight_for_graphql(self, client):
        response = await client.options(
            "/graphql",
            headers={
                "Origin": "http://localhost:5173",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Content-Type",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "http://localhost:5173"
        assert "x-request-id" in response.headers
