"""Integration tests for the exception handlers."""

from collections.abc import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from gatekeeper.core.errors import NotFoundError


pytestmark = pytest.mark.integration


@pytest.fixture
async def app(app: FastAPI) -> FastAPI:
    """Test application with routes that raise."""

    @app.get("/boom/not-found")
    async def not_found() -> None:
        raise NotFoundError("Role not found", resource="role", resource_id="ghost")

    @app.get("/boom/crash")
    async def crash() -> None:
        raise RuntimeError("secret internals")

    return app


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Client that returns 500 responses instead of re-raising."""
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as client:
        yield client


class TestAppExceptionHandler:
    """Domain errors become problem documents."""

    async def test_not_found(self, client: AsyncClient):
        response = await client.get("/boom/not-found")

        assert response.status_code == 404
        data = response.json()
        assert data["type"].endswith("/errors/not_found")
        assert data["title"] == "Not Found"
        assert data["detail"] == "Role not found"
        assert data["instance"] == "/boom/not-found"
        assert data["resource"] == "role"
        assert data["resource_id"] == "ghost"


class TestValidationExceptionHandler:
    """Request validation failures list the offending fields."""

    async def test_missing_query_parameter(
        self, client: AsyncClient, auth_headers: dict[str, str]
    ):
        response = await client.get("/api/v1/permissions/check", headers=auth_headers)

        assert response.status_code == 422
        data = response.json()
        assert data["title"] == "Validation Error"
        assert [e["field"] for e in data["errors"]] == ["permission"]


class TestGenericExceptionHandler:
    """Unexpected errors are hidden behind a generic 500."""

    async def test_crash(self, client: AsyncClient):
        response = await client.get("/boom/crash")

        assert response.status_code == 500
        data = response.json()
        assert data["detail"] == "An unexpected error occurred"
        assert data["type"].endswith("/errors/internal_error")
        assert "secret internals" not in response.text
