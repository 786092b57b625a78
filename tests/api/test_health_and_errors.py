"""Integration tests for health endpoints, middleware and error handlers.

ERROR LOGGING REQUIREMENTS (verified by tests):
- All responses include X-Request-ID header
- 4xx errors return structured JSON with error, code, request_id
- 5xx errors return structured JSON with error, code, request_id
- CORS headers expose the alert headers to browsers
"""

from collections.abc import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from entitygate.core.database import DatabaseManager
from entitygate.main import sanitize_body


class TestHealthEndpoints:
    async def test_health(self, async_client: AsyncClient) -> None:
        response = await async_client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    async def test_database_health(self, async_client: AsyncClient) -> None:
        response = await async_client.get("/health/db")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "database": True}


class TestRequestLogging:
    async def test_all_responses_have_request_id(
        self, async_client: AsyncClient
    ) -> None:
        for endpoint in ["/health", "/api/solutions", "/api/products/999"]:
            response = await async_client.get(endpoint)
            assert "X-Request-ID" in response.headers, f"Missing X-Request-ID for {endpoint}"
            assert len(response.headers["X-Request-ID"]) == 36

    async def test_request_id_is_unique_per_request(
        self, async_client: AsyncClient
    ) -> None:
        first = await async_client.get("/health")
        second = await async_client.get("/health")

        assert first.headers["X-Request-ID"] != second.headers["X-Request-ID"]

    async def test_non_json_body_is_handled(self, async_client: AsyncClient) -> None:
        response = await async_client.post(
            "/api/solutions",
            content=b"not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 422
        assert "X-Request-ID" in response.headers

    def test_sanitize_body_redacts_sensitive_fields(self) -> None:
        body = {"title": "Fix", "token": "abc", "nested": {"Password": "x"}}

        assert sanitize_body(body) == {
            "title": "Fix",
            "token": "****",
            "nested": {"Password": "****"},
        }

    def test_sanitize_body_passes_through_non_dicts(self) -> None:
        assert sanitize_body([1, 2]) == [1, 2]


class TestStructuredErrorResponses:
    async def test_validation_error_structure(self, async_client: AsyncClient) -> None:
        response = await async_client.post("/api/products", json={"name": "No price"})

        assert response.status_code == 422
        data = response.json()
        assert data["code"] == "VALIDATION_ERROR"
        assert "price" in data["error"]
        assert data["request_id"] == response.headers["X-Request-ID"]

    async def test_not_found_error_structure(self, async_client: AsyncClient) -> None:
        response = await async_client.get("/api/categories/100")

        assert response.status_code == 404
        data = response.json()
        assert set(data) == {"error", "code", "request_id"}
        assert data["request_id"] == response.headers["X-Request-ID"]

    async def test_unknown_route_returns_404(self, async_client: AsyncClient) -> None:
        response = await async_client.get("/api/bugs")

        assert response.status_code == 404


@pytest.fixture
async def failing_client(
    app: FastAPI, mock_db_manager: DatabaseManager
) -> AsyncGenerator[AsyncClient, None]:
    """Client for an app with a route that raises an unexpected error."""

    @app.get("/explode")
    async def explode() -> None:
        raise RuntimeError("kaboom")

    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as ac:
        yield ac


class TestInternalErrors:
    async def test_unhandled_exception_returns_500(
        self, failing_client: AsyncClient
    ) -> None:
        response = await failing_client.get("/explode")

        assert response.status_code == 500
        data = response.json()
        assert data["code"] == "INTERNAL_ERROR"
        assert "kaboom" not in data["error"]
        assert "request_id" in data


class TestCors:
    async def test_preflight_allows_origin(self, async_client: AsyncClient) -> None:
        response = await async_client.options(
            "/api/solutions",
            headers={
                "Origin": "http://localhost:3000",
                "Access-Control-Request-Method": "POST",
            },
        )

        assert response.status_code == 200
        assert "access-control-allow-origin" in response.headers

    async def test_alert_headers_are_exposed(self, async_client: AsyncClient) -> None:
        response = await async_client.get(
            "/api/solutions", headers={"Origin": "http://localhost:3000"}
        )

        exposed = response.headers["access-control-expose-headers"]
        assert "X-entitygate-alert" in exposed
        assert "Location" in exposed
