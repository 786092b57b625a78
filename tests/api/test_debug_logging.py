"""Endpoints behave the same with DEBUG logging enabled.

Every endpoint logs request context through ``extra=``; at DEBUG level the
entry logs and the request-body log of the middleware run too, so a
context key clashing with a LogRecord attribute would surface here as a
500.
"""

import logging

import pytest
from httpx import AsyncClient


@pytest.fixture
def debug_logging(caplog: pytest.LogCaptureFixture) -> pytest.LogCaptureFixture:
    caplog.set_level(logging.DEBUG)
    return caplog


class TestProductsAtDebug:
    async def test_product_lifecycle(
        self, async_client: AsyncClient, debug_logging: pytest.LogCaptureFixture
    ) -> None:
        created = await async_client.post(
            "/api/products",
            json={"category_id": 1, "name": "Tablet", "price": "300"},
        )
        assert created.status_code == 201
        product_id = created.json()["id"]

        updated = await async_client.put(
            f"/api/products/{product_id}",
            json={"category_id": 1, "name": "Tablet Pro", "price": "450"},
        )
        assert updated.status_code == 200

        deleted = await async_client.delete(f"/api/products/{product_id}")
        assert deleted.status_code == 204

        assert any(
            getattr(r, "product_name", None) == "Tablet" for r in debug_logging.records
        )

    async def test_constraint_violation_is_logged_and_returns_400(
        self, async_client: AsyncClient, debug_logging: pytest.LogCaptureFixture
    ) -> None:
        response = await async_client.post(
            "/api/products",
            json={"category_id": 77, "name": "Lost", "price": "1.00"},
        )

        assert response.status_code == 400
        assert response.json()["code"] == "CONSTRAINT_VIOLATION"
        warning = next(
            r for r in debug_logging.records if r.getMessage() == "Product constraint violation"
        )
        assert warning.operation == "insert"
        assert warning.error_message


class TestCategoriesAtDebug:
    async def test_update_category(
        self, async_client: AsyncClient, debug_logging: pytest.LogCaptureFixture
    ) -> None:
        response = await async_client.put(
            "/api/categories/3", json={"name": "Food", "description": "Pantry"}
        )

        assert response.status_code == 200


class TestSolutionsAtDebug:
    async def test_solution_lifecycle(
        self, async_client: AsyncClient, debug_logging: pytest.LogCaptureFixture
    ) -> None:
        created = await async_client.post(
            "/api/solutions", json={"title": "Rotate the key", "bug_id": 6}
        )
        assert created.status_code == 201
        solution = created.json()

        updated = await async_client.put(
            "/api/solutions", json={**solution, "title": "Rotate both keys"}
        )
        assert updated.status_code == 200

        rejected = await async_client.post(
            "/api/solutions", json={"id": 1, "title": "Dup", "bug_id": 6}
        )
        assert rejected.status_code == 400

        deleted = await async_client.delete(f"/api/solutions/{solution['id']}")
        assert deleted.status_code == 204

        by_bug = await async_client.get("/api/solutions/bug/6")
        assert by_bug.json() == []

    async def test_request_body_logged_at_debug(
        self, async_client: AsyncClient, debug_logging: pytest.LogCaptureFixture
    ) -> None:
        await async_client.post(
            "/api/solutions", json={"title": "Check the body log", "bug_id": 2}
        )

        body_logs = [r for r in debug_logging.records if r.getMessage() == "Request body"]
        assert body_logs
        assert body_logs[0].body["title"] == "Check the body log"
