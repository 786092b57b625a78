"""Integration tests for the product and category endpoints.

Tests cover:
- Seeded catalog as returned over HTTP
- Product create/read/replace/delete, including missing ids
- Foreign-key rejections surfaced as 400 CONSTRAINT_VIOLATION
- Category update and per-category product listing
"""

from decimal import Decimal

from httpx import AsyncClient


class TestListCatalog:
    async def test_list_categories(self, async_client: AsyncClient) -> None:
        response = await async_client.get("/api/categories")

        assert response.status_code == 200
        assert response.json() == [
            {"id": 1, "name": "Electronics", "description": "Electronic Items"},
            {"id": 2, "name": "Clothes", "description": "Dresses"},
            {"id": 3, "name": "Grocery", "description": "Grocery Items"},
        ]

    async def test_list_products(self, async_client: AsyncClient) -> None:
        response = await async_client.get("/api/products")

        assert response.status_code == 200
        data = response.json()
        assert [p["name"] for p in data] == ["Computer", "Smartphone", "Camicia"]
        assert [Decimal(p["price"]) for p in data] == [
            Decimal("1000"),
            Decimal("500"),
            Decimal("25"),
        ]


class TestProducts:
    async def test_create_product(self, async_client: AsyncClient) -> None:
        response = await async_client.post(
            "/api/products",
            json={"category_id": 2, "name": "Pantaloni", "price": "45.50"},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["category_id"] == 2
        assert Decimal(data["price"]) == Decimal("45.50")
        assert response.headers["Location"] == f"/api/products/{data['id']}"
        assert response.headers["X-entitygate-alert"] == "entitygate.product.created"

    async def test_create_product_unknown_category(
        self, async_client: AsyncClient
    ) -> None:
        response = await async_client.post(
            "/api/products",
            json={"category_id": 77, "name": "Lost", "price": "1.00"},
        )

        assert response.status_code == 400
        assert response.json()["code"] == "CONSTRAINT_VIOLATION"

        listing = await async_client.get("/api/products")
        assert len(listing.json()) == 3

    async def test_create_product_negative_price(self, async_client: AsyncClient) -> None:
        response = await async_client.post(
            "/api/products",
            json={"category_id": 1, "name": "Refund", "price": "-1"},
        )

        assert response.status_code == 422

    async def test_get_product(self, async_client: AsyncClient) -> None:
        response = await async_client.get("/api/products/2")

        assert response.status_code == 200
        assert response.json()["name"] == "Smartphone"

    async def test_get_missing_product(self, async_client: AsyncClient) -> None:
        response = await async_client.get("/api/products/99")

        assert response.status_code == 404
        assert response.json()["error"] == "Product not found: 99"

    async def test_replace_product(self, async_client: AsyncClient) -> None:
        response = await async_client.put(
            "/api/products/1",
            json={"category_id": 1, "name": "Workstation", "price": "2500"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == 1
        assert data["name"] == "Workstation"
        assert data["description"] is None
        assert response.headers["X-entitygate-params"] == "1"

    async def test_replace_missing_product(self, async_client: AsyncClient) -> None:
        response = await async_client.put(
            "/api/products/99",
            json={"category_id": 1, "name": "Ghost", "price": "1"},
        )

        assert response.status_code == 404

        listing = await async_client.get("/api/products")
        assert 99 not in [p["id"] for p in listing.json()]

    async def test_replace_with_unknown_category(self, async_client: AsyncClient) -> None:
        response = await async_client.put(
            "/api/products/3",
            json={"category_id": 9, "name": "Camicia", "price": "25"},
        )

        assert response.status_code == 400
        assert response.json()["code"] == "CONSTRAINT_VIOLATION"

    async def test_delete_product(self, async_client: AsyncClient) -> None:
        response = await async_client.delete("/api/products/3")

        assert response.status_code == 204
        assert (await async_client.get("/api/products/3")).status_code == 404

    async def test_delete_missing_product(self, async_client: AsyncClient) -> None:
        response = await async_client.delete("/api/products/3000")

        assert response.status_code == 404
        assert response.json()["code"] == "NOT_FOUND"


class TestCategories:
    async def test_get_category(self, async_client: AsyncClient) -> None:
        response = await async_client.get("/api/categories/1")

        assert response.status_code == 200
        assert response.json()["name"] == "Electronics"

    async def test_get_missing_category(self, async_client: AsyncClient) -> None:
        response = await async_client.get("/api/categories/4")

        assert response.status_code == 404

    async def test_update_category(self, async_client: AsyncClient) -> None:
        response = await async_client.put(
            "/api/categories/2",
            json={"name": "Clothing", "description": "Shirts and dresses"},
        )

        assert response.status_code == 200
        assert response.json() == {
            "id": 2,
            "name": "Clothing",
            "description": "Shirts and dresses",
        }
        assert response.headers["X-entitygate-alert"] == "entitygate.category.updated"

    async def test_update_missing_category(self, async_client: AsyncClient) -> None:
        response = await async_client.put("/api/categories/40", json={"name": "Toys"})

        assert response.status_code == 404

    async def test_category_products(self, async_client: AsyncClient) -> None:
        response = await async_client.get("/api/categories/1/products")

        assert response.status_code == 200
        data = response.json()
        assert [p["name"] for p in data] == ["Computer", "Smartphone"]
        assert {p["category_id"] for p in data} == {1}

    async def test_category_products_empty(self, async_client: AsyncClient) -> None:
        response = await async_client.get("/api/categories/3/products")

        assert response.status_code == 200
        assert response.json() == []

    async def test_category_products_missing_category(
        self, async_client: AsyncClient
    ) -> None:
        response = await async_client.get("/api/categories/12/products")

        assert response.status_code == 404


class TestOutOfRangeIds:
    HUGE = 99999999999999999999

    async def test_get_product_returns_404(self, async_client: AsyncClient) -> None:
        response = await async_client.get(f"/api/products/{self.HUGE}")

        assert response.status_code == 404

    async def test_delete_product_returns_404(self, async_client: AsyncClient) -> None:
        response = await async_client.delete(f"/api/products/{self.HUGE}")

        assert response.status_code == 404

    async def test_replace_product_returns_404(self, async_client: AsyncClient) -> None:
        response = await async_client.put(
            f"/api/products/{self.HUGE}",
            json={"category_id": 1, "name": "Wide", "price": "1"},
        )

        assert response.status_code == 404

    async def test_category_id_in_body_returns_422(
        self, async_client: AsyncClient
    ) -> None:
        response = await async_client.post(
            "/api/products",
            json={"category_id": self.HUGE, "name": "Wide", "price": "1"},
        )

        assert response.status_code == 422

    async def test_category_returns_404(self, async_client: AsyncClient) -> None:
        assert (await async_client.get(f"/api/categories/{self.HUGE}")).status_code == 404
        assert (
            await async_client.get(f"/api/categories/{self.HUGE}/products")
        ).status_code == 404
        assert (
            await async_client.put(f"/api/categories/{self.HUGE}", json={"name": "X"})
        ).status_code == 404
