"""Catalog seed data.

Fixed rows loaded when the catalog schema is created. The Alembic revision
that creates the catalog tables inserts these rows; seed_catalog() loads
the same rows into a store created from the ORM metadata (local
development and tests).
"""

from decimal import Decimal
from typing import Any

from sqlalchemy import func, select, text
from sqlalchemy.ext.asyncio import AsyncSession

from entitygate.core.database import transaction
from entitygate.core.logging import get_logger
from entitygate.models.category import Category
from entitygate.models.product import Product

logger = get_logger(__name__)

CATEGORY_ROWS: list[dict[str, Any]] = [
    {"id": 1, "name": "Electronics", "description": "Electronic Items"},
    {"id": 2, "name": "Clothes", "description": "Dresses"},
    {"id": 3, "name": "Grocery", "description": "Grocery Items"},
]

PRODUCT_ROWS: list[dict[str, Any]] = [
    {
        "id": 1,
        "category_id": 1,
        "name": "Computer",
        "description": "Electronic Items",
        "price": Decimal("1000"),
    },
    {
        "id": 2,
        "category_id": 1,
        "name": "Smartphone",
        "description": "Electronic Items",
        "price": Decimal("500"),
    },
    {
        "id": 3,
        "category_id": 2,
        "name": "Camicia",
        "description": "Clothes items",
        "price": Decimal("25"),
    },
]


SEEDED_TABLES = ("categories", "products")


def sequence_reset_sql(table: str) -> str:
    """SQL advancing a PostgreSQL serial sequence past the largest id in ``table``.

    Rows inserted with explicit ids do not move the sequence, so the next
    store-assigned id would collide with a seeded row.
    """
    return (
        f"SELECT setval(pg_get_serial_sequence('{table}', 'id'), "
        f"(SELECT MAX(id) FROM {table}))"
    )


async def seed_catalog(session: AsyncSession) -> dict[str, int]:
    """Insert the seed categories and products into an empty catalog.

    No-op when the categories table already has rows. On PostgreSQL the
    identity sequences are advanced past the seeded ids, as the catalog
    migration does.

    Returns:
        Number of rows inserted per table
    """
    result = await session.execute(select(func.count()).select_from(Category))
    if result.scalar_one() > 0:
        logger.info("Catalog already seeded, skipping")
        return {"categories": 0, "products": 0}

    async with transaction(session, table="categories"):
        session.add_all(Category(**row) for row in CATEGORY_ROWS)
        await session.flush()
        session.add_all(Product(**row) for row in PRODUCT_ROWS)
        await session.flush()
        if session.get_bind().dialect.name == "postgresql":
            for table in SEEDED_TABLES:
                await session.execute(text(sequence_reset_sql(table)))

    summary = {"categories": len(CATEGORY_ROWS), "products": len(PRODUCT_ROWS)}
    logger.info("Catalog seeded", extra=summary)
    return summary
