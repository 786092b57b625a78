"""ProductRepository with CRUD operations.

Handles all database operations for Product entities. Category references
are validated by the store's foreign key, surfaced as
ConstraintViolationError on insert and update.
"""

import time

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from entitygate.core.database import fits_integer_column
from entitygate.core.logging import get_logger
from entitygate.models.product import Product
from entitygate.repositories.base import EntityRepository

logger = get_logger(__name__)


class ProductRepository(EntityRepository[Product]):
    """Repository for Product CRUD operations."""

    model = Product
    TABLE_NAME = "products"
    ENTITY_NAME = "Product"

    async def get_by_category(
        self, session: AsyncSession, category_id: int
    ) -> list[Product]:
        """Get all products in a category.

        Args:
            session: Async SQLAlchemy session
            category_id: Category identifier

        Returns:
            List of Product instances ordered by id

        Raises:
            SQLAlchemyError: On database errors
        """
        start_time = time.monotonic()
        logger.debug(
            "Fetching products by category ID",
            extra={"category_id": category_id},
        )

        if not fits_integer_column(category_id):
            return []

        try:
            result = await session.execute(
                select(Product)
                .where(Product.category_id == category_id)
                .order_by(Product.id)
            )
            products = list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error(
                "Failed to fetch products by category ID",
                extra={
                    "category_id": category_id,
                    "error_type": type(e).__name__,
                    "error_message": str(e),
                },
                exc_info=True,
            )
            raise

        self._log_completion(
            "Category products fetch completed",
            f"SELECT FROM products WHERE category_id={category_id}",
            start_time,
            category_id=category_id,
            count=len(products),
        )
        return products
