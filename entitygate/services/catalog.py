"""Catalog services for Category and Product entities.

Orchestrates catalog operations between the API layer and repositories.
Missing ids surface as EntityNotFoundError and rejected writes as
ConstraintViolationError, both raised by the repositories.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from entitygate.core.logging import get_logger
from entitygate.models.category import Category
from entitygate.models.product import Product
from entitygate.repositories.base import EntityNotFoundError
from entitygate.repositories.category import CategoryRepository
from entitygate.repositories.product import ProductRepository
from entitygate.schemas.category import CategoryUpdate
from entitygate.schemas.product import ProductCreate, ProductUpdate

logger = get_logger(__name__)


class CategoryService:
    """Service for Category reads and explicit updates."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repository = CategoryRepository()

    async def list_categories(self) -> list[Category]:
        return await self.repository.get_all(self.session)

    async def get_category(self, category_id: int) -> Category:
        """Get a category by ID.

        Raises:
            EntityNotFoundError: If the category does not exist
        """
        category = await self.repository.get_by_id(self.session, category_id)
        if category is None:
            raise EntityNotFoundError(CategoryRepository.ENTITY_NAME, category_id)
        return category

    async def update_category(
        self, category_id: int, data: CategoryUpdate
    ) -> Category:
        """Replace a category's name and description.

        Raises:
            EntityNotFoundError: If the category does not exist
        """
        category = Category(id=category_id, **data.model_dump())
        updated = await self.repository.update(self.session, category)
        logger.info("Category updated", extra={"category_id": category_id})
        return updated


class ProductService:
    """Service for Product CRUD operations."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repository = ProductRepository()
        self.categories = CategoryRepository()

    async def list_products(self) -> list[Product]:
        return await self.repository.get_all(self.session)

    async def get_product(self, product_id: int) -> Product:
        """Get a product by ID.

        Raises:
            EntityNotFoundError: If the product does not exist
        """
        product = await self.repository.get_by_id(self.session, product_id)
        if product is None:
            raise EntityNotFoundError(ProductRepository.ENTITY_NAME, product_id)
        return product

    async def list_products_for_category(self, category_id: int) -> list[Product]:
        """List the products of one category.

        Raises:
            EntityNotFoundError: If the category does not exist
        """
        if not await self.categories.exists(self.session, category_id):
            raise EntityNotFoundError(CategoryRepository.ENTITY_NAME, category_id)
        return await self.repository.get_by_category(self.session, category_id)

    async def create_product(self, data: ProductCreate) -> Product:
        """Create a new product.

        Raises:
            ConstraintViolationError: If category_id does not reference a category
        """
        product = await self.repository.insert(self.session, Product(**data.model_dump()))
        logger.info(
            "Product created",
            extra={"product_id": product.id, "category_id": product.category_id},
        )
        return product

    async def update_product(self, product_id: int, data: ProductUpdate) -> Product:
        """Replace every field of an existing product.

        Raises:
            EntityNotFoundError: If the product does not exist
            ConstraintViolationError: If category_id does not reference a category
        """
        product = Product(id=product_id, **data.model_dump())
        updated = await self.repository.update(self.session, product)
        logger.info("Product updated", extra={"product_id": product_id})
        return updated

    async def delete_product(self, product_id: int) -> None:
        """Delete a product.

        Raises:
            EntityNotFoundError: If the product does not exist
        """
        await self.repository.delete(self.session, product_id)
        logger.info("Product deleted", extra={"product_id": product_id})
