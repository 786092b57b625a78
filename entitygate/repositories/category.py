"""CategoryRepository with CRUD operations."""

from entitygate.models.category import Category
from entitygate.repositories.base import EntityRepository


class CategoryRepository(EntityRepository[Category]):
    """Repository for Category CRUD operations."""

    model = Category
    TABLE_NAME = "categories"
    ENTITY_NAME = "Category"
