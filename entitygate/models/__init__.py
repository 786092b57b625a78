"""Models layer - SQLAlchemy ORM models.

Models define the database schema and relationships.
All models inherit from the Base class defined in core.database.
"""

from entitygate.core.database import Base
from entitygate.models.category import Category
from entitygate.models.product import Product
from entitygate.models.solution import Solution

__all__ = [
    "Base",
    "Category",
    "Product",
    "Solution",
]
