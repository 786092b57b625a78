"""Repositories layer - Data access and persistence.

Repositories handle all database operations using SQLAlchemy.
They abstract the database implementation from the service layer.
"""

from entitygate.repositories.base import (
    ConstraintViolationError,
    EntityNotFoundError,
    EntityRepository,
    RepositoryError,
)
from entitygate.repositories.category import CategoryRepository
from entitygate.repositories.product import ProductRepository
from entitygate.repositories.solution import SolutionRepository

__all__ = [
    "CategoryRepository",
    "ConstraintViolationError",
    "EntityNotFoundError",
    "EntityRepository",
    "ProductRepository",
    "RepositoryError",
    "SolutionRepository",
]
