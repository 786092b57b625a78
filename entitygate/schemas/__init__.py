"""Schemas layer - Pydantic models for API validation.

Schemas define the shape of data for API requests and responses.
They handle validation, serialization, and documentation.
"""

from entitygate.schemas.category import CategoryResponse, CategoryUpdate
from entitygate.schemas.product import ProductCreate, ProductResponse, ProductUpdate
from entitygate.schemas.solution import SolutionPayload, SolutionResponse

__all__ = [
    "CategoryResponse",
    "CategoryUpdate",
    "ProductCreate",
    "ProductResponse",
    "ProductUpdate",
    "SolutionPayload",
    "SolutionResponse",
]
