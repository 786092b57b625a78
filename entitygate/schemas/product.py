"""Pydantic schemas for Product validation.

Defines request/response models for the product catalog endpoints.
Create and update carry the same fields: an update replaces the full
record.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from entitygate.core.database import INTEGER_MAX


class ProductBase(BaseModel):
    """Fields shared by product requests and responses."""

    category_id: int = Field(
        ..., ge=1, le=INTEGER_MAX, description="Owning category ID"
    )
    name: str | None = Field(None, max_length=255, description="Product name")
    description: str | None = Field(
        None, max_length=1024, description="Product description"
    )
    price: Decimal = Field(
        ...,
        ge=0,
        max_digits=18,
        decimal_places=2,
        description="Unit price",
    )


class ProductCreate(ProductBase):
    """Schema for creating a new product."""

    pass


class ProductUpdate(ProductBase):
    """Schema for replacing an existing product."""

    pass


class ProductResponse(ProductBase):
    """Schema for product responses."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Product ID")
