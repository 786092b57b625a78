"""Pydantic schemas for Category validation."""

from pydantic import BaseModel, ConfigDict, Field


class CategoryUpdate(BaseModel):
    """Schema for replacing a category's fields."""

    name: str | None = Field(None, max_length=255, description="Category name")
    description: str | None = Field(
        None, max_length=1024, description="Category description"
    )


class CategoryResponse(BaseModel):
    """Schema for category responses."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Category ID")
    name: str | None = Field(None, description="Category name")
    description: str | None = Field(None, description="Category description")
