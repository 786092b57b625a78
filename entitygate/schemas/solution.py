"""Pydantic schemas for Solution validation.

A single payload schema is used for both create and update; whether an id
may be present is decided by the service, not by the schema.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from entitygate.core.database import INTEGER_MAX


class SolutionPayload(BaseModel):
    """Inbound solution body for POST and PUT."""

    id: int | None = Field(None, description="Solution ID (must be absent on create)")
    title: str = Field(..., min_length=1, max_length=255, description="Solution title")
    description: str | None = Field(None, description="Detailed description")
    bug_id: int = Field(
        ..., ge=1, le=INTEGER_MAX, description="Bug this solution addresses"
    )

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        """Validate and normalize the title."""
        v = v.strip()
        if not v:
            raise ValueError("Solution title cannot be empty or whitespace only")
        return v


class SolutionResponse(BaseModel):
    """Schema for solution responses."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Solution ID")
    title: str = Field(..., description="Solution title")
    description: str | None = Field(None, description="Detailed description")
    bug_id: int = Field(..., description="Bug this solution addresses")
