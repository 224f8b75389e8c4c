"""Pydantic DTOs for categories and their subcategories."""

from datetime import datetime

from pydantic import BaseModel, Field


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, examples=["IP Cameras"])
    description: str | None = None


class CategoryUpdate(BaseModel):
    """Partial update. A new name also re-derives the slug."""

    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None


class SubcategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, examples=["Dome"])


class SubcategoryResponse(BaseModel):
    id: str
    name: str
    slug: str

    model_config = {"from_attributes": True}


class CategoryResponse(BaseModel):
    id: str
    name: str
    slug: str
    description: str | None = None
    subcategories: list[SubcategoryResponse]
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
