"""Pydantic DTOs for brand pages and their page-scoped taxonomy."""

from datetime import datetime

from pydantic import BaseModel, Field


class BrandPageCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, examples=["Hikvision"])


class BrandPageResponse(BaseModel):
    id: str
    name: str
    slug: str

    model_config = {"from_attributes": True}


class PageCategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None


class PageCategoryResponse(BaseModel):
    id: str
    page_id: str
    name: str
    slug: str
    description: str | None = None
    product_ids: list[str]
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class PageSubcategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    parent_category_id: str = Field(..., min_length=1)


class PageSubcategoryResponse(BaseModel):
    id: str
    page_id: str
    parent_category_id: str
    name: str
    slug: str
    product_ids: list[str]
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ProductAssignment(BaseModel):
    """Replaces the product list of a page, page category or page subcategory."""

    products: list[str]


class PageProductsResponse(BaseModel):
    page_id: str
    product_ids: list[str]

    model_config = {"from_attributes": True}
