"""Pydantic DTOs (Data Transfer Objects) for the Product feature."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from storefront.domain.entities import ProductStatus


class ProductCreate(BaseModel):
    """Schema for creating a new product."""

    name: str = Field(..., min_length=1, max_length=255, examples=["DS-2CD2143G2-I Dome Camera"])
    category: str = Field(..., min_length=1, max_length=255, examples=["Cameras"])
    website_category: str = Field(..., min_length=1, max_length=255, examples=["ip-cameras"])
    subcategory_id: str | None = None
    status: ProductStatus = ProductStatus.ACTIVE
    description: str | None = None
    image_url: str | None = Field(None, max_length=1000)
    image_public_id: str | None = Field(None, max_length=255)

    @field_validator("name", "category", "website_category")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value


class ProductUpdate(BaseModel):
    """Schema for updating an existing product; only fields sent are applied."""

    name: str | None = Field(None, min_length=1, max_length=255)
    category: str | None = Field(None, min_length=1, max_length=255)
    website_category: str | None = Field(None, min_length=1, max_length=255)
    subcategory_id: str | None = None
    status: ProductStatus | None = None
    description: str | None = None
    image_url: str | None = Field(None, max_length=1000)
    image_public_id: str | None = Field(None, max_length=255)

    @field_validator("name", "category", "website_category", "status")
    @classmethod
    def _required_when_sent(cls, value):
        if value is None:
            raise ValueError("may not be null")
        if isinstance(value, str) and not value.strip():
            raise ValueError("must not be blank")
        return value

    def changes(self) -> dict:
        """Fields explicitly present in the request body."""
        return self.model_dump(exclude_unset=True)


class ProductResponse(BaseModel):
    """Schema returned to the client (and carried inside change messages)."""

    id: str
    name: str
    category: str
    website_category: str
    subcategory_id: str | None = None
    status: ProductStatus
    description: str | None = None
    image_url: str | None = None
    image_public_id: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class MessageResponse(BaseModel):
    """Plain confirmation body for delete-style endpoints."""

    message: str
