"""SQLAlchemy ORM models for products and the catalog change log."""

from datetime import datetime
from typing import Any

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from storefront.infrastructure.database.base import Base, JSONType, generate_uuid, utcnow


class ProductModel(Base):
    """ORM model — maps to the 'products' table."""

    __tablename__ = "products"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    category: Mapped[str] = mapped_column(String(255), nullable=False)
    website_category: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    subcategory_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="Active")
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    image_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    image_public_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
        index=True,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<ProductModel(id={self.id}, name='{self.name}')>"


class ProductChangeModel(Base):
    """One committed product mutation; change capture follows this table.

    Rows are written in the same transaction as the mutation, so a row is
    visible exactly when the change it describes has committed.
    """

    __tablename__ = "product_changes"

    position: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    operation: Mapped[str] = mapped_column(String(10), nullable=False)  # insert | update | delete
    document_key: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    document: Mapped[dict[str, Any] | None] = mapped_column(JSONType, nullable=True)
    recorded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<ProductChangeModel(position={self.position}, op={self.operation}, key={self.document_key})>"
