"""Concrete product repository backed by SQLAlchemy.

Every mutation also appends a row to ``product_changes`` in the same
session, which is what change capture follows.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.application.interfaces import ProductRepository
from storefront.domain.entities import ChangeOperation, Product
from storefront.infrastructure.database.models import ProductChangeModel, ProductModel

_DATETIME_FIELDS = ("created_at", "updated_at")


def product_to_document(product: Product) -> dict[str, Any]:
    """Serialise a product to the JSON after-image stored in the change log."""
    return {
        "id": product.id,
        "name": product.name,
        "category": product.category,
        "website_category": product.website_category,
        "subcategory_id": product.subcategory_id,
        "status": product.status.value,
        "description": product.description,
        "image_url": product.image_url,
        "image_public_id": product.image_public_id,
        "created_at": product.created_at.isoformat(),
        "updated_at": product.updated_at.isoformat(),
    }


def product_from_document(document: dict[str, Any]) -> Product:
    data = dict(document)
    for key in _DATETIME_FIELDS:
        data[key] = datetime.fromisoformat(data[key])
    return Product(**data)


class SQLAlchemyProductRepository(ProductRepository):
    """Implements the ProductRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: ProductModel) -> Product:
        """Map ORM model → domain entity."""
        return Product(
            id=model.id,
            name=model.name,
            category=model.category,
            website_category=model.website_category,
            subcategory_id=model.subcategory_id,
            status=model.status,
            description=model.description,
            image_url=model.image_url,
            image_public_id=model.image_public_id,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Product) -> ProductModel:
        """Map domain entity → ORM model (for creation)."""
        return ProductModel(
            name=entity.name,
            category=entity.category,
            website_category=entity.website_category,
            subcategory_id=entity.subcategory_id,
            status=entity.status.value,
            description=entity.description,
            image_url=entity.image_url,
            image_public_id=entity.image_public_id,
        )

    async def _record_change(
        self, operation: ChangeOperation, product_id: str, product: Product | None
    ) -> None:
        self._session.add(
            ProductChangeModel(
                operation=operation.value,
                document_key=product_id,
                document=product_to_document(product) if product is not None else None,
            )
        )
        await self._session.flush()

    async def get_by_id(self, product_id: str) -> Product | None:
        result = await self._session.get(ProductModel, product_id)
        return self._to_entity(result) if result else None

    async def get_all(self) -> list[Product]:
        stmt = select(ProductModel).order_by(ProductModel.created_at.desc())
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]

    async def get_many(self, product_ids: list[str]) -> list[Product]:
        if not product_ids:
            return []
        stmt = select(ProductModel).where(ProductModel.id.in_(product_ids))
        result = await self._session.execute(stmt)
        by_id = {row.id: self._to_entity(row) for row in result.scalars().all()}
        return [by_id[pid] for pid in dict.fromkeys(product_ids) if pid in by_id]

    async def create(self, product: Product) -> Product:
        model = self._to_model(product)
        self._session.add(model)
        await self._session.flush()
        created = self._to_entity(model)
        await self._record_change(ChangeOperation.INSERT, created.id, created)
        return created

    async def update(self, product: Product) -> Product:
        model = await self._session.get(ProductModel, product.id)
        if model is None:
            raise ValueError(f"Product {product.id} not found in database")
        model.name = product.name
        model.category = product.category
        model.website_category = product.website_category
        model.subcategory_id = product.subcategory_id
        model.status = product.status.value
        model.description = product.description
        model.image_url = product.image_url
        model.image_public_id = product.image_public_id
        await self._session.flush()
        await self._session.refresh(model)
        updated = self._to_entity(model)
        await self._record_change(ChangeOperation.UPDATE, updated.id, updated)
        return updated

    async def delete(self, product_id: str) -> bool:
        model = await self._session.get(ProductModel, product_id)
        if model is None:
            return False
        await self._session.delete(model)
        await self._session.flush()
        await self._record_change(ChangeOperation.DELETE, product_id, None)
        return True
