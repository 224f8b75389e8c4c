"""Change log reader over the ``product_changes`` table."""

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from storefront.application.interfaces import ChangeLog
from storefront.domain.entities import ChangeOperation, Product, StoreChange
from storefront.domain.exceptions import ChangeLogUnavailableError
from storefront.infrastructure.database.models import ProductChangeModel
from storefront.infrastructure.database.repositories.product_repository import (
    SQLAlchemyProductRepository,
    product_from_document,
)


class SQLAlchemyChangeLog(ChangeLog):
    """Implements the ChangeLog port.

    Each call uses its own short-lived session, so the reader only ever sees
    committed rows and never holds a transaction open between polls.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def open(self) -> int:
        try:
            async with self._session_factory() as session:
                stmt = select(func.coalesce(func.max(ProductChangeModel.position), 0))
                head = (await session.execute(stmt)).scalar_one()
        except (SQLAlchemyError, OSError) as exc:
            raise ChangeLogUnavailableError(f"Cannot open product change log: {exc}") from exc
        return int(head)

    async def read_since(self, position: int, limit: int = 100) -> list[StoreChange]:
        try:
            async with self._session_factory() as session:
                stmt = (
                    select(ProductChangeModel)
                    .where(ProductChangeModel.position > position)
                    .order_by(ProductChangeModel.position)
                    .limit(limit)
                )
                rows = (await session.execute(stmt)).scalars().all()
        except (SQLAlchemyError, OSError) as exc:
            raise ChangeLogUnavailableError(f"Cannot read product change log: {exc}") from exc

        return [
            StoreChange(
                position=row.position,
                operation=ChangeOperation(row.operation),
                document_key=row.document_key,
                document=product_from_document(row.document) if row.document else None,
            )
            for row in rows
        ]

    async def snapshot(self) -> list[Product]:
        try:
            async with self._session_factory() as session:
                return await SQLAlchemyProductRepository(session).get_all()
        except (SQLAlchemyError, OSError) as exc:
            raise ChangeLogUnavailableError(f"Cannot load product snapshot: {exc}") from exc
