"""Concrete category repository backed by SQLAlchemy."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.application.interfaces import CategoryRepository
from storefront.domain.entities import Category, Subcategory
from storefront.infrastructure.database.models import CategoryModel


class SQLAlchemyCategoryRepository(CategoryRepository):
    """Implements the CategoryRepository port; subcategories live in a JSON column."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: CategoryModel) -> Category:
        return Category(
            id=model.id,
            name=model.name,
            slug=model.slug,
            description=model.description,
            subcategories=[
                Subcategory(id=s["id"], name=s["name"], slug=s["slug"])
                for s in (model.subcategories or [])
            ],
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @staticmethod
    def _subcategory_rows(category: Category) -> list[dict]:
        return [{"id": s.id, "name": s.name, "slug": s.slug} for s in category.subcategories]

    async def get_by_id(self, category_id: str) -> Category | None:
        result = await self._session.get(CategoryModel, category_id)
        return self._to_entity(result) if result else None

    async def get_by_slug(self, slug: str) -> Category | None:
        stmt = select(CategoryModel).where(CategoryModel.slug == slug)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_all(self) -> list[Category]:
        stmt = select(CategoryModel).order_by(CategoryModel.name)
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]

    async def create(self, category: Category) -> Category:
        model = CategoryModel(
            name=category.name,
            slug=category.slug,
            description=category.description,
            subcategories=self._subcategory_rows(category),
        )
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def update(self, category: Category) -> Category:
        model = await self._session.get(CategoryModel, category.id)
        if model is None:
            raise ValueError(f"Category {category.id} not found in database")
        model.name = category.name
        model.slug = category.slug
        model.description = category.description
        # Assign a new list so the JSON column is flagged dirty
        model.subcategories = self._subcategory_rows(category)
        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, category_id: str) -> bool:
        model = await self._session.get(CategoryModel, category_id)
        if model is None:
            return False
        await self._session.delete(model)
        await self._session.flush()
        return True
