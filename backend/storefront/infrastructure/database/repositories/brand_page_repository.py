"""Concrete brand page repository backed by SQLAlchemy."""

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.application.interfaces import BrandPageRepository
from storefront.domain.entities import (
    BrandPage,
    PageCategory,
    PageProducts,
    PageSubcategory,
)
from storefront.infrastructure.database.models import (
    BrandPageModel,
    PageCategoryModel,
    PageProductsModel,
    PageSubcategoryModel,
)


class SQLAlchemyBrandPageRepository(BrandPageRepository):
    """Implements the BrandPageRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    # ── Mapping ─────────────────────────────────────────────────────

    @staticmethod
    def _page_entity(model: BrandPageModel) -> BrandPage:
        return BrandPage(
            id=model.id,
            name=model.name,
            slug=model.slug,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @staticmethod
    def _category_entity(model: PageCategoryModel) -> PageCategory:
        return PageCategory(
            id=model.id,
            page_id=model.page_id,
            name=model.name,
            slug=model.slug,
            description=model.description,
            product_ids=list(model.product_ids or []),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @staticmethod
    def _subcategory_entity(model: PageSubcategoryModel) -> PageSubcategory:
        return PageSubcategory(
            id=model.id,
            page_id=model.page_id,
            parent_category_id=model.parent_category_id,
            name=model.name,
            slug=model.slug,
            product_ids=list(model.product_ids or []),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    # ── Brand pages ─────────────────────────────────────────────────

    async def get_pages(self) -> list[BrandPage]:
        result = await self._session.execute(select(BrandPageModel).order_by(BrandPageModel.name))
        return [self._page_entity(row) for row in result.scalars().all()]

    async def get_page_by_slug(self, slug: str) -> BrandPage | None:
        stmt = select(BrandPageModel).where(BrandPageModel.slug == slug)
        model = (await self._session.execute(stmt)).scalar_one_or_none()
        return self._page_entity(model) if model else None

    async def create_page(self, page: BrandPage) -> BrandPage:
        model = BrandPageModel(name=page.name, slug=page.slug)
        self._session.add(model)
        await self._session.flush()
        return self._page_entity(model)

    async def delete_page(self, page_id: str) -> bool:
        model = await self._session.get(BrandPageModel, page_id)
        if model is None:
            return False
        await self._session.delete(model)
        await self._session.flush()
        return True

    # ── Page categories ─────────────────────────────────────────────

    async def _category_model(self, page_id: str, category_id: str) -> PageCategoryModel | None:
        stmt = select(PageCategoryModel).where(
            PageCategoryModel.id == category_id,
            PageCategoryModel.page_id == page_id,
        )
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def get_categories(self, page_id: str) -> list[PageCategory]:
        stmt = (
            select(PageCategoryModel)
            .where(PageCategoryModel.page_id == page_id)
            .order_by(PageCategoryModel.created_at)
        )
        result = await self._session.execute(stmt)
        return [self._category_entity(row) for row in result.scalars().all()]

    async def get_category(self, page_id: str, category_id: str) -> PageCategory | None:
        model = await self._category_model(page_id, category_id)
        return self._category_entity(model) if model else None

    async def create_category(self, category: PageCategory) -> PageCategory:
        model = PageCategoryModel(
            page_id=category.page_id,
            name=category.name,
            slug=category.slug,
            description=category.description,
            product_ids=list(category.product_ids),
        )
        self._session.add(model)
        await self._session.flush()
        return self._category_entity(model)

    async def update_category(self, category: PageCategory) -> PageCategory:
        model = await self._category_model(category.page_id, category.id)
        if model is None:
            raise ValueError(f"PageCategory {category.id} not found in database")
        model.name = category.name
        model.slug = category.slug
        model.description = category.description
        model.product_ids = list(category.product_ids)
        await self._session.flush()
        return self._category_entity(model)

    async def delete_category(self, page_id: str, category_id: str) -> bool:
        model = await self._category_model(page_id, category_id)
        if model is None:
            return False
        await self._session.delete(model)
        await self._session.execute(
            delete(PageSubcategoryModel).where(
                PageSubcategoryModel.parent_category_id == category_id
            )
        )
        await self._session.flush()
        return True

    # ── Page subcategories ──────────────────────────────────────────

    async def _subcategory_model(
        self, page_id: str, subcategory_id: str
    ) -> PageSubcategoryModel | None:
        stmt = select(PageSubcategoryModel).where(
            PageSubcategoryModel.id == subcategory_id,
            PageSubcategoryModel.page_id == page_id,
        )
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def get_subcategories(self, page_id: str) -> list[PageSubcategory]:
        stmt = (
            select(PageSubcategoryModel)
            .where(PageSubcategoryModel.page_id == page_id)
            .order_by(PageSubcategoryModel.created_at)
        )
        result = await self._session.execute(stmt)
        return [self._subcategory_entity(row) for row in result.scalars().all()]

    async def get_subcategory(self, page_id: str, subcategory_id: str) -> PageSubcategory | None:
        model = await self._subcategory_model(page_id, subcategory_id)
        return self._subcategory_entity(model) if model else None

    async def create_subcategory(self, subcategory: PageSubcategory) -> PageSubcategory:
        model = PageSubcategoryModel(
            page_id=subcategory.page_id,
            parent_category_id=subcategory.parent_category_id,
            name=subcategory.name,
            slug=subcategory.slug,
            product_ids=list(subcategory.product_ids),
        )
        self._session.add(model)
        await self._session.flush()
        return self._subcategory_entity(model)

    async def update_subcategory(self, subcategory: PageSubcategory) -> PageSubcategory:
        model = await self._subcategory_model(subcategory.page_id, subcategory.id)
        if model is None:
            raise ValueError(f"PageSubcategory {subcategory.id} not found in database")
        model.name = subcategory.name
        model.slug = subcategory.slug
        model.parent_category_id = subcategory.parent_category_id
        model.product_ids = list(subcategory.product_ids)
        await self._session.flush()
        return self._subcategory_entity(model)

    async def delete_subcategory(self, page_id: str, subcategory_id: str) -> bool:
        model = await self._subcategory_model(page_id, subcategory_id)
        if model is None:
            return False
        await self._session.delete(model)
        await self._session.flush()
        return True

    # ── Page product assignment ─────────────────────────────────────

    async def get_page_products(self, page_id: str) -> PageProducts | None:
        model = await self._session.get(PageProductsModel, page_id)
        if model is None:
            return None
        return PageProducts(page_id=model.page_id, product_ids=list(model.product_ids or []))

    async def set_page_products(self, assignment: PageProducts) -> PageProducts:
        model = await self._session.get(PageProductsModel, assignment.page_id)
        if model is None:
            model = PageProductsModel(page_id=assignment.page_id)
            self._session.add(model)
        model.product_ids = list(assignment.product_ids)
        await self._session.flush()
        return PageProducts(page_id=model.page_id, product_ids=list(model.product_ids))
