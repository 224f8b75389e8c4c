"""Application service for brand pages and their page-scoped taxonomy."""

from storefront.application.interfaces import BrandPageRepository, ProductRepository
from storefront.application.schemas import (
    BrandPageCreate,
    PageCategoryCreate,
    PageSubcategoryCreate,
)
from storefront.domain.entities import (
    BrandPage,
    PageCategory,
    PageProducts,
    PageSubcategory,
    Product,
)
from storefront.domain.exceptions import DuplicateEntityError, EntityNotFoundError
from storefront.domain.slugs import slugify


class BrandPageService:
    """Manages brand pages, their categories/subcategories and product assignments."""

    def __init__(self, repository: BrandPageRepository, product_repository: ProductRepository):
        self._repository = repository
        self._products = product_repository

    # ── Brand pages ─────────────────────────────────────────────────

    async def list_pages(self) -> list[BrandPage]:
        return await self._repository.get_pages()

    async def create_page(self, data: BrandPageCreate) -> BrandPage:
        slug = slugify(data.name)
        if await self._repository.get_page_by_slug(slug) is not None:
            raise DuplicateEntityError("BrandPage", "slug", slug)
        return await self._repository.create_page(BrandPage(name=data.name, slug=slug))

    async def delete_page(self, page_id: str) -> None:
        if not await self._repository.delete_page(page_id):
            raise EntityNotFoundError("BrandPage", page_id)

    # ── Page categories ─────────────────────────────────────────────

    async def list_categories(self, page_id: str) -> list[PageCategory]:
        return await self._repository.get_categories(page_id)

    async def get_category(self, page_id: str, category_id: str) -> PageCategory:
        category = await self._repository.get_category(page_id, category_id)
        if category is None:
            raise EntityNotFoundError("PageCategory", category_id)
        return category

    async def create_category(self, page_id: str, data: PageCategoryCreate) -> PageCategory:
        category = PageCategory(page_id=page_id, name=data.name, description=data.description)
        return await self._repository.create_category(category)

    async def delete_category(self, page_id: str, category_id: str) -> None:
        if not await self._repository.delete_category(page_id, category_id):
            raise EntityNotFoundError("PageCategory", category_id)

    async def assign_category_products(
        self, page_id: str, category_id: str, product_ids: list[str]
    ) -> PageCategory:
        category = await self.get_category(page_id, category_id)
        category.product_ids = list(product_ids)
        return await self._repository.update_category(category)

    # ── Page subcategories ──────────────────────────────────────────

    async def list_subcategories(self, page_id: str) -> list[PageSubcategory]:
        return await self._repository.get_subcategories(page_id)

    async def create_subcategory(
        self, page_id: str, data: PageSubcategoryCreate
    ) -> PageSubcategory:
        subcategory = PageSubcategory(
            page_id=page_id,
            parent_category_id=data.parent_category_id,
            name=data.name,
        )
        return await self._repository.create_subcategory(subcategory)

    async def delete_subcategory(self, page_id: str, subcategory_id: str) -> None:
        if not await self._repository.delete_subcategory(page_id, subcategory_id):
            raise EntityNotFoundError("PageSubcategory", subcategory_id)

    async def assign_subcategory_products(
        self, page_id: str, subcategory_id: str, product_ids: list[str]
    ) -> PageSubcategory:
        subcategory = await self._repository.get_subcategory(page_id, subcategory_id)
        if subcategory is None:
            raise EntityNotFoundError("PageSubcategory", subcategory_id)
        subcategory.product_ids = list(product_ids)
        return await self._repository.update_subcategory(subcategory)

    # ── Page products ───────────────────────────────────────────────

    async def list_page_products(self, page_id: str) -> list[Product]:
        """Products assigned to the page; empty when nothing is assigned."""
        assignment = await self._repository.get_page_products(page_id)
        if assignment is None or not assignment.product_ids:
            return []
        return await self._products.get_many(assignment.product_ids)

    async def set_page_products(self, page_id: str, product_ids: list[str]) -> PageProducts:
        return await self._repository.set_page_products(
            PageProducts(page_id=page_id, product_ids=list(product_ids))
        )
