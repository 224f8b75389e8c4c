from abc import ABC, abstractmethod

from storefront.domain.entities import (
    BrandPage,
    PageCategory,
    PageProducts,
    PageSubcategory,
)


class BrandPageRepository(ABC):
    """Port for brand pages and the taxonomy/product assignments scoped to them."""

    # ── Brand pages ─────────────────────────────────────────────────

    @abstractmethod
    async def get_pages(self) -> list[BrandPage]:
        """All brand pages ordered by name."""
        ...

    @abstractmethod
    async def get_page_by_slug(self, slug: str) -> BrandPage | None:
        ...

    @abstractmethod
    async def create_page(self, page: BrandPage) -> BrandPage:
        ...

    @abstractmethod
    async def delete_page(self, page_id: str) -> bool:
        ...

    # ── Page categories ─────────────────────────────────────────────

    @abstractmethod
    async def get_categories(self, page_id: str) -> list[PageCategory]:
        ...

    @abstractmethod
    async def get_category(self, page_id: str, category_id: str) -> PageCategory | None:
        ...

    @abstractmethod
    async def create_category(self, category: PageCategory) -> PageCategory:
        ...

    @abstractmethod
    async def update_category(self, category: PageCategory) -> PageCategory:
        ...

    @abstractmethod
    async def delete_category(self, page_id: str, category_id: str) -> bool:
        """Delete a page category together with the subcategories under it."""
        ...

    # ── Page subcategories ──────────────────────────────────────────

    @abstractmethod
    async def get_subcategories(self, page_id: str) -> list[PageSubcategory]:
        ...

    @abstractmethod
    async def get_subcategory(self, page_id: str, subcategory_id: str) -> PageSubcategory | None:
        ...

    @abstractmethod
    async def create_subcategory(self, subcategory: PageSubcategory) -> PageSubcategory:
        ...

    @abstractmethod
    async def update_subcategory(self, subcategory: PageSubcategory) -> PageSubcategory:
        ...

    @abstractmethod
    async def delete_subcategory(self, page_id: str, subcategory_id: str) -> bool:
        ...

    # ── Page product assignment ─────────────────────────────────────

    @abstractmethod
    async def get_page_products(self, page_id: str) -> PageProducts | None:
        ...

    @abstractmethod
    async def set_page_products(self, assignment: PageProducts) -> PageProducts:
        """Insert or replace the product assignment for a page."""
        ...
