from abc import ABC, abstractmethod

from storefront.domain.entities import Category


class CategoryRepository(ABC):
    """Port for the site-wide category taxonomy (categories own their subcategories)."""

    @abstractmethod
    async def get_by_id(self, category_id: str) -> Category | None:
        ...

    @abstractmethod
    async def get_by_slug(self, slug: str) -> Category | None:
        ...

    @abstractmethod
    async def get_all(self) -> list[Category]:
        """All categories ordered by name."""
        ...

    @abstractmethod
    async def create(self, category: Category) -> Category:
        ...

    @abstractmethod
    async def update(self, category: Category) -> Category:
        """Persist the category including its full subcategory list."""
        ...

    @abstractmethod
    async def delete(self, category_id: str) -> bool:
        ...
