"""Application service for the site-wide category taxonomy."""

import uuid

from storefront.application.interfaces import CategoryRepository
from storefront.application.schemas import CategoryCreate, CategoryUpdate, SubcategoryCreate
from storefront.domain.entities import Category, Subcategory
from storefront.domain.exceptions import DuplicateEntityError, EntityNotFoundError
from storefront.domain.slugs import slugify


class CategoryService:
    """Category CRUD plus subcategory management. Depends on the repository port (DI)."""

    def __init__(self, repository: CategoryRepository):
        self._repository = repository

    async def get_category(self, category_id: str) -> Category:
        category = await self._repository.get_by_id(category_id)
        if category is None:
            raise EntityNotFoundError("Category", category_id)
        return category

    async def list_categories(self) -> list[Category]:
        return await self._repository.get_all()

    async def create_category(self, data: CategoryCreate) -> Category:
        slug = slugify(data.name)
        if await self._repository.get_by_slug(slug) is not None:
            raise DuplicateEntityError("Category", "slug", slug)
        category = Category(name=data.name, slug=slug, description=data.description)
        return await self._repository.create(category)

    async def update_category(self, category_id: str, data: CategoryUpdate) -> Category:
        category = await self.get_category(category_id)
        changes = data.model_dump(exclude_unset=True)

        if changes.get("name"):
            slug = slugify(changes["name"])
            existing = await self._repository.get_by_slug(slug)
            if existing is not None and existing.id != category.id:
                raise DuplicateEntityError("Category", "slug", slug)
            category.rename(changes["name"])
        if "description" in changes:
            category.description = changes["description"]

        return await self._repository.update(category)

    async def delete_category(self, category_id: str) -> None:
        if not await self._repository.delete(category_id):
            raise EntityNotFoundError("Category", category_id)

    async def add_subcategory(self, category_id: str, data: SubcategoryCreate) -> Subcategory:
        category = await self.get_category(category_id)
        subcategory = Subcategory(name=data.name, id=str(uuid.uuid4()))
        if category.has_subcategory_slug(subcategory.slug):
            raise DuplicateEntityError("Subcategory", "slug", subcategory.slug)

        category.subcategories.append(subcategory)
        await self._repository.update(category)
        return subcategory

    async def delete_subcategory(self, category_id: str, subcategory_id: str) -> None:
        category = await self.get_category(category_id)
        subcategory = category.find_subcategory(subcategory_id)
        if subcategory is None:
            raise EntityNotFoundError("Subcategory", subcategory_id)

        category.subcategories.remove(subcategory)
        await self._repository.update(category)
