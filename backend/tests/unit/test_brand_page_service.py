"""Unit tests for the BrandPageService."""

import uuid

import pytest

from storefront.application.interfaces import BrandPageRepository, ProductRepository
from storefront.application.schemas import (
    BrandPageCreate,
    PageCategoryCreate,
    PageSubcategoryCreate,
)
from storefront.application.services import BrandPageService
from storefront.domain.entities import (
    BrandPage,
    PageCategory,
    PageProducts,
    PageSubcategory,
    Product,
)
from storefront.domain.exceptions import DuplicateEntityError, EntityNotFoundError


class FakeBrandPageRepository(BrandPageRepository):
    def __init__(self):
        self.pages: dict[str, BrandPage] = {}
        self.categories: dict[str, PageCategory] = {}
        self.subcategories: dict[str, PageSubcategory] = {}
        self.assignments: dict[str, PageProducts] = {}

    async def get_pages(self) -> list[BrandPage]:
        return sorted(self.pages.values(), key=lambda p: p.name)

    async def get_page_by_slug(self, slug: str) -> BrandPage | None:
        return next((p for p in self.pages.values() if p.slug == slug), None)

    async def create_page(self, page: BrandPage) -> BrandPage:
        page.id = str(uuid.uuid4())
        self.pages[page.id] = page
        return page

    async def delete_page(self, page_id: str) -> bool:
        return self.pages.pop(page_id, None) is not None

    async def get_categories(self, page_id: str) -> list[PageCategory]:
        return [c for c in self.categories.values() if c.page_id == page_id]

    async def get_category(self, page_id: str, category_id: str) -> PageCategory | None:
        category = self.categories.get(category_id)
        return category if category and category.page_id == page_id else None

    async def create_category(self, category: PageCategory) -> PageCategory:
        category.id = str(uuid.uuid4())
        self.categories[category.id] = category
        return category

    async def update_category(self, category: PageCategory) -> PageCategory:
        self.categories[category.id] = category
        return category

    async def delete_category(self, page_id: str, category_id: str) -> bool:
        if await self.get_category(page_id, category_id) is None:
            return False
        del self.categories[category_id]
        self.subcategories = {
            k: s for k, s in self.subcategories.items() if s.parent_category_id != category_id
        }
        return True

    async def get_subcategories(self, page_id: str) -> list[PageSubcategory]:
        return [s for s in self.subcategories.values() if s.page_id == page_id]

    async def get_subcategory(self, page_id: str, subcategory_id: str) -> PageSubcategory | None:
        subcategory = self.subcategories.get(subcategory_id)
        return subcategory if subcategory and subcategory.page_id == page_id else None

    async def create_subcategory(self, subcategory: PageSubcategory) -> PageSubcategory:
        subcategory.id = str(uuid.uuid4())
        self.subcategories[subcategory.id] = subcategory
        return subcategory

    async def update_subcategory(self, subcategory: PageSubcategory) -> PageSubcategory:
        self.subcategories[subcategory.id] = subcategory
        return subcategory

    async def delete_subcategory(self, page_id: str, subcategory_id: str) -> bool:
        if await self.get_subcategory(page_id, subcategory_id) is None:
            return False
        del self.subcategories[subcategory_id]
        return True

    async def get_page_products(self, page_id: str) -> PageProducts | None:
        return self.assignments.get(page_id)

    async def set_page_products(self, assignment: PageProducts) -> PageProducts:
        self.assignments[assignment.page_id] = assignment
        return assignment


class StaticProductRepository(ProductRepository):
    def __init__(self, products: list[Product]):
        self._products = {p.id: p for p in products}

    async def get_by_id(self, product_id):
        return self._products.get(product_id)

    async def get_all(self):
        return list(self._products.values())

    async def get_many(self, product_ids):
        return [self._products[i] for i in product_ids if i in self._products]

    async def create(self, product):
        raise NotImplementedError

    async def update(self, product):
        raise NotImplementedError

    async def delete(self, product_id):
        raise NotImplementedError


@pytest.fixture
def repository() -> FakeBrandPageRepository:
    return FakeBrandPageRepository()


@pytest.fixture
def service(repository: FakeBrandPageRepository) -> BrandPageService:
    products = [
        Product(id="p1", name="Dome", category="Cameras", website_category="ip"),
        Product(id="p2", name="Bullet", category="Cameras", website_category="ip"),
    ]
    return BrandPageService(repository, StaticProductRepository(products))


@pytest.mark.asyncio
async def test_create_page_and_reject_duplicate(service: BrandPageService):
    page = await service.create_page(BrandPageCreate(name="Dahua Saudi"))
    assert page.slug == "dahua-saudi"
    with pytest.raises(DuplicateEntityError):
        await service.create_page(BrandPageCreate(name="dahua saudi"))


@pytest.mark.asyncio
async def test_delete_missing_page(service: BrandPageService):
    with pytest.raises(EntityNotFoundError):
        await service.delete_page("nope")


@pytest.mark.asyncio
async def test_deleting_category_removes_its_subcategories(service: BrandPageService):
    page = await service.create_page(BrandPageCreate(name="Hikvision"))
    cameras = await service.create_category(page.id, PageCategoryCreate(name="Cameras"))
    recorders = await service.create_category(page.id, PageCategoryCreate(name="Recorders"))
    await service.create_subcategory(
        page.id, PageSubcategoryCreate(name="Dome", parent_category_id=cameras.id)
    )
    kept = await service.create_subcategory(
        page.id, PageSubcategoryCreate(name="4K NVR", parent_category_id=recorders.id)
    )

    await service.delete_category(page.id, cameras.id)

    remaining = await service.list_subcategories(page.id)
    assert [s.id for s in remaining] == [kept.id]


@pytest.mark.asyncio
async def test_assign_products_replaces_list(service: BrandPageService):
    page = await service.create_page(BrandPageCreate(name="Uniview"))
    category = await service.create_category(page.id, PageCategoryCreate(name="Cameras"))

    await service.assign_category_products(page.id, category.id, ["p1", "p2"])
    updated = await service.assign_category_products(page.id, category.id, ["p2"])

    assert updated.product_ids == ["p2"]


@pytest.mark.asyncio
async def test_assign_products_to_missing_subcategory(service: BrandPageService):
    with pytest.raises(EntityNotFoundError):
        await service.assign_subcategory_products("page", "nope", ["p1"])


@pytest.mark.asyncio
async def test_page_products_empty_until_assigned(service: BrandPageService):
    page = await service.create_page(BrandPageCreate(name="Hikvision"))
    assert await service.list_page_products(page.id) == []

    await service.set_page_products(page.id, ["p2", "p1", "gone"])
    products = await service.list_page_products(page.id)

    assert [p.id for p in products] == ["p2", "p1"]
