"""Brand page endpoints: pages, their own categories/subcategories, product assignment."""

from fastapi import APIRouter, Depends, HTTPException, status

from storefront.application.schemas import (
    BrandPageCreate,
    BrandPageResponse,
    MessageResponse,
    PageCategoryCreate,
    PageCategoryResponse,
    PageProductsResponse,
    PageSubcategoryCreate,
    PageSubcategoryResponse,
    ProductAssignment,
    ProductResponse,
)
from storefront.application.services import BrandPageService
from storefront.domain.exceptions import DuplicateEntityError, EntityNotFoundError
from storefront.infrastructure.dependencies import get_brand_page_service

router = APIRouter(tags=["Brand Pages"])


# ── Brand pages ──────────────────────────────────────────────────────


@router.get("/brand-pages", response_model=list[BrandPageResponse])
async def list_brand_pages(
    service: BrandPageService = Depends(get_brand_page_service),
) -> list[BrandPageResponse]:
    pages = await service.list_pages()
    return [BrandPageResponse.model_validate(p, from_attributes=True) for p in pages]


@router.post("/brand-pages", response_model=BrandPageResponse, status_code=status.HTTP_201_CREATED)
async def create_brand_page(
    data: BrandPageCreate,
    service: BrandPageService = Depends(get_brand_page_service),
) -> BrandPageResponse:
    try:
        page = await service.create_page(data)
    except DuplicateEntityError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return BrandPageResponse.model_validate(page, from_attributes=True)


@router.delete("/brand-pages/{page_id}", response_model=MessageResponse)
async def delete_brand_page(
    page_id: str,
    service: BrandPageService = Depends(get_brand_page_service),
) -> MessageResponse:
    try:
        await service.delete_page(page_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return MessageResponse(message="Brand page deleted successfully")


# ── Page categories ──────────────────────────────────────────────────


@router.get("/pages/{page_id}/categories", response_model=list[PageCategoryResponse])
async def list_page_categories(
    page_id: str,
    service: BrandPageService = Depends(get_brand_page_service),
) -> list[PageCategoryResponse]:
    categories = await service.list_categories(page_id)
    return [PageCategoryResponse.model_validate(c, from_attributes=True) for c in categories]


@router.post(
    "/pages/{page_id}/categories",
    response_model=PageCategoryResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_page_category(
    page_id: str,
    data: PageCategoryCreate,
    service: BrandPageService = Depends(get_brand_page_service),
) -> PageCategoryResponse:
    category = await service.create_category(page_id, data)
    return PageCategoryResponse.model_validate(category, from_attributes=True)


@router.get("/pages/{page_id}/categories/{category_id}", response_model=PageCategoryResponse)
async def get_page_category(
    page_id: str,
    category_id: str,
    service: BrandPageService = Depends(get_brand_page_service),
) -> PageCategoryResponse:
    try:
        category = await service.get_category(page_id, category_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return PageCategoryResponse.model_validate(category, from_attributes=True)


@router.delete("/pages/{page_id}/categories/{category_id}", response_model=MessageResponse)
async def delete_page_category(
    page_id: str,
    category_id: str,
    service: BrandPageService = Depends(get_brand_page_service),
) -> MessageResponse:
    """Delete a page category and every subcategory under it."""
    try:
        await service.delete_category(page_id, category_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return MessageResponse(message="Category deleted successfully")


@router.post(
    "/pages/{page_id}/categories/{category_id}/products",
    response_model=PageCategoryResponse,
)
async def assign_page_category_products(
    page_id: str,
    category_id: str,
    data: ProductAssignment,
    service: BrandPageService = Depends(get_brand_page_service),
) -> PageCategoryResponse:
    try:
        category = await service.assign_category_products(page_id, category_id, data.products)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return PageCategoryResponse.model_validate(category, from_attributes=True)


# ── Page subcategories ───────────────────────────────────────────────


@router.get("/pages/{page_id}/subcategories", response_model=list[PageSubcategoryResponse])
async def list_page_subcategories(
    page_id: str,
    service: BrandPageService = Depends(get_brand_page_service),
) -> list[PageSubcategoryResponse]:
    subcategories = await service.list_subcategories(page_id)
    return [PageSubcategoryResponse.model_validate(s, from_attributes=True) for s in subcategories]


@router.post(
    "/pages/{page_id}/subcategories",
    response_model=PageSubcategoryResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_page_subcategory(
    page_id: str,
    data: PageSubcategoryCreate,
    service: BrandPageService = Depends(get_brand_page_service),
) -> PageSubcategoryResponse:
    subcategory = await service.create_subcategory(page_id, data)
    return PageSubcategoryResponse.model_validate(subcategory, from_attributes=True)


@router.delete("/pages/{page_id}/subcategories/{subcategory_id}", response_model=MessageResponse)
async def delete_page_subcategory(
    page_id: str,
    subcategory_id: str,
    service: BrandPageService = Depends(get_brand_page_service),
) -> MessageResponse:
    try:
        await service.delete_subcategory(page_id, subcategory_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return MessageResponse(message="Subcategory deleted successfully")


@router.post(
    "/pages/{page_id}/subcategories/{subcategory_id}/products",
    response_model=PageSubcategoryResponse,
)
async def assign_page_subcategory_products(
    page_id: str,
    subcategory_id: str,
    data: ProductAssignment,
    service: BrandPageService = Depends(get_brand_page_service),
) -> PageSubcategoryResponse:
    try:
        subcategory = await service.assign_subcategory_products(
            page_id, subcategory_id, data.products
        )
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return PageSubcategoryResponse.model_validate(subcategory, from_attributes=True)


# ── Page products ────────────────────────────────────────────────────


@router.get("/pages/{page_id}/products", response_model=list[ProductResponse])
async def list_page_products(
    page_id: str,
    service: BrandPageService = Depends(get_brand_page_service),
) -> list[ProductResponse]:
    """Products assigned to the page, in assignment order."""
    products = await service.list_page_products(page_id)
    return [ProductResponse.model_validate(p, from_attributes=True) for p in products]


@router.post("/pages/{page_id}/products", response_model=PageProductsResponse)
async def set_page_products(
    page_id: str,
    data: ProductAssignment,
    service: BrandPageService = Depends(get_brand_page_service),
) -> PageProductsResponse:
    assignment = await service.set_page_products(page_id, data.products)
    return PageProductsResponse.model_validate(assignment, from_attributes=True)
