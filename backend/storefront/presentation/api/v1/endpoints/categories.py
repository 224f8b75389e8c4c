"""Category and subcategory endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status

from storefront.application.schemas import (
    CategoryCreate,
    CategoryResponse,
    CategoryUpdate,
    MessageResponse,
    SubcategoryCreate,
    SubcategoryResponse,
)
from storefront.application.services import CategoryService
from storefront.domain.exceptions import DuplicateEntityError, EntityNotFoundError
from storefront.infrastructure.dependencies import get_category_service

router = APIRouter(prefix="/categories", tags=["Categories"])


@router.get("", response_model=list[CategoryResponse])
async def list_categories(
    service: CategoryService = Depends(get_category_service),
) -> list[CategoryResponse]:
    """All categories ordered by name."""
    categories = await service.list_categories()
    return [CategoryResponse.model_validate(c, from_attributes=True) for c in categories]


@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(
    category_id: str,
    service: CategoryService = Depends(get_category_service),
) -> CategoryResponse:
    try:
        category = await service.get_category(category_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return CategoryResponse.model_validate(category, from_attributes=True)


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    data: CategoryCreate,
    service: CategoryService = Depends(get_category_service),
) -> CategoryResponse:
    try:
        category = await service.create_category(data)
    except DuplicateEntityError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return CategoryResponse.model_validate(category, from_attributes=True)


@router.put("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: str,
    data: CategoryUpdate,
    service: CategoryService = Depends(get_category_service),
) -> CategoryResponse:
    try:
        category = await service.update_category(category_id, data)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except DuplicateEntityError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return CategoryResponse.model_validate(category, from_attributes=True)


@router.delete("/{category_id}", response_model=MessageResponse)
async def delete_category(
    category_id: str,
    service: CategoryService = Depends(get_category_service),
) -> MessageResponse:
    try:
        await service.delete_category(category_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return MessageResponse(message="Category deleted successfully")


# ── Subcategories ────────────────────────────────────────────────────


@router.post(
    "/{category_id}/subcategories",
    response_model=SubcategoryResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_subcategory(
    category_id: str,
    data: SubcategoryCreate,
    service: CategoryService = Depends(get_category_service),
) -> SubcategoryResponse:
    """Add a subcategory; its slug must be unique within the category."""
    try:
        subcategory = await service.add_subcategory(category_id, data)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except DuplicateEntityError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return SubcategoryResponse.model_validate(subcategory, from_attributes=True)


@router.delete("/{category_id}/subcategories/{subcategory_id}", response_model=MessageResponse)
async def delete_subcategory(
    category_id: str,
    subcategory_id: str,
    service: CategoryService = Depends(get_category_service),
) -> MessageResponse:
    try:
        await service.delete_subcategory(category_id, subcategory_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return MessageResponse(message="Subcategory deleted successfully")
