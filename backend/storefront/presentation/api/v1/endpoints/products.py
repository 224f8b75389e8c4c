"""Product CRUD endpoints.

Mutations only touch the database; connected clients hear about them
through the change log → change capture → hub pipeline.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from storefront.application.schemas import (
    MessageResponse,
    ProductCreate,
    ProductResponse,
    ProductUpdate,
)
from storefront.application.services import ProductService
from storefront.domain.exceptions import EntityNotFoundError, ImageHostError
from storefront.infrastructure.dependencies import get_product_service

router = APIRouter(prefix="/products", tags=["Products"])


@router.get("", response_model=list[ProductResponse])
async def list_products(
    service: ProductService = Depends(get_product_service),
) -> list[ProductResponse]:
    """Retrieve every product, newest first."""
    products = await service.list_products()
    return [ProductResponse.model_validate(p, from_attributes=True) for p in products]


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: str,
    service: ProductService = Depends(get_product_service),
) -> ProductResponse:
    """Retrieve a single product by ID."""
    try:
        product = await service.get_product(product_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return ProductResponse.model_validate(product, from_attributes=True)


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product(
    data: ProductCreate,
    service: ProductService = Depends(get_product_service),
) -> ProductResponse:
    """Create a new product."""
    product = await service.create_product(data)
    return ProductResponse.model_validate(product, from_attributes=True)


@router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: str,
    data: ProductUpdate,
    service: ProductService = Depends(get_product_service),
) -> ProductResponse:
    """Update the fields present in the request body."""
    try:
        product = await service.update_product(product_id, data)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return ProductResponse.model_validate(product, from_attributes=True)


@router.delete("/{product_id}", response_model=MessageResponse)
async def delete_product(
    product_id: str,
    service: ProductService = Depends(get_product_service),
) -> MessageResponse:
    """Delete a product and release its hosted image."""
    try:
        await service.delete_product(product_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ImageHostError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
    return MessageResponse(message="Product deleted successfully")
