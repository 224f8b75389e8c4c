"""V1 API router — aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from storefront.presentation.api.v1.endpoints.health import router as health_router
from storefront.presentation.api.v1.endpoints.realtime import router as realtime_router
from storefront.presentation.api.v1.endpoints.products import router as products_router
from storefront.presentation.api.v1.endpoints.categories import router as categories_router
from storefront.presentation.api.v1.endpoints.brand_pages import router as brand_pages_router
from storefront.presentation.api.v1.endpoints.upload import router as upload_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
# /products/stream must register before /products/{product_id}
router.include_router(realtime_router)
router.include_router(products_router)
router.include_router(categories_router)
router.include_router(brand_pages_router)
router.include_router(upload_router)
