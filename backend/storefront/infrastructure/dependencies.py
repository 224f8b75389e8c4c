"""FastAPI dependency injection — wires infrastructure to application layer."""

from collections.abc import AsyncGenerator

from fastapi import Depends, HTTPException, Request, WebSocket, status
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.application.interfaces import ImageHost
from storefront.application.services import (
    BrandPageService,
    CategoryService,
    ChangeCapture,
    ChangeHub,
    ImageUploadService,
    ProductService,
)
from storefront.config import get_settings
from storefront.infrastructure.database.repositories import (
    SQLAlchemyBrandPageRepository,
    SQLAlchemyCategoryRepository,
    SQLAlchemyProductRepository,
)
from storefront.infrastructure.database.session import get_db_session
from storefront.infrastructure.imaging import CloudinaryImageHost


def get_image_host() -> ImageHost | None:
    """Provides the Cloudinary adapter, or None when no credentials are configured."""
    settings = get_settings()
    if not settings.image_host_configured:
        return None
    return CloudinaryImageHost(
        cloud_name=settings.cloudinary_cloud_name,
        api_key=settings.cloudinary_api_key,
        api_secret=settings.cloudinary_api_secret,
        folder=settings.cloudinary_folder,
    )


async def get_product_service(
    session: AsyncSession = Depends(get_db_session),
    image_host: ImageHost | None = Depends(get_image_host),
) -> AsyncGenerator[ProductService, None]:
    """Provides a ProductService with its repository and image host wired up."""
    yield ProductService(SQLAlchemyProductRepository(session), image_host=image_host)


async def get_category_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[CategoryService, None]:
    yield CategoryService(SQLAlchemyCategoryRepository(session))


async def get_brand_page_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[BrandPageService, None]:
    yield BrandPageService(
        SQLAlchemyBrandPageRepository(session),
        SQLAlchemyProductRepository(session),
    )


def get_image_upload_service(
    image_host: ImageHost | None = Depends(get_image_host),
) -> ImageUploadService:
    if image_host is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Image host is not configured",
        )
    return ImageUploadService(
        image_host,
        max_size_bytes=get_settings().max_upload_size_mb * 1024 * 1024,
    )


# ── Realtime (process-wide, built once in the lifespan) ──────────────


def get_change_hub(request: Request) -> ChangeHub:
    return request.app.state.change_hub


def get_change_capture(request: Request) -> ChangeCapture | None:
    return getattr(request.app.state, "change_capture", None)


def get_socket_change_hub(websocket: WebSocket) -> ChangeHub:
    return websocket.app.state.change_hub
