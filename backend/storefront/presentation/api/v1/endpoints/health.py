"""Health check endpoint — reports app version and live-update status."""

from fastapi import APIRouter, Depends

from storefront.application.services import ChangeCapture, ChangeHub
from storefront.config import get_settings
from storefront.infrastructure.dependencies import get_change_capture, get_change_hub

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check(
    hub: ChangeHub = Depends(get_change_hub),
    capture: ChangeCapture | None = Depends(get_change_capture),
) -> dict:
    """Returns the current application health status."""
    settings = get_settings()
    return {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.app_env,
        "realtime": {
            "capture": capture.status.value if capture is not None else "disabled",
            "subscribers": hub.subscriber_count,
        },
    }
