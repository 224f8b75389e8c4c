"""Image upload endpoint, forwards files to the external image host."""

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from storefront.application.schemas import UploadResponse
from storefront.application.services import ImageUploadService
from storefront.domain.exceptions import ImageHostError
from storefront.infrastructure.dependencies import get_image_upload_service

router = APIRouter(tags=["Upload"])


@router.post("/upload", response_model=UploadResponse)
async def upload_image(
    file: UploadFile | None = File(None),
    service: ImageUploadService = Depends(get_image_upload_service),
) -> UploadResponse:
    """Upload a product image; returns its public URL and asset id."""
    if file is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file uploaded")

    content = await file.read()
    try:
        image = await service.upload(content, file.filename or "upload", file.content_type)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except ImageHostError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
    return UploadResponse(url=image.url, public_id=image.public_id)
