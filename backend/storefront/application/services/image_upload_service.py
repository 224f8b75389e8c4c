"""Application service for uploading product images to the external host."""

import logging

from storefront.application.interfaces import HostedImage, ImageHost

logger = logging.getLogger(__name__)


class ImageUploadService:
    """Validates an uploaded image and forwards it to the image host."""

    def __init__(self, image_host: ImageHost, max_size_bytes: int):
        self._image_host = image_host
        self._max_size_bytes = max_size_bytes

    async def upload(self, content: bytes, filename: str, content_type: str | None) -> HostedImage:
        if not content:
            raise ValueError("No file uploaded")
        if len(content) > self._max_size_bytes:
            raise ValueError(
                f"File exceeds the {self._max_size_bytes // (1024 * 1024)} MB upload limit"
            )

        image = await self._image_host.upload(
            content=content,
            filename=filename,
            content_type=content_type or "application/octet-stream",
        )
        logger.info(
            "Uploaded %s to %s as %s",
            filename,
            self._image_host.provider_name,
            image.public_id,
        )
        return image
