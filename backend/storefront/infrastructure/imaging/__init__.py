"""External image host adapters."""

from .cloudinary_image_host import CloudinaryImageHost

__all__ = ["CloudinaryImageHost"]
