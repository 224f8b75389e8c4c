from .product_service import ProductService
from .category_service import CategoryService
from .brand_page_service import BrandPageService
from .image_upload_service import ImageUploadService
from .change_hub import ChangeHub, Subscription
from .change_capture import CaptureStatus, ChangeCapture

__all__ = [
    "ProductService",
    "CategoryService",
    "BrandPageService",
    "ImageUploadService",
    "ChangeHub",
    "Subscription",
    "CaptureStatus",
    "ChangeCapture",
]
