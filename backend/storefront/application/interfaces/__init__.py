from .product_repository import ProductRepository
from .category_repository import CategoryRepository
from .brand_page_repository import BrandPageRepository
from .change_log import ChangeLog
from .image_host import HostedImage, ImageHost

__all__ = [
    "ProductRepository",
    "CategoryRepository",
    "BrandPageRepository",
    "ChangeLog",
    "HostedImage",
    "ImageHost",
]
