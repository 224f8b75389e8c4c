from .product_repository import SQLAlchemyProductRepository
from .category_repository import SQLAlchemyCategoryRepository
from .brand_page_repository import SQLAlchemyBrandPageRepository
from .change_log import SQLAlchemyChangeLog

__all__ = [
    "SQLAlchemyProductRepository",
    "SQLAlchemyCategoryRepository",
    "SQLAlchemyBrandPageRepository",
    "SQLAlchemyChangeLog",
]
