from .product import Product, ProductStatus
from .category import Category, Subcategory
from .brand_page import BrandPage, PageCategory, PageSubcategory, PageProducts
from .change import (
    ChangeEvent,
    ChangeOperation,
    ProductCreated,
    ProductDeleted,
    ProductUpdated,
    ProductsRefreshed,
    StoreChange,
    event_from_change,
)

__all__ = [
    "Product",
    "ProductStatus",
    "Category",
    "Subcategory",
    "BrandPage",
    "PageCategory",
    "PageSubcategory",
    "PageProducts",
    "ChangeEvent",
    "ChangeOperation",
    "ProductCreated",
    "ProductDeleted",
    "ProductUpdated",
    "ProductsRefreshed",
    "StoreChange",
    "event_from_change",
]
