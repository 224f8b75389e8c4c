from .product import ProductModel, ProductChangeModel
from .category import CategoryModel
from .brand_page import (
    BrandPageModel,
    PageCategoryModel,
    PageSubcategoryModel,
    PageProductsModel,
)

__all__ = [
    "ProductModel",
    "ProductChangeModel",
    "CategoryModel",
    "BrandPageModel",
    "PageCategoryModel",
    "PageSubcategoryModel",
    "PageProductsModel",
]
