from .product import ProductCreate, ProductUpdate, ProductResponse, MessageResponse
from .category import (
    CategoryCreate,
    CategoryUpdate,
    CategoryResponse,
    SubcategoryCreate,
    SubcategoryResponse,
)
from .brand_page import (
    BrandPageCreate,
    BrandPageResponse,
    PageCategoryCreate,
    PageCategoryResponse,
    PageSubcategoryCreate,
    PageSubcategoryResponse,
    PageProductsResponse,
    ProductAssignment,
)
from .upload import UploadResponse
from .events import (
    CHANGE_EVENT_NAME,
    ChangeMessage,
    decode_event,
    encode_event,
)

__all__ = [
    "ProductCreate",
    "ProductUpdate",
    "ProductResponse",
    "MessageResponse",
    "CategoryCreate",
    "CategoryUpdate",
    "CategoryResponse",
    "SubcategoryCreate",
    "SubcategoryResponse",
    "BrandPageCreate",
    "BrandPageResponse",
    "PageCategoryCreate",
    "PageCategoryResponse",
    "PageSubcategoryCreate",
    "PageSubcategoryResponse",
    "PageProductsResponse",
    "ProductAssignment",
    "UploadResponse",
    "CHANGE_EVENT_NAME",
    "ChangeMessage",
    "decode_event",
    "encode_event",
]
