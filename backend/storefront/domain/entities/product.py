"""Domain entity for catalog products, the records synchronized to live clients."""

from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
from enum import Enum


class ProductStatus(str, Enum):
    """Closed set of product lifecycle labels."""

    ACTIVE = "Active"
    FEATURED = "Featured"
    NEW = "New"
    DISCONTINUED = "Discontinued"


@dataclass
class Product:
    """A catalog product.

    ``id`` is assigned by the store on creation and never changes afterwards.
    ``image_url`` / ``image_public_id`` reference an asset held by the
    external image host; deleting the product releases that asset.
    """

    name: str
    category: str
    website_category: str
    id: str | None = None
    subcategory_id: str | None = None
    status: ProductStatus = ProductStatus.ACTIVE
    description: str | None = None
    image_url: str | None = None
    image_public_id: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("Product name must not be empty")
        self.status = ProductStatus(self.status)

    def update(self, **changes: object) -> None:
        """Apply a partial update and refresh ``updated_at``.

        Only keys present in *changes* are touched; ``id`` and ``created_at``
        cannot be changed.
        """
        for key in ("id", "created_at", "updated_at"):
            if key in changes:
                raise ValueError(f"Product field '{key}' is read-only")

        if "name" in changes:
            name = changes["name"]
            if not isinstance(name, str) or not name.strip():
                raise ValueError("Product name must not be empty")
        if "status" in changes:
            changes["status"] = ProductStatus(changes["status"])

        for key, value in changes.items():
            if key not in _FIELD_NAMES:
                raise ValueError(f"Unknown product field '{key}'")
            setattr(self, key, value)

        self.updated_at = datetime.now(timezone.utc)


_FIELD_NAMES = frozenset(f.name for f in fields(Product))
