"""Domain entities for per-brand landing pages and their own taxonomy."""

from dataclasses import dataclass, field
from datetime import datetime, timezone

from storefront.domain.slugs import slugify


@dataclass
class BrandPage:
    """A brand landing page (e.g. Hikvision, Uniview)."""

    name: str
    slug: str = ""
    id: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        if not self.slug:
            self.slug = slugify(self.name)


@dataclass
class PageCategory:
    """A category that exists only on one brand page."""

    page_id: str
    name: str
    slug: str = ""
    id: str | None = None
    description: str | None = None
    product_ids: list[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        if not self.slug:
            self.slug = slugify(self.name)


@dataclass
class PageSubcategory:
    """A subcategory of a PageCategory, scoped to the same brand page."""

    page_id: str
    parent_category_id: str
    name: str
    slug: str = ""
    id: str | None = None
    product_ids: list[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        if not self.slug:
            self.slug = slugify(self.name)


@dataclass
class PageProducts:
    """Ordered product assignment for a single brand page."""

    page_id: str
    product_ids: list[str] = field(default_factory=list)
