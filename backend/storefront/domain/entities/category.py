"""Domain entities for the site-wide category taxonomy."""

from dataclasses import dataclass, field
from datetime import datetime, timezone

from storefront.domain.slugs import slugify


@dataclass
class Subcategory:
    """A named subdivision of a Category; slugs are unique within their parent."""

    name: str
    slug: str = ""
    id: str | None = None

    def __post_init__(self) -> None:
        if not self.slug:
            self.slug = slugify(self.name)


@dataclass
class Category:
    """Top-level catalog category with embedded subcategories."""

    name: str
    slug: str = ""
    id: str | None = None
    description: str | None = None
    subcategories: list[Subcategory] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        if not self.slug:
            self.slug = slugify(self.name)

    def rename(self, name: str) -> None:
        """Change the name and re-derive the slug from it."""
        self.name = name
        self.slug = slugify(name)
        self.updated_at = datetime.now(timezone.utc)

    def find_subcategory(self, subcategory_id: str) -> Subcategory | None:
        return next((s for s in self.subcategories if s.id == subcategory_id), None)

    def has_subcategory_slug(self, slug: str) -> bool:
        return any(s.slug == slug for s in self.subcategories)
