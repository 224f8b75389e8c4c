"""Abstract repository interface (port) for catalog products."""

from abc import ABC, abstractmethod

from storefront.domain.entities import Product


class ProductRepository(ABC):
    """Port for product persistence — implemented in the infrastructure layer.

    Implementations must record every create/update/delete in the catalog
    change log within the same transaction as the mutation itself.
    """

    @abstractmethod
    async def get_by_id(self, product_id: str) -> Product | None:
        """Retrieve a single product by its ID."""
        ...

    @abstractmethod
    async def get_all(self) -> list[Product]:
        """Retrieve every product, newest first."""
        ...

    @abstractmethod
    async def get_many(self, product_ids: list[str]) -> list[Product]:
        """Retrieve the products whose IDs are listed; unknown IDs are skipped."""
        ...

    @abstractmethod
    async def create(self, product: Product) -> Product:
        """Persist a new product and return it with the generated ID."""
        ...

    @abstractmethod
    async def update(self, product: Product) -> Product:
        """Persist changes to an existing product."""
        ...

    @abstractmethod
    async def delete(self, product_id: str) -> bool:
        """Delete a product. Returns True if deleted, False if not found."""
        ...
