"""Application service (use case) for Product operations."""

import logging

from storefront.application.interfaces import ImageHost, ProductRepository
from storefront.application.schemas import ProductCreate, ProductUpdate
from storefront.domain.entities import Product
from storefront.domain.exceptions import EntityNotFoundError

logger = logging.getLogger(__name__)


class ProductService:
    """Orchestrates product mutations.

    Live clients learn about the results through the change log, never
    through a direct call from here.
    """

    def __init__(self, repository: ProductRepository, image_host: ImageHost | None = None):
        self._repository = repository
        self._image_host = image_host

    async def get_product(self, product_id: str) -> Product:
        product = await self._repository.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError("Product", product_id)
        return product

    async def list_products(self) -> list[Product]:
        return await self._repository.get_all()

    async def create_product(self, data: ProductCreate) -> Product:
        product = Product(**data.model_dump())
        created = await self._repository.create(product)
        logger.info("Created product %s (%s)", created.id, created.name)
        return created

    async def update_product(self, product_id: str, data: ProductUpdate) -> Product:
        product = await self.get_product(product_id)
        product.update(**data.changes())
        return await self._repository.update(product)

    async def delete_product(self, product_id: str) -> None:
        """Delete a product and release its hosted image, if any."""
        product = await self.get_product(product_id)

        if product.image_public_id:
            if self._image_host is None:
                logger.warning(
                    "Product %s references image '%s' but no image host is configured; "
                    "the asset is left in place",
                    product_id,
                    product.image_public_id,
                )
            else:
                await self._image_host.destroy(product.image_public_id)

        await self._repository.delete(product_id)
        logger.info("Deleted product %s", product_id)
