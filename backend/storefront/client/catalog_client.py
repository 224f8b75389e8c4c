"""Composition root of a client process."""

import httpx

from storefront.client.connection import CatalogConnection
from storefront.client.reconciliation import LiveProductList


class CatalogClient:
    """Owns the HTTP client and the one change-stream connection of a process.

    Every ``LiveProductList`` created here shares the same connection, which
    is started when the first list is opened and closed only by ``aclose()``.

    Usage::

        async with CatalogClient("http://localhost:8020") as client:
            products = await client.open_product_list()
            print(products.view().items)
    """

    def __init__(
        self,
        base_url: str,
        *,
        http_client: httpx.AsyncClient | None = None,
        reconnect_delay: float = 1.0,
        max_reconnect_delay: float = 30.0,
        dedupe_created: bool = False,
    ):
        self._owns_client = http_client is None
        self._http_client = http_client or httpx.AsyncClient(
            base_url=base_url, timeout=httpx.Timeout(10.0, read=None)
        )
        self._dedupe_created = dedupe_created
        self.connection = CatalogConnection(
            base_url,
            http_client=self._http_client,
            reconnect_delay=reconnect_delay,
            max_reconnect_delay=max_reconnect_delay,
        )

    async def open_product_list(self) -> LiveProductList:
        """Attach a new consumer to the shared connection and load the catalog."""
        products = LiveProductList(
            self.connection,
            self._http_client,
            dedupe_created=self._dedupe_created,
        )
        await self.connection.start()
        await products.load()
        return products

    async def aclose(self) -> None:
        await self.connection.aclose()
        if self._owns_client:
            await self._http_client.aclose()

    async def __aenter__(self) -> "CatalogClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
