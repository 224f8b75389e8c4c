"""Fold catalog change events into a locally held product list."""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum

import httpx
from pydantic import TypeAdapter, ValidationError

from storefront.application.schemas import ProductResponse
from storefront.client.connection import CatalogConnection
from storefront.domain.entities import (
    ChangeEvent,
    Product,
    ProductCreated,
    ProductDeleted,
    ProductUpdated,
    ProductsRefreshed,
)

logger = logging.getLogger(__name__)

_product_list_adapter = TypeAdapter(list[ProductResponse])


def reconcile(
    items: Sequence[Product], event: ChangeEvent, *, dedupe_created: bool = False
) -> list[Product]:
    """Return the list that results from applying *event* to *items*.

    ``created`` prepends; with ``dedupe_created`` an existing entry with the
    same id is removed first (upsert at head). ``updated`` replaces the
    matching entry and is dropped when none matches. ``deleted`` removes the
    matching entry. ``full-refresh`` replaces the list wholesale.
    """
    if isinstance(event, ProductsRefreshed):
        return list(event.items)

    if isinstance(event, ProductCreated):
        rest = list(items)
        if dedupe_created:
            rest = [p for p in rest if p.id != event.item.id]
        return [event.item, *rest]

    if isinstance(event, ProductUpdated):
        return [event.item if p.id == event.item.id else p for p in items]

    if isinstance(event, ProductDeleted):
        return [p for p in items if p.id != event.product_id]

    raise TypeError(f"Unsupported change event: {type(event).__name__}")


class ListStatus(str, Enum):
    LOADING = "loading"
    READY = "ready"
    CLOSED = "closed"


@dataclass(frozen=True)
class ProductListView:
    """What a consumer renders: the list plus loading, error and live flags."""

    items: tuple[Product, ...]
    is_loading: bool
    error: str | None
    is_live: bool


ViewListener = Callable[[ProductListView], None]


class LiveProductList:
    """A product list kept current by the shared change stream.

    Starts empty and loading. ``load()`` fetches the catalog once; every
    change event received before or after that is folded in with
    ``reconcile``. The initial fetch replaces whatever was folded while it
    was in flight, and the next full refresh corrects any drift.
    """

    def __init__(
        self,
        connection: CatalogConnection,
        http_client: httpx.AsyncClient,
        *,
        products_path: str = "/api/v1/products",
        dedupe_created: bool = False,
    ):
        self._connection = connection
        self._http_client = http_client
        self._products_path = products_path
        self._dedupe_created = dedupe_created

        self._items: list[Product] = []
        self._status = ListStatus.LOADING
        self._error: str | None = None
        self._listeners: list[ViewListener] = []

        connection.add_event_listener(self._on_event)
        connection.add_connect_listener(self._on_connectivity)
        connection.add_disconnect_listener(self._on_connectivity)

    @property
    def status(self) -> ListStatus:
        return self._status

    @property
    def items(self) -> list[Product]:
        return list(self._items)

    def view(self) -> ProductListView:
        return ProductListView(
            items=tuple(self._items),
            is_loading=self._status is ListStatus.LOADING,
            error=self._error,
            is_live=self._connection.is_connected,
        )

    def add_listener(self, listener: ViewListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: ViewListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    async def load(self) -> ProductListView:
        """Fetch the catalog snapshot; failures are recorded, not raised."""
        try:
            response = await self._http_client.get(self._products_path)
            response.raise_for_status()
            products = [
                Product(**item.model_dump())
                for item in _product_list_adapter.validate_json(response.content)
            ]
        except (httpx.HTTPError, ValidationError, ValueError) as exc:
            logger.warning("Initial product fetch failed: %s", exc)
            self._error = str(exc) or type(exc).__name__
        else:
            self._items = products
            self._error = None

        if self._status is ListStatus.LOADING:
            self._status = ListStatus.READY
        self._notify()
        return self.view()

    def apply(self, event: ChangeEvent) -> None:
        """Fold a single change event into the list."""
        if self._status is ListStatus.CLOSED:
            return
        self._items = reconcile(self._items, event, dedupe_created=self._dedupe_created)
        self._notify()

    def close(self) -> None:
        """Stop following the change stream. The shared connection stays open."""
        if self._status is ListStatus.CLOSED:
            return
        self._connection.remove_event_listener(self._on_event)
        self._connection.remove_connect_listener(self._on_connectivity)
        self._connection.remove_disconnect_listener(self._on_connectivity)
        self._status = ListStatus.CLOSED
        self._listeners.clear()

    def _on_event(self, event: ChangeEvent) -> None:
        self.apply(event)

    def _on_connectivity(self) -> None:
        self._notify()

    def _notify(self) -> None:
        view = self.view()
        for listener in list(self._listeners):
            listener(view)
