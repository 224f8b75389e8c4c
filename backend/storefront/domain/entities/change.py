"""Catalog change records and the events fanned out to live clients.

``StoreChange`` is one committed row of the catalog change log.
``ChangeEvent`` is the closed set of events derived from it:

    ProductCreated(item)      insert → full after-image
    ProductUpdated(item)      update → full after-image
    ProductDeleted(id)        delete → identifier only
    ProductsRefreshed(items)  whole collection, newest first
"""

from dataclasses import dataclass, field
from enum import Enum

from storefront.domain.entities.product import Product


class ChangeOperation(str, Enum):
    """Mutation kinds recorded in the change log."""

    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(frozen=True)
class StoreChange:
    """A committed catalog mutation, as read back from the change log."""

    position: int
    operation: ChangeOperation
    document_key: str
    document: Product | None = None


@dataclass(frozen=True)
class ProductCreated:
    item: Product
    kind: str = field(default="created", init=False)


@dataclass(frozen=True)
class ProductUpdated:
    item: Product
    kind: str = field(default="updated", init=False)


@dataclass(frozen=True)
class ProductDeleted:
    product_id: str
    kind: str = field(default="deleted", init=False)


@dataclass(frozen=True)
class ProductsRefreshed:
    items: tuple[Product, ...]
    kind: str = field(default="full-refresh", init=False)


ChangeEvent = ProductCreated | ProductUpdated | ProductDeleted | ProductsRefreshed


def event_from_change(change: StoreChange) -> ChangeEvent:
    """Translate a change-log record into the matching granular event."""
    if change.operation is ChangeOperation.DELETE:
        return ProductDeleted(product_id=change.document_key)
    if change.document is None:
        raise ValueError(
            f"Change {change.position} ({change.operation.value}) carries no document"
        )
    if change.operation is ChangeOperation.INSERT:
        return ProductCreated(item=change.document)
    return ProductUpdated(item=change.document)
