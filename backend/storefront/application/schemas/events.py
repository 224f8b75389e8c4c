"""Wire format of catalog change events.

Every event travels on one channel as a JSON object discriminated by
``kind``; the server encodes domain events with ``encode_event`` and the
client turns them back into domain events with ``decode_event``.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter

from storefront.application.schemas.product import ProductResponse
from storefront.domain.entities import (
    ChangeEvent,
    Product,
    ProductCreated,
    ProductDeleted,
    ProductUpdated,
    ProductsRefreshed,
)

CHANGE_EVENT_NAME = "change"


class ProductCreatedMessage(BaseModel):
    kind: Literal["created"] = "created"
    item: ProductResponse


class ProductUpdatedMessage(BaseModel):
    kind: Literal["updated"] = "updated"
    item: ProductResponse


class ProductDeletedMessage(BaseModel):
    kind: Literal["deleted"] = "deleted"
    id: str


class ProductsRefreshedMessage(BaseModel):
    kind: Literal["full-refresh"] = "full-refresh"
    items: list[ProductResponse]


ChangeMessage = Annotated[
    Union[
        ProductCreatedMessage,
        ProductUpdatedMessage,
        ProductDeletedMessage,
        ProductsRefreshedMessage,
    ],
    Field(discriminator="kind"),
]

change_message_adapter: TypeAdapter[ChangeMessage] = TypeAdapter(ChangeMessage)


def _item(product: Product) -> ProductResponse:
    return ProductResponse.model_validate(product, from_attributes=True)


def _product(item: ProductResponse) -> Product:
    return Product(**item.model_dump())


def to_message(event: ChangeEvent) -> ChangeMessage:
    """Map a domain event to its wire message."""
    if isinstance(event, ProductCreated):
        return ProductCreatedMessage(item=_item(event.item))
    if isinstance(event, ProductUpdated):
        return ProductUpdatedMessage(item=_item(event.item))
    if isinstance(event, ProductDeleted):
        return ProductDeletedMessage(id=event.product_id)
    if isinstance(event, ProductsRefreshed):
        return ProductsRefreshedMessage(items=[_item(p) for p in event.items])
    raise TypeError(f"Unsupported change event: {type(event).__name__}")


def to_event(message: ChangeMessage) -> ChangeEvent:
    """Map a wire message back to the domain event it carries."""
    if isinstance(message, ProductCreatedMessage):
        return ProductCreated(item=_product(message.item))
    if isinstance(message, ProductUpdatedMessage):
        return ProductUpdated(item=_product(message.item))
    if isinstance(message, ProductDeletedMessage):
        return ProductDeleted(product_id=message.id)
    return ProductsRefreshed(items=tuple(_product(i) for i in message.items))


def encode_event(event: ChangeEvent) -> str:
    return to_message(event).model_dump_json()


def decode_event(raw: str | bytes) -> ChangeEvent:
    """Parse a JSON change message. Raises pydantic.ValidationError on bad input."""
    return to_event(change_message_adapter.validate_json(raw))
