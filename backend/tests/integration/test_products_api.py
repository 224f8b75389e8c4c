"""API tests for product CRUD and the change log it feeds."""

import asyncio

import pytest
from sqlalchemy import select

from storefront.application.services import ChangeCapture, ChangeHub
from storefront.domain.entities import ProductCreated, ProductDeleted, ProductsRefreshed
from storefront.infrastructure.database.models import ProductChangeModel
from storefront.infrastructure.database.repositories import SQLAlchemyChangeLog
from storefront.infrastructure.database.session import async_session_factory
from storefront.main import app


async def _changes() -> list[ProductChangeModel]:
    async with async_session_factory() as session:
        result = await session.execute(
            select(ProductChangeModel).order_by(ProductChangeModel.position)
        )
        return list(result.scalars().all())


@pytest.mark.asyncio
async def test_create_and_get_product(client, product_payload):
    created = await client.post("/api/v1/products", json=product_payload)
    assert created.status_code == 201
    body = created.json()
    assert body["id"]
    assert body["status"] == "New"

    fetched = await client.get(f"/api/v1/products/{body['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["name"] == product_payload["name"]


@pytest.mark.asyncio
async def test_list_is_newest_first(client, product_payload):
    await client.post("/api/v1/products", json={**product_payload, "name": "First"})
    await client.post("/api/v1/products", json={**product_payload, "name": "Second"})

    response = await client.get("/api/v1/products")
    assert [p["name"] for p in response.json()] == ["Second", "First"]


@pytest.mark.asyncio
async def test_create_rejects_missing_fields(client):
    response = await client.post("/api/v1/products", json={"name": "No category"})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_update_product_partial(client, product_payload):
    created = (await client.post("/api/v1/products", json=product_payload)).json()

    response = await client.put(
        f"/api/v1/products/{created['id']}", json={"status": "Discontinued"}
    )

    assert response.status_code == 200
    assert response.json()["status"] == "Discontinued"
    assert response.json()["name"] == product_payload["name"]


@pytest.mark.asyncio
async def test_update_and_delete_missing_product_404(client):
    assert (await client.put("/api/v1/products/nope", json={"name": "x"})).status_code == 404
    assert (await client.delete("/api/v1/products/nope")).status_code == 404


@pytest.mark.asyncio
async def test_every_mutation_appends_to_change_log(client, product_payload):
    created = (await client.post("/api/v1/products", json=product_payload)).json()
    await client.put(f"/api/v1/products/{created['id']}", json={"name": "Renamed"})
    deleted = await client.delete(f"/api/v1/products/{created['id']}")
    assert deleted.status_code == 200

    changes = await _changes()

    assert [c.operation for c in changes] == ["insert", "update", "delete"]
    assert {c.document_key for c in changes} == {created["id"]}
    assert changes[1].document["name"] == "Renamed"
    assert changes[2].document is None


@pytest.mark.asyncio
async def test_change_log_reads_back_committed_changes(client, product_payload):
    change_log = SQLAlchemyChangeLog(async_session_factory)
    head = await change_log.open()

    created = (await client.post("/api/v1/products", json=product_payload)).json()
    changes = await change_log.read_since(head)
    snapshot = await change_log.snapshot()

    assert len(changes) == 1
    assert changes[0].document.id == created["id"]
    assert [p.id for p in snapshot] == [created["id"]]


@pytest.mark.asyncio
async def test_mutations_reach_hub_subscribers(client, product_payload):
    hub: ChangeHub = app.state.change_hub
    capture = ChangeCapture(
        SQLAlchemyChangeLog(async_session_factory), hub, poll_interval=0.01, retry_backoff=0.0
    )
    subscription = hub.subscribe()
    await capture.start()
    try:
        while capture.position is None:
            await asyncio.sleep(0.01)

        created = (await client.post("/api/v1/products", json=product_payload)).json()
        events = [await hub.receive(subscription, timeout=2) for _ in range(2)]

        await client.delete(f"/api/v1/products/{created['id']}")
        events += [await hub.receive(subscription, timeout=2) for _ in range(2)]
    finally:
        await capture.stop()
        hub.unsubscribe(subscription)

    assert isinstance(events[0], ProductCreated)
    assert events[0].item.id == created["id"]
    assert isinstance(events[1], ProductsRefreshed)
    assert [p.id for p in events[1].items] == [created["id"]]
    assert events[2] == ProductDeleted(product_id=created["id"])
    assert events[3] == ProductsRefreshed(items=())
