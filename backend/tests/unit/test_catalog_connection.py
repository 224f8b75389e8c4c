"""Unit tests for the client-side change stream connection."""

import asyncio

import httpx
import pytest

from storefront.application.schemas import ProductResponse, encode_event
from storefront.client import CatalogClient, CatalogConnection, LiveProductList, iter_sse_events
from storefront.domain.entities import Product, ProductDeleted, ProductsRefreshed


def _product(product_id: str, name: str) -> Product:
    return Product(id=product_id, name=name, category="Cameras", website_category="ip")


def _sse(*events) -> bytes:
    frames = [": connected\n\n"]
    for event in events:
        frames.append(f"event: change\ndata: {encode_event(event)}\n\n")
    return "".join(frames).encode()


async def _lines(*lines: str):
    for line in lines:
        yield line


@pytest.mark.asyncio
async def test_iter_sse_events_groups_frames_and_skips_comments():
    lines = _lines(": keep-alive", "", "event: change", "data: {}", "", "data: a", "data: b", "")
    events = [event async for event in iter_sse_events(lines)]
    assert events == [("change", "{}"), ("message", "a\nb")]


@pytest.mark.asyncio
async def test_connection_delivers_events_and_reports_connectivity():
    body = _sse(ProductDeleted(product_id="a"), ProductDeleted(product_id="b"))

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/v1/products/stream"
        return httpx.Response(200, content=body, headers={"content-type": "text/event-stream"})

    received = []
    states = []
    done = asyncio.Event()

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
        connection = CatalogConnection(
            "http://test", http_client=http, reconnect_delay=10, max_reconnect_delay=10
        )
        connection.add_event_listener(received.append)
        connection.add_connect_listener(lambda: states.append(True))
        connection.add_disconnect_listener(lambda: (states.append(False), done.set()))

        await connection.start()
        await asyncio.wait_for(done.wait(), timeout=2)
        await connection.aclose()

    assert received == [ProductDeleted(product_id="a"), ProductDeleted(product_id="b")]
    assert states == [True, False]
    assert connection.is_connected is False


@pytest.mark.asyncio
async def test_connection_retries_after_refused_stream():
    calls = 0
    connected = asyncio.Event()

    def handler(request: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        if calls < 3:
            return httpx.Response(503, text="warming up")
        return httpx.Response(200, content=_sse(), headers={"content-type": "text/event-stream"})

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
        connection = CatalogConnection(
            "http://test", http_client=http, reconnect_delay=0.01, max_reconnect_delay=0.02
        )
        connection.add_connect_listener(connected.set)
        await connection.start()
        await asyncio.wait_for(connected.wait(), timeout=2)
        await connection.aclose()

    assert calls >= 3


@pytest.mark.asyncio
async def test_dropped_connection_keeps_list_then_full_refresh_replaces_it():
    first = _product("a", "Cam1")
    second = _product("b", "Cam2")
    streams = iter([_sse(ProductsRefreshed(items=(first,))), _sse(ProductsRefreshed(items=(second,)))])

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/api/v1/products":
            return httpx.Response(
                200,
                json=[ProductResponse.model_validate(first, from_attributes=True).model_dump(mode="json")],
            )
        body = next(streams, b"")
        return httpx.Response(200, content=body, headers={"content-type": "text/event-stream"})

    views = []
    replaced = asyncio.Event()

    def on_view(view):
        views.append(view)
        if [p.id for p in view.items] == ["b"]:
            replaced.set()

    http = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://test")
    async with CatalogClient(
        "http://test", http_client=http, reconnect_delay=0.05, max_reconnect_delay=0.05
    ) as client:
        products = LiveProductList(client.connection, http)
        products.add_listener(on_view)
        await products.load()
        await client.connection.start()
        await asyncio.wait_for(replaced.wait(), timeout=2)
        products.close()
    await http.aclose()

    first_live = next(i for i, v in enumerate(views) if v.is_live)
    dropped = [v for v in views[first_live:] if not v.is_live]
    assert dropped
    assert [p.id for p in dropped[0].items] == ["a"]
    assert [p.id for p in views[-1].items] == ["b"]


@pytest.mark.asyncio
async def test_client_shares_one_connection_across_lists():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/api/v1/products":
            return httpx.Response(200, json=[])
        return httpx.Response(200, content=_sse(), headers={"content-type": "text/event-stream"})

    http = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://test")
    async with CatalogClient("http://test", http_client=http, reconnect_delay=10) as client:
        first = await client.open_product_list()
        second = await client.open_product_list()
        first.close()

        assert client.connection.is_started is True
        assert second.view().is_loading is False
    assert client.connection.is_started is False
    await http.aclose()


_BLANK_NAME_CREATED = (
    '{"kind": "created", "item": {"id": "x", "name": "", "category": "Cameras", '
    '"website_category": "ip", "status": "Active", '
    '"created_at": "2024-01-01T00:00:00Z", "updated_at": "2024-01-01T00:00:00Z"}}'
)


@pytest.mark.asyncio
async def test_invalid_product_in_message_is_dropped_and_reconnect_continues():
    calls = 0
    reconnected = asyncio.Event()
    body = (
        f"event: change\ndata: {_BLANK_NAME_CREATED}\n\n".encode()
        + _sse(ProductDeleted(product_id="a"))
    )

    def handler(request: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        if calls >= 2:
            reconnected.set()
        return httpx.Response(200, content=body, headers={"content-type": "text/event-stream"})

    received = []
    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
        connection = CatalogConnection(
            "http://test", http_client=http, reconnect_delay=0.01, max_reconnect_delay=0.01
        )
        connection.add_event_listener(received.append)
        await connection.start()
        await asyncio.wait_for(reconnected.wait(), timeout=2)
        assert not connection._task.done()
        await connection.aclose()

    assert ProductDeleted(product_id="a") in received
    assert all(isinstance(event, ProductDeleted) for event in received)

