"""Realtime transports: push catalog change events to connected clients.

Two transports share the process-wide ChangeHub:

* ``GET /api/v1/products/stream``: Server-Sent Events, one ``change``
  frame per event, ``: keep-alive`` comments while idle.
* ``WS /api/socket``: the same JSON messages over a WebSocket; a client
  may send ``{"type": "ping"}`` and gets ``{"type": "pong"}`` back.
"""

import asyncio
import json
import logging
from collections.abc import AsyncIterator

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect
from fastapi.responses import StreamingResponse

from storefront.application.schemas import CHANGE_EVENT_NAME, encode_event
from storefront.application.services import ChangeHub, Subscription
from storefront.config import get_settings
from storefront.infrastructure.dependencies import get_change_hub, get_socket_change_hub

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/products", tags=["Realtime"])
socket_router = APIRouter(tags=["Realtime"])


# ── SSE ──────────────────────────────────────────────────────────────


async def sse_frames(hub: ChangeHub, keepalive_interval: float) -> AsyncIterator[str]:
    """Subscribe to *hub* and format its events as SSE frames until closed.

    The subscription is registered before the opening comment frame is
    yielded, so every event broadcast after that frame is delivered.
    """
    subscription = hub.subscribe()
    try:
        yield ": connected\n\n"
        while True:
            try:
                event = await hub.receive(subscription, timeout=keepalive_interval)
            except TimeoutError:
                yield ": keep-alive\n\n"
                continue
            if event is None:
                break
            yield f"event: {CHANGE_EVENT_NAME}\ndata: {encode_event(event)}\n\n"
    finally:
        hub.unsubscribe(subscription)
        logger.debug("SSE subscriber %s closed", subscription.id)


@router.get("/stream")
async def product_change_stream(
    hub: ChangeHub = Depends(get_change_hub),
) -> StreamingResponse:
    """SSE endpoint for live catalog updates.

    Clients connect via EventSource and receive ``change`` events whose
    data is a JSON message discriminated by ``kind``
    (created / updated / deleted / full-refresh).
    """
    return StreamingResponse(
        sse_frames(hub, get_settings().realtime_keepalive_interval),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )


# ── WebSocket ────────────────────────────────────────────────────────


async def _pump(websocket: WebSocket, hub: ChangeHub, subscription: Subscription) -> None:
    """Forward hub events to the socket until the hub closes the subscription."""
    async for event in hub.listen(subscription):
        await websocket.send_text(encode_event(event))


async def _answer_pings(websocket: WebSocket) -> None:
    """Reply to ``{"type": "ping"}`` until the client disconnects.

    Binary frames and text that is not JSON are ignored.
    """
    try:
        while True:
            frame = await websocket.receive()
            if frame["type"] == "websocket.disconnect":
                return
            raw = frame.get("text")
            if raw is None:
                continue
            try:
                message = json.loads(raw)
            except ValueError:
                continue
            if isinstance(message, dict) and message.get("type") == "ping":
                await websocket.send_json({"type": "pong"})
    except WebSocketDisconnect:
        return


@socket_router.websocket("/socket")
async def catalog_socket(
    websocket: WebSocket,
    hub: ChangeHub = Depends(get_socket_change_hub),
) -> None:
    """Bidirectional live-update channel at the well-known ``/api/socket`` path."""
    await websocket.accept()
    subscription = hub.subscribe()
    logger.info("Socket client connected: %s", subscription.id)

    pump = asyncio.create_task(_pump(websocket, hub, subscription))
    reader = asyncio.create_task(_answer_pings(websocket))
    try:
        done, _ = await asyncio.wait({pump, reader}, return_when=asyncio.FIRST_COMPLETED)
        if pump in done and pump.exception() is not None:
            logger.debug("Socket %s send failed: %s", subscription.id, pump.exception())
        elif reader in done and reader.exception() is not None:
            logger.debug("Socket %s read failed: %s", subscription.id, reader.exception())
        elif reader not in done:
            # Hub dropped the subscription (overflow or shutdown)
            await websocket.close(code=1001)
    finally:
        pump.cancel()
        reader.cancel()
        hub.unsubscribe(subscription)
        logger.info("Socket client disconnected: %s", subscription.id)
