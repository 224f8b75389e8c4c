"""Long-lived SSE connection to the catalog change stream.

One ``CatalogConnection`` serves every consumer in a client process. It
reads ``change`` frames from ``GET /api/v1/products/stream``, decodes them
into domain events and hands them to the registered event listeners.
Dropped or refused connections are retried with exponential backoff.
"""

import asyncio
import logging
from collections.abc import AsyncIterator, Callable

import httpx
from pydantic import ValidationError

from storefront.application.schemas import CHANGE_EVENT_NAME, decode_event
from storefront.domain.entities import ChangeEvent

logger = logging.getLogger(__name__)

ConnectionListener = Callable[[], None]
EventListener = Callable[[ChangeEvent], None]


class CatalogStreamError(Exception):
    """The change stream answered with something other than an event stream."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"Change stream error ({status_code}): {message}")


async def iter_sse_events(lines: AsyncIterator[str]) -> AsyncIterator[tuple[str, str]]:
    """Group raw SSE lines into ``(event_name, data)`` pairs.

    Comment lines (``:``-prefixed keep-alives) are ignored; an event with no
    ``event:`` field is named ``message``.
    """
    event_name = "message"
    data: list[str] = []

    async for line in lines:
        if not line:
            if data:
                yield event_name, "\n".join(data)
            event_name, data = "message", []
            continue
        if line.startswith(":"):
            continue

        field, _, value = line.partition(":")
        if value.startswith(" "):
            value = value[1:]
        if field == "event":
            event_name = value
        elif field == "data":
            data.append(value)

    if data:
        yield event_name, "\n".join(data)


class CatalogConnection:
    """Shared, self-reconnecting subscription to the catalog change stream."""

    def __init__(
        self,
        base_url: str,
        *,
        stream_path: str = "/api/v1/products/stream",
        http_client: httpx.AsyncClient | None = None,
        reconnect_delay: float = 1.0,
        max_reconnect_delay: float = 30.0,
    ):
        self._url = base_url.rstrip("/") + stream_path
        self._http_client = http_client
        self._owns_client = http_client is None
        self._reconnect_delay = reconnect_delay
        self._max_reconnect_delay = max_reconnect_delay

        self._connected = False
        self._task: asyncio.Task | None = None
        self._connect_listeners: list[ConnectionListener] = []
        self._disconnect_listeners: list[ConnectionListener] = []
        self._event_listeners: list[EventListener] = []

    @property
    def is_connected(self) -> bool:
        return self._connected

    @property
    def is_started(self) -> bool:
        return self._task is not None

    # ── Listener registration ───────────────────────────────────────

    def add_connect_listener(self, listener: ConnectionListener) -> None:
        self._connect_listeners.append(listener)

    def remove_connect_listener(self, listener: ConnectionListener) -> None:
        if listener in self._connect_listeners:
            self._connect_listeners.remove(listener)

    def add_disconnect_listener(self, listener: ConnectionListener) -> None:
        self._disconnect_listeners.append(listener)

    def remove_disconnect_listener(self, listener: ConnectionListener) -> None:
        if listener in self._disconnect_listeners:
            self._disconnect_listeners.remove(listener)

    def add_event_listener(self, listener: EventListener) -> None:
        self._event_listeners.append(listener)

    def remove_event_listener(self, listener: EventListener) -> None:
        if listener in self._event_listeners:
            self._event_listeners.remove(listener)

    # ── Lifecycle ───────────────────────────────────────────────────

    async def start(self) -> None:
        """Start the background read loop. Calling it again is a no-op."""
        if self._task is not None:
            return
        self._task = asyncio.create_task(self._run(), name="catalog-connection")

    async def aclose(self) -> None:
        """Stop reading and close the HTTP client if this connection owns it."""
        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        self._set_connected(False)
        if self._owns_client and self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=httpx.Timeout(10.0, read=None))
        return self._http_client

    async def _run(self) -> None:
        delay = self._reconnect_delay
        while True:
            try:
                await self._stream_once()
            except asyncio.CancelledError:
                raise
            except (httpx.HTTPError, CatalogStreamError) as exc:
                logger.warning("Change stream unavailable: %s", exc)
            except Exception:
                logger.exception("Change stream read failed")
            finally:
                # A completed handshake resets the backoff
                if self._connected:
                    delay = self._reconnect_delay
                self._set_connected(False)

            logger.debug("Reconnecting to change stream in %.1fs", delay)
            await asyncio.sleep(delay)
            delay = min(delay * 2, self._max_reconnect_delay)

    async def _stream_once(self) -> None:
        """Read one connection until the server ends it."""
        client = await self._get_client()
        async with client.stream(
            "GET", self._url, headers={"Accept": "text/event-stream"}
        ) as response:
            if response.status_code != 200:
                body = await response.aread()
                raise CatalogStreamError(
                    response.status_code, body.decode("utf-8", errors="replace")[:200]
                )

            self._set_connected(True)
            async for event_name, data in iter_sse_events(response.aiter_lines()):
                if event_name != CHANGE_EVENT_NAME:
                    continue
                try:
                    event = decode_event(data)
                except (ValidationError, ValueError):
                    logger.warning("Ignoring malformed change message: %.200s", data)
                    continue
                self._emit_event(event)

    # ── Notification ────────────────────────────────────────────────

    def _set_connected(self, connected: bool) -> None:
        if connected == self._connected:
            return
        self._connected = connected
        logger.info("Change stream %s", "connected" if connected else "disconnected")
        listeners = self._connect_listeners if connected else self._disconnect_listeners
        for listener in list(listeners):
            self._call(listener)

    def _emit_event(self, event: ChangeEvent) -> None:
        for listener in list(self._event_listeners):
            self._call(listener, event)

    @staticmethod
    def _call(listener: Callable, *args) -> None:
        try:
            listener(*args)
        except Exception:
            logger.exception("Change stream listener %r failed", listener)
