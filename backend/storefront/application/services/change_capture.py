"""Change capture — follows the catalog change log and feeds the change hub."""

import asyncio
import logging
from enum import Enum

from storefront.application.interfaces import ChangeLog
from storefront.application.services.change_hub import ChangeHub
from storefront.domain.entities import ProductsRefreshed, StoreChange, event_from_change

logger = logging.getLogger(__name__)


class CaptureStatus(str, Enum):
    """Observable state of the capture loop."""

    IDLE = "idle"
    CONNECTING = "connecting"
    ACTIVE = "active"
    DISABLED = "disabled"
    STOPPED = "stopped"


class ChangeCapture:
    """Asyncio daemon that tails the change log and broadcasts catalog events.

    Runs as an asyncio.Task inside FastAPI's lifespan. On start it reads the
    current head of the log and from then on dispatches every newer record in
    position order: first the granular event (created/updated/deleted), then
    a full-refresh carrying the whole collection newest first.

    Opening the log, and re-opening it after a failed read or snapshot, is retried up to
    ``max_retries`` times with exponential backoff. When every attempt fails
    capture is disabled for the rest of the process lifetime; request
    handling is unaffected, clients simply stop receiving live updates.
    """

    def __init__(
        self,
        change_log: ChangeLog,
        hub: ChangeHub,
        *,
        poll_interval: float = 1.0,
        batch_size: int = 100,
        max_retries: int = 5,
        retry_backoff: float = 0.5,
        max_backoff: float = 30.0,
    ) -> None:
        self._change_log = change_log
        self._hub = hub
        self._poll_interval = poll_interval
        self._batch_size = batch_size
        self._max_retries = max_retries
        self._retry_backoff = retry_backoff
        self._max_backoff = max_backoff
        self._position: int | None = None
        self._refresh_pending = False
        self._status = CaptureStatus.IDLE
        self._task: asyncio.Task | None = None

    @property
    def status(self) -> CaptureStatus:
        return self._status

    @property
    def position(self) -> int | None:
        """Position of the last record dispatched (the resume point)."""
        return self._position

    async def start(self) -> None:
        """Start following the change log in the background."""
        if self._task is not None:
            return
        self._status = CaptureStatus.CONNECTING
        self._task = asyncio.create_task(self._run(), name="change-capture")
        logger.info("ChangeCapture started")

    async def stop(self) -> None:
        """Stop the capture loop; the hub and its subscribers are left alone."""
        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        if self._status is not CaptureStatus.DISABLED:
            self._status = CaptureStatus.STOPPED
        logger.info("ChangeCapture stopped")

    async def wait_closed(self) -> None:
        """Wait for the capture task to finish (it only ends when disabled or stopped)."""
        if self._task is not None:
            await self._task

    async def _run(self) -> None:
        """Open, then poll and dispatch until cancelled or disabled."""
        if not await self._open_with_retry():
            return

        while True:
            try:
                if self._refresh_pending:
                    await self._flush_refresh()
                changes = await self._change_log.read_since(self._position, self._batch_size)
                for change in changes:
                    await self.dispatch(change)
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.exception("Change log read failed at position %s", self._position)
                if not await self._open_with_retry():
                    return
                continue

            if len(changes) < self._batch_size:
                await asyncio.sleep(self._poll_interval)

    async def _open_with_retry(self) -> bool:
        """Open (or re-open) the log subscription; False once capture is disabled."""
        self._status = CaptureStatus.CONNECTING
        delay = self._retry_backoff

        for attempt in range(1, self._max_retries + 1):
            try:
                head = await self._change_log.open()
            except asyncio.CancelledError:
                raise
            except Exception as exc:
                logger.warning(
                    "Could not open change log (attempt %d/%d): %s",
                    attempt,
                    self._max_retries,
                    exc,
                )
                if attempt < self._max_retries:
                    await asyncio.sleep(delay)
                    delay = min(delay * 2, self._max_backoff)
                continue

            # Resume after the last dispatched record; a fresh start begins at head
            if self._position is None:
                self._position = head
            self._status = CaptureStatus.ACTIVE
            logger.info("Following change log from position %d", self._position)
            return True

        self._status = CaptureStatus.DISABLED
        logger.error(
            "Change capture disabled after %d failed attempts; live updates are unavailable",
            self._max_retries,
        )
        return False

    async def dispatch(self, change: StoreChange) -> None:
        """Broadcast the granular event for *change*, then a full refresh."""
        try:
            event = event_from_change(change)
        except ValueError:
            logger.warning("Skipping malformed change record %d", change.position)
            self._position = change.position
            return

        delivered = await self._hub.broadcast(event)
        self._position = change.position
        logger.debug(
            "Dispatched %s for %s at position %d to %d subscriber(s)",
            event.kind,
            change.document_key,
            change.position,
            delivered,
        )

        self._refresh_pending = True
        await self._flush_refresh()

    async def _flush_refresh(self) -> None:
        # Stays pending until a snapshot is broadcast, so a failed snapshot is
        # retried after the log is re-opened
        products = await self._change_log.snapshot()
        await self._hub.broadcast(ProductsRefreshed(items=tuple(products)))
        self._refresh_pending = False
