"""Change hub — in-process broadcaster for catalog change events."""

import asyncio
import logging
import uuid
from collections.abc import AsyncIterator
from dataclasses import dataclass, field

from storefront.domain.entities import ChangeEvent

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Subscription:
    """A registered hub subscriber.

    ``queue`` buffers events for this subscriber only; ``None`` on the queue
    means the subscription has been closed.
    """

    id: str
    queue: asyncio.Queue[ChangeEvent | None] = field(repr=False)
    closed: bool = False


class ChangeHub:
    """Fans catalog change events out to every connected client.

    One instance per server process, built by the application lifespan and
    shared through ``app.state``. Each subscriber gets its own bounded
    asyncio.Queue; broadcasting enqueues without awaiting any consumer. A
    subscriber that falls a full queue behind is disconnected and must
    resynchronise from the next full refresh.
    """

    def __init__(self, queue_size: int = 100) -> None:
        self._queue_size = queue_size
        self._subscriptions: dict[str, Subscription] = {}

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    def subscribe(self) -> Subscription:
        """Register a new subscriber for all subsequent broadcasts."""
        subscription = Subscription(
            id=uuid.uuid4().hex,
            queue=asyncio.Queue(maxsize=self._queue_size),
        )
        self._subscriptions[subscription.id] = subscription
        logger.debug("Hub subscriber %s connected (%d total)", subscription.id, self.subscriber_count)
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        """Deregister a subscriber. Calling it again is a no-op."""
        if self._subscriptions.pop(subscription.id, None) is not None:
            logger.debug(
                "Hub subscriber %s disconnected (%d total)", subscription.id, self.subscriber_count
            )
        self._close(subscription)

    async def broadcast(self, event: ChangeEvent) -> int:
        """Enqueue *event* for every open subscriber. Returns how many received it."""
        delivered = 0
        overflowed: list[Subscription] = []

        for subscription in list(self._subscriptions.values()):
            try:
                subscription.queue.put_nowait(event)
                delivered += 1
            except asyncio.QueueFull:
                overflowed.append(subscription)

        for subscription in overflowed:
            logger.warning("Hub subscriber %s queue full, disconnecting", subscription.id)
            self.unsubscribe(subscription)

        return delivered

    async def listen(self, subscription: Subscription) -> AsyncIterator[ChangeEvent]:
        """Yield events for *subscription* in broadcast order until it is closed.

        The subscription is removed from the hub when the consumer stops
        iterating (client disconnect, cancellation, or hub shutdown).
        """
        try:
            while True:
                event = await self.receive(subscription)
                if event is None:
                    break
                yield event
        finally:
            self.unsubscribe(subscription)

    async def receive(
        self, subscription: Subscription, timeout: float | None = None
    ) -> ChangeEvent | None:
        """Wait for the next event; None once the subscription is closed.

        Raises TimeoutError when nothing arrives within *timeout* seconds;
        the subscription stays registered in that case.
        """
        if timeout is None:
            return await subscription.queue.get()
        return await asyncio.wait_for(subscription.queue.get(), timeout)

    async def shutdown(self) -> None:
        """Disconnect all connected subscribers."""
        for subscription in list(self._subscriptions.values()):
            self.unsubscribe(subscription)

    @staticmethod
    def _close(subscription: Subscription) -> None:
        if subscription.closed:
            return
        subscription.closed = True
        # Drop whatever is still buffered so the close marker always fits
        while not subscription.queue.empty():
            subscription.queue.get_nowait()
        subscription.queue.put_nowait(None)
