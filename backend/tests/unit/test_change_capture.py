"""Unit tests for ChangeCapture: change log to hub dispatch and retry policy."""

import asyncio

import pytest

from storefront.application.interfaces import ChangeLog
from storefront.application.services import CaptureStatus, ChangeCapture, ChangeHub
from storefront.domain.entities import (
    ChangeOperation,
    Product,
    ProductCreated,
    ProductDeleted,
    ProductUpdated,
    ProductsRefreshed,
    StoreChange,
)
from storefront.domain.exceptions import ChangeLogUnavailableError


class FakeChangeLog(ChangeLog):
    """In-memory change log; the first ``fail_*`` calls of each kind raise."""

    def __init__(self, fail_opens: int = 0, fail_reads: int = 0, fail_snapshots: int = 0):
        self.changes: list[StoreChange] = []
        self.products: list[Product] = []
        self.fail_opens = fail_opens
        self.fail_reads = fail_reads
        self.fail_snapshots = fail_snapshots
        self.open_calls = 0

    def record(self, operation: ChangeOperation, product: Product) -> StoreChange:
        change = StoreChange(
            position=len(self.changes) + 1,
            operation=operation,
            document_key=product.id,
            document=None if operation is ChangeOperation.DELETE else product,
        )
        self.changes.append(change)
        if operation is ChangeOperation.DELETE:
            self.products = [p for p in self.products if p.id != product.id]
        elif operation is ChangeOperation.INSERT:
            self.products.insert(0, product)
        return change

    async def open(self) -> int:
        self.open_calls += 1
        if self.open_calls <= self.fail_opens:
            raise ChangeLogUnavailableError("store unreachable")
        return len(self.changes)

    async def read_since(self, position: int, limit: int = 100) -> list[StoreChange]:
        if self.fail_reads:
            self.fail_reads -= 1
            raise ChangeLogUnavailableError("read interrupted")
        return [c for c in self.changes if c.position > position][:limit]

    async def snapshot(self) -> list[Product]:
        if self.fail_snapshots:
            self.fail_snapshots -= 1
            raise ChangeLogUnavailableError("snapshot interrupted")
        return list(self.products)


def _product(product_id: str, name: str = "Cam") -> Product:
    return Product(id=product_id, name=name, category="Cameras", website_category="ip")


def _capture(change_log: ChangeLog, hub: ChangeHub, **kwargs) -> ChangeCapture:
    options = {"poll_interval": 0.01, "retry_backoff": 0.0, "max_retries": 3}
    options.update(kwargs)
    return ChangeCapture(change_log, hub, **options)


@pytest.mark.asyncio
async def test_dispatch_sends_granular_event_then_full_refresh():
    log = FakeChangeLog()
    hub = ChangeHub()
    subscription = hub.subscribe()
    change = log.record(ChangeOperation.INSERT, _product("a"))

    await _capture(log, hub).dispatch(change)

    first = await hub.receive(subscription, timeout=1)
    second = await hub.receive(subscription, timeout=1)
    assert isinstance(first, ProductCreated)
    assert first.item.id == "a"
    assert isinstance(second, ProductsRefreshed)
    assert [p.id for p in second.items] == ["a"]


@pytest.mark.asyncio
async def test_dispatch_maps_update_and_delete():
    log = FakeChangeLog()
    hub = ChangeHub()
    capture = _capture(log, hub)
    subscription = hub.subscribe()
    product = _product("a")
    log.record(ChangeOperation.INSERT, product)

    await capture.dispatch(log.record(ChangeOperation.UPDATE, _product("a", "Renamed")))
    await capture.dispatch(log.record(ChangeOperation.DELETE, product))

    events = [await hub.receive(subscription, timeout=1) for _ in range(4)]
    assert isinstance(events[0], ProductUpdated)
    assert events[0].item.name == "Renamed"
    assert events[2] == ProductDeleted(product_id="a")
    assert events[3] == ProductsRefreshed(items=())
    assert capture.position == 3


@pytest.mark.asyncio
async def test_malformed_record_is_skipped():
    log = FakeChangeLog()
    hub = ChangeHub()
    capture = _capture(log, hub)
    subscription = hub.subscribe()

    await capture.dispatch(
        StoreChange(position=7, operation=ChangeOperation.INSERT, document_key="x", document=None)
    )

    assert capture.position == 7
    with pytest.raises(asyncio.TimeoutError):
        await hub.receive(subscription, timeout=0.01)


@pytest.mark.asyncio
async def test_capture_starts_at_head_and_follows_new_changes():
    log = FakeChangeLog()
    log.record(ChangeOperation.INSERT, _product("old"))
    hub = ChangeHub()
    subscription = hub.subscribe()
    capture = _capture(log, hub)

    await capture.start()
    try:
        while capture.status is not CaptureStatus.ACTIVE:
            await asyncio.sleep(0.01)
        log.record(ChangeOperation.INSERT, _product("new"))

        event = await hub.receive(subscription, timeout=1)
    finally:
        await capture.stop()

    assert isinstance(event, ProductCreated)
    assert event.item.id == "new"
    assert capture.status is CaptureStatus.STOPPED


@pytest.mark.asyncio
async def test_capture_recovers_from_transient_open_failures():
    log = FakeChangeLog(fail_opens=2)
    capture = _capture(log, ChangeHub(), max_retries=5)

    await capture.start()
    try:
        for _ in range(100):
            if capture.status is CaptureStatus.ACTIVE:
                break
            await asyncio.sleep(0.01)
    finally:
        await capture.stop()

    assert log.open_calls == 3


@pytest.mark.asyncio
async def test_capture_disabled_after_max_retries():
    log = FakeChangeLog(fail_opens=10)
    capture = _capture(log, ChangeHub(), max_retries=3)

    await capture.start()
    await asyncio.wait_for(capture.wait_closed(), timeout=1)

    assert capture.status is CaptureStatus.DISABLED
    assert log.open_calls == 3

    await capture.stop()
    assert capture.status is CaptureStatus.DISABLED


async def _wait_active(capture: ChangeCapture) -> None:
    for _ in range(100):
        if capture.status is CaptureStatus.ACTIVE:
            return
        await asyncio.sleep(0.01)


@pytest.mark.asyncio
async def test_full_refresh_is_sent_after_snapshot_failure():
    log = FakeChangeLog(fail_snapshots=1)
    hub = ChangeHub()
    subscription = hub.subscribe()
    capture = _capture(log, hub)

    await capture.start()
    try:
        await _wait_active(capture)
        log.record(ChangeOperation.INSERT, _product("a"))

        first = await hub.receive(subscription, timeout=1)
        second = await hub.receive(subscription, timeout=1)
    finally:
        await capture.stop()

    assert isinstance(first, ProductCreated)
    assert isinstance(second, ProductsRefreshed)
    assert [p.id for p in second.items] == ["a"]
    assert log.open_calls == 2
    assert capture.position == 1


@pytest.mark.asyncio
async def test_capture_reopens_after_read_failure_and_keeps_position():
    log = FakeChangeLog(fail_reads=1)
    hub = ChangeHub()
    subscription = hub.subscribe()
    capture = _capture(log, hub)

    await capture.start()
    try:
        await _wait_active(capture)
        log.record(ChangeOperation.INSERT, _product("a"))

        event = await hub.receive(subscription, timeout=1)
    finally:
        await capture.stop()

    assert isinstance(event, ProductCreated)
    assert event.item.id == "a"
    assert log.open_calls == 2
