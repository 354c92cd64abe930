import logging
from typing import Any, ClassVar
from unittest.mock import AsyncMock

import pytest

from cqrs_ddd_dispatch.adapters.memory import InMemoryExceptionReporter
from cqrs_ddd_dispatch.domain import (
    DeferredDispatcher,
    DomainEvent,
    DomainEventDispatcher,
    ListenerContainer,
)
from cqrs_ddd_dispatch.middleware import LogDomainEventDispatch
from cqrs_ddd_dispatch.primitives.exceptions import (
    ConfigurationError,
    ListenerNotFoundError,
    RetryableError,
    RetryAttemptsExhaustedError,
    UnitOfWorkError,
)
from cqrs_ddd_dispatch.unit_of_work import UnitOfWorkManager


class OrderPlaced(DomainEvent):
    order_id: str


class OrderShipped(DomainEvent):
    order_id: str


class StockReserved(DomainEvent):
    occurs_immediately: ClassVar[bool] = True

    sku: str


class Collector:
    def __init__(self) -> None:
        self.events: list[DomainEvent] = []

    async def handle(self, event: DomainEvent) -> None:
        self.events.append(event)


# --- Immediate dispatch ---


@pytest.mark.asyncio()
async def test_listeners_notified_in_registration_order() -> None:
    calls: list[str] = []
    dispatcher = DomainEventDispatcher()
    dispatcher.listen(OrderPlaced, lambda e: calls.append(f"sync {e.order_id}"))

    async def async_listener(event: OrderPlaced) -> None:
        calls.append("async")

    dispatcher.listen(OrderPlaced, [async_listener, Collector()])

    await dispatcher.dispatch(OrderPlaced(order_id="ORD-1"))

    assert calls == ["sync ORD-1", "async"]


@pytest.mark.asyncio()
async def test_event_without_listeners_is_a_no_op() -> None:
    await DomainEventDispatcher().dispatch(OrderPlaced(order_id="ORD-1"))


@pytest.mark.asyncio()
async def test_named_listeners_resolve_through_container() -> None:
    collector = Collector()
    container = ListenerContainer()
    container.bind("orders.projector", lambda: collector)
    dispatcher = DomainEventDispatcher(container)
    dispatcher.listen(OrderPlaced, "orders.projector")

    await dispatcher.dispatch(OrderPlaced(order_id="ORD-1"))

    assert [e.order_id for e in collector.events] == ["ORD-1"]


@pytest.mark.asyncio()
async def test_unknown_listener_name_raises() -> None:
    dispatcher = DomainEventDispatcher()
    dispatcher.listen(OrderPlaced, "missing")

    with pytest.raises(ListenerNotFoundError):
        await dispatcher.dispatch(OrderPlaced(order_id="ORD-1"))


def test_listen_rejects_invalid_listeners() -> None:
    dispatcher = DomainEventDispatcher()

    with pytest.raises(ConfigurationError):
        dispatcher.listen(OrderPlaced, "")
    with pytest.raises(ConfigurationError):
        dispatcher.listen(OrderPlaced, 42)  # type: ignore[arg-type]


@pytest.mark.asyncio()
async def test_listen_after_first_dispatch_raises() -> None:
    dispatcher = DomainEventDispatcher()
    await dispatcher.dispatch(OrderPlaced(order_id="ORD-1"))

    with pytest.raises(ConfigurationError, match="frozen"):
        dispatcher.listen(OrderPlaced, Collector())


@pytest.mark.asyncio()
async def test_first_failing_listener_stops_notification(
    caplog: pytest.LogCaptureFixture,
) -> None:
    after = AsyncMock()

    def broken(event: OrderPlaced) -> None:
        raise RuntimeError("projection failed")

    dispatcher = DomainEventDispatcher()
    dispatcher.listen(OrderPlaced, [broken, after])

    with pytest.raises(RuntimeError, match="projection failed"):
        await dispatcher.dispatch(OrderPlaced(order_id="ORD-1"))

    after.assert_not_called()
    assert "OrderPlaced" in caplog.text


@pytest.mark.asyncio()
async def test_events_pass_through_middleware(
    trail: list[str], recorder: Any, caplog: pytest.LogCaptureFixture
) -> None:
    dispatcher = DomainEventDispatcher()
    dispatcher.through([LogDomainEventDispatch(), recorder("A")])
    dispatcher.listen(OrderPlaced, lambda e: trail.append("listener"))

    with caplog.at_level(logging.DEBUG, logger="cqrs_ddd.middleware"):
        await dispatcher.dispatch(OrderPlaced(order_id="ORD-1"))

    assert trail == ["A-enter", "listener", "A-exit"]
    assert "Dispatching domain event OrderPlaced." in caplog.messages
    assert caplog.records[0].event["order_id"] == "ORD-1"


# --- Deferred dispatch ---


@pytest.fixture()
def deferred() -> DeferredDispatcher:
    return DeferredDispatcher()


@pytest.mark.asyncio()
async def test_deferred_events_delivered_after_commit_in_raise_order(
    manager: UnitOfWorkManager, deferred: DeferredDispatcher
) -> None:
    collector = Collector()
    deferred.listen(OrderPlaced, collector)
    deferred.listen(OrderShipped, collector)

    async def body() -> None:
        await deferred.dispatch(OrderPlaced(order_id="ORD-1"))
        await deferred.dispatch(OrderShipped(order_id="ORD-1"))
        assert collector.events == []
        assert deferred.pending == 2

    await manager.execute(body)

    assert [(type(e), e.order_id) for e in collector.events] == [
        (OrderPlaced, "ORD-1"),
        (OrderShipped, "ORD-1"),
    ]


@pytest.mark.asyncio()
async def test_no_delivery_when_every_attempt_fails(
    manager: UnitOfWorkManager, deferred: DeferredDispatcher
) -> None:
    collector = Collector()
    deferred.listen(OrderPlaced, collector)

    async def body() -> None:
        await deferred.dispatch(OrderPlaced(order_id="ORD-1"))
        raise RetryableError("deadlock")

    with pytest.raises(RetryAttemptsExhaustedError):
        await manager.execute(body, attempts=3)

    assert collector.events == []


@pytest.mark.asyncio()
async def test_events_delivered_once_after_retried_success(
    manager: UnitOfWorkManager, deferred: DeferredDispatcher
) -> None:
    collector = Collector()
    deferred.listen(OrderPlaced, collector)
    runs = 0

    async def body() -> None:
        nonlocal runs
        runs += 1
        await deferred.dispatch(OrderPlaced(order_id=f"ORD-{runs}"))
        if runs < 3:
            raise RetryableError("deadlock")

    await manager.execute(body, attempts=3)

    assert [e.order_id for e in collector.events] == ["ORD-3"]


@pytest.mark.asyncio()
async def test_forget_discards_buffered_events(
    manager: UnitOfWorkManager, deferred: DeferredDispatcher
) -> None:
    collector = Collector()
    deferred.listen(OrderPlaced, collector)

    async def body() -> None:
        await deferred.dispatch(OrderPlaced(order_id="ORD-1"))
        deferred.forget()
        assert deferred.pending == 0

    await manager.execute(body)

    assert collector.events == []


@pytest.mark.asyncio()
async def test_events_raised_during_flush_are_delivered_in_same_flush(
    manager: UnitOfWorkManager, deferred: DeferredDispatcher
) -> None:
    collector = Collector()

    async def ship(event: OrderPlaced) -> None:
        await deferred.dispatch(OrderShipped(order_id=event.order_id))

    deferred.listen(OrderPlaced, [collector, ship])
    deferred.listen(OrderShipped, collector)

    await manager.execute(lambda: deferred.dispatch(OrderPlaced(order_id="ORD-1")))

    assert [(type(e), e.order_id) for e in collector.events] == [
        (OrderPlaced, "ORD-1"),
        (OrderShipped, "ORD-1"),
    ]


@pytest.mark.asyncio()
async def test_listener_failure_during_flush_is_reported_after_commit(
    manager: UnitOfWorkManager,
    deferred: DeferredDispatcher,
    reporter: InMemoryExceptionReporter,
) -> None:
    collector = Collector()

    def broken(event: OrderPlaced) -> None:
        raise RuntimeError("listener failed")

    deferred.listen(OrderPlaced, broken)
    deferred.listen(OrderShipped, collector)

    async def body() -> str:
        await deferred.dispatch(OrderPlaced(order_id="ORD-1"))
        await deferred.dispatch(OrderShipped(order_id="ORD-1"))
        return "committed"

    assert await manager.execute(body) == "committed"
    assert [str(exc) for exc in reporter.reported] == ["listener failed"]
    assert collector.events == []


@pytest.mark.asyncio()
async def test_deferring_outside_unit_of_work_raises(
    deferred: DeferredDispatcher,
) -> None:
    with pytest.raises(UnitOfWorkError):
        await deferred.dispatch(OrderPlaced(order_id="ORD-1"))


@pytest.mark.asyncio()
async def test_immediate_events_skip_the_buffer(
    manager: UnitOfWorkManager, deferred: DeferredDispatcher
) -> None:
    collector = Collector()
    deferred.listen(StockReserved, collector)

    await deferred.dispatch(StockReserved(sku="sku-1"))

    async def body() -> None:
        await deferred.dispatch(StockReserved(sku="sku-2"))
        assert len(collector.events) == 2
        assert deferred.pending == 0

    await manager.execute(body)
