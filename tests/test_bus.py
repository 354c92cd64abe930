from dataclasses import dataclass
from typing import Any

import pytest

from cqrs_ddd_dispatch import (
    Command,
    CommandDispatcher,
    CommandHandler,
    DeferredDispatcher,
    DomainEvent,
    HandlerRegistry,
    InboundEventDispatcher,
    IntegrationEvent,
    MessageBus,
    OutboundEventPublisher,
    Query,
    QueryDispatcher,
    Result,
    SwallowInboundEvent,
)
from cqrs_ddd_dispatch.adapters.memory import (
    InMemoryOutbox,
    InMemoryQueue,
    InMemoryUnitOfWorkFactory,
)
from cqrs_ddd_dispatch.middleware import ExecuteInUnitOfWork, LogMessageDispatch
from cqrs_ddd_dispatch.primitives.exceptions import ConfigurationError, UnitOfWorkError
from cqrs_ddd_dispatch.results import ErrorCode
from cqrs_ddd_dispatch.unit_of_work import UnitOfWorkManager

# --- Application ---


@dataclass(frozen=True)
class OrderId:
    value: str


class CreateOrder(Command[OrderId]):
    items: list[str]


class CancelOrder(Command[None]):
    order_id: str


class CountOrders(Query[int]):
    pass


class OrderCreated(DomainEvent):
    order_id: str


class OrderCreatedV1(IntegrationEvent):
    order_id: str


class CreateOrderHandler(CommandHandler[OrderId]):
    def __init__(self, bus: MessageBus, uow: UnitOfWorkManager) -> None:
        self._bus = bus
        self._uow = uow

    async def handle(self, command: CreateOrder) -> Result[OrderId]:
        await self._bus.raise_domain_event(OrderCreated(order_id="ORD-1"))
        return Result.ok(OrderId("ORD-1"))

    def middleware(self) -> list[Any]:
        return [ExecuteInUnitOfWork(self._uow, attempts=2)]


@pytest.fixture()
def outbox() -> InMemoryOutbox:
    return InMemoryOutbox()


@pytest.fixture()
def queue() -> InMemoryQueue:
    return InMemoryQueue()


@pytest.fixture()
def bus(
    manager: UnitOfWorkManager, outbox: InMemoryOutbox, queue: InMemoryQueue
) -> MessageBus:
    registry = HandlerRegistry()
    commands = CommandDispatcher(registry, queue=queue)
    commands.through([LogMessageDispatch()])
    events = DeferredDispatcher()
    publisher = OutboundEventPublisher(outbox)

    async def publish(event: OrderCreated) -> None:
        await publisher.publish_after_commit(OrderCreatedV1(order_id=event.order_id))

    events.listen(OrderCreated, publish)

    bus = MessageBus(
        commands=commands,
        queries=QueryDispatcher(registry),
        unit_of_work=manager,
        events=events,
        inbound=InboundEventDispatcher(default_handler=SwallowInboundEvent()),
    )
    registry.register_command_handler(CreateOrder, CreateOrderHandler(bus, manager))

    async def count(query: CountOrders) -> Result[int]:
        return Result.ok(1)

    registry.register_query_handler(CountOrders, count)
    return bus


# --- Tests ---


@pytest.mark.asyncio()
async def test_create_order_commits_and_publishes_after_commit(
    bus: MessageBus,
    outbox: InMemoryOutbox,
    uow_factory: InMemoryUnitOfWorkFactory,
) -> None:
    result = await bus.dispatch_command(CreateOrder(items=["sku-1"]))

    assert result.success
    assert result.value == OrderId("ORD-1")
    assert uow_factory.commit_count == 1
    assert [event.order_id for event in outbox.events] == ["ORD-1"]


@pytest.mark.asyncio()
async def test_unregistered_command_fails_without_side_effects(
    bus: MessageBus,
    outbox: InMemoryOutbox,
    uow_factory: InMemoryUnitOfWorkFactory,
) -> None:
    result = await bus.dispatch_command(CancelOrder(order_id="ORD-1"))

    assert result.failure
    assert result.has_code(ErrorCode.HANDLER_NOT_FOUND)
    assert uow_factory.created == []
    assert outbox.events == []


@pytest.mark.asyncio()
async def test_query_queue_inbound_and_unit_of_work(
    bus: MessageBus, queue: InMemoryQueue
) -> None:
    assert (await bus.dispatch_query(CountOrders())).value == 1

    await bus.queue_command(CancelOrder(order_id="ORD-1"))
    assert queue.commands == [CancelOrder(order_id="ORD-1")]

    await bus.dispatch_inbound_event(OrderCreatedV1(order_id="ORD-1"))

    assert await bus.run_unit_of_work(lambda: "done", attempts=2) == "done"


@pytest.mark.asyncio()
async def test_raise_domain_event_outside_unit_of_work_is_rejected(
    bus: MessageBus,
) -> None:
    with pytest.raises(UnitOfWorkError):
        await bus.raise_domain_event(OrderCreated(order_id="ORD-1"))


@pytest.mark.asyncio()
async def test_unconfigured_components_raise() -> None:
    bus = MessageBus()

    with pytest.raises(ConfigurationError, match="command dispatcher"):
        await bus.dispatch_command(CancelOrder(order_id="ORD-1"))
    with pytest.raises(ConfigurationError, match="unit of work manager"):
        await bus.run_unit_of_work(lambda: None)
