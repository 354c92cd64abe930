import logging
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from cqrs_ddd_dispatch.cqrs import Command
from cqrs_ddd_dispatch.middleware import LogPushedToQueue
from cqrs_ddd_dispatch.primitives.exceptions import EnqueuerNotFoundError
from cqrs_ddd_dispatch.queue import ComponentQueue


class SendInvoice(Command[None]):
    invoice_id: str


class RecalculateTotals(Command[None]):
    order_id: str


@pytest.mark.asyncio()
async def test_push_routes_to_registered_enqueuer() -> None:
    enqueuer = AsyncMock()
    queue = ComponentQueue()
    queue.register(SendInvoice, enqueuer)

    await queue.push(SendInvoice(invoice_id="INV-1"))

    enqueuer.push.assert_awaited_once_with(SendInvoice(invoice_id="INV-1"))


@pytest.mark.asyncio()
async def test_default_enqueuer_receives_unregistered_commands() -> None:
    jobs: list[Any] = []
    queue = ComponentQueue(default=jobs.append)

    await queue.push(RecalculateTotals(order_id="ORD-1"))

    assert jobs == [RecalculateTotals(order_id="ORD-1")]


@pytest.mark.asyncio()
async def test_enqueuer_classes_built_through_factory() -> None:
    class InvoiceEnqueuer:
        pushed: list[Any] = []

        def push(self, command: Any) -> None:
            self.pushed.append(command)

    factory = MagicMock(side_effect=lambda cls: cls())
    queue = ComponentQueue(enqueuer_factory=factory)
    queue.register(SendInvoice, InvoiceEnqueuer)

    await queue.push(SendInvoice(invoice_id="INV-1"))

    factory.assert_called_once_with(InvoiceEnqueuer)
    assert InvoiceEnqueuer.pushed == [SendInvoice(invoice_id="INV-1")]


@pytest.mark.asyncio()
async def test_missing_enqueuer_raises() -> None:
    with pytest.raises(EnqueuerNotFoundError, match="SendInvoice"):
        await ComponentQueue().push(SendInvoice(invoice_id="INV-1"))


@pytest.mark.asyncio()
async def test_push_goes_through_queue_middleware(
    caplog: pytest.LogCaptureFixture,
) -> None:
    queue = ComponentQueue(default=lambda command: None)
    queue.through([LogPushedToQueue()])

    with caplog.at_level(logging.DEBUG, logger="cqrs_ddd.middleware"):
        await queue.push(SendInvoice(invoice_id="INV-1"))

    assert caplog.messages[0] == "Queuing command SendInvoice."
    assert caplog.records[0].command["invoice_id"] == "INV-1"
    assert caplog.messages[1].startswith("Queued command SendInvoice in ")


@pytest.mark.asyncio()
async def test_push_skips_command_declared_middleware(
    trail: list[str], recorder: Any
) -> None:
    class AuditedInvoice(SendInvoice):
        def middleware(self) -> list[Any]:
            return [recorder("dispatch-only")]

    jobs: list[Any] = []
    queue = ComponentQueue(default=jobs.append)
    queue.through([recorder("queue")])

    await queue.push(AuditedInvoice(invoice_id="INV-1"))

    assert trail == ["queue-enter", "queue-exit"]
    assert [job.invoice_id for job in jobs] == ["INV-1"]
