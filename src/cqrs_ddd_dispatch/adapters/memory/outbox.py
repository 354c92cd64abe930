"""In-memory outbox adapters — list-backed fakes for unit tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ...ports.outbox import IOutbox, IOutboxStorage, OutboxMessage

if TYPE_CHECKING:
    from ...integration.events import IntegrationEvent
    from ...ports.unit_of_work import UnitOfWork


class InMemoryOutbox(IOutbox):
    """Records pushed integration events in push order."""

    def __init__(self) -> None:
        self.events: list[IntegrationEvent] = []

    async def push(self, event: IntegrationEvent) -> None:
        self.events.append(event)

    def __len__(self) -> int:
        return len(self.events)


class InMemoryOutboxStorage(IOutboxStorage):
    """In-memory implementation of ``IOutboxStorage``.

    Remembers the unit of work each message was saved with, so tests can
    assert that messages were written inside the transaction.
    """

    def __init__(self) -> None:
        self._messages: list[OutboxMessage] = []
        self.saved_with: list[UnitOfWork | None] = []

    async def save_messages(
        self,
        messages: list[OutboxMessage],
        uow: UnitOfWork | None = None,
    ) -> None:
        self._messages.extend(messages)
        self.saved_with.extend(uow for _ in messages)

    async def get_pending(
        self,
        limit: int = 100,
        uow: UnitOfWork | None = None,  # noqa: ARG002
    ) -> list[OutboxMessage]:
        pending = [m for m in self._messages if m.published_at is None]
        pending.sort(key=lambda m: m.created_at)
        return pending[:limit]

    @property
    def messages(self) -> list[OutboxMessage]:
        return list(self._messages)

    def __len__(self) -> int:
        return len(self._messages)
