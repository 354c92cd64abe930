"""Outbox ports — the outbox sink and its transactional storage."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Protocol, runtime_checkable
from uuid import uuid4

from ..utils import default_dict_factory

if TYPE_CHECKING:
    from ..integration.events import IntegrationEvent
    from ..ports.unit_of_work import UnitOfWork


@runtime_checkable
class IOutbox(Protocol):
    """Write-sink for integration events awaiting delivery.

    The core only pushes; delivery and delivery retry belong to the
    adapter behind this port.
    """

    async def push(self, event: IntegrationEvent) -> None:
        ...


@dataclass
class OutboxMessage:
    """A message waiting in the transactional outbox."""

    message_id: str = field(default_factory=lambda: str(uuid4()))
    event_type: str = ""
    payload: dict[str, object] = field(default_factory=default_dict_factory)
    metadata: dict[str, object] = field(default_factory=default_dict_factory)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    published_at: datetime | None = None
    error: str | None = None
    retry_count: int = 0


@runtime_checkable
class IOutboxStorage(Protocol):
    """Protocol for the transactional outbox pattern."""

    async def save_messages(
        self, messages: list[OutboxMessage], uow: UnitOfWork | None = None
    ) -> None:
        """
        Persist outbox messages.

        Args:
            messages: Messages to save to outbox
            uow: Optional UnitOfWork for transactional consistency.
        """
        ...

    async def get_pending(
        self, limit: int = 100, uow: UnitOfWork | None = None
    ) -> list[OutboxMessage]:
        """Retrieve unpublished messages, ordered by creation time."""
        ...
