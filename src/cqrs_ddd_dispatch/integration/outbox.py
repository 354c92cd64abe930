"""StorageOutbox — outbox adapter that records events in outbox storage."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..ports.outbox import IOutbox, OutboxMessage
from ..unit_of_work.scope import get_current_scope

if TYPE_CHECKING:
    from ..ports.outbox import IOutboxStorage
    from .events import IntegrationEvent

logger = logging.getLogger("cqrs_ddd.outbox")


class StorageOutbox(IOutbox):
    """
    Serialises integration events into :class:`OutboxMessage` rows.

    When called inside an uncommitted unit of work the active transaction is
    passed to the storage, so the message is written atomically with the
    state change. Pushes from after-commit hooks save without a transaction.
    A relay process (not part of this package) delivers stored messages.
    """

    def __init__(self, storage: IOutboxStorage) -> None:
        self._storage = storage

    async def push(self, event: IntegrationEvent) -> None:
        message = OutboxMessage(
            message_id=event.uuid,
            event_type=type(event).__name__,
            payload=event.model_dump(mode="json"),
            metadata={"occurred_at": event.occurred_at.isoformat()},
        )
        scope = get_current_scope()
        uow = scope.unit_of_work if scope is not None and not scope.committed else None
        await self._storage.save_messages([message], uow=uow)
        logger.debug("Stored %s in outbox as %s", message.event_type, message.message_id)
