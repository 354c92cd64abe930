"""OutboundEventPublisher — hands integration events to the outbox."""

from __future__ import annotations

import logging
from functools import partial
from typing import TYPE_CHECKING

from ..middleware.pipeline import PipelineBuilder
from ..unit_of_work.scope import get_current_scope

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ..middleware.registry import MiddlewareRegistry
    from ..ports.middleware import MiddlewareRef
    from ..ports.outbox import IOutbox
    from .events import IntegrationEvent

logger = logging.getLogger("cqrs_ddd.outbox")


class OutboundEventPublisher:
    """Publishes integration events through middleware into an outbox.

    Usage::

        publisher = OutboundEventPublisher(outbox)
        publisher.through([LogOutboundEvent()])

        # inside a unit of work: pushed only once the transaction commits
        await publisher.publish_after_commit(OrderPlaced(order_id="ORD-1"))
    """

    def __init__(
        self,
        outbox: IOutbox,
        *,
        middleware: MiddlewareRegistry | None = None,
    ) -> None:
        self._outbox = outbox
        self._middleware = middleware
        self._pipes: list[MiddlewareRef] = []

    def through(self, pipes: Iterable[MiddlewareRef]) -> None:
        """Publish events through the provided middleware."""
        self._pipes = list(pipes)

    async def publish(self, event: IntegrationEvent) -> None:
        """Push *event* to the outbox now."""
        pipeline = (
            PipelineBuilder(self._middleware)
            .through(self._pipes)
            .through(event.middleware())
            .build(self._push)
        )
        await pipeline(event)

    async def publish_after_commit(self, event: IntegrationEvent) -> None:
        """Publish *event* once the active unit of work commits.

        Events are pushed in the order this method was called. Outside a
        unit of work the event is published immediately.
        """
        scope = get_current_scope()
        if scope is None:
            await self.publish(event)
            return
        scope.after_commit(partial(self.publish, event))
        logger.debug(
            "Queued integration event %s for after commit", type(event).__name__
        )

    async def _push(self, event: IntegrationEvent) -> None:
        await self._outbox.push(event)
