"""Domain-event dispatchers — immediate and deferred until commit."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ..middleware.pipeline import PipelineBuilder
from ..ports.event_dispatcher import IDeferredDispatcher, IDomainEventDispatcher
from ..primitives.exceptions import ConfigurationError, UnitOfWorkError
from ..unit_of_work.scope import get_current_scope
from .listeners import ListenerContainer, notify

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ..middleware.registry import MiddlewareRegistry
    from ..ports.event_dispatcher import EventListener
    from ..ports.middleware import MiddlewareRef
    from .events import DomainEvent

logger = logging.getLogger("cqrs_ddd.events")


class DomainEventDispatcher(IDomainEventDispatcher):
    """Dispatches domain events to their listeners immediately.

    Each event travels through the domain-event middleware pipeline; the
    terminal step notifies every listener bound to the event's type, in
    registration order. Listeners bound by name are resolved through the
    :class:`ListenerContainer` when the event is dispatched.

    **Error policy: fail-fast.** The first listener that raises stops
    notification of the remaining listeners and the error propagates to
    the caller. Listener order is assumed to encode causal dependencies.
    """

    def __init__(
        self,
        listeners: ListenerContainer | None = None,
        *,
        middleware: MiddlewareRegistry | None = None,
    ) -> None:
        self._listeners = listeners or ListenerContainer()
        self._middleware = middleware
        self._bindings: dict[type[DomainEvent], list[EventListener]] = {}
        self._pipes: list[MiddlewareRef] = []
        self._frozen = False

    # ── Registration ─────────────────────────────────────────────

    def through(self, pipes: Iterable[MiddlewareRef]) -> None:
        """Dispatch events through the provided middleware."""
        self._pipes = list(pipes)

    def listen(
        self,
        event_type: type[DomainEvent],
        listener: EventListener | list[EventListener],
    ) -> None:
        """Bind one listener, or a list of listeners, to *event_type*."""
        if self._frozen:
            raise ConfigurationError(
                f"Cannot add listeners for {event_type.__name__}: "
                "dispatcher is frozen."
            )
        bindings = self._bindings.setdefault(event_type, [])
        for item in listener if isinstance(listener, list) else [listener]:
            if isinstance(item, str):
                valid = bool(item)
            else:
                valid = callable(item) or hasattr(item, "handle")
            if not valid:
                raise ConfigurationError(
                    "Expecting listener to be a callable, an object with "
                    "handle(), or a non-empty string."
                )
            bindings.append(item)

    def freeze(self) -> None:
        self._frozen = True

    # ── Dispatching ──────────────────────────────────────────────

    async def dispatch(self, event: DomainEvent) -> None:
        """Dispatch *event* to its listeners now."""
        await self.dispatch_now(event)

    async def dispatch_now(self, event: DomainEvent) -> None:
        self._frozen = True
        if self._middleware is not None:
            self._middleware.freeze()
        pipeline = (
            PipelineBuilder(self._middleware)
            .through(self._pipes)
            .through(event.middleware())
            .build(self._notify_listeners)
        )
        await pipeline(event)

    async def _notify_listeners(self, event: DomainEvent) -> DomainEvent:
        for listener in self._cursor(type(event)):
            try:
                await notify(listener, event)
            except Exception:
                logger.exception(
                    "Error executing listener %s for event %s",
                    type(listener).__name__,
                    type(event).__name__,
                )
                raise
        return event

    def _cursor(self, event_type: type[DomainEvent]) -> Iterable[Any]:
        for listener in self._bindings.get(event_type, []):
            if isinstance(listener, str):
                yield self._listeners.get(listener)
            else:
                yield listener

    # ── Introspection ────────────────────────────────────────────

    def get_registered_listeners(self) -> dict[type[DomainEvent], list[EventListener]]:
        """Return all bound listeners (debugging utility)."""
        return {k: list(v) for k, v in self._bindings.items()}


class DeferredDispatcher(DomainEventDispatcher, IDeferredDispatcher):
    """Buffers domain events until the active unit of work commits.

    Events are appended to a buffer owned by the current
    :class:`~cqrs_ddd_dispatch.unit_of_work.scope.UnitOfWorkScope`. The first
    event buffered in a scope registers :meth:`flush` as an after-commit
    hook, so listeners only see events from committed transactions. A
    retried or failed attempt discards its scope and with it the buffer.

    Events whose class sets ``occurs_immediately`` skip the buffer.
    Raising a deferred event outside a unit of work is an error.
    """

    async def dispatch(self, event: DomainEvent) -> None:
        if event.occurs_immediately:
            await self.dispatch_now(event)
            return

        scope = get_current_scope()
        if scope is None:
            raise UnitOfWorkError(
                f"Cannot defer domain event {type(event).__name__} when not "
                "executing a unit of work."
            )
        buffer = scope.event_buffer(self)
        if buffer is None:
            buffer = scope.open_event_buffer(self)
            scope.after_commit(self.flush)
        buffer.append(event)
        logger.debug("Deferred domain event %s", type(event).__name__)

    async def flush(self) -> None:
        """Dispatch buffered events in FIFO order until the buffer is empty.

        Events raised by listeners while flushing join the same buffer and
        are dispatched before this call returns. On a listener error the
        remaining events are dropped and the error propagates.
        """
        scope = get_current_scope()
        if scope is None:
            return
        buffer = scope.event_buffer(self)
        if buffer is None:
            return
        try:
            while buffer:
                await self.dispatch_now(buffer.popleft())
        finally:
            buffer.clear()
            scope.close_event_buffer(self)

    def forget(self) -> None:
        scope = get_current_scope()
        if scope is None:
            return
        buffer = scope.event_buffer(self)
        if buffer:
            logger.debug("Forgetting %d deferred domain event(s)", len(buffer))
            buffer.clear()

    @property
    def pending(self) -> int:
        """Number of events buffered in the current scope."""
        scope = get_current_scope()
        buffer = scope.event_buffer(self) if scope is not None else None
        return len(buffer) if buffer else 0
