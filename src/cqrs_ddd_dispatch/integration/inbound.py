"""Inbound integration events — dispatch to exactly one handler."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from ..cqrs.registry import HandlerMap
from ..middleware.pipeline import PipelineBuilder
from ..primitives.exceptions import HandlerNotFoundError
from ..utils import maybe_await

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from ..middleware.registry import MiddlewareRegistry
    from ..ports.middleware import MiddlewareRef
    from .events import IntegrationEvent

logger = logging.getLogger("cqrs_ddd.inbound")


class InboundEventHandler(ABC):
    """Base class for inbound integration-event handlers.

    Usage::

        class PaymentReceivedHandler(InboundEventHandler):
            async def handle(self, event: PaymentReceived) -> None:
                ...
    """

    @abstractmethod
    async def handle(self, event: IntegrationEvent) -> None:
        ...

    def middleware(self) -> list[MiddlewareRef]:
        return []


class SwallowInboundEvent:
    """Handler that accepts an inbound event and only logs it.

    Useful as the default handler for events a module subscribes to but
    has no interest in.
    """

    def __init__(self, level: int = logging.DEBUG) -> None:
        self._level = level

    async def handle(self, event: IntegrationEvent) -> None:
        logger.log(
            self._level,
            "Swallowing inbound integration event %s.",
            type(event).__name__,
        )


class InboundEventDispatcher:
    """Routes inbound integration events to their handler.

    Parameters
    ----------
    handler_factory:
        Optional callable ``(handler_cls) -> handler_instance``.
    container:
        Optional callable ``(name) -> handler_instance`` for handlers
        registered by name.
    middleware:
        Optional registry resolving middleware referenced by name.
    default_handler:
        Used for events with no registered handler, e.g.
        :class:`SwallowInboundEvent`. Without one, such events raise
        :class:`~cqrs_ddd_dispatch.primitives.exceptions.HandlerNotFoundError`.
    """

    def __init__(
        self,
        *,
        handler_factory: Callable[[type[Any]], Any] | None = None,
        container: Callable[[str], Any] | None = None,
        middleware: MiddlewareRegistry | None = None,
        default_handler: Any | None = None,
    ) -> None:
        self._handlers = HandlerMap(
            "inbound event", handler_factory=handler_factory, container=container
        )
        self._middleware = middleware
        self._default_handler = default_handler
        self._pipes: list[MiddlewareRef] = []

    def register(self, event_type: type[IntegrationEvent], handler: Any) -> None:
        self._handlers.register(event_type, handler)

    def through(self, pipes: Iterable[MiddlewareRef]) -> None:
        """Dispatch events through the provided middleware."""
        self._pipes = list(pipes)

    async def dispatch(self, event: IntegrationEvent) -> None:
        """Dispatch *event* to its handler; errors propagate to the caller."""
        self._handlers.freeze()
        if self._middleware is not None:
            self._middleware.freeze()

        handler = self._resolve(event)

        async def _handle(passed: IntegrationEvent) -> None:
            if hasattr(handler, "handle"):
                await maybe_await(handler.handle(passed))
            else:
                await maybe_await(handler(passed))

        handler_middleware = getattr(handler, "middleware", None)
        pipeline = (
            PipelineBuilder(self._middleware)
            .through(self._pipes)
            .through(event.middleware())
            .through(handler_middleware() if callable(handler_middleware) else [])
            .build(_handle)
        )
        await pipeline(event)

    def _resolve(self, event: IntegrationEvent) -> Any:
        try:
            return self._handlers.resolve(type(event))
        except HandlerNotFoundError:
            if self._default_handler is None:
                raise
            return self._handlers.build(self._default_handler)
