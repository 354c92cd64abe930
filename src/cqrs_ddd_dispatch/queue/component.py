"""ComponentQueue — routes queued commands to per-type enqueuers."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ..cqrs.registry import HandlerMap
from ..middleware.pipeline import PipelineBuilder
from ..ports.queue import IQueue
from ..primitives.exceptions import EnqueuerNotFoundError, HandlerNotFoundError
from ..utils import maybe_await

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from ..cqrs.command import Command
    from ..middleware.registry import MiddlewareRegistry
    from ..ports.middleware import MiddlewareRef

logger = logging.getLogger("cqrs_ddd.queue")


class ComponentQueue(IQueue):
    """Queue port implementation that delegates to enqueuers.

    An enqueuer is whatever actually hands the command to the job runner
    or broker: a callable ``(command) -> None`` (sync or async) or an object
    with ``push(command)``. Enqueuers are registered per command type, with
    an optional default for everything else.

    Pushes run only the queue's own middleware. A command's
    ``middleware()`` belongs to its dispatch and runs when the queued
    command is later dispatched to its handler.

    Usage::

        queue = ComponentQueue(default=lambda command: jobs.append(command))
        queue.register(SendInvoice, invoice_queue)
        queue.through([LogPushedToQueue()])
    """

    def __init__(
        self,
        *,
        default: Any | None = None,
        enqueuer_factory: Callable[[type[Any]], Any] | None = None,
        container: Callable[[str], Any] | None = None,
        middleware: MiddlewareRegistry | None = None,
    ) -> None:
        self._enqueuers = HandlerMap(
            "enqueuer", handler_factory=enqueuer_factory, container=container
        )
        self._default = default
        self._middleware = middleware
        self._pipes: list[MiddlewareRef] = []

    def register(self, command_type: type[Any], enqueuer: Any) -> None:
        self._enqueuers.register(command_type, enqueuer)

    def through(self, pipes: Iterable[MiddlewareRef]) -> None:
        """Push commands through the provided middleware."""
        self._pipes = list(pipes)

    async def push(self, command: Command[Any]) -> None:
        self._enqueuers.freeze()
        if self._middleware is not None:
            self._middleware.freeze()
        pipeline = (
            PipelineBuilder(self._middleware)
            .through(self._pipes)
            .build(self._enqueue)
        )
        await pipeline(command)

    async def _enqueue(self, command: Command[Any]) -> None:
        enqueuer = self._resolve(type(command))
        if hasattr(enqueuer, "push"):
            await maybe_await(enqueuer.push(command))
        else:
            await maybe_await(enqueuer(command))

    def _resolve(self, command_type: type[Any]) -> Any:
        try:
            return self._enqueuers.resolve(command_type)
        except HandlerNotFoundError:
            if self._default is None:
                raise EnqueuerNotFoundError(
                    f"No enqueuer registered for {command_type.__name__}"
                ) from None
            return self._enqueuers.build(self._default)
