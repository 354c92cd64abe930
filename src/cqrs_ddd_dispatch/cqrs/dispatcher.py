"""Command and query dispatchers — route messages through middleware to handlers."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, TypeVar

from ..middleware.pipeline import PipelineBuilder
from ..primitives.exceptions import (
    AbortOnFailure,
    AmbiguousHandlerError,
    ConfigurationError,
    FatalError,
    HandlerError,
)
from ..results.error import Error, ErrorCode
from ..results.result import Result
from ..utils import maybe_await
from .queuer import CommandQueuer

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from ..messages import Message
    from ..middleware.registry import MiddlewareRegistry
    from ..ports.middleware import MiddlewareRef
    from ..ports.queue import IQueue
    from .command import Command
    from .query import Query
    from .registry import HandlerRegistry

logger = logging.getLogger("cqrs_ddd.bus")

TResult = TypeVar("TResult")


class _MessageDispatcher:
    """Shared dispatch logic for commands and queries.

    The handler is resolved *before* any middleware runs, so a message
    without a handler produces no side effects. The pipeline is the
    dispatcher's own middleware, then the message's ``middleware()``, then
    the handler's ``middleware()``, ending at ``handler.handle``.
    """

    _kind = "message"

    def __init__(
        self,
        registry: HandlerRegistry,
        *,
        middleware: MiddlewareRegistry | None = None,
    ) -> None:
        self._registry = registry
        self._middleware = middleware
        self._pipes: list[MiddlewareRef] = []

    def through(self, pipes: Iterable[MiddlewareRef]) -> None:
        """Dispatch messages through the provided middleware."""
        self._pipes = list(pipes)

    async def _dispatch(
        self,
        message: Message,
        resolve: Callable[[type[Any]], Any],
    ) -> Result[Any]:
        self._freeze()
        name = type(message).__name__

        try:
            handler = resolve(type(message))
        except AmbiguousHandlerError as exc:
            logger.error("Cannot dispatch %s %s: %s", self._kind, name, exc)
            return Result.failed(
                Error(code=ErrorCode.AMBIGUOUS_HANDLER, message=str(exc))
            )
        except HandlerError as exc:
            logger.error("Cannot dispatch %s %s: %s", self._kind, name, exc)
            return Result.failed(
                Error(code=ErrorCode.HANDLER_NOT_FOUND, message=str(exc))
            )
        except FatalError:
            raise
        except Exception as exc:
            logger.exception("Cannot build handler for %s %s", self._kind, name)
            return self._unexpected(exc)

        async def _handle(passed: Message) -> Any:
            if hasattr(handler, "handle"):
                return await maybe_await(handler.handle(passed))
            return await maybe_await(handler(passed))

        handler_middleware = getattr(handler, "middleware", None)
        pipeline = (
            PipelineBuilder(self._middleware)
            .through(self._pipes)
            .through(message.middleware())
            .through(handler_middleware() if callable(handler_middleware) else [])
            .build(_handle)
        )

        try:
            result = await pipeline(message)
        except AbortOnFailure as exc:
            return exc.result
        except FatalError:
            raise
        except Exception as exc:
            logger.exception("Unexpected error dispatching %s %s", self._kind, name)
            return self._unexpected(exc)

        if not isinstance(result, Result):
            logger.error(
                "Handler for %s %s returned %s instead of a Result",
                self._kind,
                name,
                type(result).__name__,
            )
            return Result.failed(
                Error(
                    code=ErrorCode.UNEXPECTED_ERROR,
                    message=f"Handler for {name} did not return a Result.",
                )
            )
        return result

    @staticmethod
    def _unexpected(exc: Exception) -> Result[Any]:
        return Result.failed(
            Error(
                code=ErrorCode.UNEXPECTED_ERROR,
                message=str(exc) or type(exc).__name__,
            )
        )

    def _freeze(self) -> None:
        self._registry.freeze()
        if self._middleware is not None:
            self._middleware.freeze()


class CommandDispatcher(_MessageDispatcher):
    """Routes commands to their single handler and returns its Result.

    Parameters
    ----------
    registry:
        :class:`~cqrs_ddd_dispatch.cqrs.registry.HandlerRegistry` instance.
    middleware:
        Optional :class:`~cqrs_ddd_dispatch.middleware.registry.MiddlewareRegistry`
        used to resolve middleware referenced by name.
    queue:
        Optional queue port used by :meth:`queue`.
    """

    _kind = "command"

    def __init__(
        self,
        registry: HandlerRegistry,
        *,
        middleware: MiddlewareRegistry | None = None,
        queue: IQueue | None = None,
    ) -> None:
        super().__init__(registry, middleware=middleware)
        self._queuer = CommandQueuer(queue) if queue is not None else None

    async def dispatch(self, command: Command[TResult]) -> Result[TResult]:
        """Dispatch *command*; always returns a Result unless a FatalError occurs."""
        return await self._dispatch(command, self._registry.resolve_command_handler)

    async def queue(self, command: Command[Any]) -> None:
        """Push *command* onto the queue for asynchronous dispatch."""
        if self._queuer is None:
            raise ConfigurationError("No queue configured on the command dispatcher.")
        await self._queuer.queue(command)


class QueryDispatcher(_MessageDispatcher):
    """Routes queries to their single handler and returns its Result."""

    _kind = "query"

    async def dispatch(self, query: Query[TResult]) -> Result[TResult]:
        return await self._dispatch(query, self._registry.resolve_query_handler)
