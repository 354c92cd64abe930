"""Handler base classes."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from ..ports.middleware import MiddlewareRef
    from ..results.result import Result
    from .command import Command
    from .query import Query

TResult = TypeVar("TResult")  # Result type


class CommandHandler(ABC, Generic[TResult]):
    """Base class for command handlers.

    Handlers must be registered explicitly with a ``HandlerRegistry``.
    The handler owns its Result: the dispatcher returns it unchanged.

    Usage::

        class CreateOrderHandler(CommandHandler[OrderId]):
            async def handle(self, command: CreateOrder) -> Result[OrderId]:
                ...
    """

    @abstractmethod
    async def handle(self, command: Command[TResult]) -> Result[TResult]:
        """Execute the command and return a Result."""
        ...

    def middleware(self) -> list[MiddlewareRef]:
        """Middleware to run after the dispatcher's and the command's own."""
        return []


class QueryHandler(ABC, Generic[TResult]):
    """Base class for query handlers.

    Handlers must be registered explicitly with a ``HandlerRegistry``.

    Usage::

        class GetOrderHandler(QueryHandler[OrderDTO]):
            async def handle(self, query: GetOrder) -> Result[OrderDTO]:
                ...
    """

    @abstractmethod
    async def handle(self, query: Query[TResult]) -> Result[TResult]:
        """Execute the query and return a Result."""
        ...

    def middleware(self) -> list[MiddlewareRef]:
        """Middleware to run after the dispatcher's and the query's own."""
        return []
