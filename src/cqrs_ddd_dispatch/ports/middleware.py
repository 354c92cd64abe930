"""IMiddleware — LIFO middleware protocol."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import (
    Any,
    Protocol,
    TypeAlias,
    runtime_checkable,
)

NextHandler: TypeAlias = Callable[[Any], Awaitable[Any]]


@runtime_checkable
class IMiddleware(Protocol):
    """Protocol for middleware in any dispatch pipeline.

    Middleware wraps dispatch of a command, query, domain event, integration
    event or queued command. It can inspect or replace the message,
    short-circuit by not calling ``next_handler``, or act on the outcome.
    The chain is applied in **LIFO** order (first registered = outermost).

    The pipeline does not police how often ``next_handler`` is called;
    calling it exactly once is the normal case.
    """

    async def __call__(
        self,
        message: Any,
        next_handler: NextHandler,
    ) -> Any:
        """Execute middleware logic and call next_handler to proceed.

        Parameters
        ----------
        message:
            The incoming message.
        next_handler:
            Async callable representing the rest of the pipeline.

        Returns
        -------
        The result from the handler chain.
        """
        ...


#: A middleware object, or the name it is registered under in a
#: :class:`~cqrs_ddd_dispatch.middleware.registry.MiddlewareRegistry`.
MiddlewareRef: TypeAlias = "IMiddleware | str"
