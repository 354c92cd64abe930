"""Unit-of-work middleware — run the rest of the pipeline transactionally."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..ports.middleware import IMiddleware
from ..primitives.exceptions import AbortOnFailure
from ..results.result import Result

if TYPE_CHECKING:
    from ..ports.middleware import NextHandler
    from ..unit_of_work.manager import UnitOfWorkManager


class ExecuteInUnitOfWork(IMiddleware):
    """Executes the command handler inside a unit of work.

    A failed Result from the handler is raised as
    :class:`~cqrs_ddd_dispatch.primitives.exceptions.AbortOnFailure` inside
    the transaction, so it rolls back, and then returned unchanged.

    Usage::

        class PlaceOrderHandler(CommandHandler[OrderId]):
            def middleware(self):
                return [ExecuteInUnitOfWork(uow_manager, attempts=3)]
    """

    def __init__(self, manager: UnitOfWorkManager, attempts: int = 1) -> None:
        self._manager = manager
        self._attempts = attempts

    async def __call__(self, message: Any, next_handler: NextHandler) -> Any:
        async def body() -> Any:
            result = await next_handler(message)
            if isinstance(result, Result) and result.failure:
                raise AbortOnFailure(result)
            return result

        try:
            return await self._manager.execute(body, self._attempts)
        except AbortOnFailure as exc:
            return exc.result


class HandleInUnitOfWork(IMiddleware):
    """Handles an inbound integration event inside a unit of work."""

    def __init__(self, manager: UnitOfWorkManager, attempts: int = 1) -> None:
        self._manager = manager
        self._attempts = attempts

    async def __call__(self, message: Any, next_handler: NextHandler) -> Any:
        return await self._manager.execute(
            lambda: next_handler(message), self._attempts
        )
