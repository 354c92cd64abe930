"""Logging middleware for every dispatch pipeline."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

from ..cqrs.command import Command
from ..logging.context import ContextFactory, SimpleContextFactory
from ..ports.middleware import IMiddleware

if TYPE_CHECKING:
    from ..ports.middleware import NextHandler


class _LogDispatch(IMiddleware):
    """Logs before and after the rest of the pipeline runs.

    Log records carry structured context from the *context* factory in
    ``extra``, under the message key and, after dispatch, ``"result"``.
    """

    before = "Dispatching %s."
    after = "Dispatched %s in %.2fms."
    failed = "%s failed after %.2fms."

    def __init__(
        self,
        logger: logging.Logger | None = None,
        *,
        dispatch_level: int = logging.DEBUG,
        dispatched_level: int = logging.INFO,
        context: ContextFactory | None = None,
    ) -> None:
        self._logger = logger or logging.getLogger("cqrs_ddd.middleware")
        self._dispatch_level = dispatch_level
        self._dispatched_level = dispatched_level
        self._context = context or SimpleContextFactory()

    def _key(self, message: Any) -> str:
        return "payload"

    async def __call__(self, message: Any, next_handler: NextHandler) -> Any:
        name = type(message).__name__
        self._logger.log(
            self._dispatch_level,
            self.before,
            name,
            extra={self._key(message): self._context.make(message)},
        )
        start = time.perf_counter()
        try:
            result = await next_handler(message)
        except Exception:
            elapsed = (time.perf_counter() - start) * 1000
            self._logger.error(self.failed, name, elapsed)
            raise
        elapsed = (time.perf_counter() - start) * 1000
        extra = {"result": self._context.make(result)} if result is not None else {}
        self._logger.log(self._dispatched_level, self.after, name, elapsed, extra=extra)
        return result


class LogMessageDispatch(_LogDispatch):
    """Logs command and query dispatch on the bus."""

    before = "Bus dispatching %s."
    after = "Bus dispatched %s in %.2fms."

    def _key(self, message: Any) -> str:
        return "command" if isinstance(message, Command) else "query"


class LogDomainEventDispatch(_LogDispatch):
    before = "Dispatching domain event %s."
    after = "Dispatched domain event %s in %.2fms."

    def _key(self, message: Any) -> str:
        return "event"


class LogInboundEvent(_LogDispatch):
    before = "Receiving inbound integration event %s."
    after = "Received inbound integration event %s in %.2fms."

    def _key(self, message: Any) -> str:
        return "event"


class LogOutboundEvent(_LogDispatch):
    before = "Publishing integration event %s."
    after = "Published integration event %s in %.2fms."

    def _key(self, message: Any) -> str:
        return "event"


class LogPushedToQueue(_LogDispatch):
    before = "Queuing command %s."
    after = "Queued command %s in %.2fms."

    def _key(self, message: Any) -> str:
        return "command"
