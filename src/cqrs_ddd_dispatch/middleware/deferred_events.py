"""FlushDeferredEvents — flush or forget deferred events after the handler."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..ports.middleware import IMiddleware
from ..results.result import Result

if TYPE_CHECKING:
    from ..ports.event_dispatcher import IDeferredDispatcher
    from ..ports.middleware import NextHandler


class FlushDeferredEvents(IMiddleware):
    """Flushes deferred domain events as soon as the handler succeeds.

    A failed Result or an exception makes the dispatcher forget the buffered
    events instead. Use it where events should reach listeners before the
    surrounding transaction commits; otherwise the
    :class:`~cqrs_ddd_dispatch.domain.dispatcher.DeferredDispatcher` already
    flushes after commit on its own.
    """

    def __init__(self, dispatcher: IDeferredDispatcher) -> None:
        self._dispatcher = dispatcher

    async def __call__(self, message: Any, next_handler: NextHandler) -> Any:
        try:
            result = await next_handler(message)
        except Exception:
            self._dispatcher.forget()
            raise

        if isinstance(result, Result) and result.failure:
            self._dispatcher.forget()
        else:
            await self._dispatcher.flush()
        return result
