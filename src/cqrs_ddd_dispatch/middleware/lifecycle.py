"""Setup and teardown around a dispatch."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..ports.middleware import IMiddleware
from ..primitives.exceptions import ConfigurationError
from ..utils import maybe_await

if TYPE_CHECKING:
    from collections.abc import Callable

    from ..ports.middleware import NextHandler


class SetupBeforeDispatch(IMiddleware):
    """Runs *callback* before dispatch.

    The callback may return a zero-argument teardown callable, which runs
    after dispatch whether or not the rest of the pipeline raised.
    """

    def __init__(self, callback: Callable[[], Any]) -> None:
        self._callback = callback

    async def __call__(self, message: Any, next_handler: NextHandler) -> Any:
        teardown = await maybe_await(self._callback())
        if teardown is not None and not callable(teardown):
            raise ConfigurationError(
                "Expecting setup function to return None or a teardown callable."
            )
        try:
            return await next_handler(message)
        finally:
            if teardown is not None:
                await maybe_await(teardown())


class TearDownAfterDispatch(IMiddleware):
    def __init__(self, callback: Callable[[], Any]) -> None:
        self._callback = callback

    async def __call__(self, message: Any, next_handler: NextHandler) -> Any:
        try:
            return await next_handler(message)
        finally:
            await maybe_await(self._callback())
