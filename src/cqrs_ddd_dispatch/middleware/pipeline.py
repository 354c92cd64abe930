"""build_pipeline — construct middleware chain."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..primitives.exceptions import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from ..ports.middleware import IMiddleware, MiddlewareRef
    from .registry import MiddlewareRegistry


def resolve_middleware(
    middlewares: Iterable[MiddlewareRef],
    registry: MiddlewareRegistry | None = None,
) -> list[IMiddleware]:
    """Turn middleware references into middleware objects.

    String references are looked up in *registry*.
    """
    resolved: list[IMiddleware] = []
    for mw in middlewares:
        if isinstance(mw, str):
            if registry is None:
                raise ConfigurationError(
                    f"Cannot resolve middleware {mw!r} without a MiddlewareRegistry."
                )
            resolved.append(registry.get(mw))
        else:
            resolved.append(mw)
    return resolved


def build_pipeline(
    middlewares: Iterable[MiddlewareRef],
    handler_fn: Callable[[Any], Any],
    *,
    registry: MiddlewareRegistry | None = None,
) -> Callable[[Any], Any]:
    """Build a LIFO middleware chain ending at *handler_fn*.

    The first middleware in the list is the **outermost** wrapper.
    Each middleware must implement: ``async def __call__(message, next_handler)``.
    Named middleware are resolved through *registry* while the chain is built.
    """
    pipeline: Callable[[Any], Any] = handler_fn

    for mw in reversed(resolve_middleware(middlewares, registry)):
        current_next = pipeline  # capture for closure

        async def _wrapper(
            message: Any,
            _mw: IMiddleware = mw,
            _next: Callable[[Any], Any] = current_next,
        ) -> Any:
            return await _mw(message, _next)

        pipeline = _wrapper

    return pipeline


class PipelineBuilder:
    """Collects middleware stages then builds one pipeline.

    Dispatchers use this to stack their own middleware, the message's and
    the handler's, in that order::

        pipeline = (
            PipelineBuilder(registry)
            .through(self._pipes)
            .through(message.middleware())
            .build(terminal)
        )
    """

    def __init__(self, registry: MiddlewareRegistry | None = None) -> None:
        self._registry = registry
        self._stages: list[MiddlewareRef] = []

    def through(self, middlewares: Iterable[MiddlewareRef]) -> PipelineBuilder:
        self._stages.extend(middlewares)
        return self

    def build(self, handler_fn: Callable[[Any], Any]) -> Callable[[Any], Any]:
        return build_pipeline(self._stages, handler_fn, registry=self._registry)
