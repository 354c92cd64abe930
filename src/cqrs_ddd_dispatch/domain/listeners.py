"""Listener container and the adapter used to invoke listeners."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ..primitives.exceptions import ConfigurationError, ListenerNotFoundError
from ..utils import maybe_await

if TYPE_CHECKING:
    from collections.abc import Callable

    from .events import DomainEvent

logger = logging.getLogger("cqrs_ddd.events")


class ListenerContainer:
    """Resolves listeners bound by name.

    Factories run on every lookup so listeners are built lazily, when an
    event is actually dispatched to them.
    """

    def __init__(self) -> None:
        self._bindings: dict[str, Callable[[], Any]] = {}

    def bind(self, name: str, factory: Callable[[], Any]) -> None:
        if not name:
            raise ConfigurationError("Listener name must be a non-empty string.")
        self._bindings[name] = factory

    def has(self, name: str) -> bool:
        return name in self._bindings

    def get(self, name: str) -> Any:
        factory = self._bindings.get(name)
        if factory is None:
            raise ListenerNotFoundError(f"Unrecognised listener name: {name}")
        listener = factory()
        if listener is None:
            raise ConfigurationError(
                f"Listener binding for {name} must return an object."
            )
        return listener


async def notify(listener: Any, event: DomainEvent) -> None:
    """Invoke *listener* for *event*.

    Listeners are objects with a ``handle(event)`` method or plain callables;
    either may be sync or async.
    """
    if hasattr(listener, "handle"):
        await maybe_await(listener.handle(event))
    elif callable(listener):
        await maybe_await(listener(event))
    else:
        raise TypeError(
            f"Listener {type(listener).__name__} must be a callable or have a "
            "handle() method"
        )
