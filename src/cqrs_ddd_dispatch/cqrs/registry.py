"""Handler registries with conflict detection and registration-then-freeze."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ..primitives.exceptions import (
    AmbiguousHandlerError,
    ConfigurationError,
    HandlerNotFoundError,
    HandlerRegistrationError,
)

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)


def _describe(handler: Any) -> str:
    if isinstance(handler, str):
        return handler
    if isinstance(handler, type):
        return handler.__name__
    return type(handler).__name__


class HandlerMap:
    """Maps a message type to exactly one handler.

    A handler may be a class (built with *handler_factory*), an instance or
    callable, or a string name resolved through *container*.

    Lookup tries the exact message type first, then registered base
    classes of the message. When several unrelated base classes match, the
    lookup is ambiguous.

    Parameters
    ----------
    kind:
        Human readable label used in log and error messages.
    handler_factory:
        Optional callable ``(handler_cls) -> handler_instance``.
        Defaults to simple ``handler_cls()`` construction.
    container:
        Optional callable ``(name) -> handler_instance`` for string handlers.
    """

    def __init__(
        self,
        kind: str,
        *,
        handler_factory: Callable[[type[Any]], Any] | None = None,
        container: Callable[[str], Any] | None = None,
    ) -> None:
        self._kind = kind
        self._handlers: dict[type[Any], Any] = {}
        self._handler_factory: Callable[[type[Any]], Any] = handler_factory or (
            lambda cls: cls()
        )
        self._container = container
        self._frozen = False

    # ── Registration ─────────────────────────────────────────────

    def register(self, message_type: type[Any], handler: Any) -> None:
        if self._frozen:
            raise ConfigurationError(
                f"Cannot register {self._kind} handler for "
                f"{message_type.__name__}: registry is frozen."
            )
        existing = self._handlers.get(message_type)
        if existing is not None and existing is not handler:
            msg = (
                f"Duplicate {self._kind} handler for {message_type.__name__}: "
                f"{_describe(existing)} already registered, "
                f"cannot register {_describe(handler)}"
            )
            raise HandlerRegistrationError(msg)
        self._handlers[message_type] = handler
        logger.debug(
            "Registered %s handler %s -> %s",
            self._kind,
            message_type.__name__,
            _describe(handler),
        )

    # ── Lookup ───────────────────────────────────────────────────

    def has(self, message_type: type[Any]) -> bool:
        try:
            self.lookup(message_type)
        except HandlerNotFoundError:
            return False
        return True

    def lookup(self, message_type: type[Any]) -> Any:
        """Return the registered handler reference for *message_type*."""
        handler = self._handlers.get(message_type)
        if handler is not None:
            return handler

        candidates = [t for t in self._handlers if issubclass(message_type, t)]
        if not candidates:
            raise HandlerNotFoundError(message_type)
        most_specific = [
            t
            for t in candidates
            if not any(other is not t and issubclass(other, t) for other in candidates)
        ]
        if len(most_specific) > 1:
            raise AmbiguousHandlerError(message_type, most_specific)
        return self._handlers[most_specific[0]]

    def resolve(self, message_type: type[Any]) -> Any:
        """Return a ready-to-call handler instance for *message_type*."""
        return self.build(self.lookup(message_type))

    def build(self, handler: Any) -> Any:
        if isinstance(handler, str):
            if self._container is None:
                raise ConfigurationError(
                    f"Cannot resolve {self._kind} handler {handler!r} "
                    "without a container."
                )
            return self._container(handler)
        if isinstance(handler, type):
            return self._handler_factory(handler)
        return handler

    # ── Lifecycle / introspection ────────────────────────────────

    def freeze(self) -> None:
        self._frozen = True

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def snapshot(self) -> dict[str, str]:
        return {k.__name__: _describe(v) for k, v in self._handlers.items()}

    def clear(self) -> None:
        """Remove all registrations (testing utility)."""
        self._handlers.clear()
        self._frozen = False


class HandlerRegistry:
    """Primary declarative store for command and query handlers.

    Register handler *classes* (or instances, or container names) during
    bootstrapping. Registering a second handler for the same command or
    query type raises ``HandlerRegistrationError``. Dispatchers freeze the
    registry on first dispatch; later registration raises
    ``ConfigurationError``.
    """

    def __init__(
        self,
        *,
        handler_factory: Callable[[type[Any]], Any] | None = None,
        container: Callable[[str], Any] | None = None,
    ) -> None:
        self._commands = HandlerMap(
            "command", handler_factory=handler_factory, container=container
        )
        self._queries = HandlerMap(
            "query", handler_factory=handler_factory, container=container
        )

    # ── Registration ─────────────────────────────────────────────

    def register_command_handler(self, command_type: type[Any], handler: Any) -> None:
        self._commands.register(command_type, handler)

    def register_query_handler(self, query_type: type[Any], handler: Any) -> None:
        self._queries.register(query_type, handler)

    # ── Lookup ───────────────────────────────────────────────────

    def resolve_command_handler(self, command_type: type[Any]) -> Any:
        return self._commands.resolve(command_type)

    def resolve_query_handler(self, query_type: type[Any]) -> Any:
        return self._queries.resolve(query_type)

    def has_command_handler(self, command_type: type[Any]) -> bool:
        return self._commands.has(command_type)

    def has_query_handler(self, query_type: type[Any]) -> bool:
        return self._queries.has(query_type)

    # ── Lifecycle / introspection ────────────────────────────────

    def freeze(self) -> None:
        self._commands.freeze()
        self._queries.freeze()

    @property
    def is_frozen(self) -> bool:
        return self._commands.is_frozen and self._queries.is_frozen

    def get_registered_handlers(self) -> dict[str, dict[str, str]]:
        """Return a snapshot of all registered handlers (for debugging)."""
        return {
            "commands": self._commands.snapshot(),
            "queries": self._queries.snapshot(),
        }

    def clear(self) -> None:
        """Clear all registered handlers (testing utility)."""
        self._commands.clear()
        self._queries.clear()


__all__ = ["HandlerMap", "HandlerRegistry"]
