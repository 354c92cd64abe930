"""MiddlewareRegistry — named middleware resolved lazily into pipelines."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ..primitives.exceptions import ConfigurationError, MiddlewareNotFoundError
from .definition import MiddlewareDefinition

if TYPE_CHECKING:
    from collections.abc import Callable

    from ..ports.middleware import IMiddleware

logger = logging.getLogger(__name__)


class MiddlewareRegistry:
    """Container of middleware that pipelines reference by name.

    Messages, handlers and dispatchers may list middleware as strings; the
    pipeline builder resolves each name here when a message is dispatched,
    so instantiation is deferred until first use.

    Registration happens at startup. Once :meth:`freeze` has been called
    (dispatchers do this on first dispatch) the registry is read-only.
    """

    def __init__(self) -> None:
        self._definitions: dict[str, MiddlewareDefinition] = {}
        self._instances: dict[str, IMiddleware] = {}
        self._frozen = False

    # ── Registration ─────────────────────────────────────────────

    def register(
        self,
        name: str,
        middleware_cls: type[Any] | None = None,
        *,
        factory: Callable[..., IMiddleware] | None = None,
        singleton: bool = True,
        **kwargs: object,
    ) -> None:
        """Register a middleware class or factory under *name*.

        Parameters
        ----------
        name:
            Name used to reference the middleware from pipelines.
        middleware_cls:
            The middleware class (must implement ``__call__(message, next)``).
        factory:
            Optional custom constructor.
        singleton:
            Reuse one built instance. Default ``True``.
        **kwargs:
            Passed to the constructor or factory.
        """
        if self._frozen:
            raise ConfigurationError(
                f"Cannot register middleware {name!r}: registry is frozen."
            )
        if not name:
            raise ConfigurationError("Middleware name must be a non-empty string.")
        if middleware_cls is None and factory is None:
            raise ConfigurationError(
                f"Middleware {name!r} needs a class or a factory."
            )
        self._definitions[name] = MiddlewareDefinition(
            name=name,
            middleware_cls=middleware_cls,
            factory=factory,
            kwargs=kwargs,
            singleton=singleton,
        )
        self._instances.pop(name, None)
        logger.debug("Registered middleware %s", name)

    def add(
        self,
        name: str,
        *,
        factory: Callable[..., IMiddleware] | None = None,
        singleton: bool = True,
        **kwargs: object,
    ) -> Callable[[type[Any]], type[Any]]:
        """Decorator-style registration.

        Usage::

            @registry.add("log")
            class LogEverything: ...
        """

        def wrapper(cls: type[Any]) -> type[Any]:
            self.register(
                name, cls, factory=factory, singleton=singleton, **kwargs
            )
            return cls

        return wrapper

    # ── Retrieval ────────────────────────────────────────────────

    def has(self, name: str) -> bool:
        return name in self._definitions

    def get(self, name: str) -> IMiddleware:
        """Return the middleware registered as *name*, building it if needed."""
        defn = self._definitions.get(name)
        if defn is None:
            raise MiddlewareNotFoundError(f"Unrecognised middleware name: {name}")
        if not defn.singleton:
            return defn.build()
        instance = self._instances.get(name)
        if instance is None:
            instance = defn.build()
            self._instances[name] = instance
        return instance

    # ── Lifecycle ────────────────────────────────────────────────

    def freeze(self) -> None:
        self._frozen = True

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def clear(self) -> None:
        """Remove all registrations (testing utility)."""
        self._definitions.clear()
        self._instances.clear()
        self._frozen = False
