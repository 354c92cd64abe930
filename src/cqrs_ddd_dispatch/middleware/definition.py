"""MiddlewareDefinition — descriptor for a named middleware."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..utils import default_dict_factory

if TYPE_CHECKING:
    from collections.abc import Callable

    from ..ports.middleware import IMiddleware


@dataclass
class MiddlewareDefinition:
    """Descriptor for a middleware registered under a name.

    Supports **deferred instantiation**: supply *middleware_cls* and
    optional *factory* for lazy construction. With ``singleton=True`` the
    built instance is reused for every pipeline.
    """

    name: str
    middleware_cls: type[IMiddleware] | None = None
    factory: Callable[..., IMiddleware] | None = None
    kwargs: dict[str, object] = field(default_factory=default_dict_factory)
    singleton: bool = True

    def build(self) -> IMiddleware:
        """Construct the middleware instance."""
        if self.factory is not None:
            return self.factory(**self.kwargs)
        if self.middleware_cls is None:
            raise TypeError(f"Middleware {self.name!r} has no class or factory.")
        return self.middleware_cls(**self.kwargs)
