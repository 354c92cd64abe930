"""Message — base for commands, queries and events."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

if TYPE_CHECKING:
    from .ports.middleware import MiddlewareRef


class Message(BaseModel):
    """Immutable message with structural identity.

    Two messages are equal when they have the same type and field values.
    A message may declare middleware it must always be routed through by
    overriding :meth:`middleware`; these run after the middleware configured
    on the dispatcher.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    def middleware(self) -> list[MiddlewareRef]:
        """Middleware (objects or registered names) specific to this message."""
        return []
