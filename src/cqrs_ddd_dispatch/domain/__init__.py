"""Domain events and their dispatchers."""

from __future__ import annotations

from .dispatcher import DeferredDispatcher, DomainEventDispatcher
from .events import DomainEvent
from .listeners import ListenerContainer

__all__ = [
    "DeferredDispatcher",
    "DomainEvent",
    "DomainEventDispatcher",
    "ListenerContainer",
]
