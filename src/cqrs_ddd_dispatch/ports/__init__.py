"""Ports: the protocols and base classes infrastructure plugs into."""

from __future__ import annotations

from .event_dispatcher import (
    EventListener,
    EventListenerCallable,
    EventListenerProtocol,
    IDeferredDispatcher,
    IDomainEventDispatcher,
)
from .exception_reporter import IExceptionReporter
from .middleware import IMiddleware, MiddlewareRef, NextHandler
from .outbox import IOutbox, IOutboxStorage, OutboxMessage
from .queue import IQueue
from .unit_of_work import UnitOfWork
from .validation import IValidator

__all__ = [
    "EventListener",
    "EventListenerCallable",
    "EventListenerProtocol",
    "IDeferredDispatcher",
    "IDomainEventDispatcher",
    "IExceptionReporter",
    "IMiddleware",
    "IOutbox",
    "IOutboxStorage",
    "IQueue",
    "IValidator",
    "MiddlewareRef",
    "NextHandler",
    "OutboxMessage",
    "UnitOfWork",
]
