"""cqrs-ddd-dispatch — commands, queries, units of work and deferred events."""

from __future__ import annotations

from .bus import MessageBus
from .cqrs import (
    Command,
    CommandDispatcher,
    CommandHandler,
    CommandQueuer,
    HandlerRegistry,
    Query,
    QueryDispatcher,
    QueryHandler,
)
from .domain import (
    DeferredDispatcher,
    DomainEvent,
    DomainEventDispatcher,
    ListenerContainer,
)
from .integration import (
    InboundEventDispatcher,
    InboundEventHandler,
    IntegrationEvent,
    OutboundEventPublisher,
    StorageOutbox,
    SwallowInboundEvent,
)
from .messages import Message
from .middleware import MiddlewareRegistry, build_pipeline
from .queue import ComponentQueue
from .results import Error, ErrorCode, Result
from .unit_of_work import UnitOfWorkManager, get_current_scope

__version__ = "0.1.0"

__all__ = [
    "Command",
    "CommandDispatcher",
    "CommandHandler",
    "CommandQueuer",
    "ComponentQueue",
    "DeferredDispatcher",
    "DomainEvent",
    "DomainEventDispatcher",
    "Error",
    "ErrorCode",
    "HandlerRegistry",
    "InboundEventDispatcher",
    "InboundEventHandler",
    "IntegrationEvent",
    "ListenerContainer",
    "Message",
    "MessageBus",
    "MiddlewareRegistry",
    "OutboundEventPublisher",
    "Query",
    "QueryDispatcher",
    "QueryHandler",
    "Result",
    "StorageOutbox",
    "SwallowInboundEvent",
    "UnitOfWorkManager",
    "build_pipeline",
    "get_current_scope",
]
