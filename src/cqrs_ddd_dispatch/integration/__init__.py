"""Integration events: outbound publishing via the outbox, inbound dispatch."""

from __future__ import annotations

from .events import IntegrationEvent
from .inbound import InboundEventDispatcher, InboundEventHandler, SwallowInboundEvent
from .outbound import OutboundEventPublisher
from .outbox import StorageOutbox

__all__ = [
    "InboundEventDispatcher",
    "InboundEventHandler",
    "IntegrationEvent",
    "OutboundEventPublisher",
    "StorageOutbox",
    "SwallowInboundEvent",
]
