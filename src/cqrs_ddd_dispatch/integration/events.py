"""Integration Event base class."""

from __future__ import annotations

from datetime import datetime, timezone
from uuid import uuid4

from pydantic import Field

from ..messages import Message


class IntegrationEvent(Message):
    """Base class for events that cross module or service boundaries.

    Each event carries a unique ``uuid`` so subscribers can de-duplicate,
    and the time it occurred. Outbound events are handed to the outbox;
    inbound events are dispatched to exactly one inbound handler.
    """

    uuid: str = Field(default_factory=lambda: str(uuid4()))
    occurred_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
