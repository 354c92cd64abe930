"""Domain Event base class."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import ClassVar

from pydantic import Field

from ..messages import Message


class DomainEvent(Message):
    """Base class for all Domain Events.

    Events are immutable and record when they occurred. Raised during a unit
    of work, they are buffered and only reach listeners once the transaction
    has committed, unless the event class sets ``occurs_immediately``.
    """

    occurs_immediately: ClassVar[bool] = False

    occurred_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
