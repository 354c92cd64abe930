"""In-memory adapters for testing."""

from __future__ import annotations

from .exception_reporter import InMemoryExceptionReporter
from .outbox import InMemoryOutbox, InMemoryOutboxStorage
from .queue import InMemoryQueue
from .unit_of_work import InMemoryUnitOfWork, InMemoryUnitOfWorkFactory

__all__ = [
    "InMemoryExceptionReporter",
    "InMemoryOutbox",
    "InMemoryOutboxStorage",
    "InMemoryQueue",
    "InMemoryUnitOfWork",
    "InMemoryUnitOfWorkFactory",
]
