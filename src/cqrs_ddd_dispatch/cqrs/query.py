"""Query base class — immutable request for data."""

from __future__ import annotations

from typing import Generic

from typing_extensions import TypeVar

from ..messages import Message

TResult = TypeVar("TResult", default=None)


class Query(Message, Generic[TResult]):
    """Base class for all Queries.

    Queries represent a request for data and **must** be immutable. Their
    handlers must not change external state, and queries can never be
    pushed onto a queue.
    """
