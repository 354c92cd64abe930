"""Command base class — immutable intent to change state."""

from __future__ import annotations

from typing import Generic

from typing_extensions import TypeVar

from ..messages import Message

TResult = TypeVar("TResult", default=None)


class Command(Message, Generic[TResult]):
    """
    Base for all commands.

    Commands represent write operations that change system state. They:
    - Are named with imperative verbs (e.g., CreateOrder, CancelOrder)
    - Are handled by exactly one handler, which returns a ``Result[TResult]``
    - Can be validated, logged, run in a unit of work or queued via middleware

    Usage::

        class CreateOrder(Command[OrderId]):
            items: list[str]
    """
