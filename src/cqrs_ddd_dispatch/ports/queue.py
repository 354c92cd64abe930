"""IQueue — port for asynchronous command execution."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..cqrs.command import Command


@runtime_checkable
class IQueue(Protocol):
    """
    Port for pushing commands onto a queue (job runner, broker, ...).

    Fire-and-forget: no Result is produced, and delivery retry belongs to
    the adapter, not to the core.
    """

    async def push(self, command: Command[Any]) -> None:
        ...
