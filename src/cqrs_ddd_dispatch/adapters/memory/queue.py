"""InMemoryQueue — records queued commands for unit tests."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ...ports.queue import IQueue

if TYPE_CHECKING:
    from ...cqrs.command import Command


class InMemoryQueue(IQueue):
    def __init__(self) -> None:
        self.commands: list[Command[Any]] = []

    async def push(self, command: Command[Any]) -> None:
        self.commands.append(command)

    def __len__(self) -> int:
        return len(self.commands)
