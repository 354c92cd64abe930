"""CommandQueuer — hands commands to the queue port."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .command import Command

if TYPE_CHECKING:
    from ..ports.queue import IQueue

logger = logging.getLogger("cqrs_ddd.bus")


class CommandQueuer:
    """Queues commands for asynchronous dispatch.

    Only commands are accepted; queries are never queueable.
    """

    def __init__(self, queue: IQueue) -> None:
        self._queue = queue

    async def queue(self, command: Command[Any]) -> None:
        if not isinstance(command, Command):
            raise TypeError(
                f"Only commands can be queued, got {type(command).__name__}."
            )
        logger.debug("Queueing command %s", type(command).__name__)
        await self._queue.push(command)
