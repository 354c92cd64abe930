"""MessageBus — single entry point over the dispatchers and the unit of work."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

from .primitives.exceptions import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from .cqrs.command import Command
    from .cqrs.dispatcher import CommandDispatcher, QueryDispatcher
    from .cqrs.query import Query
    from .domain.events import DomainEvent
    from .integration.events import IntegrationEvent
    from .integration.inbound import InboundEventDispatcher
    from .ports.event_dispatcher import IDomainEventDispatcher
    from .results.result import Result
    from .unit_of_work.manager import UnitOfWorkManager

TResult = TypeVar("TResult")
TReturn = TypeVar("TReturn")


class MessageBus:
    """Routes every kind of message to the component that owns it.

    The bus holds no dispatch logic of its own; each operation forwards to
    the configured component. Calling an operation whose component was not
    configured raises
    :class:`~cqrs_ddd_dispatch.primitives.exceptions.ConfigurationError`.

    Parameters
    ----------
    commands:
        :class:`~cqrs_ddd_dispatch.cqrs.dispatcher.CommandDispatcher`; also
        used for :meth:`queue_command` when it has a queue.
    queries:
        :class:`~cqrs_ddd_dispatch.cqrs.dispatcher.QueryDispatcher`.
    unit_of_work:
        :class:`~cqrs_ddd_dispatch.unit_of_work.manager.UnitOfWorkManager`.
    events:
        Domain-event dispatcher, normally a
        :class:`~cqrs_ddd_dispatch.domain.dispatcher.DeferredDispatcher`.
    inbound:
        :class:`~cqrs_ddd_dispatch.integration.inbound.InboundEventDispatcher`.
    """

    def __init__(
        self,
        *,
        commands: CommandDispatcher | None = None,
        queries: QueryDispatcher | None = None,
        unit_of_work: UnitOfWorkManager | None = None,
        events: IDomainEventDispatcher | None = None,
        inbound: InboundEventDispatcher | None = None,
    ) -> None:
        self._commands = commands
        self._queries = queries
        self._unit_of_work = unit_of_work
        self._events = events
        self._inbound = inbound

    async def dispatch_command(self, command: Command[TResult]) -> Result[TResult]:
        return await self._require(self._commands, "command dispatcher").dispatch(
            command
        )

    async def dispatch_query(self, query: Query[TResult]) -> Result[TResult]:
        return await self._require(self._queries, "query dispatcher").dispatch(query)

    async def queue_command(self, command: Command[Any]) -> None:
        await self._require(self._commands, "command dispatcher").queue(command)

    async def dispatch_inbound_event(self, event: IntegrationEvent) -> None:
        await self._require(self._inbound, "inbound event dispatcher").dispatch(
            event
        )

    async def run_unit_of_work(
        self,
        body: Callable[[], Awaitable[TReturn] | TReturn],
        attempts: int = 1,
    ) -> TReturn:
        """Execute *body* in a unit of work; see ``UnitOfWorkManager.execute``."""
        manager = self._require(self._unit_of_work, "unit of work manager")
        return await manager.execute(body, attempts)

    async def raise_domain_event(self, event: DomainEvent) -> None:
        """Hand *event* to the domain-event dispatcher.

        With a deferred dispatcher this must happen inside a unit of work;
        listeners see the event only after that unit of work commits.
        """
        await self._require(self._events, "domain event dispatcher").dispatch(event)

    @staticmethod
    def _require(component: Any, name: str) -> Any:
        if component is None:
            raise ConfigurationError(f"No {name} configured on the message bus.")
        return component
