from __future__ import annotations

from typing import (
    TYPE_CHECKING,
    Protocol,
    TypeAlias,
    TypeVar,
    runtime_checkable,
)

if TYPE_CHECKING:
    from collections.abc import Awaitable

    from ..domain.events import DomainEvent

E_contra = TypeVar("E_contra", bound="DomainEvent", contravariant=True)


class EventListenerProtocol(Protocol[E_contra]):
    """
    Protocol for listener objects with a handle(event) method.

    Contravariant TypeVar ensures proper Liskov substitution:
    a listener for a supertype can be used where a listener for
    a subtype is expected.
    """

    def handle(self, event: E_contra) -> Awaitable[None] | None:
        ...


class EventListenerCallable(Protocol[E_contra]):
    def __call__(self, event: E_contra) -> Awaitable[None] | None:
        ...


#: A listener object, a plain callable, or a name bound in a ListenerContainer.
EventListener: TypeAlias = "EventListenerCallable | EventListenerProtocol | str"


@runtime_checkable
class IDomainEventDispatcher(Protocol):
    """Protocol for domain-event dispatching."""

    async def dispatch(self, event: DomainEvent) -> None:
        """Dispatch *event* to its listeners (possibly deferred)."""
        ...


@runtime_checkable
class IDeferredDispatcher(IDomainEventDispatcher, Protocol):
    """Dispatcher that buffers events until the unit of work commits."""

    async def flush(self) -> None:
        """Dispatch every buffered event, in the order raised."""
        ...

    def forget(self) -> None:
        """Discard buffered events without dispatching them."""
        ...
