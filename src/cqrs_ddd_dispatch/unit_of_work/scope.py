"""UnitOfWorkScope — per-attempt state bound to the current context."""

from __future__ import annotations

from collections import deque
from contextvars import ContextVar
from typing import TYPE_CHECKING, Any

from ..primitives.exceptions import UnitOfWorkError
from ..utils import maybe_await

if TYPE_CHECKING:
    from collections.abc import Callable

    from ..domain.events import DomainEvent
    from ..ports.unit_of_work import UnitOfWork

#: ContextVar tracking the active scope; ``None`` means no unit of work is
#: executing in this context.
_current_scope: ContextVar[UnitOfWorkScope | None] = ContextVar(
    "current_unit_of_work_scope", default=None
)


def get_current_scope() -> UnitOfWorkScope | None:
    """Return the active unit-of-work scope (or *None* outside one)."""
    return _current_scope.get()


class UnitOfWorkScope:
    """State owned by one attempt of a unit of work.

    Holds the before-commit and after-commit hook queues and the deferred
    domain-event buffers. A scope is created when an attempt starts and
    cleared when it ends, whether it committed or not; nothing in it
    survives into a retry or into the next unit of work.
    """

    def __init__(self, attempt: int = 1) -> None:
        self.attempt = attempt
        self.unit_of_work: UnitOfWork | None = None
        self.committed = False
        self._before_commit: deque[Callable[[], Any]] = deque()
        self._after_commit: deque[Callable[[], Any]] = deque()
        self._event_buffers: dict[object, deque[DomainEvent]] = {}

    # ── Hooks ────────────────────────────────────────────────────

    def before_commit(self, callback: Callable[[], Any]) -> None:
        if self.committed:
            raise UnitOfWorkError(
                "Cannot queue a before commit callback as unit of work has "
                "been committed."
            )
        self._before_commit.append(callback)

    def after_commit(self, callback: Callable[[], Any]) -> None:
        self._after_commit.append(callback)

    async def run_before_commit(self) -> None:
        """Run before-commit hooks in order; a failure aborts the commit."""
        while self._before_commit:
            callback = self._before_commit.popleft()
            await maybe_await(callback())

    def next_after_commit(self) -> Callable[[], Any] | None:
        return self._after_commit.popleft() if self._after_commit else None

    @property
    def pending_hooks(self) -> tuple[int, int]:
        """Number of queued (before-commit, after-commit) hooks."""
        return len(self._before_commit), len(self._after_commit)

    # ── Deferred events ──────────────────────────────────────────

    def event_buffer(self, owner: object) -> deque[DomainEvent] | None:
        return self._event_buffers.get(owner)

    def open_event_buffer(self, owner: object) -> deque[DomainEvent]:
        buffer: deque[DomainEvent] = deque()
        self._event_buffers[owner] = buffer
        return buffer

    def close_event_buffer(self, owner: object) -> None:
        self._event_buffers.pop(owner, None)

    # ── Lifecycle ────────────────────────────────────────────────

    def mark_committed(self) -> None:
        self.committed = True

    def clear(self) -> None:
        self._before_commit.clear()
        self._after_commit.clear()
        self._event_buffers.clear()
        self.unit_of_work = None
