"""InMemoryUnitOfWork — tracks commit/rollback calls for unit tests."""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

from ...ports.unit_of_work import UnitOfWork

if TYPE_CHECKING:
    from collections.abc import Iterable


class InMemoryUnitOfWork(UnitOfWork):
    """In-memory implementation of UnitOfWork for testing.

    Records commit/rollback calls for assertions. When *commit_error* is
    given, ``commit()`` raises it instead of committing, which is how tests
    simulate a serialization failure at commit time.
    """

    def __init__(self, commit_error: BaseException | None = None) -> None:
        self.committed: bool = False
        self.rolled_back: bool = False
        self.commit_count: int = 0
        self.rollback_count: int = 0
        self._commit_error = commit_error

    async def commit(self) -> None:
        if self.committed or self.rolled_back:
            return
        if self._commit_error is not None:
            raise self._commit_error
        self.committed = True
        self.commit_count += 1

    async def rollback(self) -> None:
        if self.committed or self.rolled_back:
            return
        self.rolled_back = True
        self.rollback_count += 1


class InMemoryUnitOfWorkFactory:
    """Creates a fresh :class:`InMemoryUnitOfWork` per attempt.

    *commit_errors* are handed out in order, one per created unit of work;
    once exhausted, units of work commit normally.

    Usage::

        factory = InMemoryUnitOfWorkFactory([RetryableError("deadlock")])
        manager = UnitOfWorkManager(factory)
        ...
        assert [uow.committed for uow in factory.created] == [False, True]
    """

    def __init__(self, commit_errors: Iterable[BaseException] = ()) -> None:
        self._commit_errors = deque(commit_errors)
        self.created: list[InMemoryUnitOfWork] = []

    def __call__(self) -> InMemoryUnitOfWork:
        error = self._commit_errors.popleft() if self._commit_errors else None
        uow = InMemoryUnitOfWork(commit_error=error)
        self.created.append(uow)
        return uow

    @property
    def commit_count(self) -> int:
        return sum(uow.commit_count for uow in self.created)
