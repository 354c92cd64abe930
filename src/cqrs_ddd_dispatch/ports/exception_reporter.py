from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class IExceptionReporter(Protocol):
    """
    Port for reporting exceptions the core handles without re-raising.

    Used for failed attempts that are retried and for after-commit hook
    failures, which must not undo an already committed transaction.
    """

    def report(self, exc: BaseException) -> None:
        ...
