"""UnitOfWorkManager — transactional execution with retry and commit hooks."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, TypeVar

from ..logging.reporter import LoggingExceptionReporter
from ..primitives.exceptions import (
    ConfigurationError,
    RetryableError,
    RetryAttemptsExhaustedError,
    UnitOfWorkError,
)
from ..utils import maybe_await
from .scope import UnitOfWorkScope, _current_scope, get_current_scope

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from ..ports.exception_reporter import IExceptionReporter
    from ..ports.unit_of_work import UnitOfWork

logger = logging.getLogger("cqrs_ddd.uow")

TReturn = TypeVar("TReturn")


class UnitOfWorkManager:
    """Runs a body of work inside a transaction, with bounded retry.

    For every attempt the manager:

    1. opens a new :class:`UnitOfWorkScope` and a new transaction from
       *uow_factory*;
    2. awaits the body;
    3. runs before-commit hooks in registration order (a failure aborts
       the commit exactly as if the body had failed);
    4. commits;
    5. runs after-commit hooks in registration order. Failures here are
       reported and logged, the commit stands.

    A :class:`~cqrs_ddd_dispatch.primitives.exceptions.RetryableError`
    raised by steps 2-4 starts a fresh attempt while attempts remain; the
    failed attempt's hooks and buffered domain events are thrown away with
    its scope. Any other exception propagates immediately.

    Calling :meth:`execute` while a unit of work is already active joins it:
    the body runs inside the enclosing transaction and its hooks attach to
    the enclosing scope. From an after-commit hook it starts a new one.

    Parameters
    ----------
    uow_factory:
        Callable returning a :class:`~cqrs_ddd_dispatch.ports.unit_of_work.UnitOfWork`
        async context manager.
    reporter:
        Receives exceptions that are handled without being re-raised.
        Defaults to :class:`~cqrs_ddd_dispatch.logging.reporter.LoggingExceptionReporter`.
    """

    def __init__(
        self,
        uow_factory: Callable[[], UnitOfWork],
        *,
        reporter: IExceptionReporter | None = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._reporter: IExceptionReporter = reporter or LoggingExceptionReporter()

    # ── Public API ───────────────────────────────────────────────

    async def execute(
        self,
        body: Callable[[], Awaitable[TReturn] | TReturn],
        attempts: int = 1,
    ) -> TReturn:
        """Execute *body* in a unit of work, retrying up to *attempts* times."""
        if attempts < 1:
            raise ConfigurationError(
                f"Unit of work attempts must be greater than zero, got {attempts}."
            )

        scope = get_current_scope()
        if scope is not None and not scope.committed:
            logger.debug("Joining enclosing unit of work")
            return await maybe_await(body())

        for attempt in range(1, attempts):
            try:
                return await self._transaction(body, attempt)
            except RetryableError as exc:
                logger.warning(
                    "Unit of work attempt %d/%d failed, retrying: %s",
                    attempt,
                    attempts,
                    exc,
                )
                self._reporter.report(exc)

        try:
            return await self._transaction(body, attempts)
        except RetryableError as exc:
            raise RetryAttemptsExhaustedError(attempts, exc) from exc

    def before_commit(self, callback: Callable[[], Any]) -> None:
        """Queue *callback* to run just before the active transaction commits."""
        scope = get_current_scope()
        if scope is None:
            raise UnitOfWorkError(
                "Cannot queue a before commit callback when not executing a "
                "unit of work."
            )
        scope.before_commit(callback)

    def after_commit(self, callback: Callable[[], Any]) -> None:
        """Queue *callback* to run after the active transaction commits."""
        scope = get_current_scope()
        if scope is None:
            raise UnitOfWorkError(
                "Cannot queue an after commit callback when not executing a "
                "unit of work."
            )
        scope.after_commit(callback)

    @property
    def in_unit_of_work(self) -> bool:
        return get_current_scope() is not None

    # ── Internals ────────────────────────────────────────────────

    async def _transaction(
        self,
        body: Callable[[], Awaitable[TReturn] | TReturn],
        attempt: int,
    ) -> TReturn:
        scope = UnitOfWorkScope(attempt)
        token = _current_scope.set(scope)
        try:
            async with self._uow_factory() as uow:
                scope.unit_of_work = uow
                value = await maybe_await(body())
                await scope.run_before_commit()
            scope.mark_committed()
            logger.debug("Unit of work committed (attempt %d)", attempt)
            await self._run_after_commit(scope)
            return value
        finally:
            _current_scope.reset(token)
            scope.clear()

    async def _run_after_commit(self, scope: UnitOfWorkScope) -> None:
        while (callback := scope.next_after_commit()) is not None:
            try:
                await maybe_await(callback())
            except Exception as exc:
                logger.error("Error in after-commit hook: %s", exc)
                self._reporter.report(exc)
