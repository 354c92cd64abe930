"""UnitOfWork — transactional port driven by the UnitOfWorkManager."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

logger = logging.getLogger("cqrs_ddd.uow")


class UnitOfWork(ABC):
    """
    Abstract transactional boundary (database transaction, session, ...).

    Infrastructure packages extend this class. The
    :class:`~cqrs_ddd_dispatch.unit_of_work.manager.UnitOfWorkManager` opens
    one instance per attempt with ``async with`` and owns the commit hooks;
    implementations only have to commit and roll back.

    ``commit()`` may raise
    :class:`~cqrs_ddd_dispatch.primitives.exceptions.RetryableError` for
    transient conflicts (serialization failures, deadlocks) so the manager
    can retry the whole unit of work.

    Example:
        ```python
        class SQLAlchemyUnitOfWork(UnitOfWork):
            def __init__(self, session):
                self._session = session

            async def commit(self):
                await self._session.commit()

            async def rollback(self):
                await self._session.rollback()
        ```
    """

    @abstractmethod
    async def commit(self) -> None:
        """Commit the transaction. Must be implemented by subclasses."""
        ...

    @abstractmethod
    async def rollback(self) -> None:
        """Rollback the transaction. Must be implemented by subclasses."""
        ...

    async def __aenter__(self) -> UnitOfWork:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        """
        Exit the context manager.

        1. If successful (exc_type is None): commit(); a failed commit is
           rolled back and re-raised
        2. If exception: rollback(); the original exception keeps propagating
        """
        if exc_type is None:
            try:
                await self.commit()
            except Exception:
                await self.rollback()
                raise
        else:
            logger.debug("Rolling back unit of work after %s", exc_type.__name__)
            await self.rollback()
