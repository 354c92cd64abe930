from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from cqrs_ddd_dispatch.adapters.memory import (
    InMemoryExceptionReporter,
    InMemoryUnitOfWorkFactory,
)
from cqrs_ddd_dispatch.unit_of_work import UnitOfWorkManager


class Recorder:
    """Middleware that records when it is entered and left."""

    def __init__(self, name: str, trail: list[str]) -> None:
        self.name = name
        self.trail = trail

    async def __call__(self, message: Any, next_handler: Any) -> Any:
        self.trail.append(f"{self.name}-enter")
        result = await next_handler(message)
        self.trail.append(f"{self.name}-exit")
        return result


@pytest.fixture()
def trail() -> list[str]:
    return []


@pytest.fixture()
def recorder(trail: list[str]) -> Callable[[str], Recorder]:
    return lambda name: Recorder(name, trail)


@pytest.fixture()
def uow_factory() -> InMemoryUnitOfWorkFactory:
    return InMemoryUnitOfWorkFactory()


@pytest.fixture()
def reporter() -> InMemoryExceptionReporter:
    return InMemoryExceptionReporter()


@pytest.fixture()
def manager(
    uow_factory: InMemoryUnitOfWorkFactory, reporter: InMemoryExceptionReporter
) -> UnitOfWorkManager:
    return UnitOfWorkManager(uow_factory, reporter=reporter)
