from typing import Any

import pytest

from cqrs_ddd_dispatch.middleware import MiddlewareRegistry
from cqrs_ddd_dispatch.primitives.exceptions import (
    ConfigurationError,
    MiddlewareNotFoundError,
)


class Tagging:
    def __init__(self, tag: str = "default") -> None:
        self.tag = tag

    async def __call__(self, message: Any, next_handler: Any) -> Any:
        return await next_handler(message)


def test_register_and_get_builds_lazily_with_kwargs() -> None:
    registry = MiddlewareRegistry()
    registry.register("tagging", Tagging, tag="audit")

    middleware = registry.get("tagging")

    assert isinstance(middleware, Tagging)
    assert middleware.tag == "audit"
    assert registry.has("tagging")


def test_singleton_instances_are_reused() -> None:
    registry = MiddlewareRegistry()
    registry.register("shared", Tagging)
    registry.register("fresh", Tagging, singleton=False)

    assert registry.get("shared") is registry.get("shared")
    assert registry.get("fresh") is not registry.get("fresh")


def test_decorator_registration() -> None:
    registry = MiddlewareRegistry()

    @registry.add("decorated", tag="x")
    class Decorated(Tagging):
        pass

    assert isinstance(registry.get("decorated"), Decorated)


def test_unknown_name_raises() -> None:
    with pytest.raises(MiddlewareNotFoundError, match="missing"):
        MiddlewareRegistry().get("missing")


def test_invalid_registrations_raise() -> None:
    registry = MiddlewareRegistry()

    with pytest.raises(ConfigurationError):
        registry.register("", Tagging)
    with pytest.raises(ConfigurationError):
        registry.register("nothing")


def test_frozen_registry_rejects_registration() -> None:
    registry = MiddlewareRegistry()
    registry.freeze()

    assert registry.is_frozen
    with pytest.raises(ConfigurationError, match="frozen"):
        registry.register("late", Tagging)

    registry.clear()
    registry.register("late", Tagging)
