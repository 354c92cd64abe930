from typing import Any

import pytest

from cqrs_ddd_dispatch.middleware import (
    MiddlewareRegistry,
    PipelineBuilder,
    build_pipeline,
)
from cqrs_ddd_dispatch.primitives.exceptions import (
    ConfigurationError,
    MiddlewareNotFoundError,
)


class ShortCircuit:
    async def __call__(self, message: Any, next_handler: Any) -> Any:
        return "short-circuited"


@pytest.mark.asyncio()
async def test_first_middleware_is_outermost(trail: list[str], recorder: Any) -> None:
    async def handler(message: Any) -> str:
        trail.append("H")
        return "done"

    pipeline = build_pipeline([recorder("A"), recorder("B")], handler)

    assert await pipeline("msg") == "done"
    assert trail == ["A-enter", "B-enter", "H", "B-exit", "A-exit"]


@pytest.mark.asyncio()
async def test_middleware_can_short_circuit(trail: list[str], recorder: Any) -> None:
    async def handler(message: Any) -> str:
        trail.append("H")
        return "done"

    pipeline = build_pipeline([recorder("A"), ShortCircuit()], handler)

    assert await pipeline("msg") == "short-circuited"
    assert trail == ["A-enter", "A-exit"]


@pytest.mark.asyncio()
async def test_empty_pipeline_calls_handler_directly() -> None:
    async def handler(message: Any) -> Any:
        return message

    assert await build_pipeline([], handler)("msg") == "msg"


@pytest.mark.asyncio()
async def test_middleware_errors_propagate() -> None:
    class Explode:
        async def __call__(self, message: Any, next_handler: Any) -> Any:
            raise RuntimeError("boom")

    async def handler(message: Any) -> Any:
        return message

    with pytest.raises(RuntimeError, match="boom"):
        await build_pipeline([Explode()], handler)("msg")


@pytest.mark.asyncio()
async def test_builder_stacks_stages_in_order(trail: list[str], recorder: Any) -> None:
    registry = MiddlewareRegistry()
    registry.register("named", factory=lambda: recorder("N"))

    async def handler(message: Any) -> Any:
        trail.append("H")
        return message

    pipeline = (
        PipelineBuilder(registry)
        .through([recorder("A")])
        .through(["named"])
        .through([recorder("C")])
        .build(handler)
    )
    await pipeline("msg")

    assert trail == ["A-enter", "N-enter", "C-enter", "H", "C-exit", "N-exit", "A-exit"]


def test_named_middleware_requires_registry() -> None:
    async def handler(message: Any) -> Any:
        return message

    with pytest.raises(ConfigurationError):
        build_pipeline(["log"], handler)


def test_unknown_middleware_name_raises() -> None:
    async def handler(message: Any) -> Any:
        return message

    with pytest.raises(MiddlewareNotFoundError):
        build_pipeline(["missing"], handler, registry=MiddlewareRegistry())
