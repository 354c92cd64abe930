"""Common utility functions and helpers."""

from __future__ import annotations

import inspect
from typing import Any


def default_dict_factory() -> dict[str, object]:
    """Factory for mutable default dict in dataclass fields.

    Use this instead of dict() or {} to avoid dataclass default_factory issues.
    """
    return {}


async def maybe_await(value: Any) -> Any:
    """Await *value* if it is awaitable, otherwise return it as-is.

    Hooks, listeners and enqueuers may be plain callables or coroutines.
    """
    if inspect.isawaitable(value):
        return await value
    return value
