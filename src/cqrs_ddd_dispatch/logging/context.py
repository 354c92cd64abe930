"""Log-context factories — structured key/value context for log records."""

from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel

from ..results.result import Result

_SCALARS = (str, int, float, bool, type(None))


@runtime_checkable
class ContextFactory(Protocol):
    """Builds the structured context attached to dispatch log records."""

    def make(self, obj: Any) -> dict[str, Any]:
        ...


@runtime_checkable
class ContextProvider(Protocol):
    """Objects that describe their own log context."""

    def context(self) -> dict[str, Any]:
        ...


class SimpleContextFactory(ContextFactory):
    """Default context factory.

    * Results become ``{"success", "value", "errors", "meta"}``.
    * Objects with a ``context()`` method describe themselves.
    * Pydantic models (messages) are dumped in JSON mode.
    * Dataclasses are converted with :func:`dataclasses.asdict`.
    """

    def make(self, obj: Any) -> dict[str, Any]:
        if isinstance(obj, Result):
            return self._result_context(obj)
        if isinstance(obj, ContextProvider) and not isinstance(obj, type):
            return dict(obj.context())
        if isinstance(obj, BaseModel):
            return obj.model_dump(mode="json")
        if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
            return dataclasses.asdict(obj)
        return {"type": type(obj).__name__}

    def _result_context(self, result: Result[Any]) -> dict[str, Any]:
        context: dict[str, Any] = {"success": result.success}
        if result.success:
            context["value"] = self._value(result.payload)
        else:
            context["errors"] = [
                {
                    "code": err.code.value if isinstance(err.code, Enum) else None,
                    "message": err.message,
                    "key": err.key,
                }
                for err in result.errors
            ]
        if result.meta:
            context["meta"] = dict(result.meta)
        return context

    def _value(self, value: Any) -> Any:
        if isinstance(value, _SCALARS):
            return value
        if isinstance(value, Enum):
            return value.value
        return self.make(value)
