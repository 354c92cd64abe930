"""Result — outcome of dispatching a command or query."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from ..primitives.exceptions import AbortOnFailure
from ..utils import default_dict_factory
from .error import Error

if TYPE_CHECKING:
    from collections.abc import Callable

T = TypeVar("T")
U = TypeVar("U")

ErrorsLike = Error | Enum | str | Iterable[Error]


def _to_errors(errors: ErrorsLike) -> tuple[Error, ...]:
    if isinstance(errors, Error):
        return (errors,)
    if isinstance(errors, Enum):
        return (Error(code=errors),)
    if isinstance(errors, str):
        return (Error(message=errors),)
    return tuple(errors)


@dataclass(frozen=True)
class Result(Generic[T]):
    """Tagged success/failure outcome returned by handlers.

    A successful result carries a ``payload``; a failed result carries one or
    more :class:`~cqrs_ddd_dispatch.results.error.Error` and never a payload.
    Build instances through :meth:`ok` and :meth:`failed`.

    Chaining on a failure short-circuits::

        result = (
            await dispatcher.dispatch(CreateOrder(items=items))
        ).map(lambda order_id: order_id.value)
    """

    success: bool
    payload: T | None = None
    errors: tuple[Error, ...] = ()
    meta: Mapping[str, object] = field(default_factory=default_dict_factory)

    def __post_init__(self) -> None:
        if self.success and self.errors:
            raise ValueError("A successful result cannot carry errors.")
        if not self.success:
            if not self.errors:
                raise ValueError("A failed result must carry at least one error.")
            if self.payload is not None:
                raise ValueError("A failed result cannot carry a value.")

    # ── Factory methods ──────────────────────────────────────────

    @classmethod
    def ok(cls, value: T | None = None) -> Result[T]:
        return cls(success=True, payload=value)

    @classmethod
    def failed(cls, errors: ErrorsLike) -> Result[Any]:
        return cls(success=False, errors=_to_errors(errors))

    fail = failed

    # ── Inspection ───────────────────────────────────────────────

    @property
    def failure(self) -> bool:
        return not self.success

    @property
    def value(self) -> T:
        """Return the payload, raising :class:`AbortOnFailure` on a failure."""
        if not self.success:
            raise AbortOnFailure(self)
        return self.payload  # type: ignore[return-value]

    def safe(self) -> T | None:
        return self.payload if self.success else None

    def unwrap_or(self, default: T) -> T:
        return self.payload if self.success else default  # type: ignore[return-value]

    @property
    def error(self) -> str | None:
        """First non-empty error message, if any."""
        for err in self.errors:
            if err.message:
                return err.message
        return None

    def has_code(self, code: Enum) -> bool:
        return any(err.is_(code) for err in self.errors)

    def abort(self) -> None:
        """Raise :class:`AbortOnFailure` if this result failed."""
        if not self.success:
            raise AbortOnFailure(self)

    # ── Chaining ─────────────────────────────────────────────────

    def map(self, fn: Callable[[T], U]) -> Result[U]:
        if not self.success:
            return self  # type: ignore[return-value]
        return Result(success=True, payload=fn(self.payload), meta=self.meta)  # type: ignore[arg-type]

    def bind(self, fn: Callable[[T], Result[U]]) -> Result[U]:
        if not self.success:
            return self  # type: ignore[return-value]
        return fn(self.payload)  # type: ignore[arg-type]

    and_then = bind

    def map_errors(self, fn: Callable[[Error], Error]) -> Result[T]:
        if self.success:
            return self
        return replace(self, errors=tuple(fn(err) for err in self.errors))

    def or_else(self, fn: Callable[[tuple[Error, ...]], Result[T]]) -> Result[T]:
        if self.success:
            return self
        return fn(self.errors)

    # ── Meta ─────────────────────────────────────────────────────

    def with_meta(self, meta: Mapping[str, object] | None = None, **values: object) -> Result[T]:
        """Return a copy with *meta* merged over the existing meta."""
        merged = {**self.meta, **(meta or {}), **values}
        return replace(self, meta=merged)
