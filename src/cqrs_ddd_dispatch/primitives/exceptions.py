"""Exceptions raised by the dispatch core."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..results.result import Result


class DispatchError(Exception):
    """Root exception for the dispatch toolkit."""


class ConfigurationError(DispatchError):
    """Raised when the dispatch core is wired or called with invalid settings."""


# ── Registration / lookup ────────────────────────────────────────────


class HandlerError(DispatchError):
    """Base class for handler registration and lookup errors."""


class HandlerRegistrationError(HandlerError):
    """Raised when a second handler is registered for the same message type."""


class HandlerNotFoundError(HandlerError):
    """Raised when no handler is registered for a message type."""

    def __init__(self, message_type: type[Any]) -> None:
        self.message_type = message_type
        super().__init__(f"No handler registered for {message_type.__name__}")


class AmbiguousHandlerError(HandlerError):
    """Raised when more than one registered handler matches a message."""

    def __init__(self, message_type: type[Any], candidates: list[type[Any]]) -> None:
        self.message_type = message_type
        self.candidates = candidates
        names = ", ".join(c.__name__ for c in candidates)
        super().__init__(
            f"Ambiguous handler for {message_type.__name__}: "
            f"registered for {names}"
        )


class ListenerNotFoundError(HandlerError):
    """Raised when a named listener cannot be resolved by its container."""


class MiddlewareNotFoundError(HandlerError):
    """Raised when a named middleware is not registered."""


class EnqueuerNotFoundError(HandlerError):
    """Raised when no enqueuer exists for a queued command."""


# ── Result short-circuiting ──────────────────────────────────────────


class AbortOnFailure(DispatchError):
    """Carries a failed Result out of a deep call chain.

    Dispatchers catch this and return :attr:`result` unchanged instead of
    wrapping it as an unexpected error.
    """

    def __init__(self, result: Result[Any]) -> None:
        if result.success:
            raise ValueError("AbortOnFailure requires a failed result.")
        self.result = result
        super().__init__(result.error or "Aborted on failed result.")


# ── Unit of work ─────────────────────────────────────────────────────


class UnitOfWorkError(DispatchError):
    """Raised when unit-of-work hooks or deferred events are used out of scope."""


class InfrastructureError(DispatchError):
    """Base class for faults raised by infrastructure ports."""


class RetryableError(InfrastructureError):
    """Transient fault (serialization conflict, deadlock, ...).

    The unit-of-work manager retries the whole body when this is raised.
    """


class FatalError(InfrastructureError):
    """Non-retryable infrastructure fault. Never converted into a Result."""


class RetryAttemptsExhaustedError(FatalError):
    """Raised when every attempt of a unit of work failed with a retryable fault."""

    def __init__(self, attempts: int, last_error: BaseException) -> None:
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(
            f"Unit of work failed after {attempts} attempt(s): {last_error}"
        )
