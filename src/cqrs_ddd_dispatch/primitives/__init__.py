"""Primitives: exceptions."""

from __future__ import annotations

from .exceptions import (
    AbortOnFailure,
    AmbiguousHandlerError,
    ConfigurationError,
    DispatchError,
    EnqueuerNotFoundError,
    FatalError,
    HandlerError,
    HandlerNotFoundError,
    HandlerRegistrationError,
    InfrastructureError,
    ListenerNotFoundError,
    MiddlewareNotFoundError,
    RetryableError,
    RetryAttemptsExhaustedError,
    UnitOfWorkError,
)

__all__ = [
    "AbortOnFailure",
    "AmbiguousHandlerError",
    "ConfigurationError",
    "DispatchError",
    "EnqueuerNotFoundError",
    "FatalError",
    "HandlerError",
    "HandlerNotFoundError",
    "HandlerRegistrationError",
    "InfrastructureError",
    "ListenerNotFoundError",
    "MiddlewareNotFoundError",
    "RetryAttemptsExhaustedError",
    "RetryableError",
    "UnitOfWorkError",
]
