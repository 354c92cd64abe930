"""Middleware: pipeline, named registry and built-in middleware."""

from __future__ import annotations

from .deferred_events import FlushDeferredEvents
from .definition import MiddlewareDefinition
from .lifecycle import SetupBeforeDispatch, TearDownAfterDispatch
from .logging import (
    LogDomainEventDispatch,
    LogInboundEvent,
    LogMessageDispatch,
    LogOutboundEvent,
    LogPushedToQueue,
)
from .pipeline import PipelineBuilder, build_pipeline, resolve_middleware
from .registry import MiddlewareRegistry
from .unit_of_work import ExecuteInUnitOfWork, HandleInUnitOfWork
from .validation import ValidateMessage

__all__ = [
    "ExecuteInUnitOfWork",
    "FlushDeferredEvents",
    "HandleInUnitOfWork",
    "LogDomainEventDispatch",
    "LogInboundEvent",
    "LogMessageDispatch",
    "LogOutboundEvent",
    "LogPushedToQueue",
    "MiddlewareDefinition",
    "MiddlewareRegistry",
    "PipelineBuilder",
    "SetupBeforeDispatch",
    "TearDownAfterDispatch",
    "ValidateMessage",
    "build_pipeline",
    "resolve_middleware",
]
