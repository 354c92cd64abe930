"""Logging adapters: log-context factories and exception reporting."""

from __future__ import annotations

from .context import ContextFactory, ContextProvider, SimpleContextFactory
from .reporter import LoggingExceptionReporter

__all__ = [
    "ContextFactory",
    "ContextProvider",
    "LoggingExceptionReporter",
    "SimpleContextFactory",
]
