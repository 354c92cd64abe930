"""Commands, queries, their handlers and dispatchers."""

from __future__ import annotations

from .command import Command
from .dispatcher import CommandDispatcher, QueryDispatcher
from .handler import CommandHandler, QueryHandler
from .query import Query
from .queuer import CommandQueuer
from .registry import HandlerMap, HandlerRegistry

__all__ = [
    "Command",
    "CommandDispatcher",
    "CommandHandler",
    "CommandQueuer",
    "HandlerMap",
    "HandlerRegistry",
    "Query",
    "QueryDispatcher",
    "QueryHandler",
]
