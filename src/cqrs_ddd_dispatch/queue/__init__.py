"""Queue: asynchronous command execution."""

from __future__ import annotations

from .component import ComponentQueue

__all__ = ["ComponentQueue"]
