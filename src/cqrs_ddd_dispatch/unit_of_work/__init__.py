"""Unit of work: transactional execution, retry and commit hooks."""

from __future__ import annotations

from .manager import UnitOfWorkManager
from .scope import UnitOfWorkScope, get_current_scope

__all__ = ["UnitOfWorkManager", "UnitOfWorkScope", "get_current_scope"]
