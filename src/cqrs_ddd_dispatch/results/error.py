"""Error — a single failure reason carried by a failed Result."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorCode(str, Enum):
    """Reason codes produced by the dispatch core itself."""

    HANDLER_NOT_FOUND = "handler_not_found"
    AMBIGUOUS_HANDLER = "ambiguous_handler"
    UNEXPECTED_ERROR = "unexpected_error"
    VALIDATION_FAILED = "validation_failed"


@dataclass(frozen=True)
class Error:
    """A failure reason: optional code, message and key.

    ``key`` identifies the field or item the error relates to (e.g. the
    attribute of a command that failed validation).

    Usage::

        Error(code=ErrorCode.VALIDATION_FAILED, message="is required", key="name")
        Error(message="Order is already cancelled.")
    """

    code: Enum | None = None
    message: str = ""
    key: str | None = None

    def __post_init__(self) -> None:
        if not self.message and self.code is None:
            raise ValueError("Error must have a message or a code.")
        if self.key == "":
            object.__setattr__(self, "key", None)

    def is_(self, code: Enum) -> bool:
        """Return ``True`` if this error carries *code*."""
        return self.code is code

    def __str__(self) -> str:
        if self.message:
            return self.message
        return str(self.code.value) if self.code is not None else ""
