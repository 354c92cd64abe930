"""PydanticValidator — re-runs pydantic model validation on a message."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import ValidationError as PydanticValidationError

from .result import ValidationResult

if TYPE_CHECKING:
    from ..messages import Message


class PydanticValidator:
    """Validates a message by round-tripping it through its model class.

    Messages are frozen, but they can still be built with
    ``model_construct()`` and skip validation; this catches those. Each
    pydantic error becomes a message under its dotted location.
    """

    async def validate(self, message: Message) -> ValidationResult:
        try:
            type(message).model_validate(message.model_dump())
        except PydanticValidationError as exc:
            result = ValidationResult.success()
            for error in exc.errors():
                loc = ".".join(str(part) for part in error.get("loc", ())) or "__root__"
                result.add_error(loc, error.get("msg", "validation error"))
            return result
        return ValidationResult.success()
