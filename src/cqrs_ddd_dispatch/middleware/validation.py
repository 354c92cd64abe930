"""ValidateMessage — validates commands and queries before the handler."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..ports.middleware import IMiddleware
from ..results.error import Error, ErrorCode
from ..results.result import Result

if TYPE_CHECKING:
    from ..ports.middleware import NextHandler
    from ..ports.validation import IValidator


class ValidateMessage(IMiddleware):
    """Runs ``IValidator.validate()`` before the handler.

    If validation fails the handler is not called and a failed Result is
    returned with one ``VALIDATION_FAILED`` error per message, keyed by
    field.
    """

    def __init__(self, validator: IValidator) -> None:
        self._validator = validator

    async def __call__(self, message: Any, next_handler: NextHandler) -> Any:
        result = await self._validator.validate(message)
        if result.is_valid:
            return await next_handler(message)
        return Result.failed(
            [
                Error(code=ErrorCode.VALIDATION_FAILED, message=text, key=key)
                for key, messages in result.errors.items()
                for text in messages
            ]
        )
