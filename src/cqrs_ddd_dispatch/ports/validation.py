"""IValidator — composable message-validation protocol."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..messages import Message
    from ..validation.result import ValidationResult


@runtime_checkable
class IValidator(Protocol):
    """Protocol for command and query validators.

    Validators are composable via
    :class:`~cqrs_ddd_dispatch.validation.composite.CompositeValidator`.
    """

    async def validate(self, message: Message) -> ValidationResult:
        """Validate *message* and return a
        :class:`~cqrs_ddd_dispatch.validation.result.ValidationResult`.
        """
        ...
