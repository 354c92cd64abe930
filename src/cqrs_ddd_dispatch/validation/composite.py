"""Validators that combine other validators or plain rule callables."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..utils import maybe_await
from .result import ValidationResult

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from ..messages import Message
    from ..ports.validation import IValidator


class CompositeValidator:
    """Runs every validator in turn and merges all their messages.

    Usage::

        validator = CompositeValidator([PydanticValidator(), CustomerExists(repo)])
        result = await validator.validate(command)
    """

    def __init__(self, validators: Iterable[IValidator] | None = None) -> None:
        self._validators: list[IValidator] = list(validators or [])

    def add(self, validator: IValidator) -> None:
        self._validators.append(validator)

    async def validate(self, message: Message) -> ValidationResult:
        combined = ValidationResult.success()
        for validator in self._validators:
            combined = combined.merge(await validator.validate(message))
        return combined


class RuleValidator:
    """Validator built from rule callables.

    A rule receives the message and returns ``None`` (or an empty mapping)
    when it passes, otherwise a :class:`ValidationResult` or a mapping of
    field name to messages. Rules may be coroutines. All rules run and
    their messages accumulate in rule order.
    """

    def __init__(self, rules: Iterable[Callable[[Any], Any]] | None = None) -> None:
        self._rules = list(rules or [])

    def using(self, rules: Iterable[Callable[[Any], Any]]) -> RuleValidator:
        """Return a copy of this validator with *rules* appended."""
        return RuleValidator([*self._rules, *rules])

    async def validate(self, message: Message) -> ValidationResult:
        combined = ValidationResult.success()
        for rule in self._rules:
            outcome = await maybe_await(rule(message))
            if outcome is None:
                continue
            if not isinstance(outcome, ValidationResult):
                outcome = ValidationResult.failure(dict(outcome))
            combined = combined.merge(outcome)
        return combined
