"""ValidationResult — field-keyed validation messages."""

from __future__ import annotations

from dataclasses import dataclass, field


def default_errors_factory() -> dict[str, list[str]]:
    return {}


@dataclass
class ValidationResult:
    """Collects validation messages keyed by field name.

    Message-level problems use the ``"__root__"`` key.

    Usage::

        result = ValidationResult.success()
        result = ValidationResult.failure({"customer_id": ["is required"]})
    """

    errors: dict[str, list[str]] = field(default_factory=default_errors_factory)

    @property
    def is_valid(self) -> bool:
        return not any(self.errors.values())

    @classmethod
    def success(cls) -> ValidationResult:
        return cls()

    @classmethod
    def failure(cls, errors: dict[str, list[str]]) -> ValidationResult:
        return cls(errors={key: list(messages) for key, messages in errors.items()})

    def merge(self, other: ValidationResult) -> ValidationResult:
        """Return a new result holding the messages of both, self first."""
        merged = {key: list(messages) for key, messages in self.errors.items()}
        for key, messages in other.errors.items():
            merged.setdefault(key, []).extend(messages)
        return ValidationResult(errors=merged)

    def add_error(self, key: str, message: str) -> None:
        self.errors.setdefault(key, []).append(message)

    def __bool__(self) -> bool:
        return self.is_valid
