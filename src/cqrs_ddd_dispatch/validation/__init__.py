"""Validation: ValidationResult, PydanticValidator and composable validators."""

from __future__ import annotations

from .composite import CompositeValidator, RuleValidator
from .pydantic import PydanticValidator
from .result import ValidationResult

__all__ = [
    "CompositeValidator",
    "PydanticValidator",
    "RuleValidator",
    "ValidationResult",
]
