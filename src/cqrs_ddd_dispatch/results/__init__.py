"""Result and Error value types."""

from .error import Error, ErrorCode
from .result import Result

__all__ = ["Error", "ErrorCode", "Result"]
