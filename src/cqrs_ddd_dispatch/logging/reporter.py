"""LoggingExceptionReporter — reports handled exceptions to a logger."""

from __future__ import annotations

import logging

from ..ports.exception_reporter import IExceptionReporter


class LoggingExceptionReporter(IExceptionReporter):
    """Logs reported exceptions with their traceback."""

    def __init__(
        self,
        logger: logging.Logger | None = None,
        level: int = logging.ERROR,
    ) -> None:
        self._logger = logger or logging.getLogger("cqrs_ddd.exceptions")
        self._level = level

    def report(self, exc: BaseException) -> None:
        self._logger.log(
            self._level,
            "%s: %s",
            type(exc).__name__,
            exc,
            exc_info=(type(exc), exc, exc.__traceback__),
        )
