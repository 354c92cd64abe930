"""InMemoryExceptionReporter — collects reported exceptions."""

from __future__ import annotations

from ...ports.exception_reporter import IExceptionReporter


class InMemoryExceptionReporter(IExceptionReporter):
    def __init__(self) -> None:
        self.reported: list[BaseException] = []

    def report(self, exc: BaseException) -> None:
        self.reported.append(exc)
