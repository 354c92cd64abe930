import logging
from dataclasses import dataclass
from enum import Enum

import pytest

from cqrs_ddd_dispatch.cqrs import Command
from cqrs_ddd_dispatch.logging import LoggingExceptionReporter, SimpleContextFactory
from cqrs_ddd_dispatch.results import Error, Result


class Colour(Enum):
    RED = "red"


@dataclass
class Money:
    amount: int
    currency: str


class ChargeCard(Command[None]):
    card_id: str


class Sensitive:
    def context(self) -> dict[str, str]:
        return {"card": "****"}


def test_context_for_messages_and_values() -> None:
    factory = SimpleContextFactory()

    assert factory.make(ChargeCard(card_id="C1")) == {"card_id": "C1"}
    assert factory.make(Money(10, "EUR")) == {"amount": 10, "currency": "EUR"}
    assert factory.make(Sensitive()) == {"card": "****"}
    assert factory.make(object()) == {"type": "object"}


def test_context_for_results() -> None:
    factory = SimpleContextFactory()

    assert factory.make(Result.ok(Colour.RED)) == {"success": True, "value": "red"}
    assert factory.make(Result.ok(Money(1, "EUR")).with_meta(attempt=2)) == {
        "success": True,
        "value": {"amount": 1, "currency": "EUR"},
        "meta": {"attempt": 2},
    }
    assert factory.make(Result.failed(Error(message="bad", key="card_id"))) == {
        "success": False,
        "errors": [{"code": None, "message": "bad", "key": "card_id"}],
    }


def test_logging_exception_reporter_logs_traceback(
    caplog: pytest.LogCaptureFixture,
) -> None:
    try:
        raise RuntimeError("mailer down")
    except RuntimeError as exc:
        error = exc

    LoggingExceptionReporter().report(error)

    [record] = caplog.records
    assert record.name == "cqrs_ddd.exceptions"
    assert record.levelno == logging.ERROR
    assert record.getMessage() == "RuntimeError: mailer down"
    assert record.exc_info is not None
