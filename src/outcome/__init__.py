"""Outcome - a Try-style result type for code that may fail."""

from src.outcome.errors import (
    FailurePayloadError,
    NotDefinedError,
    OutcomeError,
    PredicateError,
    SuccessInversionError,
)
from src.outcome.helpers import not_null, sleep
from src.outcome.outcome import Err, Ok, Outcome, flatten

__all__ = [
    "Outcome",
    "Ok",
    "Err",
    "flatten",
    "OutcomeError",
    "NotDefinedError",
    "PredicateError",
    "SuccessInversionError",
    "FailurePayloadError",
    "not_null",
    "sleep",
]
