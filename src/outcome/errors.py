"""Exception hierarchy for failures the outcome type constructs itself.

Anything raised by caller-supplied functions is stored as-is; these
classes only cover the synthetic cases.
"""

from __future__ import annotations

from typing import Any


class OutcomeError(Exception):
    """Base exception for all errors built by the outcome library."""


class NotDefinedError(OutcomeError):
    """A partial function returned None for its input."""

    def __init__(self, value: Any) -> None:
        super().__init__(f"Function not defined for {value!r}")
        self.value = value


class PredicateError(OutcomeError):
    """A filter predicate was falsy for the held value."""

    def __init__(self, value: Any) -> None:
        super().__init__(f"Predicate does not hold for {value!r}")
        self.value = value


class SuccessInversionError(OutcomeError):
    """``failed()`` was called on an Ok."""

    def __init__(self, value: Any) -> None:
        super().__init__(f"Cannot call failed() on Ok({value!r})")
        self.value = value


class FailurePayloadError(OutcomeError):
    """Carries a failure payload that is not itself an exception.

    Python can only raise exceptions, so ``get()`` and ``or_else_raise()``
    wrap anything else in this error. The original object is available as
    ``payload``.
    """

    def __init__(self, payload: Any) -> None:
        super().__init__(f"Failure payload is not an exception: {payload!r}")
        self.payload = payload
