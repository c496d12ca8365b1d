"""Outcome type for composing computations that may fail.

An ``Outcome`` is either an ``Ok`` holding a produced value or an ``Err``
holding whatever was raised. Instead of nesting try/except blocks, callers
chain transformations on the outcome and decide at the end how to get the
value out:

    >>> Outcome.of(lambda: int("42")).map(lambda n: n * 2).or_else(0)
    84
    >>> Outcome.of(lambda: int("nope")).map(lambda n: n * 2).or_else(0)
    0

Every operation that takes a callable has an ``*_async`` sibling that
accepts a coroutine function instead. Both siblings share the same
branching helpers and differ only in awaiting the callable.

Only ``Exception`` subclasses are captured. Cancellation, KeyboardInterrupt
and SystemExit always propagate.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, NoReturn, Optional, TypeVar

from src.outcome.config import failure_tracing_enabled
from src.outcome.errors import (
    FailurePayloadError,
    NotDefinedError,
    PredicateError,
    SuccessInversionError,
)
from src.outcome.log import get_logger

T = TypeVar("T")
U = TypeVar("U")

logger = get_logger(__name__)


class Outcome(ABC, Generic[T]):
    """The result of a computation that may have failed.

    Construct one with ``from_value``, ``of`` or ``of_async`` (or directly
    as ``Ok(x)`` / ``Err(e)``). Instances are immutable; every operation
    returns a new outcome, or ``self`` when there is nothing to do.
    """

    __slots__ = ()

    @staticmethod
    def from_value(x: U) -> Outcome[U]:
        """Wrap a plain value as an Ok.

        Do not use this for the result of a call that may raise; use
        ``of`` or ``of_async`` so the failure is captured.
        """
        return Ok(x)

    @staticmethod
    def of(f: Callable[[], U]) -> Outcome[U]:
        """Call ``f`` now and capture its result or the exception it raises."""
        try:
            return Ok(f())
        except Exception as e:
            return _captured("of", e)

    @staticmethod
    async def of_async(f: Callable[[], Awaitable[U]]) -> Outcome[U]:
        """Await ``f()`` and capture its result or the exception it raises."""
        try:
            return Ok(await f())
        except Exception as e:
            return _captured("of_async", e)

    @abstractmethod
    def is_success(self) -> bool:
        ...

    @abstractmethod
    def is_failure(self) -> bool:
        ...

    @abstractmethod
    def get(self) -> T:
        """Return the value, or raise the stored failure.

        A stored exception is raised as the same object, so every call
        appends to its ``__traceback__``. Raised inside an ``except`` block,
        it also picks up that block's exception as ``__context__``.
        """
        ...

    @abstractmethod
    def to_optional(self) -> Optional[T]:
        """Return the value, or None on failure. Never raises."""
        ...

    @abstractmethod
    def collect(self, f: Callable[[T], Optional[U]]) -> Outcome[U]:
        """Apply a partial function to the value.

        ``f`` signals that it is not defined for the value by returning
        None, which yields an Err holding a ``NotDefinedError``. An Err is
        returned unchanged and ``f`` is never called.
        """
        ...

    @abstractmethod
    async def collect_async(
        self, f: Callable[[T], Awaitable[Optional[U]]]
    ) -> Outcome[U]:
        ...

    @abstractmethod
    def filter(self, predicate: Callable[[T], Any]) -> Outcome[T]:
        """Keep an Ok only if ``predicate`` is truthy for its value.

        A falsy predicate yields an Err holding a ``PredicateError``.
        """
        ...

    @abstractmethod
    async def filter_async(
        self, predicate: Callable[[T], Awaitable[Any]]
    ) -> Outcome[T]:
        ...

    @abstractmethod
    def map(self, f: Callable[[T], U]) -> Outcome[U]:
        """Apply ``f`` to the value, capturing anything it raises."""
        ...

    @abstractmethod
    async def map_async(self, f: Callable[[T], Awaitable[U]]) -> Outcome[U]:
        ...

    @abstractmethod
    def flat_map(self, f: Callable[[T], Outcome[U]]) -> Outcome[U]:
        """Apply an outcome-returning ``f`` to the value without double wrapping."""
        ...

    @abstractmethod
    async def flat_map_async(
        self, f: Callable[[T], Awaitable[Outcome[U]]]
    ) -> Outcome[U]:
        ...

    @abstractmethod
    def failed(self) -> Outcome[Any]:
        """Swap the roles: Err(e) becomes Ok(e), Ok becomes an Err."""
        ...

    @abstractmethod
    def if_success_or_else(
        self,
        f: Callable[[T], Any],
        g: Optional[Callable[[], Any]] = None,
    ) -> None:
        """Run ``f(value)`` on an Ok, or ``g()`` on an Err, for side effects."""
        ...

    @abstractmethod
    async def if_success_or_else_async(
        self,
        f: Callable[[T], Awaitable[Any]],
        g: Optional[Callable[[], Awaitable[Any]]] = None,
    ) -> None:
        ...

    @abstractmethod
    def or_(self, alternative: Outcome[U]) -> Outcome[T] | Outcome[U]:
        """Return ``self`` if it is an Ok, otherwise ``alternative``."""
        ...

    @abstractmethod
    def or_else(self, default: U) -> T | U:
        """Return the value if this is an Ok, otherwise ``default``."""
        ...

    @abstractmethod
    def or_else_raise(self, f: Optional[Callable[[Any], Any]] = None) -> T:
        """Return the value, or raise the failure (passed through ``f`` if given)."""
        ...

    @abstractmethod
    async def or_else_raise_async(
        self, f: Optional[Callable[[Any], Awaitable[Any]]] = None
    ) -> T:
        ...

    @abstractmethod
    def recover(self, f: Callable[[Any], Optional[U]]) -> Outcome[T] | Outcome[U]:
        """Turn an Err into an Ok by applying a partial function to its payload."""
        ...

    @abstractmethod
    async def recover_async(
        self, f: Callable[[Any], Awaitable[Optional[U]]]
    ) -> Outcome[T] | Outcome[U]:
        ...

    @abstractmethod
    def recover_with(
        self, f: Callable[[Any], Optional[Outcome[U]]]
    ) -> Outcome[T] | Outcome[U]:
        """Like ``recover`` but ``f`` returns a whole outcome."""
        ...

    @abstractmethod
    async def recover_with_async(
        self, f: Callable[[Any], Awaitable[Optional[Outcome[U]]]]
    ) -> Outcome[T] | Outcome[U]:
        ...

    @abstractmethod
    def reduce(self, f: Callable[[T], U], g: Callable[[Any], U]) -> U:
        """Fold to a plain value: ``f(value)`` on an Ok, ``g(error)`` on an Err."""
        ...

    @abstractmethod
    async def reduce_async(
        self,
        f: Callable[[T], Awaitable[U]],
        g: Callable[[Any], Awaitable[U]],
    ) -> U:
        ...

    @abstractmethod
    def transform(
        self,
        f: Callable[[T], Outcome[U]],
        g: Callable[[Any], Outcome[U]],
    ) -> Outcome[U]:
        """``flat_map(f)`` on an Ok, ``recover_with(g)`` on an Err."""
        ...

    @abstractmethod
    async def transform_async(
        self,
        f: Callable[[T], Awaitable[Outcome[U]]],
        g: Callable[[Any], Awaitable[Outcome[U]]],
    ) -> Outcome[U]:
        ...


@dataclass(frozen=True, slots=True)
class Ok(Outcome[T]):
    """Successful outcome holding a value. The value may be None."""

    value: T

    def is_success(self) -> bool:
        return True

    def is_failure(self) -> bool:
        return False

    def get(self) -> T:
        return self.value

    def to_optional(self) -> Optional[T]:
        return self.value

    def collect(self, f: Callable[[T], Optional[U]]) -> Outcome[U]:
        try:
            produced = f(self.value)
        except Exception as e:
            return _captured("collect", e)
        return _defined(produced, self.value)

    async def collect_async(
        self, f: Callable[[T], Awaitable[Optional[U]]]
    ) -> Outcome[U]:
        try:
            produced = await f(self.value)
        except Exception as e:
            return _captured("collect_async", e)
        return _defined(produced, self.value)

    def filter(self, predicate: Callable[[T], Any]) -> Outcome[T]:
        try:
            verdict = predicate(self.value)
        except Exception as e:
            return _captured("filter", e)
        return _kept(self, verdict)

    async def filter_async(
        self, predicate: Callable[[T], Awaitable[Any]]
    ) -> Outcome[T]:
        try:
            verdict = await predicate(self.value)
        except Exception as e:
            return _captured("filter_async", e)
        return _kept(self, verdict)

    def map(self, f: Callable[[T], U]) -> Outcome[U]:
        try:
            return Ok(f(self.value))
        except Exception as e:
            return _captured("map", e)

    async def map_async(self, f: Callable[[T], Awaitable[U]]) -> Outcome[U]:
        try:
            return Ok(await f(self.value))
        except Exception as e:
            return _captured("map_async", e)

    def flat_map(self, f: Callable[[T], Outcome[U]]) -> Outcome[U]:
        try:
            return f(self.value)
        except Exception as e:
            return _captured("flat_map", e)

    async def flat_map_async(
        self, f: Callable[[T], Awaitable[Outcome[U]]]
    ) -> Outcome[U]:
        try:
            return await f(self.value)
        except Exception as e:
            return _captured("flat_map_async", e)

    def failed(self) -> Outcome[Any]:
        return Err(SuccessInversionError(self.value))

    def if_success_or_else(
        self,
        f: Callable[[T], Any],
        g: Optional[Callable[[], Any]] = None,
    ) -> None:
        f(self.value)

    async def if_success_or_else_async(
        self,
        f: Callable[[T], Awaitable[Any]],
        g: Optional[Callable[[], Awaitable[Any]]] = None,
    ) -> None:
        await f(self.value)

    def or_(self, alternative: Outcome[U]) -> Outcome[T] | Outcome[U]:
        return self

    def or_else(self, default: U) -> T | U:
        return self.value

    def or_else_raise(self, f: Optional[Callable[[Any], Any]] = None) -> T:
        return self.value

    async def or_else_raise_async(
        self, f: Optional[Callable[[Any], Awaitable[Any]]] = None
    ) -> T:
        return self.value

    def recover(self, f: Callable[[Any], Optional[U]]) -> Outcome[T] | Outcome[U]:
        return self

    async def recover_async(
        self, f: Callable[[Any], Awaitable[Optional[U]]]
    ) -> Outcome[T] | Outcome[U]:
        return self

    def recover_with(
        self, f: Callable[[Any], Optional[Outcome[U]]]
    ) -> Outcome[T] | Outcome[U]:
        return self

    async def recover_with_async(
        self, f: Callable[[Any], Awaitable[Optional[Outcome[U]]]]
    ) -> Outcome[T] | Outcome[U]:
        return self

    def reduce(self, f: Callable[[T], U], g: Callable[[Any], U]) -> U:
        return f(self.value)

    async def reduce_async(
        self,
        f: Callable[[T], Awaitable[U]],
        g: Callable[[Any], Awaitable[U]],
    ) -> U:
        return await f(self.value)

    def transform(
        self,
        f: Callable[[T], Outcome[U]],
        g: Callable[[Any], Outcome[U]],
    ) -> Outcome[U]:
        return self.flat_map(f)

    async def transform_async(
        self,
        f: Callable[[T], Awaitable[Outcome[U]]],
        g: Callable[[Any], Awaitable[Outcome[U]]],
    ) -> Outcome[U]:
        return await self.flat_map_async(f)


@dataclass(frozen=True, slots=True)
class Err(Outcome[T]):
    """Failed outcome holding the failure payload, stored verbatim."""

    error: Any

    def is_success(self) -> bool:
        return False

    def is_failure(self) -> bool:
        return True

    def get(self) -> NoReturn:
        raise _raisable(self.error)

    def to_optional(self) -> Optional[T]:
        return None

    def collect(self, f: Callable[[T], Optional[U]]) -> Outcome[U]:
        return self  # type: ignore[return-value]

    async def collect_async(
        self, f: Callable[[T], Awaitable[Optional[U]]]
    ) -> Outcome[U]:
        return self  # type: ignore[return-value]

    def filter(self, predicate: Callable[[T], Any]) -> Outcome[T]:
        return self

    async def filter_async(
        self, predicate: Callable[[T], Awaitable[Any]]
    ) -> Outcome[T]:
        return self

    def map(self, f: Callable[[T], U]) -> Outcome[U]:
        return self  # type: ignore[return-value]

    async def map_async(self, f: Callable[[T], Awaitable[U]]) -> Outcome[U]:
        return self  # type: ignore[return-value]

    def flat_map(self, f: Callable[[T], Outcome[U]]) -> Outcome[U]:
        return self  # type: ignore[return-value]

    async def flat_map_async(
        self, f: Callable[[T], Awaitable[Outcome[U]]]
    ) -> Outcome[U]:
        return self  # type: ignore[return-value]

    def failed(self) -> Outcome[Any]:
        return Ok(self.error)

    def if_success_or_else(
        self,
        f: Callable[[T], Any],
        g: Optional[Callable[[], Any]] = None,
    ) -> None:
        if g is not None:
            g()

    async def if_success_or_else_async(
        self,
        f: Callable[[T], Awaitable[Any]],
        g: Optional[Callable[[], Awaitable[Any]]] = None,
    ) -> None:
        if g is not None:
            await g()

    def or_(self, alternative: Outcome[U]) -> Outcome[T] | Outcome[U]:
        return alternative

    def or_else(self, default: U) -> T | U:
        return default

    def or_else_raise(self, f: Optional[Callable[[Any], Any]] = None) -> NoReturn:
        if f is None:
            raise _raisable(self.error)
        raise _raisable(f(self.error))

    async def or_else_raise_async(
        self, f: Optional[Callable[[Any], Awaitable[Any]]] = None
    ) -> NoReturn:
        if f is None:
            raise _raisable(self.error)
        raise _raisable(await f(self.error))

    def recover(self, f: Callable[[Any], Optional[U]]) -> Outcome[T] | Outcome[U]:
        try:
            produced = f(self.error)
        except Exception as e:
            return _captured("recover", e)
        return _defined(produced, self.error)

    async def recover_async(
        self, f: Callable[[Any], Awaitable[Optional[U]]]
    ) -> Outcome[T] | Outcome[U]:
        try:
            produced = await f(self.error)
        except Exception as e:
            return _captured("recover_async", e)
        return _defined(produced, self.error)

    def recover_with(
        self, f: Callable[[Any], Optional[Outcome[U]]]
    ) -> Outcome[T] | Outcome[U]:
        try:
            produced = f(self.error)
        except Exception as e:
            return _captured("recover_with", e)
        return _replaced(produced, self.error)

    async def recover_with_async(
        self, f: Callable[[Any], Awaitable[Optional[Outcome[U]]]]
    ) -> Outcome[T] | Outcome[U]:
        try:
            produced = await f(self.error)
        except Exception as e:
            return _captured("recover_with_async", e)
        return _replaced(produced, self.error)

    def reduce(self, f: Callable[[T], U], g: Callable[[Any], U]) -> U:
        return g(self.error)

    async def reduce_async(
        self,
        f: Callable[[T], Awaitable[U]],
        g: Callable[[Any], Awaitable[U]],
    ) -> U:
        return await g(self.error)

    def transform(
        self,
        f: Callable[[T], Outcome[U]],
        g: Callable[[Any], Outcome[U]],
    ) -> Outcome[U]:
        return self.recover_with(g)  # type: ignore[return-value]

    async def transform_async(
        self,
        f: Callable[[T], Awaitable[Outcome[U]]],
        g: Callable[[Any], Awaitable[Outcome[U]]],
    ) -> Outcome[U]:
        return await self.recover_with_async(g)  # type: ignore[return-value]


def flatten(nested: Outcome[Outcome[T]]) -> Outcome[T]:
    """Remove one level of nesting from an outcome of an outcome.

    An Ok returns its inner outcome as-is, even when the inner one is an
    Err. An Err is returned unchanged.

    Raises:
        TypeError: If an Ok does not hold an outcome.
    """
    if isinstance(nested, Err):
        return nested  # type: ignore[return-value]
    inner = nested.get()
    if not isinstance(inner, Outcome):
        raise TypeError(f"Cannot flatten Ok holding {type(inner).__name__}")
    return inner


# Branching shared by each sync method and its async sibling.


def _captured(operation: str, exc: Exception) -> Err[Any]:
    if failure_tracing_enabled():
        logger.debug(
            "failure_captured",
            operation=operation,
            error_type=type(exc).__name__,
            error=str(exc),
        )
    return Err(exc)


def _defined(produced: Optional[U], subject: Any) -> Outcome[U]:
    if produced is None:
        return Err(NotDefinedError(subject))
    return Ok(produced)


def _kept(ok: Ok[T], verdict: Any) -> Outcome[T]:
    if verdict:
        return ok
    return Err(PredicateError(ok.value))


def _replaced(produced: Optional[Outcome[U]], subject: Any) -> Outcome[U]:
    if produced is None:
        return Err(NotDefinedError(subject))
    return produced


def _raisable(payload: Any) -> BaseException:
    if isinstance(payload, BaseException):
        return payload
    return FailurePayloadError(payload)
