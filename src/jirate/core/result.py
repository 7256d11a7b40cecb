"""
Result type for explicit error handling.

``Ok`` carries a value, ``Err`` carries an error. Fallible steps return a
``Result`` and are chained with ``and_then``; the first ``Err`` short-circuits
the rest of the chain.

Example:
    >>> def parse(text: str) -> Result[int, str]:
    ...     return Ok(int(text)) if text.isdigit() else Err("not a number")
    >>> parse("21").map(lambda x: x * 2).unwrap()
    42
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from typing import Any, Generic, NoReturn, TypeVar


T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")
F = TypeVar("F")


class ResultError(Exception):
    """Raised when a Result is unwrapped the wrong way."""


class Result(ABC, Generic[T, E]):
    """Base class for ``Ok`` and ``Err``."""

    __slots__ = ()

    @abstractmethod
    def is_ok(self) -> bool: ...

    @abstractmethod
    def is_err(self) -> bool: ...

    @abstractmethod
    def ok(self) -> T | None: ...

    @abstractmethod
    def err(self) -> E | None: ...

    @abstractmethod
    def unwrap(self) -> T: ...

    @abstractmethod
    def unwrap_err(self) -> E: ...

    @abstractmethod
    def unwrap_or(self, default: T) -> T: ...

    @abstractmethod
    def unwrap_or_else(self, fn: Callable[[E], T]) -> T: ...

    @abstractmethod
    def expect(self, message: str) -> T: ...

    @abstractmethod
    def map(self, fn: Callable[[T], U]) -> Result[U, E]: ...

    @abstractmethod
    def map_err(self, fn: Callable[[E], F]) -> Result[T, F]: ...

    @abstractmethod
    def and_then(self, fn: Callable[[T], Result[U, E]]) -> Result[U, E]: ...

    @abstractmethod
    def or_else(self, fn: Callable[[E], Result[T, F]]) -> Result[T, F]: ...

    @abstractmethod
    def inspect(self, fn: Callable[[T], Any]) -> Result[T, E]: ...

    @abstractmethod
    def inspect_err(self, fn: Callable[[E], Any]) -> Result[T, E]: ...

    @abstractmethod
    def to_exception(self, factory: Callable[[E], Exception] | None = None) -> T:
        """
        Return the value or raise.

        Args:
            factory: Builds the exception from the error. When omitted, an
                error that is already an exception is raised as-is and any
                other error is wrapped in ResultError.
        """
        ...

    # -------------------------------------------------------------------------
    # Factories
    # -------------------------------------------------------------------------

    @staticmethod
    def from_optional(value: T | None, error: E) -> Result[T, E]:
        """Ok(value) unless value is None, in which case Err(error)."""
        if value is None:
            return Err(error)
        return Ok(value)

    @staticmethod
    def try_call(
        fn: Callable[[], T],
        error_factory: Callable[[Exception], E] | None = None,
    ) -> Result[T, Any]:
        """Run ``fn`` and capture any exception as Err."""
        try:
            return Ok(fn())
        except Exception as e:
            if error_factory is not None:
                return Err(error_factory(e))
            return Err(e)

    @staticmethod
    def collect(results: Iterable[Result[T, E]]) -> Result[list[T], E]:
        """Gather Ok values into a list, stopping at the first Err."""
        values: list[T] = []
        for result in results:
            if result.is_err():
                return Err(result.unwrap_err())
            values.append(result.unwrap())
        return Ok(values)


class Ok(Result[T, E]):
    """Successful result."""

    __slots__ = ("_value",)

    def __init__(self, value: T):
        self._value = value

    def __repr__(self) -> str:
        return f"Ok({self._value!r})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Ok) and self._value == other._value

    def __hash__(self) -> int:
        return hash(("Ok", self._value))

    def __bool__(self) -> bool:
        return True

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def ok(self) -> T:
        return self._value

    def err(self) -> None:
        return None

    def unwrap(self) -> T:
        return self._value

    def unwrap_err(self) -> NoReturn:
        raise ResultError(f"Called unwrap_err on Ok: {self._value!r}")

    def unwrap_or(self, default: T) -> T:
        return self._value

    def unwrap_or_else(self, fn: Callable[[E], T]) -> T:
        return self._value

    def expect(self, message: str) -> T:
        return self._value

    def map(self, fn: Callable[[T], U]) -> Result[U, E]:
        return Ok(fn(self._value))

    def map_err(self, fn: Callable[[E], F]) -> Result[T, F]:
        return Ok(self._value)

    def and_then(self, fn: Callable[[T], Result[U, E]]) -> Result[U, E]:
        return fn(self._value)

    def or_else(self, fn: Callable[[E], Result[T, F]]) -> Result[T, F]:
        return Ok(self._value)

    def inspect(self, fn: Callable[[T], Any]) -> Result[T, E]:
        fn(self._value)
        return self

    def inspect_err(self, fn: Callable[[E], Any]) -> Result[T, E]:
        return self

    def to_exception(self, factory: Callable[[E], Exception] | None = None) -> T:
        return self._value


class Err(Result[T, E]):
    """Failed result."""

    __slots__ = ("_error",)

    def __init__(self, error: E):
        self._error = error

    def __repr__(self) -> str:
        return f"Err({self._error!r})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Err) and self._error == other._error

    def __hash__(self) -> int:
        return hash(("Err", repr(self._error)))

    def __bool__(self) -> bool:
        return False

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def ok(self) -> None:
        return None

    def err(self) -> E:
        return self._error

    def unwrap(self) -> NoReturn:
        raise ResultError(f"Called unwrap on Err: {self._error!r}")

    def unwrap_err(self) -> E:
        return self._error

    def unwrap_or(self, default: T) -> T:
        return default

    def unwrap_or_else(self, fn: Callable[[E], T]) -> T:
        return fn(self._error)

    def expect(self, message: str) -> NoReturn:
        raise ResultError(f"{message}: {self._error!r}")

    def map(self, fn: Callable[[T], U]) -> Result[U, E]:
        return Err(self._error)

    def map_err(self, fn: Callable[[E], F]) -> Result[T, F]:
        return Err(fn(self._error))

    def and_then(self, fn: Callable[[T], Result[U, E]]) -> Result[U, E]:
        return Err(self._error)

    def or_else(self, fn: Callable[[E], Result[T, F]]) -> Result[T, F]:
        return fn(self._error)

    def inspect(self, fn: Callable[[T], Any]) -> Result[T, E]:
        return self

    def inspect_err(self, fn: Callable[[E], Any]) -> Result[T, E]:
        fn(self._error)
        return self

    def to_exception(self, factory: Callable[[E], Exception] | None = None) -> NoReturn:
        if factory is not None:
            raise factory(self._error)
        if isinstance(self._error, Exception):
            raise self._error
        raise ResultError(f"Result is Err: {self._error!r}")
