"""
Result envelope for consistent success/failure handling.

Every fallible rdme operation returns ``Result[T]``: ``Ok[T]`` on success,
``Err[T]`` carrying an exception (normally an ``RdmeError``) on failure.
Callers pattern-match or check ``is_err()`` instead of wrapping each stage
in try/except, which keeps the "no partial write on failure" rule of the
pipeline visible in the code.

Examples:
    >>> from rdme.core.result import Ok, Err, Result
    >>> def parse_port(text: str) -> Result[int]:
    ...     if not text.isdigit():
    ...         return Err(ValueError(text))
    ...     return Ok(int(text))
    >>> match parse_port("8080"):
    ...     case Ok(value):
    ...         print(value)
    ...     case Err(error):
    ...         print(f"bad port: {error}")
    8080
    >>> parse_port("x").map(lambda p: p + 1).is_err()
    True

Tags:
    result-pattern, error-handling, functional-programming, rdme

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """
    Successful result containing a value.

    Manifesto:
        - **Value presence guaranteed:** Unlike Optional, Ok always has a value
          (which may itself be ``None`` when "nothing" is a valid outcome)
        - **Transformation without unwrapping:** Use map to stay in Result
        - **Immutability:** Frozen dataclass prevents accidental mutation

    Examples:
        >>> Ok(10).map(lambda x: x * 2).unwrap()
        20
    """

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        """Get the value. Safe for Ok."""
        return self.value

    def unwrap_err(self) -> Exception:
        """Raise: an Ok has no error."""
        raise ValueError(f"Called unwrap_err on Ok: {self.value!r}")

    def map(self, f: Callable[[T], U]) -> Result[U]:
        """Transform the value if Ok."""
        return Ok(f(self.value))

    def map_err(self, f: Callable[[Exception], Exception]) -> Result[T]:
        """Transform error if Err (no-op for Ok)."""
        return self

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[T]):
    """
    Failed result containing an error.

    The error is an exception instance but is never raised by ``Err``
    itself, except through ``unwrap()``, which is meant for tests and for
    code paths that have already checked ``is_ok()``.

    Examples:
        >>> err = Err(ValueError("boom"))
        >>> err.map(lambda x: x + 1).is_err()
        True
    """

    error: Exception

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> T:
        """Raise the contained error."""
        raise self.error

    def unwrap_err(self) -> Exception:
        """Get the error. Safe for Err."""
        return self.error

    def map(self, f: Callable[[T], U]) -> Result[U]:
        """No-op for Err."""
        return Err(self.error)

    def map_err(self, f: Callable[[Exception], Exception]) -> Result[T]:
        """Transform the error."""
        return Err(f(self.error))

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


# Type alias for Result
Result = Ok[T] | Err[T]
