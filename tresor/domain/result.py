"""Result type for fallible parsing: Ok(value) or Err(error).

Request parsing returns a Result instead of raising, so callers decide
where a failure turns into an HTTP error.
"""

from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful outcome carrying value."""

    value: T


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failed outcome carrying error."""

    error: E


Result: TypeAlias = Ok[T] | Err[E]
