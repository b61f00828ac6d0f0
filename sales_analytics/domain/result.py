"""Minimal success/failure result for value-object factories."""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from .errors import AnalyticsError

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True, slots=True)
class Err:
    error: AnalyticsError


Result = Union[Ok[T], Err]


def unwrap(result: "Result[T]") -> T:
    """Return the success value or raise the carried error."""
    match result:
        case Ok(value=value):
            return value
        case Err(error=error):
            raise error
    raise TypeError(f"Not a result: {result!r}")
