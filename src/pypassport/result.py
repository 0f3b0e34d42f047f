"""Tagged results for callers that prefer matching over ``try``.

::

    match await attempt(client.get("theme")):
        case Ok(value=theme):
            ...
        case Err(error=err) if err.kind is ErrorKind.NOT_LOGGED_IN:
            ...
        case Err(error=err):
            ...
"""

from __future__ import annotations

from collections.abc import Awaitable
from dataclasses import dataclass
from typing import Generic, TypeVar

from pypassport.exceptions import ErrorKind, PassportError

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True, slots=True)
class Err:
    error: PassportError

    @property
    def kind(self) -> ErrorKind:
        return self.error.kind


Result = Ok[T] | Err


async def attempt(operation: Awaitable[T]) -> Ok[T] | Err:
    """Await *operation*, capturing a :class:`PassportError` as :class:`Err`.

    Other exceptions (programming errors, cancellation) propagate.
    """
    try:
        return Ok(await operation)
    except PassportError as exc:
        return Err(exc)
