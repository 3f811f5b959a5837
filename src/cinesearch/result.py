"""Result type passed across the repository boundary.

Failures are values, not exceptions: the repository returns ``Failure`` and
the coordinator publishes it like any other outcome.
"""

from __future__ import annotations

import dataclasses
import typing

TSuccess = typing.TypeVar("TSuccess")
TDefault = typing.TypeVar("TDefault")


@dataclasses.dataclass(frozen=True, slots=True)
class ErrorInfo:
    """User-displayable description of a failed fetch.

    ``kind`` is one of ``"transport"``, ``"upstream"`` or ``"decode"``. It is
    informational; callers branch on Success vs Failure only.
    """

    message: str
    kind: str = "transport"
    #: Opaque source exception, kept for logging. Not part of equality.
    cause: BaseException | None = dataclasses.field(
        default=None, compare=False, repr=False
    )

    def __str__(self) -> str:
        return self.message


@dataclasses.dataclass(frozen=True, slots=True)
class Success(typing.Generic[TSuccess]):
    """A successful fetch."""

    value: TSuccess


@dataclasses.dataclass(frozen=True, slots=True)
class Failure:
    """A failed fetch, carrying its error description."""

    error: ErrorInfo


Result = Success[TSuccess] | Failure


def is_success(result: object) -> typing.TypeGuard[Success[typing.Any]]:
    """Return True when *result* is a ``Success``."""
    return isinstance(result, Success)


def unwrap_or(
    result: Success[TSuccess] | Failure, default: TDefault
) -> TSuccess | TDefault:
    """Return the success value, or *default* for a failure."""
    match result:
        case Success(value=value):
            return value
        case Failure():
            return default
