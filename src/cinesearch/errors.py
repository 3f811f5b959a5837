"""Exception hierarchy for Cinesearch.

Repository exceptions never leave the repository: they are converted into
``Failure(ErrorInfo)`` values at that boundary. The remaining classes signal
programming or configuration mistakes and are raised normally.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator


class CinesearchError(Exception):
    """Base exception for all Cinesearch errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class ConfigurationError(CinesearchError):
    """Configuration validation or resolution failed."""


class InternalError(CinesearchError):
    """A Cinesearch internal error (bug) or invariant violation."""


class ClosedError(CinesearchError):
    """A coordinator or one of its slots was used after ``close()``."""


class RepositoryError(CinesearchError):
    """Base class for failures raised inside a repository call."""

    #: Short tag copied into ``ErrorInfo.kind``.
    kind: str = "transport"


class TransportError(RepositoryError):
    """Network-level failure: timeout, refused connection, TLS, ..."""

    kind = "transport"


class UpstreamError(RepositoryError):
    """The catalog service answered, but not with a usable success."""

    kind = "upstream"

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.status_code = status_code


class DecodeError(RepositoryError):
    """The response body could not be parsed into the expected payload."""

    kind = "decode"


def _walk_exception_chain(exc: BaseException) -> Iterator[BaseException]:
    """Yield *exc* and its ``__cause__``/``__context__`` chain, with cycle protection."""
    seen: set[int] = set()
    stack: list[BaseException] = [exc]
    while stack:
        cur = stack.pop()
        if id(cur) in seen:
            continue
        seen.add(id(cur))
        yield cur

        cause = cur.__cause__
        if isinstance(cause, BaseException):
            stack.append(cause)
        context = cur.__context__
        if isinstance(context, BaseException):
            stack.append(context)
