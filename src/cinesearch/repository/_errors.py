"""Map exceptions raised during a repository call into ``ErrorInfo`` values."""

from __future__ import annotations

import asyncio

import httpx
from pydantic import ValidationError

from cinesearch.errors import (
    DecodeError,
    RepositoryError,
    TransportError,
    _walk_exception_chain,
)
from cinesearch.result import ErrorInfo


def extract_status_code(exc: BaseException) -> int | None:
    """Walk the exception chain to find an HTTP status code."""
    for e in _walk_exception_chain(exc):
        value = getattr(e, "status_code", None)
        if isinstance(value, int) and 100 <= value <= 599:
            return value
    return None


def _classify(exc: BaseException) -> RepositoryError:
    if isinstance(exc, RepositoryError):
        return exc
    if isinstance(exc, httpx.TimeoutException):
        return TransportError(str(exc) or "request timed out")
    if isinstance(exc, httpx.HTTPError):
        return TransportError(str(exc) or type(exc).__name__)
    if isinstance(exc, ValidationError):
        return DecodeError(
            f"unexpected payload shape ({exc.error_count()} validation errors)"
        )
    if isinstance(exc, ValueError):
        return DecodeError(str(exc) or "malformed response body")
    return TransportError(str(exc) or type(exc).__name__)


def to_error_info(exc: BaseException, *, operation: str) -> ErrorInfo:
    """Describe a failed repository call as a user-displayable ``ErrorInfo``.

    Cancellation is re-raised, never converted.
    """
    if isinstance(exc, asyncio.CancelledError):
        raise exc

    classified = _classify(exc)
    status_code = extract_status_code(classified)
    status_note = f" (status={status_code})" if isinstance(status_code, int) else ""
    detail = str(classified)
    message = (
        f"{operation} failed{status_note}: {detail}"
        if detail
        else f"{operation} failed{status_note}"
    )
    return ErrorInfo(message=message, kind=classified.kind, cause=exc)
