from __future__ import annotations

import asyncio

import httpx
import pytest

from cinesearch.errors import (
    CinesearchError,
    DecodeError,
    RepositoryError,
    TransportError,
    UpstreamError,
)
from cinesearch.repository._errors import extract_status_code, to_error_info

pytestmark = pytest.mark.unit


def test_repository_errors_share_a_base() -> None:
    for cls in (TransportError, UpstreamError, DecodeError):
        err = cls("boom")
        assert isinstance(err, RepositoryError)
        assert isinstance(err, CinesearchError)


def test_error_kinds() -> None:
    assert TransportError("x").kind == "transport"
    assert UpstreamError("x").kind == "upstream"
    assert DecodeError("x").kind == "decode"


def test_upstream_error_defaults_to_none() -> None:
    err = UpstreamError("fail")
    assert err.hint is None
    assert err.status_code is None


def test_status_code_found_through_exception_chain() -> None:
    inner = UpstreamError("Service Unavailable", status_code=503)
    try:
        try:
            raise inner
        except UpstreamError as e:
            raise RuntimeError("wrapped") from e
    except RuntimeError as outer:
        assert extract_status_code(outer) == 503


def test_out_of_range_status_is_ignored() -> None:
    assert extract_status_code(UpstreamError("odd", status_code=42)) is None


def test_upstream_error_keeps_status_note() -> None:
    exc = UpstreamError("Service Unavailable", status_code=503)

    info = to_error_info(exc, operation="Search for 'x'")

    assert info.kind == "upstream"
    assert info.message == "Search for 'x' failed (status=503): Service Unavailable"
    assert info.cause is exc


def test_http_transport_error_maps_to_transport() -> None:
    request = httpx.Request("GET", "https://omdb.test/")
    exc = httpx.ConnectError("connection refused", request=request)

    info = to_error_info(exc, operation="Search")

    assert info.kind == "transport"
    assert info.message == "Search failed: connection refused"


def test_json_error_maps_to_decode() -> None:
    info = to_error_info(ValueError("Expecting value"), operation="Search")
    assert info.kind == "decode"
    assert info.message == "Search failed: Expecting value"


def test_cancellation_is_never_converted() -> None:
    with pytest.raises(asyncio.CancelledError):
        to_error_info(asyncio.CancelledError(), operation="Search")
