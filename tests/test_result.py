from __future__ import annotations

import dataclasses

import pytest

from cinesearch.result import ErrorInfo, Failure, Success, is_success, unwrap_or

pytestmark = pytest.mark.unit


def test_results_are_frozen() -> None:
    with pytest.raises(dataclasses.FrozenInstanceError):
        Success(1).value = 2  # type: ignore[misc]


def test_error_info_equality_ignores_cause() -> None:
    assert ErrorInfo("boom", cause=RuntimeError("a")) == ErrorInfo("boom")
    assert str(ErrorInfo("boom")) == "boom"


def test_unwrap_or_and_is_success() -> None:
    ok = Success([1])
    bad = Failure(ErrorInfo("nope"))

    assert unwrap_or(ok, []) == [1]
    assert unwrap_or(bad, []) == []
    assert is_success(ok)
    assert not is_success(bad)


def test_pattern_matching_is_exhaustive_over_two_variants() -> None:
    def describe(result: Success[int] | Failure) -> str:
        match result:
            case Success(value=v):
                return f"ok {v}"
            case Failure(error=e):
                return f"error {e.message}"

    assert describe(Success(3)) == "ok 3"
    assert describe(Failure(ErrorInfo("x"))) == "error x"
