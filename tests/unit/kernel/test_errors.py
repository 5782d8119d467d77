"""Unit tests for the kernel error hierarchy."""

from __future__ import annotations

import json

import pytest

from singleflight.kernel.errors import (
    AbortedError,
    BaseError,
    NoInstanceError,
    RetriesEndedError,
    RetryError,
    RetryErrorKind,
    RetryLimitError,
    StoppedError,
)


class TestBaseError:
    def test_defaults(self) -> None:
        err = BaseError("boom")
        assert err.message == "boom"
        assert err.code == "base_error"
        assert err.detail == {}
        assert err.cause is None

    def test_cause_is_chained(self) -> None:
        cause = ValueError("inner")
        err = BaseError("outer", cause=cause)
        assert err.__cause__ is cause
        assert err.to_dict()["cause"] == repr(cause)

    def test_str_is_json(self) -> None:
        err = BaseError("boom", code="custom", detail={"k": 1})
        assert json.loads(str(err)) == {"code": "custom", "message": "boom", "detail": {"k": 1}}

    def test_repr(self) -> None:
        assert repr(BaseError("boom")) == "BaseError(code='base_error', message='boom')"


class TestRetryErrors:
    @pytest.mark.parametrize(
        "err, kind, message",
        [
            (AbortedError("db", 3), RetryErrorKind.ABORTED, "Retries aborted after 3 attempts"),
            (StoppedError("db"), RetryErrorKind.STOPPED, "db has been stopped"),
            (RetriesEndedError("db"), RetryErrorKind.ENDED, "Retries of db ended"),
            (RetryLimitError("db", 2), RetryErrorKind.RETRY_LIMIT, "Retry limit reached"),
            (NoInstanceError("db"), RetryErrorKind.NO_INSTANCE, "No available instance"),
        ],
    )
    def test_kind_and_message(self, err: RetryError, kind: RetryErrorKind, message: str) -> None:
        assert err.kind is kind
        assert err.message == message
        assert err.controller == "db"
        assert isinstance(err, BaseError)

    def test_only_aborted_is_terminal(self) -> None:
        assert [k for k in RetryErrorKind if k.terminal] == [RetryErrorKind.ABORTED]
        assert AbortedError("x", 1).terminal is True
        assert StoppedError("x").terminal is False

    def test_to_dict_includes_kind(self) -> None:
        payload = RetryLimitError("db", 1).to_dict()
        assert payload["kind"] == "retry_limit"
        assert payload["controller"] == "db"
        assert payload["code"] == "retry_limit_reached"
