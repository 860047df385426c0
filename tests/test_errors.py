from __future__ import annotations

from core.domain.models import ErrorObj, RateLimit
from core.errors import (
    ErrorResponse,
    HTTPError,
    ParameterError,
    ResponseDecodeError,
    StreamError,
    StreamErrorType,
    rate_limit_from_error,
)


def test_rate_limit_from_headers() -> None:
    limit = RateLimit.from_headers(
        {"x-rate-limit-limit": "15", "x-rate-limit-remaining": "14", "x-rate-limit-reset": "60"}
    )

    assert limit == RateLimit(limit=15, remaining=14, reset=60)
    assert limit.reset_at.year == 1970


def test_rate_limit_missing_or_invalid_headers() -> None:
    assert RateLimit.from_headers({}) is None
    assert (
        RateLimit.from_headers(
            {"x-rate-limit-limit": "a", "x-rate-limit-remaining": "1", "x-rate-limit-reset": "1"}
        )
        is None
    )


def test_error_response_message_and_dict() -> None:
    limit = RateLimit(limit=1, remaining=0, reset=10)
    err = ErrorResponse(
        status_code=400,
        title="Invalid Request",
        errors=[ErrorObj(detail="bad ids", parameter="ids")],
        rate_limit=limit,
    )

    assert str(err) == "twitter api error 400: Invalid Request: bad ids"
    assert err.to_dict() == {
        "status_code": 400,
        "title": "Invalid Request",
        "errors": [{"detail": "bad ids", "parameter": "ids"}],
        "rate_limit": {"limit": 1, "remaining": 0, "reset": 10},
    }


def test_http_error_message() -> None:
    err = HTTPError(status="404 Not Found", status_code=404, url="https://x/2//tweets")

    assert str(err) == "twitter [https://x/2//tweets] status: 404 Not Found code: 404"
    assert err.to_dict() == {
        "status": "404 Not Found",
        "status_code": 404,
        "url": "https://x/2//tweets",
    }


def test_rate_limit_from_error() -> None:
    limit = RateLimit(limit=1, remaining=0, reset=10)

    assert rate_limit_from_error(ErrorResponse(status_code=429, rate_limit=limit)) is limit
    assert rate_limit_from_error(ResponseDecodeError("tweet lookup", rate_limit=limit)) is limit
    assert rate_limit_from_error(ParameterError("nope")) is None
    assert rate_limit_from_error(RuntimeError("x")) is None


def test_stream_error_message() -> None:
    err = StreamError(StreamErrorType.TWEET, "unmarshal tweet stream")

    assert str(err) == "tweet: unmarshal tweet stream"
    assert err.type is StreamErrorType.TWEET


def test_parameter_error_is_value_error() -> None:
    assert isinstance(ParameterError("x"), ValueError)
