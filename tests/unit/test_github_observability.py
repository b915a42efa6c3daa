"""Unit tests for fetch observability."""

from __future__ import annotations

import datetime as dt

import pytest

from showcase.github import (
    ErrorCategory,
    FetchEventLogger,
    FetchEventType,
    GitHubAPIError,
    GitHubConfigError,
    GitHubResponseShapeError,
    GitHubTransportError,
    RateLimit,
    categorize_error,
)


class _FakeLogger:
    """Collects log calls for assertions."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str]] = []
        self.exc_infos: list[object | None] = []

    def log(
        self,
        level: str,
        message: str,
        /,
        *,
        exc_info: object | None = None,
        stack_info: bool = False,
    ) -> str:
        self.calls.append((level, message))
        self.exc_infos.append(exc_info)
        return message


@pytest.mark.parametrize(
    ("error", "expected"),
    [
        pytest.param(
            GitHubAPIError.http_error(503, "unavailable"),
            ErrorCategory.TRANSIENT,
            id="server_error",
        ),
        pytest.param(
            GitHubAPIError.http_error(429, "slow down"),
            ErrorCategory.TRANSIENT,
            id="too_many_requests",
        ),
        pytest.param(
            GitHubAPIError.http_error(404, "missing"),
            ErrorCategory.CLIENT_ERROR,
            id="not_found",
        ),
        pytest.param(
            GitHubTransportError("connection reset"),
            ErrorCategory.TRANSIENT,
            id="transport",
        ),
        pytest.param(
            GitHubResponseShapeError("bad"),
            ErrorCategory.SCHEMA_DRIFT,
            id="shape",
        ),
        pytest.param(
            GitHubConfigError.insecure_base_url(),
            ErrorCategory.CONFIGURATION,
            id="config",
        ),
        pytest.param(RuntimeError("?"), ErrorCategory.UNKNOWN, id="unknown"),
    ],
)
def test_categorize_error(error: BaseException, expected: ErrorCategory) -> None:
    """Errors map onto alerting categories."""
    assert categorize_error(error) == expected


def test_page_event_is_structured() -> None:
    """Page events carry the event type and counters."""
    logger = _FakeLogger()

    FetchEventLogger(logger).page_fetched(
        url="https://api.example.test/p1", page=1, repositories=3
    )

    assert logger.calls == [
        (
            "INFO",
            f"[{FetchEventType.PAGE_COMPLETED}] page=1 repositories=3 "
            "url=https://api.example.test/p1",
        )
    ]


def test_low_rate_limit_is_a_warning() -> None:
    """A nearly exhausted quota is logged at WARNING."""
    logger = _FakeLogger()
    reset = dt.datetime(2024, 7, 8, 12, 0, tzinfo=dt.UTC)

    FetchEventLogger(logger).rate_limit_observed(
        RateLimit(remaining=3, limit=60, reset=reset)
    )

    assert logger.calls == [
        (
            "WARNING",
            f"[{FetchEventType.RATE_LIMIT}] remaining=3 limit=60 "
            "reset_at=2024-07-08T12:00:00+00:00",
        )
    ]


def test_rate_limit_without_limit_is_ignored() -> None:
    """Headers that carry no limit produce no event."""
    logger = _FakeLogger()

    FetchEventLogger(logger).rate_limit_observed(RateLimit(remaining=0, limit=0))

    assert logger.calls == []


def test_failure_event_includes_category() -> None:
    """Failures log at ERROR with type and category."""
    logger = _FakeLogger()
    error = GitHubAPIError.http_error(500, "boom")

    FetchEventLogger(logger).fetch_failed(owner="octo", error=error)

    ((level, message),) = logger.calls
    assert level == "ERROR"
    assert "owner=octo" in message
    assert "error_type=GitHubAPIError" in message
    assert "error_category=transient" in message
    assert logger.exc_infos == [error]
