"""Observability hooks for repository fetching.

The client never logs directly. It reports progress to an injected
:class:`FetchObserver`; :class:`FetchEventLogger` is the default
implementation and emits structured ``[event] key=value`` lines through
femtologging.
"""

from __future__ import annotations

import enum
import typing as typ

from showcase.logging import get_logger, log_error, log_info, log_warning

from .errors import (
    GitHubAPIError,
    GitHubConfigError,
    GitHubResponseShapeError,
    GitHubTransportError,
)

if typ.TYPE_CHECKING:
    from .models import RateLimit

_HTTP_SERVER_ERROR_THRESHOLD = 500
_HTTP_TOO_MANY_REQUESTS = 429

# Below this many remaining requests the rate-limit event is raised to WARNING.
RATE_LIMIT_LOW_WATERMARK = 10


class FetchEventType(enum.StrEnum):
    """Structured log event types for repository fetching."""

    PAGE_COMPLETED = "fetch.page.completed"
    RATE_LIMIT = "fetch.rate_limit"
    FETCH_COMPLETED = "fetch.completed"
    FETCH_FAILED = "fetch.failed"


class ErrorCategory(enum.StrEnum):
    """Categories used to classify fetch failures."""

    TRANSIENT = "transient"
    CLIENT_ERROR = "client_error"
    SCHEMA_DRIFT = "schema_drift"
    CONFIGURATION = "configuration"
    UNKNOWN = "unknown"


_EXCEPTION_CATEGORY_MAP: tuple[tuple[type[BaseException], ErrorCategory], ...] = (
    (GitHubTransportError, ErrorCategory.TRANSIENT),
    (GitHubResponseShapeError, ErrorCategory.SCHEMA_DRIFT),
    (GitHubConfigError, ErrorCategory.CONFIGURATION),
)


def categorize_error(exc: BaseException) -> ErrorCategory:
    """Categorise a fetch failure.

    Server errors and ``429 Too Many Requests`` count as transient; any other
    non-success status is a client error.
    """
    if isinstance(exc, GitHubAPIError):
        status = exc.status_code
        if status is not None and (
            status >= _HTTP_SERVER_ERROR_THRESHOLD or status == _HTTP_TOO_MANY_REQUESTS
        ):
            return ErrorCategory.TRANSIENT
        return ErrorCategory.CLIENT_ERROR

    for exc_type, category in _EXCEPTION_CATEGORY_MAP:
        if isinstance(exc, exc_type):
            return category

    return ErrorCategory.UNKNOWN


class FetchObserver(typ.Protocol):
    """Receives progress notifications from the repository fetcher."""

    def page_fetched(self, *, url: str, page: int, repositories: int) -> None:
        """Handle one successfully decoded page."""
        ...

    def rate_limit_observed(self, rate_limit: RateLimit) -> None:
        """Handle rate-limit headers attached to a response."""
        ...

    def fetch_completed(self, *, owner: str, pages: int, repositories: int) -> None:
        """Handle the end of pagination."""
        ...

    def fetch_failed(self, *, owner: str, error: BaseException) -> None:
        """Handle a fetch that aborted with ``error``."""
        ...


class NullFetchObserver:
    """Observer that ignores every notification."""

    def page_fetched(self, *, url: str, page: int, repositories: int) -> None:
        """Ignore page notifications."""

    def rate_limit_observed(self, rate_limit: RateLimit) -> None:
        """Ignore rate-limit notifications."""

    def fetch_completed(self, *, owner: str, pages: int, repositories: int) -> None:
        """Ignore completion notifications."""

    def fetch_failed(self, *, owner: str, error: BaseException) -> None:
        """Ignore failure notifications."""


class FetchEventLogger:
    """Emit structured fetch events via femtologging.

    Pages and completions log at INFO, a nearly exhausted quota at WARNING,
    and failures at ERROR with the error category attached.
    """

    def __init__(self, logger: typ.Any | None = None) -> None:  # noqa: ANN401
        """Log through ``logger``, defaulting to this module's logger."""
        self._logger = logger if logger is not None else get_logger(__name__)

    def page_fetched(self, *, url: str, page: int, repositories: int) -> None:
        """Log one decoded page."""
        log_info(
            self._logger,
            "[%s] page=%d repositories=%d url=%s",
            FetchEventType.PAGE_COMPLETED,
            page,
            repositories,
            url,
        )

    def rate_limit_observed(self, rate_limit: RateLimit) -> None:
        """Log the remaining quota, escalating when it runs low."""
        if rate_limit.limit <= 0:
            return
        reset = rate_limit.reset.isoformat() if rate_limit.reset else "unknown"
        log = (
            log_warning
            if rate_limit.remaining < RATE_LIMIT_LOW_WATERMARK
            else log_info
        )
        log(
            self._logger,
            "[%s] remaining=%d limit=%d reset_at=%s",
            FetchEventType.RATE_LIMIT,
            rate_limit.remaining,
            rate_limit.limit,
            reset,
        )

    def fetch_completed(self, *, owner: str, pages: int, repositories: int) -> None:
        """Log the totals for a finished fetch."""
        log_info(
            self._logger,
            "[%s] owner=%s pages=%d repositories=%d",
            FetchEventType.FETCH_COMPLETED,
            owner,
            pages,
            repositories,
        )

    def fetch_failed(self, *, owner: str, error: BaseException) -> None:
        """Log an aborted fetch with its error category."""
        log_error(
            self._logger,
            "[%s] owner=%s error_type=%s error_category=%s error_message=%s",
            FetchEventType.FETCH_FAILED,
            owner,
            type(error).__name__,
            categorize_error(error),
            str(error),
            exc_info=error,
        )
