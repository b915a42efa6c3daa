"""GitHub REST client, repository models and fetch observability."""

from __future__ import annotations

from .client import GitHubRESTClient, next_page_url, parse_rate_limit
from .errors import (
    GitHubAPIError,
    GitHubConfigError,
    GitHubResponseShapeError,
    GitHubTransportError,
)
from .models import RateLimit, Repository
from .observability import (
    ErrorCategory,
    FetchEventLogger,
    FetchEventType,
    FetchObserver,
    NullFetchObserver,
    categorize_error,
)

__all__ = [
    "ErrorCategory",
    "FetchEventLogger",
    "FetchEventType",
    "FetchObserver",
    "GitHubAPIError",
    "GitHubConfigError",
    "GitHubRESTClient",
    "GitHubResponseShapeError",
    "GitHubTransportError",
    "NullFetchObserver",
    "RateLimit",
    "Repository",
    "categorize_error",
    "next_page_url",
    "parse_rate_limit",
]
