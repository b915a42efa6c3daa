"""Common time utilities."""

from __future__ import annotations

import datetime as dt

EPOCH = dt.datetime(1970, 1, 1, tzinfo=dt.UTC)
"""Stand-in for repositories GitHub reports without a push timestamp."""

_GITHUB_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def utcnow() -> dt.datetime:
    """Return an aware UTC timestamp."""
    return dt.datetime.now(dt.UTC)


def ensure_utc(value: dt.datetime) -> dt.datetime:
    """Return ``value`` in UTC, treating naive timestamps as already UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=dt.UTC)
    return value.astimezone(dt.UTC)


def format_github_timestamp(value: dt.datetime) -> str:
    """Format a timestamp as ``YYYY-MM-DDTHH:MM:SSZ`` with second precision.

    Examples
    --------
    >>> format_github_timestamp(dt.datetime(2024, 7, 1, 9, 30, 5, 999, tzinfo=dt.UTC))
    '2024-07-01T09:30:05Z'

    """
    return ensure_utc(value).strftime(_GITHUB_TIMESTAMP_FORMAT)
