"""Typed models for repositories fetched from the GitHub REST API."""

from __future__ import annotations

import dataclasses
import datetime as dt

import msgspec

from showcase.common.time import EPOCH, ensure_utc


class Repository(msgspec.Struct, frozen=True, kw_only=True):
    """Repository metadata relevant to curation.

    Records are immutable once decoded; filtering, sorting and rendering
    always produce new lists that reference the same instances.

    Attributes
    ----------
    name : str
        Short repository name.
    html_url : str
        Browser URL. Untrusted; sanitised before it is rendered as a link.
    description : str
        Free text, possibly empty or multi-line.
    topics : tuple[str, ...]
        Topic labels as reported by GitHub.
    is_fork, is_archived, is_private : bool
        Repository flags.
    language : str
        Primary language, empty when GitHub reports none.
    star_count : int
        Stargazer count.
    pushed_at : datetime.datetime
        Last push time in UTC.

    """

    name: str
    html_url: str = ""
    description: str = ""
    topics: tuple[str, ...] = ()
    is_fork: bool = False
    is_archived: bool = False
    is_private: bool = False
    language: str = ""
    star_count: int = 0
    pushed_at: dt.datetime = EPOCH


class RepositoryPayload(msgspec.Struct, kw_only=True):
    """Wire shape of one element of ``GET /users/{owner}/repos``.

    GitHub sends ``null`` for several of these fields, so everything is
    optional here and defaults are applied by :meth:`to_repository`.
    """

    name: str | None = None
    full_name: str | None = None
    html_url: str | None = None
    description: str | None = None
    topics: list[str] | None = None
    fork: bool | None = None
    archived: bool | None = None
    private: bool | None = None
    language: str | None = None
    stargazers_count: int | None = None
    pushed_at: dt.datetime | None = None

    def to_repository(self) -> Repository:
        """Map the wire payload onto an immutable :class:`Repository`."""
        return Repository(
            name=self.name or "",
            html_url=self.html_url or "",
            description=self.description or "",
            topics=tuple(self.topics or ()),
            is_fork=bool(self.fork),
            is_archived=bool(self.archived),
            is_private=bool(self.private),
            language=self.language or "",
            star_count=max(self.stargazers_count or 0, 0),
            pushed_at=ensure_utc(self.pushed_at) if self.pushed_at else EPOCH,
        )


@dataclasses.dataclass(frozen=True, slots=True)
class RateLimit:
    """Quota metadata from the ``X-RateLimit-*`` response headers."""

    remaining: int
    limit: int
    reset: dt.datetime | None = None
