"""Inclusion predicates for curated repository listings.

Private repositories are always dropped; every other predicate is driven by
:class:`FilterOptions`. Filtering is stable: kept records preserve their
relative input order.
"""

from __future__ import annotations

import dataclasses
import datetime as dt
import typing as typ

from showcase.common.time import ensure_utc, utcnow

if typ.TYPE_CHECKING:
    from showcase.github.models import Repository


def _normalise_tag(value: str) -> str:
    return value.strip().lower()


@dataclasses.dataclass(frozen=True, slots=True)
class FilterOptions:
    """Options controlling which repositories survive filtering.

    Attributes
    ----------
    include_forks, include_archived
        Keep forks / archived repositories.
    min_stars
        Drop repositories with fewer stars.
    since_days
        Drop repositories last pushed more than this many days before
        ``now``. ``0`` disables the check.
    require_description
        Drop repositories whose description is blank.
    tags
        Topics to match. Empty disables topic filtering.
    tags_match_all
        Require every tag instead of any one of them.
    now
        Reference time for ``since_days``; wall-clock UTC when ``None``.

    """

    include_forks: bool = False
    include_archived: bool = False
    min_stars: int = 0
    since_days: int = 0
    require_description: bool = False
    tags: tuple[str, ...] = ()
    tags_match_all: bool = False
    now: dt.datetime | None = None

    def cutoff(self) -> dt.datetime | None:
        """Return the oldest acceptable push time, or ``None`` when disabled."""
        if self.since_days <= 0:
            return None
        now = ensure_utc(self.now) if self.now is not None else utcnow()
        return now - dt.timedelta(days=self.since_days)


def matches_topics(
    topics: typ.Iterable[str],
    tags: typ.Iterable[str],
    *,
    match_all: bool,
) -> bool:
    """Return True when ``topics`` satisfy ``tags``.

    Both sides are trimmed and lower-cased and blanks are discarded. A
    repository without topics never matches. In "all" mode at least one
    non-blank tag must have been supplied, so a tag list made only of blanks
    never matches.
    """
    topic_set = {_normalise_tag(topic) for topic in topics} - {""}
    if not topic_set:
        return False

    matched = 0
    for raw_tag in tags:
        tag = _normalise_tag(raw_tag)
        if not tag:
            continue
        if tag in topic_set:
            if not match_all:
                return True
            matched += 1
        elif match_all:
            return False

    return match_all and matched > 0


def _keep(
    repo: Repository,
    options: FilterOptions,
    cutoff: dt.datetime | None,
) -> bool:
    checks = (
        not repo.is_private,
        options.include_forks or not repo.is_fork,
        options.include_archived or not repo.is_archived,
        repo.star_count >= options.min_stars,
        not options.require_description or bool(repo.description.strip()),
        not options.tags
        or matches_topics(
            repo.topics, options.tags, match_all=options.tags_match_all
        ),
        cutoff is None or repo.pushed_at >= cutoff,
    )
    return all(checks)


def filter_repositories(
    repositories: typ.Iterable[Repository],
    options: FilterOptions | None = None,
) -> list[Repository]:
    """Return the repositories that pass every applicable predicate."""
    effective = options or FilterOptions()
    cutoff = effective.cutoff()
    return [repo for repo in repositories if _keep(repo, effective, cutoff)]
