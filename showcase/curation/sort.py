"""Deterministic ordering and truncation of repository listings."""

from __future__ import annotations

import enum
import typing as typ

if typ.TYPE_CHECKING:
    from showcase.github.models import Repository


class SortMode(enum.StrEnum):
    """Primary sort key for curated listings."""

    PUSHED = "pushed"
    STARS = "stars"


def _pushed_key(repo: Repository) -> tuple[float, int, str]:
    return (-repo.pushed_at.timestamp(), -repo.star_count, repo.name.lower())


def _stars_key(repo: Repository) -> tuple[int, float, str]:
    return (-repo.star_count, -repo.pushed_at.timestamp(), repo.name.lower())


def sort_repositories(
    repositories: typ.Iterable[Repository],
    mode: SortMode | str = SortMode.PUSHED,
) -> list[Repository]:
    """Return a new list ordered by ``mode``.

    ``pushed`` orders by push time, then stars, both descending; ``stars``
    swaps the first two keys. Names break remaining ties, ascending and
    case-insensitively. Unrecognised modes sort as ``pushed``.
    """
    key = _stars_key if mode == SortMode.STARS else _pushed_key
    return sorted(repositories, key=key)


def top_n(repositories: list[Repository], n: int) -> list[Repository]:
    """Return the first ``n`` repositories.

    The list is returned unchanged when ``n <= 0`` or ``n`` is at least its
    length.
    """
    if n <= 0 or n >= len(repositories):
        return repositories
    return repositories[:n]
