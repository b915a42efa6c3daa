"""JSON renderer for curated repository listings."""

from __future__ import annotations

import typing as typ

import msgspec

from showcase.common.time import format_github_timestamp

from .errors import RenderError

if typ.TYPE_CHECKING:
    from showcase.github.models import Repository

_INDENT = 2


class RepositoryEntry(msgspec.Struct):
    """One element of the JSON output; field order is the output order."""

    name: str
    html_url: str
    description: str
    language: str
    pushed_at: str
    stargazers_count: int


def _entry(repo: Repository) -> RepositoryEntry:
    return RepositoryEntry(
        name=repo.name,
        html_url=repo.html_url,
        description=repo.description,
        language=repo.language,
        pushed_at=format_github_timestamp(repo.pushed_at),
        stargazers_count=repo.star_count,
    )


def render_json(repositories: typ.Sequence[Repository]) -> str:
    """Render repositories as an indented JSON array.

    An empty input renders as ``[]``, never ``null``.

    Raises
    ------
    RenderError
        If encoding fails.

    """
    entries = [_entry(repo) for repo in repositories]
    try:
        encoded = msgspec.json.encode(entries)
    except (msgspec.EncodeError, TypeError, OverflowError) as exc:
        raise RenderError.serialization(exc) from exc
    return msgspec.json.format(encoded, indent=_INDENT).decode("utf-8") + "\n"
