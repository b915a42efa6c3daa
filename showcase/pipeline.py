"""Composition of the curation stages.

Fetching is left to the caller; everything here is a pure transformation
from a list of repositories to rendered text.
"""

from __future__ import annotations

import dataclasses
import enum
import typing as typ

from showcase.curation import (
    FilterOptions,
    SortMode,
    filter_repositories,
    sort_repositories,
    top_n,
)
from showcase.patching import PatchResult, patch_document
from showcase.rendering import render_json, render_markdown

if typ.TYPE_CHECKING:
    from showcase.github.models import Repository

DEFAULT_MARKER = "CURRENT PROJECTS"
DEFAULT_TOP = 10


class OutputFormat(enum.StrEnum):
    """Supported output formats."""

    MARKDOWN = "markdown"
    JSON = "json"


@dataclasses.dataclass(frozen=True, slots=True)
class CurationSettings:
    """Everything that shapes a listing after the repositories are fetched."""

    filters: FilterOptions = dataclasses.field(default_factory=FilterOptions)
    sort_mode: SortMode = SortMode.PUSHED
    top: int = DEFAULT_TOP
    output_format: OutputFormat = OutputFormat.MARKDOWN
    marker: str = DEFAULT_MARKER


def curate(
    repositories: typ.Iterable[Repository],
    settings: CurationSettings,
) -> list[Repository]:
    """Filter, sort and truncate ``repositories``."""
    kept = filter_repositories(repositories, settings.filters)
    ordered = sort_repositories(kept, settings.sort_mode)
    return top_n(ordered, settings.top)


def render(repositories: typ.Sequence[Repository], settings: CurationSettings) -> str:
    """Render curated repositories in the configured format."""
    if settings.output_format == OutputFormat.JSON:
        return render_json(repositories)
    return render_markdown(repositories, settings.marker)


def build_listing(
    repositories: typ.Iterable[Repository],
    settings: CurationSettings,
) -> str:
    """Curate and render ``repositories`` in one step."""
    return render(curate(repositories, settings), settings)


def splice_listing(
    document: str,
    listing: str,
    settings: CurationSettings,
    *,
    append_if_missing: bool = False,
) -> PatchResult:
    """Patch a rendered Markdown ``listing`` into ``document``."""
    return patch_document(
        document,
        listing,
        settings.marker,
        append_if_missing=append_if_missing,
    )
