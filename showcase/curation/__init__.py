"""Filtering and ordering of fetched repositories."""

from __future__ import annotations

from .filter import FilterOptions, filter_repositories, matches_topics
from .sort import SortMode, sort_repositories, top_n

__all__ = [
    "FilterOptions",
    "SortMode",
    "filter_repositories",
    "matches_topics",
    "sort_repositories",
    "top_n",
]
