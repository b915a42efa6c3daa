"""Unit tests for sorting and truncating repository listings."""

from __future__ import annotations

import datetime as dt

import pytest

from showcase.curation import SortMode, sort_repositories, top_n
from tests.helpers.github_payloads import make_repository

_T1 = dt.datetime(2024, 7, 1, tzinfo=dt.UTC)
_T2 = dt.datetime(2024, 7, 2, tzinfo=dt.UTC)
_T3 = dt.datetime(2024, 7, 3, tzinfo=dt.UTC)


def _names(repos: list) -> list[str]:
    return [repo.name for repo in repos]


class TestPushedMode:
    """Tests for the default pushed ordering."""

    def test_orders_by_push_time_descending(self) -> None:
        """Most recently pushed repositories come first."""
        repos = [
            make_repository("old", pushed_at=_T1),
            make_repository("new", pushed_at=_T3),
            make_repository("mid", pushed_at=_T2),
        ]

        assert _names(sort_repositories(repos)) == ["new", "mid", "old"]

    def test_stars_break_push_ties(self) -> None:
        """Equal push times fall back to stars descending."""
        repos = [
            make_repository("few", pushed_at=_T1, star_count=1),
            make_repository("many", pushed_at=_T1, star_count=10),
        ]

        assert _names(sort_repositories(repos, SortMode.PUSHED)) == ["many", "few"]

    def test_names_break_remaining_ties_case_insensitively(self) -> None:
        """Identical push time and stars order by name, ignoring case."""
        repos = [
            make_repository("charlie", pushed_at=_T1),
            make_repository("Bravo", pushed_at=_T1),
            make_repository("alpha", pushed_at=_T1),
        ]

        assert _names(sort_repositories(repos)) == ["alpha", "Bravo", "charlie"]

    def test_unknown_mode_sorts_by_push_time(self) -> None:
        """Unrecognised modes fall back to pushed ordering."""
        repos = [
            make_repository("old", pushed_at=_T1, star_count=99),
            make_repository("new", pushed_at=_T2, star_count=0),
        ]

        assert _names(sort_repositories(repos, "forks")) == ["new", "old"]


class TestStarsMode:
    """Tests for stars ordering."""

    def test_orders_by_stars_then_push_time(self) -> None:
        """Stars lead; push time and then name break ties."""
        repos = [
            make_repository("recent-few", pushed_at=_T3, star_count=1),
            make_repository("old-many", pushed_at=_T1, star_count=10),
            make_repository("new-many", pushed_at=_T2, star_count=10),
            make_repository("B-tie", pushed_at=_T1, star_count=1),
            make_repository("a-tie", pushed_at=_T1, star_count=1),
        ]

        assert _names(sort_repositories(repos, "stars")) == [
            "new-many",
            "old-many",
            "recent-few",
            "a-tie",
            "B-tie",
        ]


def test_sort_returns_new_list() -> None:
    """Sorting never reorders the caller's list."""
    repos = [make_repository("a", pushed_at=_T1), make_repository("b", pushed_at=_T2)]
    original = list(repos)

    sort_repositories(repos)

    assert repos == original


class TestTopN:
    """Tests for top_n truncation."""

    @pytest.mark.parametrize("n", [0, -1, 3, 4])
    def test_out_of_range_returns_list_unchanged(self, n: int) -> None:
        """Non-positive or oversize counts return the same list."""
        repos = [make_repository(name) for name in ("a", "b", "c")]

        assert top_n(repos, n) is repos

    def test_truncates_to_first_n(self) -> None:
        """In-range counts return the first n items in order."""
        repos = [make_repository(name) for name in ("a", "b", "c")]

        assert _names(top_n(repos, 2)) == ["a", "b"]
