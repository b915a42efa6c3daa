"""Shared fixtures for unit and feature tests."""

from __future__ import annotations

import datetime as dt

import pytest

from showcase.config import BASE_URL_ENV_VAR, TIMEOUT_ENV_VAR, TOKEN_ENV_VAR
from showcase.logging import LOG_LEVEL_ENV_VAR

REFERENCE_NOW = dt.datetime(2024, 7, 8, 12, 0, tzinfo=dt.UTC)


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's GitHub token and overrides out of tests."""
    for name in (TOKEN_ENV_VAR, BASE_URL_ENV_VAR, TIMEOUT_ENV_VAR, LOG_LEVEL_ENV_VAR):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def reference_now() -> dt.datetime:
    """Fixed reference time for recency filtering."""
    return REFERENCE_NOW


@pytest.fixture
def captured_basic_config(monkeypatch: pytest.MonkeyPatch) -> dict[str, object]:
    """Replace femtologging's basicConfig and capture its arguments."""
    captured: dict[str, object] = {}

    def fake_basic_config(**kwargs: object) -> None:
        captured.update(kwargs)

    monkeypatch.setattr("showcase.logging.basicConfig", fake_basic_config)
    return captured
