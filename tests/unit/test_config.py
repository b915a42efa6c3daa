"""Unit tests for fetch configuration."""

from __future__ import annotations

import pytest

from showcase.config import FetchConfig, is_secure_base_url, resolve_token
from showcase.github import GitHubConfigError


class TestFetchConfig:
    """Tests for FetchConfig validation and environment loading."""

    def test_defaults(self) -> None:
        """Defaults target the public GitHub API without a credential."""
        config = FetchConfig()
        assert config.base_url == "https://api.github.com"
        assert config.token is None
        assert config.timeout_s == pytest.approx(30.0)

    def test_strips_trailing_slash_and_blank_token(self) -> None:
        """Trailing slashes and blank tokens are normalised away."""
        config = FetchConfig(base_url="https://ghe.example.test/api/v3/", token=" ")
        assert config.base_url == "https://ghe.example.test/api/v3"
        assert config.token is None

    @pytest.mark.parametrize(
        "base_url", ["ftp://example.test", "not a url", "", "javascript:alert(1)"]
    )
    def test_rejects_non_http_base_urls(self, base_url: str) -> None:
        """Only absolute http(s) base URLs are accepted."""
        with pytest.raises(GitHubConfigError):
            FetchConfig(base_url=base_url)

    def test_rejects_token_over_plain_http(self) -> None:
        """Credentials are never sent over plain HTTP to remote hosts."""
        with pytest.raises(GitHubConfigError, match="https"):
            FetchConfig(base_url="http://api.example.test", token="secret")

    def test_allows_token_over_localhost_http(self) -> None:
        """Local test servers may use plain HTTP."""
        config = FetchConfig(base_url="http://127.0.0.1:8080", token="secret")
        assert config.token == "secret"

    def test_rejects_non_positive_timeout(self) -> None:
        """Timeouts must be strictly positive."""
        with pytest.raises(GitHubConfigError, match="timeout"):
            FetchConfig(timeout_s=0)

    def test_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Environment variables supply token, base URL and timeout."""
        monkeypatch.setenv("GITHUB_TOKEN", "env-token")
        monkeypatch.setenv("SHOWCASE_BASE_URL", "https://ghe.example.test/api/v3")
        monkeypatch.setenv("SHOWCASE_TIMEOUT_S", "5")

        config = FetchConfig.from_env()

        assert config.token == "env-token"
        assert config.base_url == "https://ghe.example.test/api/v3"
        assert config.timeout_s == pytest.approx(5.0)

    def test_from_env_rejects_bad_timeout(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """A non-numeric timeout is a configuration error."""
        monkeypatch.setenv("SHOWCASE_TIMEOUT_S", "soon")
        with pytest.raises(GitHubConfigError):
            FetchConfig.from_env()

    def test_from_env_applies_overrides_before_validating(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Explicit values replace insecure or invalid environment settings."""
        monkeypatch.setenv("GITHUB_TOKEN", "env-token")
        monkeypatch.setenv("SHOWCASE_BASE_URL", "http://remote.example.test")
        monkeypatch.setenv("SHOWCASE_TIMEOUT_S", "soon")

        config = FetchConfig.from_env(
            base_url="https://ghe.example.test/api/v3", timeout_s=7.0
        )

        assert config.token == "env-token"
        assert config.base_url == "https://ghe.example.test/api/v3"
        assert config.timeout_s == pytest.approx(7.0)


def test_resolve_token_prefers_explicit(monkeypatch: pytest.MonkeyPatch) -> None:
    """An explicit token wins over GITHUB_TOKEN."""
    monkeypatch.setenv("GITHUB_TOKEN", "env-token")
    assert resolve_token("flag-token") == "flag-token"
    assert resolve_token(None) == "env-token"
    assert resolve_token("  ") == "env-token"


def test_resolve_token_blank_environment_means_none(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """A blank GITHUB_TOKEN is treated as absent."""
    monkeypatch.setenv("GITHUB_TOKEN", "   ")
    assert resolve_token(None) is None


@pytest.mark.parametrize(
    ("base_url", "expected"),
    [
        ("https://api.github.com", True),
        ("http://localhost:3000", True),
        ("http://127.0.0.1", True),
        ("http://[::1]:8080", True),
        ("http://api.example.test", False),
        ("ftp://localhost", False),
    ],
)
def test_is_secure_base_url(base_url: str, *, expected: bool) -> None:
    """HTTPS is always secure; HTTP only for loopback hosts."""
    assert is_secure_base_url(base_url) is expected
