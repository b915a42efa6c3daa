"""Configuration for fetching repositories from GitHub.

Usage
-----
Build a configuration explicitly:

>>> config = FetchConfig(token="ghp_example")
>>> config.base_url
'https://api.github.com'

Or from the environment, where ``GITHUB_TOKEN`` supplies the credential:

>>> import os
>>> os.environ["SHOWCASE_TIMEOUT_S"] = "10"
>>> FetchConfig.from_env().timeout_s
10.0

"""

from __future__ import annotations

import dataclasses as dc
import os

import httpx

from showcase.github.errors import GitHubConfigError

DEFAULT_BASE_URL = "https://api.github.com"
DEFAULT_TIMEOUT_S = 30.0
DEFAULT_USER_AGENT = "showcase/0.1"

TOKEN_ENV_VAR = "GITHUB_TOKEN"
BASE_URL_ENV_VAR = "SHOWCASE_BASE_URL"
TIMEOUT_ENV_VAR = "SHOWCASE_TIMEOUT_S"

_LOCALHOST_NAMES = frozenset({"localhost", "127.0.0.1", "::1"})


def resolve_token(explicit: str | None) -> str | None:
    """Return the explicit token, else ``GITHUB_TOKEN``; blank means none."""
    for candidate in (explicit, os.environ.get(TOKEN_ENV_VAR)):
        if candidate and candidate.strip():
            return candidate.strip()
    return None


def is_secure_base_url(base_url: str) -> bool:
    """Return True when a credential may be sent to ``base_url``.

    HTTPS is always acceptable; plain HTTP only for loopback hosts.
    """
    try:
        url = httpx.URL(base_url)
    except httpx.InvalidURL:
        return False
    scheme = url.scheme.lower()
    if scheme == "https":
        return True
    if scheme == "http":
        return url.host in _LOCALHOST_NAMES
    return False


def parse_timeout(raw: object) -> float:
    """Parse a strictly positive timeout in seconds."""
    try:
        value = float(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise GitHubConfigError.invalid_timeout(raw) from exc
    if value <= 0:
        raise GitHubConfigError.invalid_timeout(raw)
    return value


@dc.dataclass(frozen=True, slots=True)
class FetchConfig:
    """Configuration for :class:`showcase.github.GitHubRESTClient`.

    Attributes
    ----------
    base_url
        REST API root. Trailing slashes are stripped.
    token
        Optional bearer credential. ``None`` omits the ``Authorization``
        header entirely.
    timeout_s
        Upper bound for each individual HTTP request.
    user_agent
        Value of the ``User-Agent`` header.

    """

    base_url: str = DEFAULT_BASE_URL
    token: str | None = None
    timeout_s: float = DEFAULT_TIMEOUT_S
    user_agent: str = DEFAULT_USER_AGENT

    def __post_init__(self) -> None:
        """Normalise the base URL and token, then validate the combination."""
        base_url = self.base_url.strip().rstrip("/")
        try:
            scheme = httpx.URL(base_url).scheme.lower()
        except httpx.InvalidURL as exc:
            raise GitHubConfigError.invalid_base_url(self.base_url) from exc
        if scheme not in {"http", "https"}:
            raise GitHubConfigError.invalid_base_url(self.base_url)
        object.__setattr__(self, "base_url", base_url)

        token = self.token.strip() if self.token else None
        object.__setattr__(self, "token", token or None)

        if self.timeout_s <= 0:
            raise GitHubConfigError.invalid_timeout(self.timeout_s)
        if self.token and not is_secure_base_url(self.base_url):
            raise GitHubConfigError.insecure_base_url()

    @classmethod
    def from_env(
        cls,
        *,
        token: str | None = None,
        base_url: str | None = None,
        timeout_s: float | None = None,
    ) -> FetchConfig:
        """Create configuration from environment variables.

        Reads ``GITHUB_TOKEN``, ``SHOWCASE_BASE_URL`` and
        ``SHOWCASE_TIMEOUT_S``. Explicit arguments take precedence over the
        environment and the combined settings are validated once.

        Raises
        ------
        GitHubConfigError
            If the timeout is not a positive number, the base URL is not
            http(s), or a token would be sent over plain HTTP to a remote
            host.

        """
        if not base_url:
            base_url = (
                os.environ.get(BASE_URL_ENV_VAR, "").strip() or DEFAULT_BASE_URL
            )
        if timeout_s is None:
            raw_timeout = os.environ.get(TIMEOUT_ENV_VAR, "").strip()
            timeout_s = parse_timeout(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT_S
        return cls(
            base_url=base_url,
            token=resolve_token(token),
            timeout_s=timeout_s,
        )
