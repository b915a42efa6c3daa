"""GitHub REST client that lists every repository owned by a user."""

from __future__ import annotations

import datetime as dt
import re
import typing as typ

import httpx
import msgspec

from .errors import GitHubAPIError, GitHubResponseShapeError, GitHubTransportError
from .models import RateLimit, Repository, RepositoryPayload
from .observability import NullFetchObserver

if typ.TYPE_CHECKING:
    from showcase.config import FetchConfig

    from .observability import FetchObserver

ACCEPT_HEADER = "application/vnd.github+json"
PER_PAGE = 100

_PAGE_DECODER = msgspec.json.Decoder(list[RepositoryPayload])
_NEXT_LINK_RE = re.compile(r'<([^>]+)>\s*;\s*rel\s*=\s*"next"')


def first_page_url(base_url: str, owner: str) -> str:
    """Return the URL of the first repository page for ``owner``."""
    return (
        f"{base_url.rstrip('/')}/users/{owner}/repos"
        f"?type=owner&per_page={PER_PAGE}&page=1"
    )


def next_page_url(response: httpx.Response) -> str | None:
    """Return the ``rel="next"`` target of the ``Link`` header, if any.

    The URL is used verbatim. Relations may appear in any order and with
    arbitrary whitespace around the separators.
    """
    header = response.headers.get("Link")
    if not header:
        return None
    match = _NEXT_LINK_RE.search(header)
    if match is None:
        return None
    return match.group(1).strip() or None


def _header_int(headers: httpx.Headers, name: str) -> int | None:
    raw = headers.get(name)
    if raw is None:
        return None
    try:
        return int(raw.strip())
    except ValueError:
        return 0


def parse_rate_limit(headers: httpx.Headers) -> RateLimit | None:
    """Parse ``X-RateLimit-*`` headers; ``None`` when none are present.

    Unparsable values read as zero rather than failing the request.
    """
    remaining = _header_int(headers, "X-RateLimit-Remaining")
    limit = _header_int(headers, "X-RateLimit-Limit")
    reset_epoch = _header_int(headers, "X-RateLimit-Reset")
    if remaining is None and limit is None and reset_epoch is None:
        return None
    reset = (
        dt.datetime.fromtimestamp(reset_epoch, dt.UTC) if reset_epoch else None
    )
    return RateLimit(remaining=remaining or 0, limit=limit or 0, reset=reset)


def decode_page(url: str, content: bytes) -> list[Repository]:
    """Decode one JSON page into repository records."""
    try:
        payloads = _PAGE_DECODER.decode(content)
    except msgspec.DecodeError as exc:
        raise GitHubResponseShapeError.undecodable(url, str(exc)) from exc
    return [payload.to_repository() for payload in payloads]


class GitHubRESTClient:
    """Synchronous client for ``GET /users/{owner}/repos``.

    Pages are requested strictly one after another: the next URL is only
    known once the current response's ``Link`` header has been read.
    """

    def __init__(
        self,
        config: FetchConfig,
        *,
        http_client: httpx.Client | None = None,
        observer: FetchObserver | None = None,
    ) -> None:
        """Initialise the client with configuration and optional collaborators."""
        self._config = config
        self._observer = observer or NullFetchObserver()
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(timeout=config.timeout_s)

    def __enter__(self) -> GitHubRESTClient:
        """Return the client for use in a ``with`` block."""
        return self

    def __exit__(self, *exc_info: object) -> None:
        """Close owned HTTP resources."""
        self.close()

    def close(self) -> None:
        """Close any owned HTTP resources."""
        if self._owns_client:
            self._client.close()

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": ACCEPT_HEADER,
            "User-Agent": self._config.user_agent,
        }
        if self._config.token:
            headers["Authorization"] = f"Bearer {self._config.token}"
        return headers

    def _get(self, url: str) -> httpx.Response:
        try:
            return self._client.get(
                url,
                headers=self._headers(),
                timeout=self._config.timeout_s,
            )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise GitHubTransportError.request_failed(url, exc) from exc

    def fetch_page(self, url: str) -> tuple[list[Repository], str | None]:
        """Fetch one page, returning its records and the next page URL.

        Raises
        ------
        GitHubTransportError
            If the request fails or times out.
        GitHubAPIError
            If GitHub answers with a non-success status.
        GitHubResponseShapeError
            If the body is not a JSON array of repositories.

        """
        response = self._get(url)

        rate_limit = parse_rate_limit(response.headers)
        if rate_limit is not None:
            self._observer.rate_limit_observed(rate_limit)

        if not response.is_success:
            raise GitHubAPIError.http_error(response.status_code, response.text)

        return decode_page(url, response.content), next_page_url(response)

    def fetch_all(self, owner: str) -> list[Repository]:
        """Fetch every repository owned by ``owner`` across all pages.

        Records keep the order in which GitHub returned them. Any failure
        aborts the whole fetch; already decoded pages are discarded.
        """
        repositories: list[Repository] = []
        next_url: str | None = first_page_url(self._config.base_url, owner)
        page = 0
        try:
            while next_url is not None:
                records, following = self.fetch_page(next_url)
                page += 1
                self._observer.page_fetched(
                    url=next_url, page=page, repositories=len(records)
                )
                repositories.extend(records)
                next_url = following
        except (GitHubAPIError, GitHubTransportError, GitHubResponseShapeError) as exc:
            self._observer.fetch_failed(owner=owner, error=exc)
            raise

        self._observer.fetch_completed(
            owner=owner, pages=page, repositories=len(repositories)
        )
        return repositories
