"""GitHub fetch errors."""

from __future__ import annotations


class GitHubAPIError(RuntimeError):
    """Raised when GitHub answers with a non-success status code."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        body: str = "",
    ) -> None:
        """Initialise with a message, HTTP status code and response body."""
        self.status_code = status_code
        self.body = body
        super().__init__(message)

    @classmethod
    def http_error(cls, status_code: int, body: str) -> GitHubAPIError:
        """Return an error for non-2xx HTTP responses."""
        return cls(
            f"GitHub API returned status {status_code}: {body}",
            status_code=status_code,
            body=body,
        )


class GitHubTransportError(RuntimeError):
    """Raised when a request cannot be built, sent, or completed in time."""

    @classmethod
    def request_failed(cls, url: str, exc: BaseException) -> GitHubTransportError:
        """Return an error describing a failed request to ``url``."""
        return cls(f"fetching repos from {url}: {exc}")


class GitHubResponseShapeError(RuntimeError):
    """Raised when a response body is not a JSON array of repositories."""

    @classmethod
    def undecodable(cls, url: str, detail: str) -> GitHubResponseShapeError:
        """Return an error for a payload that failed to decode."""
        return cls(f"decoding response from {url}: {detail}")


class GitHubConfigError(ValueError):
    """Raised when GitHub client configuration is invalid."""

    @classmethod
    def invalid_base_url(cls, base_url: str) -> GitHubConfigError:
        """Return an error for a base URL that is not an absolute http(s) URL."""
        return cls(f"base URL must be an absolute http(s) URL, got {base_url!r}")

    @classmethod
    def insecure_base_url(cls) -> GitHubConfigError:
        """Return an error when a token would be sent over plain HTTP."""
        return cls(
            "base URL must use https when a token is set "
            "(http is allowed only for localhost)"
        )

    @classmethod
    def invalid_timeout(cls, raw: object) -> GitHubConfigError:
        """Return an error for a non-positive or non-numeric timeout."""
        return cls(f"timeout must be a positive number of seconds, got {raw!r}")
