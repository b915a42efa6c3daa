"""Command line for rendering and splicing a "current projects" listing."""

from __future__ import annotations

import argparse
import sys
import typing as typ
from pathlib import Path

from showcase.config import (
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT_S,
    FetchConfig,
    parse_timeout,
)
from showcase.curation import FilterOptions, SortMode
from showcase.github import (
    FetchEventLogger,
    GitHubAPIError,
    GitHubConfigError,
    GitHubRESTClient,
    GitHubResponseShapeError,
    GitHubTransportError,
)
from showcase.logging import (
    configure_logging,
    get_logger,
    log_info,
    log_warning,
    resolve_log_level,
)
from showcase.patching import PatchError
from showcase.pipeline import (
    DEFAULT_MARKER,
    DEFAULT_TOP,
    CurationSettings,
    OutputFormat,
    build_listing,
    splice_listing,
)
from showcase.rendering import RenderError

if typ.TYPE_CHECKING:
    import httpx

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def _non_blank(value: str) -> str:
    stripped = value.strip()
    if not stripped:
        msg = "--topics must not be empty"
        raise argparse.ArgumentTypeError(msg)
    return stripped


def _timeout(value: str) -> float:
    try:
        return parse_timeout(value)
    except GitHubConfigError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for the ``showcase`` command."""
    parser = argparse.ArgumentParser(
        prog="showcase",
        description=(
            "Render a GitHub user's public repositories as a current projects "
            "listing, optionally patching it into an existing README."
        ),
    )
    parser.add_argument("--user", required=True, help="GitHub username")
    parser.add_argument(
        "--token",
        default=None,
        help="GitHub personal access token (default: $GITHUB_TOKEN)",
    )
    parser.add_argument(
        "--top", type=int, default=DEFAULT_TOP, help="Number of repos to show"
    )
    parser.add_argument("--min-stars", type=int, default=0, help="Minimum star count")
    parser.add_argument(
        "--include-forks", action="store_true", help="Include forked repositories"
    )
    parser.add_argument(
        "--include-archived",
        action="store_true",
        help="Include archived repositories",
    )
    parser.add_argument(
        "--since-days",
        type=int,
        default=0,
        help="Only repos pushed within N days (0 = no limit)",
    )
    parser.add_argument(
        "--require-description",
        action="store_true",
        help="Only include repos with a description",
    )
    parser.add_argument(
        "--topics",
        action="append",
        type=_non_blank,
        default=[],
        help="Filter by GitHub topic (repeatable)",
    )
    parser.add_argument(
        "--tag-match",
        choices=("any", "all"),
        default="any",
        help="Topic match mode",
    )
    parser.add_argument(
        "--sort",
        choices=[mode.value for mode in SortMode],
        default=SortMode.PUSHED.value,
        help="Sort order",
    )
    parser.add_argument(
        "--readme", type=Path, default=None, help="README to patch in place"
    )
    parser.add_argument(
        "--out", type=Path, default=None, help="Output file (default: stdout)"
    )
    parser.add_argument(
        "--marker", default=DEFAULT_MARKER, help="Marker name for the section"
    )
    parser.add_argument(
        "--format",
        choices=[fmt.value for fmt in OutputFormat],
        default=OutputFormat.MARKDOWN.value,
        help="Output format",
    )
    parser.add_argument(
        "--base-url",
        default=None,
        help=f"GitHub API base URL (default: $SHOWCASE_BASE_URL or {DEFAULT_BASE_URL})",
    )
    parser.add_argument(
        "--append-if-missing",
        action="store_true",
        help="Append the section if the README has no markers",
    )
    parser.add_argument(
        "--timeout",
        type=_timeout,
        default=None,
        help=(
            "Per-request timeout in seconds "
            f"(default: $SHOWCASE_TIMEOUT_S or {DEFAULT_TIMEOUT_S:g})"
        ),
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level (default: $SHOWCASE_LOG_LEVEL or INFO)",
    )
    return parser


def _validate(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    """Reject option values and combinations argparse cannot express."""
    if not args.user.strip():
        parser.error("--user is required")
    for flag, value in (
        ("--top", args.top),
        ("--min-stars", args.min_stars),
        ("--since-days", args.since_days),
    ):
        if value < 0:
            parser.error(f"{flag} must be non-negative, got {value}")
    if args.readme is not None and args.format == OutputFormat.JSON:
        parser.error("--readme cannot be used with --format json")


def _settings(args: argparse.Namespace) -> CurationSettings:
    return CurationSettings(
        filters=FilterOptions(
            include_forks=args.include_forks,
            include_archived=args.include_archived,
            min_stars=args.min_stars,
            since_days=args.since_days,
            require_description=args.require_description,
            tags=tuple(args.topics),
            tags_match_all=args.tag_match == "all",
        ),
        sort_mode=SortMode(args.sort),
        top=args.top,
        output_format=OutputFormat(args.format),
        marker=args.marker,
    )


def _fetch_config(args: argparse.Namespace) -> FetchConfig:
    """Layer command-line overrides on top of the environment."""
    return FetchConfig.from_env(
        token=args.token,
        base_url=args.base_url,
        timeout_s=args.timeout,
    )


def _error(message: str) -> int:
    print(f"Error: {message}", file=sys.stderr)
    return EXIT_FAILURE


def _write_text(path: Path, content: str) -> None:
    # Bytes keep CRLF documents and undecodable bytes intact.
    path.write_bytes(content.encode("utf-8", errors="surrogateescape"))


def _patch_readme(
    args: argparse.Namespace,
    listing: str,
    settings: CurationSettings,
) -> int:
    readme: Path = args.readme
    try:
        existing = readme.read_bytes().decode("utf-8", errors="surrogateescape")
    except OSError as exc:
        return _error(f"reading README {str(readme)!r}: {exc}")

    try:
        result = splice_listing(
            existing,
            listing,
            settings,
            append_if_missing=args.append_if_missing,
        )
    except PatchError as exc:
        return _error(f"patching README: {exc}")

    out_path: Path = args.out or readme
    try:
        _write_text(out_path, result.content)
    except OSError as exc:
        return _error(f"writing file {str(out_path)!r}: {exc}")
    log_info(logger, "README %s: %s", result.outcome, out_path)
    return EXIT_OK


def _emit(args: argparse.Namespace, listing: str) -> int:
    if args.out is None:
        sys.stdout.write(listing)
        return EXIT_OK
    try:
        _write_text(args.out, listing)
    except OSError as exc:
        return _error(f"writing file {str(args.out)!r}: {exc}")
    log_info(logger, "Output written to: %s", args.out)
    return EXIT_OK


def main(
    argv: list[str] | None = None,
    *,
    http_client: httpx.Client | None = None,
) -> int:
    """Fetch, curate and render repositories for ``--user``.

    Parameters
    ----------
    argv : list[str] | None, optional
        Command-line arguments. ``None`` defaults to ``sys.argv``.
    http_client : httpx.Client | None, optional
        HTTP client to fetch with instead of a freshly created one.

    Returns
    -------
    int
        ``0`` on success, ``1`` on runtime failures. Usage errors exit
        with ``2`` through argparse.

    """
    parser = build_parser()
    args = parser.parse_args(argv)
    _validate(parser, args)

    raw_level = resolve_log_level(args.log_level)
    level, invalid = configure_logging(raw_level, force=True)
    if invalid and raw_level:
        log_warning(logger, "Unknown log level %r; using %s", raw_level, level)

    try:
        config = _fetch_config(args)
    except GitHubConfigError as exc:
        parser.error(str(exc))

    settings = _settings(args)
    with GitHubRESTClient(
        config, http_client=http_client, observer=FetchEventLogger()
    ) as client:
        try:
            repositories = client.fetch_all(args.user)
        except (
            GitHubAPIError,
            GitHubTransportError,
            GitHubResponseShapeError,
        ) as exc:
            return _error(f"fetching repositories: {exc}")

    try:
        listing = build_listing(repositories, settings)
    except RenderError as exc:
        return _error(f"rendering {settings.output_format}: {exc}")

    if args.readme is not None:
        return _patch_readme(args, listing, settings)
    return _emit(args, listing)


if __name__ == "__main__":
    raise SystemExit(main())
