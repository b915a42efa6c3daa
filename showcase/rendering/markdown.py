"""Markdown renderer for the "current projects" section.

The section is delimited by HTML comment markers so it can later be located
and replaced inside an existing document::

    <!-- BEGIN CURRENT PROJECTS -->
    ## Current Projects

    - [widget](https://github.com/octo/widget) (Python) - Does widget things
    <!-- END CURRENT PROJECTS -->

Every repository field is untrusted. Names, languages and descriptions are
escaped so they cannot open links, code spans or HTML, and URLs are only
linked when they use ``http`` or ``https``.

Usage
-----
>>> from showcase.rendering.markdown import render_markdown
>>> print(render_markdown([], "CURRENT PROJECTS"), end="")
<!-- BEGIN CURRENT PROJECTS -->
## Current Projects
<BLANKLINE>
_No public projects matched._
<!-- END CURRENT PROJECTS -->

"""

from __future__ import annotations

import typing as typ

import httpx

if typ.TYPE_CHECKING:
    from showcase.github.models import Repository

HEADING = "## Current Projects"
EMPTY_SENTINEL = "_No public projects matched._"

_INLINE_ESCAPES = str.maketrans(
    {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        "\\": "\\\\",
        "[": "\\[",
        "]": "\\]",
        "(": "\\(",
        ")": "\\)",
        "`": "\\`",
    }
)

_URL_ESCAPES = str.maketrans({"(": "%28", ")": "%29", " ": "%20"})

_ALLOWED_SCHEMES = frozenset({"http", "https"})


def begin_marker(marker: str) -> str:
    """Return the BEGIN comment line for ``marker``."""
    return f"<!-- BEGIN {marker} -->"


def end_marker(marker: str) -> str:
    """Return the END comment line for ``marker``."""
    return f"<!-- END {marker} -->"


def escape_markdown_inline(text: str) -> str:
    """Escape characters that could break out of a single Markdown line.

    Ampersands and angle brackets become HTML entities; backslashes,
    brackets, parentheses and backticks are backslash-escaped.

    Examples
    --------
    >>> escape_markdown_inline("<b>[x](y)</b>")
    '&lt;b&gt;\\\\[x\\\\]\\\\(y\\\\)&lt;/b&gt;'

    """
    return text.translate(_INLINE_ESCAPES)


def normalize_inline_text(text: str) -> str:
    """Collapse newlines and whitespace runs into single spaces."""
    return " ".join(text.split())


def sanitize_markdown_url(raw: str) -> str:
    """Return a link target safe to embed in ``[text](url)``, or ``""``.

    Only ``http`` and ``https`` URLs that parse cleanly survive. The URL is
    re-serialised percent-encoded, and parentheses are encoded as well so the
    URL cannot close the link early.
    """
    candidate = raw.strip().replace("\r", "").replace("\n", "")
    if not candidate:
        return ""
    try:
        url = httpx.URL(candidate)
    except httpx.InvalidURL:
        return ""
    if url.scheme not in _ALLOWED_SCHEMES or not url.host:
        return ""
    return str(url).translate(_URL_ESCAPES)


def format_repository_line(repo: Repository) -> str:
    """Render one repository as a Markdown list item."""
    name = escape_markdown_inline(repo.name.strip())
    link = sanitize_markdown_url(repo.html_url)
    language = escape_markdown_inline(repo.language.strip())
    description = escape_markdown_inline(normalize_inline_text(repo.description))

    parts = [f"- [{name}]({link})" if link else f"- {name}"]
    if language:
        parts.append(f"({language})")
    if description:
        parts.append(f"- {description}")
    return " ".join(parts)


def render_markdown(repositories: typ.Sequence[Repository], marker: str) -> str:
    """Render the marker-delimited Markdown section.

    Parameters
    ----------
    repositories
        Filtered and sorted repositories.
    marker
        Marker name used in the BEGIN/END comment lines.

    Returns
    -------
    str
        The section, LF-terminated.

    """
    lines = [begin_marker(marker), HEADING, ""]
    if repositories:
        lines.extend(format_repository_line(repo) for repo in repositories)
    else:
        lines.append(EMPTY_SENTINEL)
    lines.append(end_marker(marker))
    return "\n".join(lines) + "\n"
