"""Markdown and JSON renderers for curated repository listings."""

from __future__ import annotations

from .errors import RenderError
from .json import render_json
from .markdown import (
    begin_marker,
    end_marker,
    escape_markdown_inline,
    render_markdown,
    sanitize_markdown_url,
)

__all__ = [
    "RenderError",
    "begin_marker",
    "end_marker",
    "escape_markdown_inline",
    "render_json",
    "render_markdown",
    "sanitize_markdown_url",
]
