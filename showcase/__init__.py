"""Curate a GitHub user's public repositories into a "current projects" listing."""

from __future__ import annotations

__version__ = "0.1.0"
