"""Errors raised by the renderers."""

from __future__ import annotations


class RenderError(Exception):
    """Raised when a listing cannot be serialised."""

    @classmethod
    def serialization(cls, exc: BaseException) -> RenderError:
        """Return an error wrapping an encoder failure."""
        return cls(f"marshaling JSON: {exc}")
