"""Document structure errors raised by the patcher."""

from __future__ import annotations


class PatchError(ValueError):
    """Base class for documents whose markers cannot be patched."""

    def __init__(self, message: str, *, marker: str) -> None:
        """Initialise with a message and the marker name involved."""
        self.marker = marker
        super().__init__(message)


class MarkerNotFoundError(PatchError):
    """Raised when neither marker is present and appending is disabled."""

    @classmethod
    def for_marker(cls, marker: str) -> MarkerNotFoundError:
        """Return an error naming the missing ``marker``."""
        return cls(
            f"marker {marker!r} not found in document; "
            "use --append-if-missing to add it",
            marker=marker,
        )


class InconsistentMarkersError(PatchError):
    """Raised when only one of the BEGIN/END markers is present."""

    @classmethod
    def for_marker(cls, marker: str) -> InconsistentMarkersError:
        """Return an error for a half-present ``marker`` pair."""
        return cls(
            f"only one of BEGIN/END markers for {marker!r} found; "
            "document markers are inconsistent",
            marker=marker,
        )


class ReversedMarkersError(PatchError):
    """Raised when the END marker precedes the BEGIN marker."""

    @classmethod
    def for_marker(cls, marker: str) -> ReversedMarkersError:
        """Return an error for a reversed ``marker`` pair."""
        return cls(
            f"END marker appears before BEGIN marker for {marker!r}",
            marker=marker,
        )
