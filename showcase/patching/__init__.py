"""Marker-delimited patching of existing documents."""

from __future__ import annotations

from .errors import (
    InconsistentMarkersError,
    MarkerNotFoundError,
    PatchError,
    ReversedMarkersError,
)
from .patch import (
    PatchOutcome,
    PatchResult,
    adapt_line_endings,
    detect_line_ending,
    patch_document,
)

__all__ = [
    "InconsistentMarkersError",
    "MarkerNotFoundError",
    "PatchError",
    "PatchOutcome",
    "PatchResult",
    "ReversedMarkersError",
    "adapt_line_endings",
    "detect_line_ending",
    "patch_document",
]
