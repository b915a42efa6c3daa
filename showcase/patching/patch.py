"""Idempotent replacement of a marker-delimited section in a document.

The document's line-ending style is detected once (any CRLF makes the whole
document CRLF) and the new section is converted to match, so patching never
mixes line endings and re-applying the same section is a no-op.

Usage
-----
>>> doc = "# Me\\n<!-- BEGIN X -->\\nold\\n<!-- END X -->\\nbye\\n"
>>> section = "<!-- BEGIN X -->\\nnew\\n<!-- END X -->\\n"
>>> patch_document(doc, section, "X").content
'# Me\\n<!-- BEGIN X -->\\nnew\\n<!-- END X -->\\nbye\\n'

"""

from __future__ import annotations

import dataclasses
import enum

from showcase.rendering.markdown import begin_marker, end_marker

from .errors import InconsistentMarkersError, MarkerNotFoundError, ReversedMarkersError

LF = "\n"
CRLF = "\r\n"


class PatchOutcome(enum.StrEnum):
    """How a successful patch changed the document."""

    APPENDED = "appended"
    REPLACED = "replaced"


@dataclasses.dataclass(frozen=True, slots=True)
class PatchResult:
    """Patched document text and the outcome that produced it."""

    content: str
    outcome: PatchOutcome

    @property
    def patched(self) -> bool:
        """Return True; failures raise :class:`PatchError` instead."""
        return True


def detect_line_ending(content: str) -> str:
    """Return ``CRLF`` if ``content`` contains one anywhere, else ``LF``."""
    return CRLF if CRLF in content else LF


def adapt_line_endings(content: str, line_ending: str) -> str:
    """Convert ``content`` to ``line_ending`` without mixing styles."""
    normalised = content.replace(CRLF, LF)
    if line_ending == CRLF:
        return normalised.replace(LF, CRLF)
    return normalised


def _append_separator(existing: str, line_ending: str) -> str:
    if existing and not existing.endswith(line_ending):
        return line_ending * 2
    return line_ending


def _end_of_marker_line(existing: str, end_index: int) -> int:
    """Return the index just past the END marker's trailing line ending."""
    position = end_index
    if existing.startswith("\r", position):
        position += 1
    if existing.startswith("\n", position):
        position += 1
    return position


def patch_document(
    existing: str,
    section: str,
    marker: str,
    *,
    append_if_missing: bool = False,
) -> PatchResult:
    """Splice ``section`` into ``existing`` between the ``marker`` comments.

    Parameters
    ----------
    existing
        Current document text.
    section
        Newly rendered section, including its own marker lines.
    marker
        Marker name shared by the BEGIN and END comments.
    append_if_missing
        Append ``section`` when the document has neither marker.

    Returns
    -------
    PatchResult
        The patched document. Content outside the replaced span is
        preserved exactly.

    Raises
    ------
    MarkerNotFoundError
        Neither marker is present and ``append_if_missing`` is false.
    InconsistentMarkersError
        Exactly one marker is present.
    ReversedMarkersError
        The END marker precedes the BEGIN marker.

    """
    line_ending = detect_line_ending(existing)
    begin_line = begin_marker(marker)
    end_line = end_marker(marker)

    begin_index = existing.find(begin_line)
    end_index = existing.find(end_line)

    if begin_index == -1 and end_index == -1:
        if not append_if_missing:
            raise MarkerNotFoundError.for_marker(marker)
        return PatchResult(
            content=existing
            + _append_separator(existing, line_ending)
            + adapt_line_endings(section, line_ending),
            outcome=PatchOutcome.APPENDED,
        )

    if begin_index == -1 or end_index == -1:
        raise InconsistentMarkersError.for_marker(marker)

    if begin_index > end_index:
        raise ReversedMarkersError.for_marker(marker)

    span_end = _end_of_marker_line(existing, end_index + len(end_line))
    return PatchResult(
        content=existing[:begin_index]
        + adapt_line_endings(section, line_ending)
        + existing[span_end:],
        outcome=PatchOutcome.REPLACED,
    )
