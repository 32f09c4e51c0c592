"""Merge crate documentation into a README.

The README owns everything except one managed region::

    # My crate                      <- kept
    <!-- cargo-rdme start -->       <- begin marker
    ...documentation lines...       <- replaced on every run
    <!-- cargo-rdme end -->         <- end marker
    ## License                      <- kept

The marker lines are HTML comments, invisible in rendered markdown, and
the same ones cargo-rdme writes, so READMEs maintained by either tool are
interchangeable. When a README has no markers yet, the region is inserted
right after a leading ``# Title`` line, or at the very top.

Markers that are missing their partner, repeated or out of order are
reported as ``MalformedMarkersError`` and never repaired.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from rdme.core.errors import MalformedMarkersError
from rdme.core.logging import get_logger
from rdme.core.result import Err, Ok, Result
from rdme.doc import Doc
from rdme.markdown import Markdown

logger = get_logger(__name__)

MARKER_START = "<!-- cargo-rdme start -->"
MARKER_END = "<!-- cargo-rdme end -->"

_TOP_LEVEL_HEADING = re.compile(r"^#(?:[ \t]|$)")


@dataclass(frozen=True, slots=True)
class InjectionSpan:
    """Where the managed region sits: lines ``[start, end)`` are replaced."""

    start: int
    end: int

    @property
    def is_empty(self) -> bool:
        return self.start == self.end


def _is_marker(line: str, marker: str) -> bool:
    return line.strip() == marker


def _insertion_point(lines: list[str]) -> int:
    if lines and _TOP_LEVEL_HEADING.match(lines[0]):
        return 1
    return 0


def find_injection_span(markdown: Markdown) -> Result[InjectionSpan]:
    """Locate the managed region, or the place to insert a new one.

    Returns:
        Ok(InjectionSpan) covering both marker lines when a region exists,
        an empty span at the insertion point when no marker exists, or
        Err(MalformedMarkersError).
    """
    lines = list(markdown.lines())
    starts = [i for i, line in enumerate(lines) if _is_marker(line, MARKER_START)]
    ends = [i for i, line in enumerate(lines) if _is_marker(line, MARKER_END)]

    if not starts and not ends:
        point = _insertion_point(lines)
        return Ok(InjectionSpan(point, point))

    if len(starts) > 1:
        return Err(MalformedMarkersError(f"{len(starts)} start markers found").with_context(lines=starts))
    if len(ends) > 1:
        return Err(MalformedMarkersError(f"{len(ends)} end markers found").with_context(lines=ends))
    if not ends:
        return Err(MalformedMarkersError("start marker without an end marker"))
    if not starts:
        return Err(MalformedMarkersError("end marker without a start marker"))

    start, end = starts[0], ends[0]
    if end < start:
        return Err(MalformedMarkersError("end marker before the start marker"))
    return Ok(InjectionSpan(start, end + 1))


def build_region(doc: Doc) -> list[str]:
    """Begin marker, the documentation lines, end marker."""
    return [MARKER_START, *doc.lines(), MARKER_END]


def inject_doc(markdown: Markdown, doc: Doc) -> Result[Markdown]:
    """Replace (or insert) the managed region of ``markdown`` with ``doc``.

    Deterministic and idempotent: injecting the same doc into the result
    again yields an equal Markdown. ``markdown`` itself is never modified.

    A doc containing a marker line is refused: its result could not be
    injected into again.

    Returns:
        Ok(Markdown) with the new region, or Err(MalformedMarkersError).
    """
    for number, line in enumerate(doc.lines(), start=1):
        if _is_marker(line, MARKER_START) or _is_marker(line, MARKER_END):
            return Err(MalformedMarkersError(f"documentation line {number} is a marker line"))

    match find_injection_span(markdown):
        case Err(error):
            logger.debug("markers_malformed", reason=getattr(error, "reason", str(error)))
            return Err(error)
        case Ok(span):
            lines = list(markdown.lines())
            result = lines[:span.start] + build_region(doc) + lines[span.end:]

            logger.debug(
                "doc_injected",
                region_existed=not span.is_empty,
                region_start=span.start,
                doc_lines=len(doc),
            )
            return Ok(Markdown.from_lines(result))
