"""Line terminator detection.

A README keeps the line-ending convention it already has on disk. The
convention is inferred right before writing, from whatever the file holds
at that moment; nothing is cached between runs or between calls.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from rdme.core.errors import DocumentReadError
from rdme.core.result import Err, Ok, Result


class LineTerminator(str, Enum):
    """End-of-line convention of a text file."""

    LF = "\n"
    CRLF = "\r\n"

    @property
    def label(self) -> str:
        return self.name.lower()

    @classmethod
    def from_label(cls, label: str) -> "LineTerminator":
        """Parse ``lf`` / ``crlf`` (case-insensitive)."""
        try:
            return cls[label.upper()]
        except KeyError:
            raise ValueError(f"unknown line terminator {label!r}") from None


def read_text_exact(path: Path) -> str:
    """Read a whole file as UTF-8 without newline translation."""
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()


def count_terminators(content: str) -> tuple[int, int]:
    """Return ``(crlf_lines, lf_only_lines)`` for a piece of text."""
    crlf_lines = content.count("\r\n")
    lf_lines = content.count("\n") - crlf_lines
    return crlf_lines, lf_lines


def infer_from_text(content: str) -> LineTerminator:
    """CRLF when CRLF breaks strictly outnumber bare LF breaks, else LF."""
    crlf_lines, lf_lines = count_terminators(content)
    if crlf_lines > lf_lines:
        return LineTerminator.CRLF
    return LineTerminator.LF


def infer_line_terminator(file_path: Path | str) -> Result[LineTerminator]:
    """Infer the dominant line terminator of a file.

    Args:
        file_path: File to inspect.

    Returns:
        Ok(LineTerminator), or Err(DocumentReadError) if the file cannot be read.
    """
    path = Path(file_path)
    try:
        content = read_text_exact(path)
    except (OSError, UnicodeDecodeError) as e:
        return Err(DocumentReadError(path, cause=e))
    return Ok(infer_from_text(content))
