"""Line-sequence model of a markdown document.

``Markdown`` knows nothing about markdown syntax: it is an immutable list
of lines with the terminators stripped. The terminator is chosen again
when the document is written, so reading a CRLF file and writing it back
as CRLF reproduces it exactly.

Usage::

    from rdme.markdown import Markdown
    from rdme.line_terminator import LineTerminator

    readme = Markdown.from_file(Path("README.md")).unwrap()
    readme.write_to_file(Path("README.md"), LineTerminator.LF)
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, TextIO

from rdme.core.errors import DocumentReadError, DocumentWriteError
from rdme.core.logging import get_logger
from rdme.core.result import Err, Ok, Result
from rdme.line_terminator import LineTerminator, read_text_exact

logger = get_logger(__name__)


def split_lines(text: str) -> list[str]:
    """Split text on LF and CRLF boundaries.

    A trailing terminator ends the last line; it does not start an empty one.
    Other control characters (form feed, lone CR, ...) stay inside the line.
    """
    if not text:
        return []
    *terminated, last = text.split("\n")
    lines = [line[:-1] if line.endswith("\r") else line for line in terminated]
    if last:
        lines.append(last)
    return lines


@dataclass(frozen=True)
class Markdown:
    """Ordered, immutable sequence of text lines."""

    _lines: tuple[str, ...] = ()

    @classmethod
    def empty(cls) -> "Markdown":
        return cls(())

    @classmethod
    def from_str(cls, text: str) -> "Markdown":
        return cls(tuple(split_lines(text)))

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "Markdown":
        return cls(tuple(lines))

    @classmethod
    def from_file(cls, file_path: Path | str) -> Result["Markdown"]:
        """Read a whole file and split it into lines.

        Returns:
            Ok(Markdown), or Err(DocumentReadError) if the file cannot be read.
        """
        path = Path(file_path)
        try:
            text = read_text_exact(path)
        except (OSError, UnicodeDecodeError) as e:
            return Err(DocumentReadError(path, cause=e))
        return Ok(cls.from_str(text))

    def lines(self) -> Iterator[str]:
        """Iterate over the lines; every call starts from the first line."""
        return iter(self._lines)

    def __iter__(self) -> Iterator[str]:
        return self.lines()

    def __len__(self) -> int:
        return len(self._lines)

    def render(self, line_terminator: LineTerminator) -> str:
        """Render the document with ``line_terminator`` after every line."""
        terminator = line_terminator.value
        return "".join(line + terminator for line in self._lines)

    def write(self, sink: TextIO, line_terminator: LineTerminator) -> Result[None]:
        """Write the rendered document to an open text sink.

        The sink should not translate newlines (open files with ``newline=""``).
        """
        try:
            sink.write(self.render(line_terminator))
        except (OSError, ValueError) as e:
            return Err(DocumentWriteError(cause=e))
        return Ok(None)

    def write_to_file(self, file_path: Path | str, line_terminator: LineTerminator) -> Result[None]:
        """Create or truncate ``file_path`` and write the document to it.

        The content is rendered before the file is opened, so a failure can
        only come from the file system.
        """
        path = Path(file_path)
        content = self.render(line_terminator)
        try:
            with open(path, "w", encoding="utf-8", newline="") as f:
                f.write(content)
        except OSError as e:
            return Err(DocumentWriteError(path, cause=e))

        logger.debug(
            "markdown_written",
            path=str(path),
            lines=len(self._lines),
            line_terminator=line_terminator.label,
        )
        return Ok(None)
