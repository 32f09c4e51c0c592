"""Crate documentation extracted from a Rust entry file."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator

from rdme.core.errors import SourceReadError
from rdme.core.result import Err, Ok, Result
from rdme.markdown import Markdown
from rdme.parser.doc_extractor import extract_doc_lines


@dataclass(frozen=True)
class Doc:
    """Normalized documentation lines, free of comment syntax."""

    markdown: Markdown

    @classmethod
    def empty(cls) -> "Doc":
        return cls(Markdown.empty())

    @classmethod
    def from_str(cls, text: str) -> "Doc":
        return cls(Markdown.from_str(text))

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "Doc":
        return cls(Markdown.from_lines(lines))

    @classmethod
    def from_source_str(cls, source: str) -> Result["Doc | None"]:
        return extract_doc(source)

    @classmethod
    def from_source_file(cls, file_path: Path | str) -> Result["Doc | None"]:
        """Read a Rust file and extract its crate documentation.

        Returns:
            Ok(Doc), Ok(None) if the file has no inner documentation,
            Err(SourceReadError) or Err(SourceParseError).
        """
        path = Path(file_path)
        try:
            with open(path, "r", encoding="utf-8", newline="") as f:
                source = f.read()
        except (OSError, UnicodeDecodeError) as e:
            return Err(SourceReadError(path, cause=e))

        return extract_doc(source).map_err(lambda error: error.with_context(path=str(path)))

    def lines(self) -> Iterator[str]:
        return self.markdown.lines()

    def __len__(self) -> int:
        return len(self.markdown)


def extract_doc(source: str) -> Result[Doc | None]:
    """Extract the top-level inner documentation of Rust source text.

    Pure function of ``source``. Returns Ok(None) when the source yields no
    documentation lines at all.
    """
    match extract_doc_lines(source):
        case Ok(lines) if lines:
            return Ok(Doc.from_lines(lines))
        case Ok(_):
            return Ok(None)
        case Err(error):
            return Err(error)
