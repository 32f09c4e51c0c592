"""Extract a crate's top-level inner documentation from Rust source.

Three spellings of an inner doc attribute are recognized, in any mix::

    //! line comment
    /*! block comment */
    #![doc = "attribute with a string literal"]

They must appear in the inner-attribute prelude of the file, before the
first item; an inner attribute at top level after an item is a syntax
error. Each attribute's text is normalized (see ``normalize_doc_string``)
and the results are concatenated in source order.
"""

from __future__ import annotations

from rdme.core.errors import SourceParseError
from rdme.core.logging import get_logger
from rdme.core.result import Err, Ok, Result
from rdme.markdown import split_lines
from rdme.parser.lexer import LexError, Token, TokenKind, tokenize

logger = get_logger(__name__)


def _is_blank(line: str) -> bool:
    return all(ch.isspace() for ch in line)


def normalize_doc_string(content: str) -> list[str]:
    """Turn one attribute's text into documentation lines.

    - no lines: one empty line
    - one line: drop exactly one leading space
    - several lines: drop the first line if it is blank, keep the rest verbatim
    """
    lines = split_lines(content)

    if not lines:
        return [""]
    if len(lines) == 1:
        line = lines[0]
        return [line[1:] if line.startswith(" ") else line]
    return [line for i, line in enumerate(lines) if not (i == 0 and _is_blank(line))]


def _is_inner_attribute_start(tokens: list[Token], i: int) -> bool:
    return (
        i + 2 < len(tokens)
        and tokens[i].is_punct("#")
        and tokens[i + 1].is_punct("!")
        and tokens[i + 2].kind is TokenKind.OPEN
        and tokens[i + 2].text == "["
    )


def _matching_close(tokens: list[Token], open_index: int) -> int:
    """Index of the delimiter closing ``tokens[open_index]``.

    The lexer has already checked that delimiters balance.
    """
    depth = 0
    for j in range(open_index, len(tokens)):
        kind = tokens[j].kind
        if kind is TokenKind.OPEN:
            depth += 1
        elif kind is TokenKind.CLOSE:
            depth -= 1
            if depth == 0:
                return j
    raise LexError("unclosed delimiter", tokens[open_index].line, tokens[open_index].column)


def _doc_attribute_value(body: list[Token]) -> str | None:
    """``doc = "..."`` → the string value; anything else → None."""
    if (
        len(body) == 3
        and body[0].kind is TokenKind.IDENT
        and body[0].text == "doc"
        and body[1].is_punct("=")
        and body[2].kind is TokenKind.STRING
    ):
        return body[2].value
    return None


def inner_doc_strings(tokens: list[Token]) -> list[str]:
    """Collect the raw text of every top-level inner doc attribute.

    Raises:
        LexError: if an inner attribute appears at top level after an item.
    """
    docs: list[str] = []
    i = 0
    while i < len(tokens):
        token = tokens[i]
        if token.kind is TokenKind.INNER_DOC:
            docs.append(token.value or "")
            i += 1
        elif _is_inner_attribute_start(tokens, i):
            close = _matching_close(tokens, i + 2)
            value = _doc_attribute_value(tokens[i + 3:close])
            if value is not None:
                docs.append(value)
            i = close + 1
        else:
            break

    depth = 0
    for j in range(i, len(tokens)):
        token = tokens[j]
        if token.kind is TokenKind.OPEN:
            depth += 1
        elif token.kind is TokenKind.CLOSE:
            depth -= 1
        elif depth == 0 and (token.kind is TokenKind.INNER_DOC or _is_inner_attribute_start(tokens, j)):
            raise LexError(
                "an inner attribute is not permitted in this context",
                token.line,
                token.column,
            )
    return docs


def extract_doc_lines(source: str) -> Result[list[str]]:
    """Tokenize ``source`` and return its normalized documentation lines.

    Returns:
        Ok(lines) (possibly empty), or Err(SourceParseError).
    """
    try:
        doc_strings = inner_doc_strings(tokenize(source))
    except LexError as e:
        return Err(SourceParseError(e.message, line=e.line, column=e.column, cause=e))

    lines: list[str] = []
    for content in doc_strings:
        lines.extend(normalize_doc_string(content))

    logger.debug("doc_attributes_scanned", attributes=len(doc_strings), lines=len(lines))
    return Ok(lines)
