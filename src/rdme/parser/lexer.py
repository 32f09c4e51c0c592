"""Lightweight Rust tokenizer.

Splits Rust source into the tokens needed to find a crate's inner
documentation attributes: identifiers, literals, punctuation, delimiters
and doc comments. Ordinary comments and whitespace are dropped.

The lexer also rejects source that is lexically broken: unterminated
comments or literals, unknown string escapes, malformed raw strings and
unbalanced or mismatched delimiters. It does not build a syntax tree.

Usage::

    from rdme.parser.lexer import Lexer

    for token in Lexer(source).tokenize():
        print(token.kind, token.text)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

_OPEN_TO_CLOSE = {"(": ")", "[": "]", "{": "}"}
_CLOSE_TO_OPEN = {v: k for k, v in _OPEN_TO_CLOSE.items()}

_SIMPLE_ESCAPES = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "\\": "\\",
    "0": "\0",
    "'": "'",
    '"': '"',
}

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


class TokenKind(str, Enum):
    IDENT = "IDENT"
    LIFETIME = "LIFETIME"
    STRING = "STRING"          # "..." and r#"..."#; value is the decoded text
    LITERAL = "LITERAL"        # numbers, chars, byte and C strings
    PUNCT = "PUNCT"
    OPEN = "OPEN"
    CLOSE = "CLOSE"
    INNER_DOC = "INNER_DOC"    # //! and /*! */; value is the comment body
    OUTER_DOC = "OUTER_DOC"    # /// and /** */


@dataclass(frozen=True, slots=True)
class Token:
    kind: TokenKind
    text: str
    line: int
    column: int
    value: str | None = None

    def is_punct(self, char: str) -> bool:
        return self.kind is TokenKind.PUNCT and self.text == char


class LexError(Exception):
    """Lexically invalid source, with a 1-based position."""

    def __init__(self, message: str, line: int, column: int):
        super().__init__(f"{message} at line {line}, column {column}")
        self.message = message
        self.line = line
        self.column = column


def _is_ident_start(ch: str) -> bool:
    return ch == "_" or ch.isalpha()


def _is_ident_continue(ch: str) -> bool:
    return ch == "_" or ch.isalnum()


def prepare_source(source: str) -> str:
    """Strip a byte-order mark and a shebang line, normalize CRLF to LF.

    The shebang line is blanked rather than removed so line numbers in
    errors still match the file.
    """
    if source.startswith("\ufeff"):
        source = source[1:]
    source = source.replace("\r\n", "\n")
    if source.startswith("#!") and not source[2:].lstrip().startswith("["):
        end = source.find("\n")
        source = "" if end == -1 else source[end:]
    return source


class Lexer:
    """Tokenizer over one Rust source string."""

    def __init__(self, source: str):
        self._src = prepare_source(source)
        self._pos = 0
        self._line = 1
        self._line_start = 0
        self._delimiters: list[Token] = []

    # ── cursor ───────────────────────────────────────────────────────────

    def _peek(self, offset: int = 0) -> str:
        index = self._pos + offset
        return self._src[index] if index < len(self._src) else ""

    def _startswith(self, text: str) -> bool:
        return self._src.startswith(text, self._pos)

    def _advance(self, count: int = 1) -> str:
        chunk = self._src[self._pos:self._pos + count]
        newlines = chunk.count("\n")
        if newlines:
            self._line += newlines
            self._line_start = self._pos + chunk.rfind("\n") + 1
        self._pos += len(chunk)
        return chunk

    def _column(self) -> int:
        return self._pos - self._line_start + 1

    def _error(self, message: str, line: int | None = None, column: int | None = None) -> LexError:
        return LexError(
            message,
            self._line if line is None else line,
            self._column() if column is None else column,
        )

    # ── entry point ──────────────────────────────────────────────────────

    def tokenize(self) -> list[Token]:
        """Tokenize the whole source.

        Raises:
            LexError: if the source is lexically invalid.
        """
        tokens: list[Token] = []
        while True:
            token = self._next_token()
            if token is None:
                break
            tokens.append(token)

        if self._delimiters:
            unclosed = self._delimiters[-1]
            raise self._error(f"unclosed delimiter {unclosed.text!r}", unclosed.line, unclosed.column)
        return tokens

    def _next_token(self) -> Token | None:
        while self._pos < len(self._src):
            ch = self._peek()
            line, column = self._line, self._column()

            if ch.isspace():
                self._advance()
            elif self._startswith("//"):
                token = self._line_comment(line, column)
                if token is not None:
                    return token
            elif self._startswith("/*"):
                token = self._block_comment(line, column)
                if token is not None:
                    return token
            elif ch == '"':
                return self._string(line, column, prefix="")
            elif ch == "'":
                return self._quote(line, column)
            elif ch.isdigit():
                return self._number(line, column)
            elif _is_ident_start(ch):
                return self._ident_or_prefixed_literal(line, column)
            elif ch in _OPEN_TO_CLOSE:
                self._advance()
                token = Token(TokenKind.OPEN, ch, line, column)
                self._delimiters.append(token)
                return token
            elif ch in _CLOSE_TO_OPEN:
                return self._close(ch, line, column)
            else:
                self._advance()
                return Token(TokenKind.PUNCT, ch, line, column)
        return None

    # ── comments ─────────────────────────────────────────────────────────

    def _line_comment(self, line: int, column: int) -> Token | None:
        end = self._src.find("\n", self._pos)
        if end == -1:
            end = len(self._src)
        text = self._advance(end - self._pos)

        if text.startswith("//!"):
            return Token(TokenKind.INNER_DOC, text, line, column, value=text[3:])
        if text.startswith("///") and not text.startswith("////"):
            return Token(TokenKind.OUTER_DOC, text, line, column, value=text[3:])
        return None

    def _block_comment(self, line: int, column: int) -> Token | None:
        start = self._pos
        self._advance(2)
        depth = 1
        while depth:
            if self._pos >= len(self._src):
                raise self._error("unterminated block comment", line, column)
            if self._startswith("/*"):
                self._advance(2)
                depth += 1
            elif self._startswith("*/"):
                self._advance(2)
                depth -= 1
            else:
                self._advance()

        text = self._src[start:self._pos]
        body = text[3:-2]
        if text.startswith("/*!"):
            return Token(TokenKind.INNER_DOC, text, line, column, value=body)
        if text.startswith("/**") and not text.startswith("/***") and text != "/**/":
            return Token(TokenKind.OUTER_DOC, text, line, column, value=body)
        return None

    # ── literals ─────────────────────────────────────────────────────────

    def _escape(self, allow_unicode: bool) -> str:
        """Decode one escape; the cursor is on the backslash."""
        line, column = self._line, self._column()
        self._advance()
        ch = self._peek()

        if ch in _SIMPLE_ESCAPES:
            self._advance()
            return _SIMPLE_ESCAPES[ch]
        if ch == "\n":
            # String continuation: skip the newline and leading whitespace.
            while self._peek() and self._peek().isspace():
                self._advance()
            return ""
        if ch == "x":
            self._advance()
            digits = self._advance(2)
            if len(digits) != 2 or not set(digits) <= _HEX_DIGITS:
                raise self._error("invalid \\x escape", line, column)
            return chr(int(digits, 16))
        if ch == "u" and allow_unicode:
            self._advance()
            if self._peek() != "{":
                raise self._error("invalid unicode escape", line, column)
            self._advance()
            digits = ""
            while self._peek() and self._peek() != "}":
                digits += self._advance()
            if self._peek() != "}":
                raise self._error("unterminated unicode escape", line, column)
            self._advance()
            digits = digits.replace("_", "")
            if not digits or len(digits) > 6 or not set(digits) <= _HEX_DIGITS:
                raise self._error("invalid unicode escape", line, column)
            try:
                return chr(int(digits, 16))
            except ValueError:
                raise self._error("invalid unicode escape", line, column) from None
        raise self._error(f"unknown character escape {ch!r}", line, column)

    def _string(self, line: int, column: int, prefix: str) -> Token:
        """Quoted string; the cursor is on the opening quote."""
        start = self._pos - len(prefix)
        self._advance()
        value: list[str] = []
        while True:
            ch = self._peek()
            if not ch:
                raise self._error("unterminated double quote string", line, column)
            if ch == '"':
                self._advance()
                break
            if ch == "\\":
                value.append(self._escape(allow_unicode=prefix != "b"))
            else:
                value.append(self._advance())

        text = self._src[start:self._pos]
        kind = TokenKind.STRING if prefix == "" else TokenKind.LITERAL
        return Token(kind, text, line, column, value="".join(value))

    def _raw_string(self, line: int, column: int, prefix: str) -> Token:
        """Raw string; the cursor is on the first ``#`` or the opening quote."""
        start = self._pos - len(prefix)
        hashes = 0
        while self._peek() == "#":
            self._advance()
            hashes += 1
        if self._peek() != '"':
            raise self._error("invalid raw string: expected '\"'", line, column)
        self._advance()

        terminator = '"' + "#" * hashes
        end = self._src.find(terminator, self._pos)
        if end == -1:
            raise self._error("unterminated raw string", line, column)
        value = self._src[self._pos:end]
        self._advance(end + len(terminator) - self._pos)

        text = self._src[start:self._pos]
        kind = TokenKind.STRING if prefix == "r" else TokenKind.LITERAL
        return Token(kind, text, line, column, value=value)

    def _char(self, line: int, column: int, prefix: str) -> Token:
        """Character literal; the cursor is on the opening quote."""
        start = self._pos - len(prefix)
        self._advance()
        if self._peek() == "\\":
            value = self._escape(allow_unicode=prefix != "b")
        elif self._peek() and self._peek() not in "'\n":
            value = self._advance()
        else:
            raise self._error("empty or unterminated character literal", line, column)
        if self._peek() != "'":
            raise self._error("unterminated character literal", line, column)
        self._advance()
        return Token(TokenKind.LITERAL, self._src[start:self._pos], line, column, value=value)

    def _quote(self, line: int, column: int) -> Token:
        """Either a character literal or a lifetime/label."""
        next_ch = self._peek(1)
        if next_ch == "\\" or (next_ch and self._peek(2) == "'"):
            return self._char(line, column, prefix="")
        if _is_ident_start(next_ch):
            start = self._pos
            self._advance()
            while _is_ident_continue(self._peek()):
                self._advance()
            return Token(TokenKind.LIFETIME, self._src[start:self._pos], line, column)
        raise self._error("unterminated character literal", line, column)

    def _number(self, line: int, column: int) -> Token:
        start = self._pos
        while _is_ident_continue(self._peek()):
            self._advance()
        if self._peek() == "." and self._peek(1).isdigit():
            self._advance()
            while _is_ident_continue(self._peek()):
                self._advance()
        return Token(TokenKind.LITERAL, self._src[start:self._pos], line, column)

    def _ident_or_prefixed_literal(self, line: int, column: int) -> Token:
        start = self._pos
        while _is_ident_continue(self._peek()):
            self._advance()
        word = self._src[start:self._pos]
        next_ch = self._peek()

        if word in ("r", "br", "cr") and next_ch in ('"', "#"):
            if word == "r" and next_ch == "#" and _is_ident_start(self._peek(1)):
                # Raw identifier: r#type
                self._advance()
                while _is_ident_continue(self._peek()):
                    self._advance()
                return Token(TokenKind.IDENT, self._src[start:self._pos], line, column)
            return self._raw_string(line, column, prefix=word)
        if word in ("b", "c") and next_ch == '"':
            return self._string(line, column, prefix=word)
        if word == "b" and next_ch == "'":
            return self._char(line, column, prefix=word)

        return Token(TokenKind.IDENT, word, line, column)

    # ── delimiters ───────────────────────────────────────────────────────

    def _close(self, ch: str, line: int, column: int) -> Token:
        if not self._delimiters:
            raise self._error(f"unexpected closing delimiter {ch!r}", line, column)
        opener = self._delimiters.pop()
        if _OPEN_TO_CLOSE[opener.text] != ch:
            raise self._error(
                f"mismatched closing delimiter {ch!r} for {opener.text!r} "
                f"opened at line {opener.line}",
                line,
                column,
            )
        self._advance()
        return Token(TokenKind.CLOSE, ch, line, column)


def tokenize(source: str) -> list[Token]:
    """Tokenize Rust source. Raises LexError on invalid input."""
    return Lexer(source).tokenize()
