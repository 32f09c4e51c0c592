"""
Rust source parsing for rdme.

Exposes:
- Lexer: tokenizer for Rust source (lexical validation included)
- extract_doc_lines: normalized top-level inner documentation lines
"""

from rdme.parser.doc_extractor import extract_doc_lines, inner_doc_strings, normalize_doc_string
from rdme.parser.lexer import Lexer, LexError, Token, TokenKind, tokenize

__all__ = [
    "Lexer",
    "LexError",
    "Token",
    "TokenKind",
    "tokenize",
    "extract_doc_lines",
    "inner_doc_strings",
    "normalize_doc_string",
]
