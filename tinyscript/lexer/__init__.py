"""
TinyScript Lexer Package

Implements the lexical scanner for the TinyScript language: raw source text
in, an ordered list of tokens out, always terminated by a single EOF token.

Key Features:
- Integer, float, boolean and string literals
- Identifiers made of ASCII letters, digits and underscores
- Every other non-whitespace character is its own punctuation token
- Fatal, typed errors for malformed numbers and unterminated strings
"""

from .tokens import Token, TokenKind, TokenValue, SourceLocation
from .lexer import Lexer, ScanState, lex, lex_file
from .errors import (
    ErrorKind, Diagnostic, LexerError, MalformedNumberError, UnterminatedStringError
)

__all__ = [
    "Lexer",
    "ScanState",
    "lex",
    "lex_file",
    "Token",
    "TokenKind",
    "TokenValue",
    "SourceLocation",
    "ErrorKind",
    "Diagnostic",
    "LexerError",
    "MalformedNumberError",
    "UnterminatedStringError",
]
