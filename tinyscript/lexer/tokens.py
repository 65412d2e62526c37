"""
Token definitions for the TinyScript lexer.

A token is a tagged value plus the integer offset where the lexer produced it.
The set of value kinds is closed:

- Identifiers and booleans (``true`` / ``false``)
- Single punctuation/operator characters
- String, char, integer and float literals
- The EOF sentinel (exactly one, always last)
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Any, Optional
import math
import struct


class TokenKind(Enum):
    """Enumeration of all token value kinds in TinyScript."""

    IDENTIFIER = auto()     # myVar, int, print
    CHARACTER = auto()      # ; ( ) { } = + ...
    STRING = auto()         # "hello"
    CHAR = auto()           # 'a' (not produced by the scanner)
    INTEGER = auto()        # 42
    FLOAT = auto()          # 3.14
    BOOLEAN = auto()        # true, false
    EOF = auto()            # end of input


# Inclusive bounds of the integer payload
INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1


def to_float32(value: float) -> float:
    """Round to the nearest 32-bit float. Values past its range become infinity."""
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def format_float32(value: float) -> str:
    """Shortest text that reads back as the same 32-bit float."""
    if not math.isfinite(value):
        return repr(value)

    for precision in range(1, 10):
        text = f"{value:.{precision}g}"
        if to_float32(float(text)) == value:
            break

    return repr(float(text))


@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in the source code.

    Only used for diagnostics; tokens carry a plain offset.
    """
    filename: str
    line: int
    column: int
    offset: int

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"

    def __repr__(self) -> str:
        return f"SourceLocation({self.filename!r}, {self.line}, {self.column}, {self.offset})"


@dataclass(frozen=True)
class TokenValue:
    """
    Tagged token value: exactly one kind is active, with its payload.

    Use the named constructors rather than building instances directly.
    """
    kind: TokenKind
    payload: Any = None

    @classmethod
    def identifier(cls, text: str) -> "TokenValue":
        return cls(TokenKind.IDENTIFIER, text)

    @classmethod
    def character(cls, char: str) -> "TokenValue":
        if len(char) != 1:
            raise ValueError(f"Character token needs exactly one character, got {char!r}")
        return cls(TokenKind.CHARACTER, char)

    @classmethod
    def string(cls, text: str) -> "TokenValue":
        return cls(TokenKind.STRING, text)

    @classmethod
    def char(cls, char: str) -> "TokenValue":
        if len(char) != 1:
            raise ValueError(f"Char literal needs exactly one character, got {char!r}")
        return cls(TokenKind.CHAR, char)

    @classmethod
    def integer(cls, value: int) -> "TokenValue":
        if not INT32_MIN <= value <= INT32_MAX:
            raise ValueError(f"Integer {value} does not fit in 32 bits")
        return cls(TokenKind.INTEGER, value)

    @classmethod
    def float(cls, value: float) -> "TokenValue":
        return cls(TokenKind.FLOAT, to_float32(value))

    @classmethod
    def boolean(cls, value: bool) -> "TokenValue":
        return cls(TokenKind.BOOLEAN, bool(value))

    @classmethod
    def eof(cls) -> "TokenValue":
        return cls(TokenKind.EOF, None)

    def __str__(self) -> str:
        if self.kind is TokenKind.EOF:
            return "EOF"
        return f"{self.kind.name}({self.payload!r})"


@dataclass(frozen=True)
class Token:
    """
    Represents a lexical token in the TinyScript language.

    ``position`` is the source offset recorded by the lexer when the token
    was emitted (see ``Lexer`` for the exact convention per kind).
    """
    value: TokenValue
    position: int

    def __str__(self) -> str:
        return f"{self.value}@{self.position}"

    @property
    def kind(self) -> TokenKind:
        return self.value.kind

    @property
    def payload(self) -> Any:
        return self.value.payload

    @property
    def lexeme(self) -> str:
        """Textual form of the token, reconstructed from kind and payload."""
        kind = self.value.kind
        payload = self.value.payload

        if kind is TokenKind.IDENTIFIER or kind is TokenKind.CHARACTER:
            return payload
        if kind is TokenKind.STRING:
            return f'"{payload}"'
        if kind is TokenKind.CHAR:
            return f"'{payload}'"
        if kind is TokenKind.INTEGER:
            return str(payload)
        if kind is TokenKind.FLOAT:
            return format_float32(payload)
        if kind is TokenKind.BOOLEAN:
            return "true" if payload else "false"
        if kind is TokenKind.EOF:
            return ""
        raise AssertionError(f"unhandled token kind: {kind}")

    @property
    def is_eof(self) -> bool:
        return self.value.kind is TokenKind.EOF

    @property
    def is_literal(self) -> bool:
        """Check if this token is a literal value."""
        return self.value.kind in {
            TokenKind.STRING, TokenKind.CHAR, TokenKind.INTEGER,
            TokenKind.FLOAT, TokenKind.BOOLEAN,
        }

    def is_character(self, char: Optional[str] = None) -> bool:
        """Check if this is a punctuation token, optionally a specific one."""
        if self.value.kind is not TokenKind.CHARACTER:
            return False
        return char is None or self.value.payload == char

    def is_identifier(self, name: Optional[str] = None) -> bool:
        """Check if this is an identifier token, optionally with a given name."""
        if self.value.kind is not TokenKind.IDENTIFIER:
            return False
        return name is None or self.value.payload == name


# Reserved words recognised by the scanner
BOOLEAN_LITERALS = {
    "true": True,
    "false": False,
}
