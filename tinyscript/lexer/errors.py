"""
Error handling for the TinyScript lexer.

Every lexer error is fatal: the scan stops at the first one and no partial
token list is returned. Errors carry a ``Diagnostic`` for reporting and an
``ErrorKind`` so callers can tell them apart without parsing messages.
"""

from enum import Enum
from typing import Optional, List
from dataclasses import dataclass

from .tokens import SourceLocation


class ErrorKind(Enum):
    """The fatal error kinds of the front end (lexer and parser)."""
    MALFORMED_NUMBER = "MalformedNumber"
    UNTERMINATED_STRING = "UnterminatedString"
    UNTERMINATED_BRACKET_GROUP = "UnterminatedBracketGroup"
    UNRECOGNIZED_BRACKET = "UnrecognizedBracket"
    UNEXPECTED_TOKEN = "UnexpectedToken"


@dataclass
class Diagnostic:
    """A rendered error report."""
    message: str
    position: int
    severity: str  # "error", "warning"
    code: Optional[str] = None
    help_text: Optional[str] = None
    suggestions: Optional[List[str]] = None
    location: Optional[SourceLocation] = None
    title: Optional[str] = None

    def __str__(self) -> str:
        result = f"{self.severity.upper()}"
        if self.code:
            result += f"[{self.code}]"
        result += f": {self.message}\n"

        if self.location is not None:
            result += f"  --> {self.location}\n"
        else:
            result += f"  --> offset {self.position}\n"

        if self.title:
            result += f"  note: {self.title}\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        if self.suggestions:
            result += "  suggestions:\n"
            for suggestion in self.suggestions:
                result += f"    - {suggestion}\n"

        return result


class LexerError(Exception):
    """
    Exception raised when the lexer encounters a fatal error.

    Contains detailed diagnostic information for error reporting.
    """

    kind: ErrorKind

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.diagnostic = Diagnostic(
            message=message,
            position=location.offset,
            severity="error",
            code=code,
            help_text=help_text,
            suggestions=suggestions,
            location=location,
            title=ERROR_CODES.get(code),
        )

    @property
    def location(self) -> SourceLocation:
        return self.diagnostic.location

    def __str__(self) -> str:
        return str(self.diagnostic)


class MalformedNumberError(LexerError):
    """A numeric literal with several decimal points, or out of range."""
    kind = ErrorKind.MALFORMED_NUMBER


class UnterminatedStringError(LexerError):
    """End of input reached inside a string literal."""
    kind = ErrorKind.UNTERMINATED_STRING


# Common error codes for categorization
ERROR_CODES = {
    "L002": "Unterminated string literal",
    "L003": "Invalid numeric literal",
    "L007": "Number literal overflow",
}


def create_multiple_decimal_points_error(lexeme: str, location: SourceLocation) -> MalformedNumberError:
    """Create an error for a number containing more than one '.'."""
    return MalformedNumberError(
        message=f"Cannot have more than one decimal point in a number: '{lexeme}'",
        location=location,
        code="L003",
        help_text="A float literal has exactly one decimal point, an integer literal has none.",
        suggestions=["Remove the extra decimal points"]
    )


def create_integer_overflow_error(lexeme: str, location: SourceLocation) -> MalformedNumberError:
    """Create an error for an integer literal that does not fit in 32 bits."""
    return MalformedNumberError(
        message=f"Integer literal out of range: '{lexeme}'",
        location=location,
        code="L007",
        help_text="Integer literals must fit in a signed 32-bit integer.",
        suggestions=["Use a float literal for large values"]
    )


def create_unterminated_string_error(location: SourceLocation) -> UnterminatedStringError:
    """Create an error for an unterminated string literal."""
    return UnterminatedStringError(
        message="Unclosed string!",
        location=location,
        code="L002",
        help_text='String literals must be closed with a matching " quote.',
        suggestions=['Add a closing " quote', 'Check for a \\ right before the closing quote']
    )
