"""
Error handling for the TinyScript parser.

Parse errors are fatal: the first grammar violation aborts the parse. Each
error keeps the offending token (when there is one) and a ``Diagnostic``
pointing at its source offset.
"""

from typing import Optional, List

from ..lexer.tokens import Token
from ..lexer.errors import Diagnostic, ErrorKind


class ParseError(Exception):
    """
    Exception raised when the parser encounters a fatal syntax error.

    Contains detailed diagnostic information for error reporting.
    """

    kind: ErrorKind

    def __init__(
        self,
        message: str,
        position: int,
        token: Optional[Token] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.diagnostic = Diagnostic(
            message=message,
            position=position,
            severity="error",
            code=code,
            help_text=help_text,
            suggestions=suggestions,
            title=PARSER_ERROR_CODES.get(code),
        )
        self.token = token

    @property
    def position(self) -> int:
        return self.diagnostic.position

    def __str__(self) -> str:
        return str(self.diagnostic)


class UnexpectedTokenError(ParseError):
    """The grammar dispatch met a token shape it does not recognise."""
    kind = ErrorKind.UNEXPECTED_TOKEN


class UnterminatedBracketGroupError(ParseError):
    """EOF reached before the closing bracket of a group."""
    kind = ErrorKind.UNTERMINATED_BRACKET_GROUP


class UnrecognizedBracketError(ParseError):
    """Bracket extraction asked for an opening character with no closing pair."""
    kind = ErrorKind.UNRECOGNIZED_BRACKET


# Common parser error codes for categorization
PARSER_ERROR_CODES = {
    "P001": "Unexpected token",
    "P003": "Missing semicolon",
    "P004": "Unclosed delimiter",
    "P010": "Unexpected end of input",
    "P013": "Unknown bracket character",
}

# Closing character for each bracket the parser can extract
BRACKET_PAIRS = {
    '(': ')',
    '{': '}',
    '[': ']',
    '<': '>',
}


def describe_token(token: Token) -> str:
    """Human readable description of a token for messages."""
    if token.is_eof:
        return "end of input"
    return f"{token.kind.name.lower()} '{token.lexeme}'"


def create_unexpected_token_error(expected: str, found: Token) -> UnexpectedTokenError:
    """Create an error for an unexpected token."""
    found_str = describe_token(found)

    suggestions = []
    if expected in ("';'", "'{'", "'('", "')'", "'='"):
        suggestions.append(f"Add {expected}")

    return UnexpectedTokenError(
        message=f"Expected {expected}, found {found_str}",
        position=found.position,
        token=found,
        code="P010" if found.is_eof else "P001",
        help_text=f"The parser expected to see {expected} at this position, but found {found_str} instead.",
        suggestions=suggestions
    )


def create_missing_semicolon_error(found: Token) -> UnexpectedTokenError:
    """Create an error for a statement that runs into the end of input."""
    return UnexpectedTokenError(
        message="Expected ';' before end of input",
        position=found.position,
        token=found,
        code="P003",
        help_text="Statements must be terminated with ';'.",
        suggestions=["Add a semicolon ';' to end the statement"]
    )


def create_unclosed_delimiter_error(delimiter: str, found: Token) -> UnterminatedBracketGroupError:
    """Create an error for a bracket group that is never closed."""
    closing = BRACKET_PAIRS.get(delimiter, delimiter)

    return UnterminatedBracketGroupError(
        message="Could not get parameters, reached EOF!",
        position=found.position,
        token=found,
        code="P004",
        help_text=f"The opening '{delimiter}' was never closed.",
        suggestions=[f"Add a closing '{closing}'", "Check for missing delimiters"]
    )


def create_unrecognized_bracket_error(delimiter: str, position: int) -> UnrecognizedBracketError:
    """Create an error for an opening character with no known closing pair."""
    return UnrecognizedBracketError(
        message=f"Could not find matching closing character for: `{delimiter}`.",
        position=position,
        code="P013",
        help_text=f"Only {', '.join(BRACKET_PAIRS)} can open a bracket group.",
    )
