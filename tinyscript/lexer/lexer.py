"""
TinyScript Lexer - turns source text into a list of tokens.

Single pass over the source, one codepoint at a time. The current character
drives the dispatch: digits start a number, letters/underscore start an
identifier, a double quote starts a string, whitespace is dropped and anything
else becomes a one-character punctuation token.
"""

import logging
import re
from enum import Enum, auto
from typing import List

from .tokens import Token, TokenValue, SourceLocation, BOOLEAN_LITERALS, INT32_MIN, INT32_MAX
from .errors import (
    create_multiple_decimal_points_error, create_integer_overflow_error,
    create_unterminated_string_error
)

logger = logging.getLogger(__name__)

# Current character once the cursor has moved past the end of input
NULL_CHAR = '\0'


class ScanState(Enum):
    """Scan lifecycle: GO while there is input left, STOP once past the end."""
    GO = auto()
    STOP = auto()


class Lexer:
    """
    TinyScript lexical analyzer.

    Instances are single use: construct with the source, call ``tokenize()``
    once, discard. Any malformed literal aborts the whole scan.

    Token positions follow these conventions:

    - numbers, identifiers and booleans: offset one past their last character
    - strings: offset of the closing quote
    - punctuation: offset of the character itself
    - EOF: length of the source
    """

    def __init__(self, source: str, filename: str = "<unknown>"):
        """
        Initialize the lexer with source code.

        Args:
            source: Source code string
            filename: Name of source file for error reporting
        """
        self.source = source
        self.filename = filename
        self.state = ScanState.GO
        self.position = -1
        self.current_char = NULL_CHAR
        self.line = 1
        self.column = 0
        self.tokens: List[Token] = []
        self._used = False

        self._compile_patterns()

    def _compile_patterns(self):
        """Compile the character classes used by the dispatch."""
        self.number_start = re.compile(r'[0-9]')
        self.number_body = re.compile(r'[0-9.]')
        self.identifier_start = re.compile(r'[a-zA-Z_]')
        self.identifier_body = re.compile(r'[0-9a-zA-Z_]')
        self.discard = re.compile(r'[ \r\n\t]')

    def tokenize(self) -> List[Token]:
        """
        Tokenize the entire source code.

        Returns:
            List of tokens, always terminated by exactly one EOF token

        Raises:
            MalformedNumberError: If a number has several decimal points or overflows
            UnterminatedStringError: If input ends inside a string literal
        """
        if self._used:
            raise RuntimeError("Lexer instances can only tokenize once")
        self._used = True

        # Load the first character
        self._advance()

        while self.state is ScanState.GO:
            char = self.current_char

            if self.number_start.match(char):
                self.tokens.append(self._scan_number())
            elif self.identifier_start.match(char):
                self.tokens.append(self._scan_identifier())
            elif char == '"':
                self.tokens.append(self._scan_string())
            elif self.discard.match(char):
                self._advance()
            else:
                self.tokens.append(Token(TokenValue.character(char), self.position))
                self._advance()

        self.tokens.append(Token(TokenValue.eof(), self.position))

        logger.debug("Scanned %d tokens from %s", len(self.tokens), self.filename)
        return self.tokens

    def _scan_number(self) -> Token:
        """Scan an integer or float literal."""
        start = self._location()
        digits = []
        dot_count = 0

        while self.number_body.match(self.current_char):
            if self.current_char == '.':
                dot_count += 1
                if dot_count > 1:
                    raise create_multiple_decimal_points_error(''.join(digits) + '.', start)

            digits.append(self.current_char)
            self._advance()

        lexeme = ''.join(digits)

        if dot_count == 1:
            return Token(TokenValue.float(float(lexeme)), self.position)

        value = int(lexeme)
        if not INT32_MIN <= value <= INT32_MAX:
            raise create_integer_overflow_error(lexeme, start)
        return Token(TokenValue.integer(value), self.position)

    def _scan_identifier(self) -> Token:
        """Scan an identifier; ``true``/``false`` become booleans."""
        name = []

        while self.identifier_body.match(self.current_char):
            name.append(self.current_char)
            self._advance()

        identifier = ''.join(name)

        if identifier in BOOLEAN_LITERALS:
            return Token(TokenValue.boolean(BOOLEAN_LITERALS[identifier]), self.position)
        return Token(TokenValue.identifier(identifier), self.position)

    def _scan_string(self) -> Token:
        """
        Scan a double-quoted string literal.

        A quote preceded by a backslash does not close the string. The
        backslash itself is kept and no escape sequence is decoded.
        """
        start = self._location()
        self._advance()  # Skip opening quote

        contents = []
        last_char = NULL_CHAR

        while self.state is ScanState.GO:
            if self.current_char == '"' and last_char != '\\':
                self._advance()  # Skip closing quote
                return Token(TokenValue.string(''.join(contents)), self.position - 1)

            contents.append(self.current_char)
            last_char = self.current_char
            self._advance()

        raise create_unterminated_string_error(start)

    def _advance(self):
        """Move the cursor one character forward, stopping at the end of input."""
        if self.current_char == '\n':
            self.line += 1
            self.column = 0

        self.position += 1
        self.column += 1

        if self.position >= len(self.source):
            self.state = ScanState.STOP
            self.current_char = NULL_CHAR
        else:
            self.current_char = self.source[self.position]

    def _location(self) -> SourceLocation:
        return SourceLocation(self.filename, self.line, self.column, self.position)


def lex(source: str, filename: str = "<string>") -> List[Token]:
    """
    Convenience function to tokenize a source string.

    Args:
        source: Source code string
        filename: Filename for error reporting

    Returns:
        List of tokens

    Raises:
        LexerError: If lexing fails
    """
    return Lexer(source, filename).tokenize()


def lex_file(filepath: str) -> List[Token]:
    """
    Convenience function to tokenize a source file.

    Raises:
        LexerError: If lexing fails
        IOError: If file cannot be read
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        source = f.read()

    return lex(source, filepath)
