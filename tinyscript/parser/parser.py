"""
TinyScript Recursive Descent Parser

Turns the lexer's token list into a list of top-level AST nodes. Statements
are told apart with one or two tokens of lookahead:

    if ( guard ) { body }                 -> Conditional
    type name ( params ) { body }         -> Function
    type name = value ;                   -> Assign (declaration)
    name = value ;                        -> Assign (re-assignment)
    name ( args ) ;                       -> Invocation

Bracketed groups (parameters, bodies, guards, arguments) are cut out of the
token list first and handed to a fresh parser over just that slice, which
must consume it completely.
"""

import logging
from typing import List

from ..lexer.tokens import Token, TokenValue
from .ast_nodes import Node, Conditional, Invocation, Assign, Var, Parameters, Function
from .errors import (
    BRACKET_PAIRS, create_unexpected_token_error, create_missing_semicolon_error,
    create_unclosed_delimiter_error, create_unrecognized_bracket_error
)

logger = logging.getLogger(__name__)

# Keyword introducing a conditional statement
CONDITIONAL_KEYWORD = "if"

# Characters that may never start an operand inside an expression
NON_OPERAND_CHARS = {')', ']', '}', '{', ';'}


class Parser:
    """
    TinyScript recursive descent parser.

    Instances are single use. The cursor never runs past the final EOF
    token: advancing at the end keeps it there.
    """

    def __init__(self, tokens: List[Token]):
        """
        Initialize parser with a list of tokens.

        Args:
            tokens: List of tokens from the lexer, terminated by EOF
        """
        if not tokens or not tokens[-1].is_eof:
            raise ValueError("Token list must end with an EOF token")

        self.tokens = tokens
        self.token_id = 0
        self.current_token = tokens[0]
        self._used = False

    def parse(self) -> List[Node]:
        """
        Parse the token stream into an AST.

        Returns:
            The top-level nodes, in source order

        Raises:
            ParseError: On the first grammar violation
        """
        if self._used:
            raise RuntimeError("Parser instances can only parse once")
        self._used = True

        nodes = self._walk()
        logger.debug("Parsed %d top-level nodes", len(nodes))
        return nodes

    # Cursor

    def advance(self):
        """Move to the next token, staying on the last one at the end."""
        self.token_id += 1

        if self.token_id >= len(self.tokens):
            self.token_id = len(self.tokens) - 1

        self.current_token = self.tokens[self.token_id]

    def peek(self, offset: int = 1) -> Token:
        """Return the token ``offset`` places ahead without moving."""
        index = min(self.token_id + offset, len(self.tokens) - 1)
        return self.tokens[index]

    def previous(self) -> Token:
        return self.tokens[max(self.token_id - 1, 0)]

    # Token extraction

    def get_parameters(self, open_char: str) -> List[Token]:
        """
        Collect the tokens of a bracket group.

        The cursor must sit just after the opening ``open_char``. Tokens are
        collected up to the matching closing character (nested pairs of the
        same bracket are kept), and the cursor is left just past it.
        """
        close_char = BRACKET_PAIRS.get(open_char)
        if close_char is None:
            raise create_unrecognized_bracket_error(open_char, self.current_token.position)

        parameters = []
        depth = 0

        while True:
            token = self.current_token

            if token.is_eof:
                raise create_unclosed_delimiter_error(open_char, token)

            if token.is_character(close_char):
                if depth == 0:
                    break
                depth -= 1
            elif token.is_character(open_char):
                depth += 1

            parameters.append(token)
            self.advance()

        self.advance()
        return parameters

    def get_until_eos(self) -> List[Token]:
        """
        Get the tokens after the current one up to an EOS (End of
        Statement) token (';'), and move past the ';'.
        """
        tokens = []

        self.advance()

        while not self.current_token.is_character(';'):
            if self.current_token.is_eof:
                raise create_missing_semicolon_error(self.current_token)

            tokens.append(self.current_token)
            self.advance()

        self.advance()
        return tokens

    def _group(self, open_char: str) -> 'Parser':
        """Extract a bracket group and return a parser over just its tokens."""
        tokens = self.get_parameters(open_char)
        return self._slice_parser(tokens, self.previous())

    @staticmethod
    def _slice_parser(tokens: List[Token], end: Token) -> 'Parser':
        # The slice gets its own EOF, placed where the slice ends in the source
        return Parser(tokens + [Token(TokenValue.eof(), end.position)])

    def _expect(self, char: str, what: str):
        """Consume ``char`` or raise an unexpected-token error."""
        if not self.current_token.is_character(char):
            raise create_unexpected_token_error(what, self.current_token)
        self.advance()

    # Statements

    def _walk(self) -> List[Node]:
        """Parse statements until the end of this parser's tokens."""
        nodes = []

        while not self.current_token.is_eof:
            nodes.append(self._parse_statement())

        return nodes

    def _parse_statement(self) -> Node:
        """Dispatch on the leading token shape."""
        token = self.current_token

        if not token.is_identifier():
            raise create_unexpected_token_error("a statement", token)

        next_token = self.peek()

        if token.is_identifier(CONDITIONAL_KEYWORD) and next_token.is_character('('):
            node = self._parse_conditional()
        elif next_token.is_identifier():
            after = self.peek(2)
            if after.is_character('('):
                node = self._parse_function()
            elif after.is_character('='):
                node = self._parse_declaration()
            else:
                raise create_unexpected_token_error("'(' or '='", after)
        elif next_token.is_character('='):
            node = self._parse_reassignment()
        elif next_token.is_character('('):
            node = self._parse_invocation_statement()
        else:
            raise create_unexpected_token_error("'=', '(' or an identifier", next_token)

        logger.debug("Parsed %s starting at offset %d", node.node_type.value, token.position)
        return node

    def _parse_function(self) -> Function:
        """Parse ``return_type name(params) { body }``."""
        return_type = self.current_token.payload
        self.advance()
        name = self.current_token.payload
        self.advance()

        self._expect('(', "'('")
        parameters = Parameters(self._group('(')._parse_parameter_declarations())

        self._expect('{', "'{'")
        body = self._group('{')._walk()

        return Function(name=name, return_type=return_type, parameters=parameters, body=body)

    def _parse_conditional(self) -> Conditional:
        """Parse ``if (guard) { body }``."""
        self.advance()  # Skip keyword
        self._expect('(', "'('")

        condition = self._group('(')._parse_expression()
        if not condition:
            raise create_unexpected_token_error("a condition", self.previous())

        self._expect('{', "'{'")
        body = self._group('{')._walk()

        return Conditional(condition=condition, body=body)

    def _parse_declaration(self) -> Assign:
        """Parse ``type name = value;``."""
        var_type = self.current_token.payload
        self.advance()
        name_token = self.current_token
        self.advance()

        value = self._parse_statement_value()
        return Assign(
            var_name=Var(name_token.payload, token=name_token),
            value=value,
            first_time=True,
            var_type=var_type
        )

    def _parse_reassignment(self) -> Assign:
        """Parse ``name = value;``."""
        name_token = self.current_token
        self.advance()

        value = self._parse_statement_value()
        return Assign(
            var_name=Var(name_token.payload, token=name_token),
            value=value,
            first_time=False
        )

    def _parse_statement_value(self) -> List[Node]:
        # Cursor is on '='; the value runs to the ';'
        tokens = self.get_until_eos()
        if not tokens:
            raise create_unexpected_token_error("a value", self.previous())
        return self._slice_parser(tokens, self.previous())._parse_expression()

    def _parse_invocation_statement(self) -> Invocation:
        """Parse ``name(args);``."""
        name = self.current_token.payload
        self.advance()
        self.advance()  # Skip '('

        parameters = self._group('(')._parse_arguments()
        self._expect(';', "';'")

        return Invocation(method_name=name, parameters=parameters)

    # Slice-level rules, each consuming its whole token slice

    def _parse_parameter_declarations(self) -> List[Node]:
        """Parse ``type name, type name, ...`` (possibly empty)."""
        declarations = []

        if self.current_token.is_eof:
            return declarations

        while True:
            type_token = self.current_token
            if not type_token.is_identifier():
                raise create_unexpected_token_error("a parameter type", type_token)
            self.advance()

            name_token = self.current_token
            if not name_token.is_identifier():
                raise create_unexpected_token_error("a parameter name", name_token)
            self.advance()

            declarations.append(Var(name_token.payload, token=name_token, var_type=type_token.payload))

            if self.current_token.is_eof:
                return declarations

            self._expect(',', "',' or ')'")

    def _parse_arguments(self) -> List[Node]:
        """
        Parse comma separated call arguments (possibly none).

        A one-node argument is kept as is, longer ones are grouped in a
        ``Parameters`` node.
        """
        arguments = []

        if self.current_token.is_eof:
            return arguments

        while True:
            argument = []
            while not (self.current_token.is_eof or self.current_token.is_character(',')):
                argument.append(self._parse_operand())

            if not argument:
                raise create_unexpected_token_error("an argument", self.current_token)

            arguments.append(argument[0] if len(argument) == 1 else Parameters(argument))

            if self.current_token.is_eof:
                return arguments

            self.advance()  # Skip ','

    def _parse_expression(self) -> List[Node]:
        """Parse a flat sequence of operands up to the end of the slice."""
        nodes = []

        while not self.current_token.is_eof:
            nodes.append(self._parse_operand())

        return nodes

    def _parse_operand(self) -> Node:
        """Parse a call, a bracketed group or a single-token operand."""
        token = self.current_token

        if token.is_identifier() and self.peek().is_character('('):
            self.advance()
            self.advance()
            return Invocation(method_name=token.payload, parameters=self._group('(')._parse_arguments())

        if token.is_character('('):
            self.advance()
            inner = self._group('(')._parse_expression()
            if len(inner) == 1:
                return inner[0]
            return Parameters(inner)

        if token.is_character('['):
            self.advance()
            # Square brackets always stay a group, even around one node
            return Parameters(self._group('[')._parse_expression())

        if token.is_character() and token.payload in NON_OPERAND_CHARS:
            raise create_unexpected_token_error("an operand", token)

        self.advance()
        return Var(token.lexeme, token=token)


def parse(tokens: List[Token]) -> List[Node]:
    """
    Convenience function to parse a token list.

    Raises:
        ParseError: If parsing fails
    """
    return Parser(tokens).parse()


def parse_string(source: str, filename: str = "<string>") -> List[Node]:
    """
    Convenience function to lex and parse a source string.

    Raises:
        LexerError: If lexing fails
        ParseError: If parsing fails
    """
    from ..lexer import lex

    return parse(lex(source, filename))


def parse_file(filepath: str) -> List[Node]:
    """
    Convenience function to parse a source file.

    Raises:
        LexerError: If lexing fails
        ParseError: If parsing fails
        IOError: If file cannot be read
    """
    from ..lexer import lex_file

    return parse(lex_file(filepath))
