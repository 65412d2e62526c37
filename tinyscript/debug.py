"""
Debug printers for tokens and AST nodes.
"""

from typing import Iterable, List

import click

from .lexer.tokens import Token, TokenKind
from .parser.ast_nodes import (
    Node, NodeVisitor, Conditional, Invocation, Assign, Var, Parameters, Function
)


def format_payload(token: Token) -> str:
    if token.kind is TokenKind.BOOLEAN:
        return "true" if token.payload else "false"
    if token.kind is TokenKind.FLOAT:
        return token.lexeme
    return str(token.payload)


def format_token(token: Token) -> str:
    """Render one token as ``Token: <VARIANT>: <payload>``."""
    if token.kind is TokenKind.EOF:
        return "Token: EOF"
    return f"Token: {token.kind.name}: {format_payload(token)}"


def format_tokens(tokens: Iterable[Token]) -> List[str]:
    return [format_token(token) for token in tokens]


def print_tokens(tokens: Iterable[Token]):
    """Print the given list of tokens, one per line."""
    for line in format_tokens(tokens):
        click.echo(line)


class AstPrinter(NodeVisitor):
    """Renders a tree as indented lines, two spaces per level."""

    def __init__(self):
        self.lines: List[str] = []
        self.depth = 0

    def _emit(self, text: str):
        self.lines.append("  " * self.depth + text)

    def _nested(self, label: str, nodes: List[Node]):
        self._emit(label)
        self.depth += 1
        for node in nodes:
            node.accept(self)
        self.depth -= 1

    def visit_conditional(self, node: Conditional):
        self._emit("Conditional")
        self.depth += 1
        self._nested("condition:", node.condition)
        self._nested("body:", node.body)
        self.depth -= 1

    def visit_invocation(self, node: Invocation):
        self._nested(f"Invocation {node.method_name}", node.parameters)

    def visit_assign(self, node: Assign):
        if node.first_time:
            label = f"Assign {node.var_type} {node.var_name.var_name} (declaration)"
        else:
            label = f"Assign {node.var_name.var_name}"
        self._nested(label, node.value)

    def visit_var(self, node: Var):
        if node.var_type is not None:
            self._emit(f"Var {node.var_type} {node.var_name}")
        elif node.token is not None and node.token.is_literal:
            self._emit(f"Var {node.token.kind.name.lower()} {node.token.lexeme}")
        else:
            self._emit(f"Var {node.var_name}")

    def visit_parameters(self, node: Parameters):
        self._nested("Parameters", node.parameters)

    def visit_function(self, node: Function):
        self._emit(f"Function {node.return_type} {node.name}")
        self.depth += 1
        node.parameters.accept(self)
        self._nested("body:", node.body)
        self.depth -= 1


def dump_ast(nodes: Iterable[Node]) -> str:
    """Render a list of top-level nodes as an indented tree."""
    printer = AstPrinter()
    for node in nodes:
        node.accept(printer)
    return "\n".join(printer.lines)
