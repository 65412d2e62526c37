"""
TinyScript Parser Package

Implements the recursive descent parser that turns the lexer's tokens into an
Abstract Syntax Tree, plus the condition evaluator used for conditional
dispatch.

Key Features:
- Function declarations, typed declarations, re-assignments, calls and
  ``if`` statements
- Bracket groups parsed recursively over their own token slice
- Closed, structurally comparable node set with a typed visitor
- Fatal, typed errors for unexpected tokens and unbalanced brackets
"""

from .ast_nodes import (
    NodeType, NodeVisitor, Node,
    Conditional, Invocation, Assign, Var, Parameters, Function,
)
from .condition import Condition, evaluate_condition
from .parser import Parser, parse, parse_string, parse_file
from .errors import (
    ParseError, UnexpectedTokenError, UnterminatedBracketGroupError,
    UnrecognizedBracketError
)

__all__ = [
    # Core parser
    "Parser", "parse", "parse_string", "parse_file",

    # AST nodes
    "NodeType", "NodeVisitor", "Node",
    "Conditional", "Invocation", "Assign", "Var", "Parameters", "Function",

    # Condition evaluation
    "Condition", "evaluate_condition",

    # Error handling
    "ParseError", "UnexpectedTokenError", "UnterminatedBracketGroupError",
    "UnrecognizedBracketError",
]
