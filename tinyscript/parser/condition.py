"""
Condition evaluation for conditional statements.

Reduces the node sequence of an ``if`` guard to a boolean. Only a single
integer or boolean operand can be decided without a runtime; everything else
is False for now.
"""

from typing import List

from ..lexer.tokens import TokenKind
from .ast_nodes import Node, Var


class Condition:
    """A conditional's guard, ready to be reduced to a boolean."""

    def __init__(self, nodes: List[Node]):
        self.nodes = nodes

    def calculate(self) -> bool:
        """
        Reduce the guard to a boolean.

        Only a one-node guard is decided: a ``Var`` holding an integer is
        truthy when non-zero, one holding a boolean is its value. Any other
        shape or length is False.
        """
        if len(self.nodes) != 1:
            return False

        node = self.nodes[0]
        if not isinstance(node, Var) or node.value is None:
            # TODO: resolve identifiers and invocations once an evaluator exists
            return False

        kind = node.value.kind
        if kind is TokenKind.INTEGER:
            return node.value.payload != 0
        if kind is TokenKind.BOOLEAN:
            return node.value.payload
        return False


def evaluate_condition(nodes: List[Node]) -> bool:
    """Convenience wrapper around ``Condition(nodes).calculate()``."""
    return Condition(nodes).calculate()
