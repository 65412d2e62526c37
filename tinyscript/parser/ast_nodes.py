"""
Abstract Syntax Tree node definitions for TinyScript.

The node set is closed: conditionals, invocations, assignments, variables,
parameter groups and function declarations. Every parent owns its children
outright (plain lists, no parent pointers), so the AST is a strict tree and
nodes compare structurally.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, List, Optional

from ..lexer.tokens import Token, TokenValue


class NodeType(Enum):
    """Enumeration of all AST node types."""
    CONDITIONAL = "Conditional"
    INVOCATION = "Invocation"
    ASSIGN = "Assign"
    VAR = "Var"
    PARAMETERS = "Parameters"
    FUNCTION = "Function"


class NodeVisitor(ABC):
    """Visitor interface with one method per node type."""

    @abstractmethod
    def visit_conditional(self, node: 'Conditional') -> Any:
        pass

    @abstractmethod
    def visit_invocation(self, node: 'Invocation') -> Any:
        pass

    @abstractmethod
    def visit_assign(self, node: 'Assign') -> Any:
        pass

    @abstractmethod
    def visit_var(self, node: 'Var') -> Any:
        pass

    @abstractmethod
    def visit_parameters(self, node: 'Parameters') -> Any:
        pass

    @abstractmethod
    def visit_function(self, node: 'Function') -> Any:
        pass


class Node(ABC):
    """Base class for all AST nodes."""

    node_type: ClassVar[NodeType]

    @abstractmethod
    def accept(self, visitor: NodeVisitor) -> Any:
        """Accept a visitor (visitor pattern)."""
        pass

    @abstractmethod
    def children(self) -> List['Node']:
        """Get all child nodes, in source order."""
        pass

    def __str__(self) -> str:
        return self.node_type.value


@dataclass
class Var(Node):
    """
    A single-token operand: a variable reference, a literal or an operator.

    ``token`` is the token the node was built from; parameter declarations
    also record their declared type in ``var_type``.
    """
    node_type: ClassVar[NodeType] = NodeType.VAR

    var_name: str
    token: Optional[Token] = None
    var_type: Optional[str] = None

    @property
    def value(self) -> Optional[TokenValue]:
        return self.token.value if self.token is not None else None

    def accept(self, visitor: NodeVisitor) -> Any:
        return visitor.visit_var(self)

    def children(self) -> List[Node]:
        return []


@dataclass
class Parameters(Node):
    """An ordered group of nodes: parameter lists and grouped expressions."""
    node_type: ClassVar[NodeType] = NodeType.PARAMETERS

    parameters: List[Node] = field(default_factory=list)

    def accept(self, visitor: NodeVisitor) -> Any:
        return visitor.visit_parameters(self)

    def children(self) -> List[Node]:
        return list(self.parameters)


@dataclass
class Conditional(Node):
    """``if (condition) { body }``."""
    node_type: ClassVar[NodeType] = NodeType.CONDITIONAL

    condition: List[Node]
    body: List[Node] = field(default_factory=list)

    def __post_init__(self):
        if not self.condition:
            raise ValueError("Conditional requires a non-empty condition")

    def accept(self, visitor: NodeVisitor) -> Any:
        return visitor.visit_conditional(self)

    def children(self) -> List[Node]:
        return self.condition + self.body


@dataclass
class Invocation(Node):
    """Function call: ``name(arg, ...)``."""
    node_type: ClassVar[NodeType] = NodeType.INVOCATION

    method_name: str
    parameters: List[Node] = field(default_factory=list)

    def accept(self, visitor: NodeVisitor) -> Any:
        return visitor.visit_invocation(self)

    def children(self) -> List[Node]:
        return list(self.parameters)


@dataclass
class Assign(Node):
    """
    Assignment of an expression to a variable.

    ``first_time`` is True for a declaration (``type name = value``), which
    also records the declared type, and False for a re-assignment
    (``name = value``).
    """
    node_type: ClassVar[NodeType] = NodeType.ASSIGN

    var_name: Var
    value: List[Node]
    first_time: bool
    var_type: Optional[str] = None

    def __post_init__(self):
        if self.first_time != (self.var_type is not None):
            raise ValueError("Declarations need a type, re-assignments must not have one")

    def accept(self, visitor: NodeVisitor) -> Any:
        return visitor.visit_assign(self)

    def children(self) -> List[Node]:
        return [self.var_name] + self.value


@dataclass
class Function(Node):
    """Function declaration: ``return_type name(parameters) { body }``."""
    node_type: ClassVar[NodeType] = NodeType.FUNCTION

    name: str
    return_type: str
    parameters: Parameters = field(default_factory=Parameters)
    body: List[Node] = field(default_factory=list)

    def accept(self, visitor: NodeVisitor) -> Any:
        return visitor.visit_function(self)

    def children(self) -> List[Node]:
        return [self.parameters] + self.body
