"""
minic Abstract Syntax Tree (AST) Definitions
============================================

This module defines the AST node types produced by the parser and
consumed by the code generator.

Node Hierarchy
--------------
ASTNode (base)
├── Function - root node: one function with a statement body
├── Statements
│   ├── Return - return <expr>;
│   ├── VarDecl - int <name> [= <expr>];
│   └── Assign - <name> = <expr>;
└── Expressions
    ├── IntegerLiteral - decimal integer constant
    ├── Identifier - variable reference
    └── BinaryOp - <left> <op> <right>

Design Notes
------------
- All nodes are dataclasses; they carry data only
- Each node may store its source location; it never takes part in
  equality, so hand-built trees compare equal to parsed ones
- BinaryOp chains are always left-associative: ``a + b * c`` is
  ``BinaryOp(*, BinaryOp(+, a, b), c)``
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from minic.errors import InternalConsistencyError, SourceLocation


# =============================================================================
# AST Node Base Class
# =============================================================================

@dataclass
class ASTNode:
    """
    Base class for all AST nodes.

    Attributes:
        location: Source location where this node starts (keyword-only)
    """
    location: Optional[SourceLocation] = field(
        default=None, compare=False, repr=False, kw_only=True
    )


# =============================================================================
# Expression Nodes
# =============================================================================

class BinaryOperator(Enum):
    """Binary operators; the value is the operator's source text."""
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"


@dataclass
class IntegerLiteral(ASTNode):
    """
    Integer literal expression.

    Attributes:
        value: The integer value
    """
    value: int


@dataclass
class Identifier(ASTNode):
    """
    Variable reference expression.

    Attributes:
        name: The variable name
    """
    name: str


@dataclass
class BinaryOp(ASTNode):
    """
    Binary operation expression (left op right).

    Attributes:
        op: The binary operator
        left: Left operand expression
        right: Right operand expression
    """
    op: BinaryOperator
    left: "Expression"
    right: "Expression"


Expression = Union[IntegerLiteral, Identifier, BinaryOp]


# =============================================================================
# Statement Nodes
# =============================================================================

@dataclass
class Return(ASTNode):
    """Return statement with its value expression."""
    expr: Expression


@dataclass
class VarDecl(ASTNode):
    """
    Integer variable declaration.

    Represents:
        int x;
        int y = 10;

    Attributes:
        name: Variable name
        expr: Optional initializer expression
    """
    name: str
    expr: Optional[Expression] = None


@dataclass
class Assign(ASTNode):
    """Assignment of an expression to a named variable."""
    name: str
    expr: Expression


Statement = Union[Return, VarDecl, Assign]


# =============================================================================
# Root Node
# =============================================================================

@dataclass
class Function(ASTNode):
    """
    Root node: a parameterless int function.

    Attributes:
        name: Function name
        body: Statements in source order
    """
    name: str
    body: list[Statement] = field(default_factory=list)


# =============================================================================
# AST Visitor Pattern
# =============================================================================

class ASTVisitor:
    """
    Base class for AST visitors.

    Dispatches on the node's class name to ``visit_<ClassName>``.
    Subclasses override the methods for the node types they handle.

    Usage:
        class MyVisitor(ASTVisitor):
            def visit_Function(self, node):
                ...

        MyVisitor().visit(function)
    """

    def visit(self, node: ASTNode):
        """
        Visit a node by dispatching to the appropriate method.

        Returns:
            The result of the visit method (varies by visitor)
        """
        method_name = f"visit_{node.__class__.__name__}"
        visitor = getattr(self, method_name, self.generic_visit)
        return visitor(node)

    def generic_visit(self, node: ASTNode):
        """Called when no visit method matches; the node set is closed."""
        raise InternalConsistencyError(node)


# =============================================================================
# AST Pretty Printer
# =============================================================================

class ASTPrinter(ASTVisitor):
    """
    Pretty printer for AST debugging.

    Produces an indented, human-readable view of the tree:

        Function main
          VarDecl x = 5
          Return (x + 1)

    Usage:
        print(ASTPrinter().print(function))
    """

    def __init__(self):
        self.output: list[str] = []
        self.indent_level = 0

    def print(self, node: ASTNode) -> str:
        """Print the AST and return as string."""
        self.output = []
        self.indent_level = 0
        self.visit(node)
        return "\n".join(self.output)

    def _emit(self, text: str) -> None:
        indent = "  " * self.indent_level
        self.output.append(f"{indent}{text}")

    def visit_Function(self, node: Function):
        self._emit(f"Function {node.name}")
        self.indent_level += 1
        for stmt in node.body:
            self.visit(stmt)
        self.indent_level -= 1

    def visit_Return(self, node: Return):
        self._emit(f"Return {self._expr_str(node.expr)}")

    def visit_VarDecl(self, node: VarDecl):
        init = f" = {self._expr_str(node.expr)}" if node.expr is not None else ""
        self._emit(f"VarDecl {node.name}{init}")

    def visit_Assign(self, node: Assign):
        self._emit(f"Assign {node.name} = {self._expr_str(node.expr)}")

    def generic_visit(self, node: ASTNode):
        self._emit(f"<{type(node).__name__}>")

    def _expr_str(self, expr: Expression) -> str:
        """Convert expression to a fully parenthesized string."""
        if isinstance(expr, IntegerLiteral):
            return str(expr.value)
        if isinstance(expr, Identifier):
            return expr.name
        if isinstance(expr, BinaryOp):
            return f"({self._expr_str(expr.left)} {expr.op.value} {self._expr_str(expr.right)})"
        return f"<{type(expr).__name__}>"
