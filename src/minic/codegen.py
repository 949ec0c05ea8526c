"""
C99 Code Generator for minic
============================

This module renders a Function AST as the text of a C99 function
definition.

Rendering Rules
---------------
| Node                    | Output                              |
|-------------------------|-------------------------------------|
| IntegerLiteral(5)       | 5                                   |
| Identifier(x)           | x                                   |
| BinaryOp(+, l, r)       | l + r   (BinaryOp operands in parens) |
| Return(e)               | return e;                           |
| VarDecl(x)              | int x;                              |
| VarDecl(x, e)           | int x = e;                          |
| Assign(x, e)            | x = e;                              |
| Function(f, body)       | int f(void) { ...one line each... } |

Nested BinaryOp operands are always parenthesized, which keeps the
source's flat left-to-right grouping intact under C's own operator
precedence: ``1 + 2 * 3`` in minic becomes ``(1 + 2) * 3`` in C.

Any node outside this table raises InternalConsistencyError instead of
producing malformed text.

Usage
-----
>>> from minic.parser import parse_source
>>> from minic.codegen import CodeGenerator
>>> print(CodeGenerator().generate(parse_source('int main() { return 1+2; }')), end="")
int main(void) {
    return 1 + 2;
}
"""

from minic.ast import (
    ASTVisitor,
    Function,
    Return,
    VarDecl,
    Assign,
    Expression,
    IntegerLiteral,
    Identifier,
    BinaryOp,
    BinaryOperator,
)
from minic.errors import InternalConsistencyError


# Node classes allowed in statement and expression positions
STATEMENT_TYPES = (Return, VarDecl, Assign)
EXPRESSION_TYPES = (IntegerLiteral, Identifier, BinaryOp)


class CodeGenerator(ASTVisitor):
    """
    Generates C99 source text from a minic AST.

    Each visit method returns the text for its node; nothing is
    accumulated between calls, so one generator may be reused.

    Attributes:
        indent: Prefix placed before every statement line
    """

    def __init__(self, indent: str = "    "):
        self.indent = indent

    def generate(self, function: Function) -> str:
        """
        Generate the C99 function definition.

        Args:
            function: The root AST node

        Returns:
            Complete function text, ending with a newline

        Raises:
            InternalConsistencyError: If the tree contains an unknown node
        """
        if not isinstance(function, Function):
            raise InternalConsistencyError(function)
        return self.visit(function)

    # =========================================================================
    # Function and Statements
    # =========================================================================

    def visit_Function(self, node: Function) -> str:
        lines = [f"int {node.name}(void) {{\n"]
        for stmt in node.body:
            lines.append(f"{self.indent}{self._statement(stmt)}\n")
        lines.append("}\n")
        return "".join(lines)

    def _statement(self, stmt) -> str:
        if not isinstance(stmt, STATEMENT_TYPES):
            raise InternalConsistencyError(stmt)
        return self.visit(stmt)

    def visit_Return(self, node: Return) -> str:
        return f"return {self._expression(node.expr)};"

    def visit_VarDecl(self, node: VarDecl) -> str:
        if node.expr is None:
            return f"int {node.name};"
        return f"int {node.name} = {self._expression(node.expr)};"

    def visit_Assign(self, node: Assign) -> str:
        return f"{node.name} = {self._expression(node.expr)};"

    # =========================================================================
    # Expressions
    # =========================================================================

    def visit_IntegerLiteral(self, node: IntegerLiteral) -> str:
        try:
            return str(node.value)
        except ValueError:
            # Only reachable with a hand-built value past the int conversion limit
            raise InternalConsistencyError(node) from None

    def visit_Identifier(self, node: Identifier) -> str:
        return node.name

    def visit_BinaryOp(self, node: BinaryOp) -> str:
        if not isinstance(node.op, BinaryOperator):
            raise InternalConsistencyError(node.op)
        return f"{self._operand(node.left)} {node.op.value} {self._operand(node.right)}"

    def _expression(self, expr: Expression) -> str:
        if not isinstance(expr, EXPRESSION_TYPES):
            raise InternalConsistencyError(expr)
        return self.visit(expr)

    def _operand(self, expr: Expression) -> str:
        """Render a BinaryOp operand, parenthesizing nested operations."""
        if isinstance(expr, BinaryOp):
            return f"({self._expression(expr)})"
        return self._expression(expr)


def generate_c99(function: Function, indent: str = "    ") -> str:
    """Render a Function AST as C99 text."""
    return CodeGenerator(indent).generate(function)
