"""
minic Recursive Descent Parser
==============================

This module turns the lexer's token list into a Function AST using
single-token lookahead and no backtracking. The first mismatch raises
ParseError; no partial tree is ever returned.

Grammar (EBNF)
--------------
program    ::= 'int' ID '(' ')' '{' statement* '}'
statement  ::= 'return' expr ';'
             | 'int' ID ('=' expr)? ';'
             | ID '=' expr ';'
expr       ::= term (OPERATOR term)*
term       ::= NUMBER | ID
OPERATOR   ::= '+' | '-' | '*' | '/'

Operators have no precedence levels: every chain folds left to right,
so ``1 + 2 * 3`` parses as ``(1 + 2) * 3``. Parentheses are lexed but
never accepted inside expressions.

Assignment Operator
-------------------
'=' is lexed as an ordinary OP token. In strict mode (the default) the
OP in a declaration initializer or an assignment must be '='. With
``strict_assignment=False`` any OP token is accepted in that position,
so ``x + 5;`` reads as ``x = 5;``.

Example Usage
-------------
>>> from minic.parser import parse_source
>>> parse_source('int main() { return 1 + 2; }')
Function(name='main', body=[Return(expr=BinaryOp(op=<BinaryOperator.ADD: '+'>, ...))])
"""

from typing import Optional

from minic.lexer import Lexer, Token, TokenType, ARITHMETIC_OPERATORS
from minic.ast import (
    Function,
    Statement,
    Return,
    VarDecl,
    Assign,
    Expression,
    IntegerLiteral,
    Identifier,
    BinaryOp,
    BinaryOperator,
)
from minic.errors import ParseError


class Parser:
    """
    Recursive descent parser for minic.

    One Parser instance parses one token list; create a new one per
    input.

    Attributes:
        tokens: List of tokens to parse
        filename: Source filename for error reporting
        strict_assignment: Require '=' as the assignment operator
    """

    def __init__(
        self,
        tokens: list[Token],
        filename: str = "<input>",
        source_lines: Optional[list[str]] = None,
        strict_assignment: bool = True,
    ):
        """
        Initialize the parser.

        Args:
            tokens: List of tokens from the lexer
            filename: Source filename for error messages
            source_lines: Original source lines for error context
            strict_assignment: Reject operators other than '=' where an
                assignment operator is expected
        """
        self.tokens = tokens
        self.filename = filename
        self.source_lines = source_lines or []
        self.strict_assignment = strict_assignment

        # Current position in token stream
        self._pos = 0
        self._eof = self._make_eof_token()

    def parse(self) -> Function:
        """
        Parse the token list into a Function.

        Returns:
            The Function root node

        Raises:
            ParseError: On the first token that does not fit the grammar,
                including tokens left over after the closing brace
        """
        function = self._parse_function()
        if not self._at_end():
            raise self._error("end of input")
        return function

    # =========================================================================
    # Token Access Methods
    # =========================================================================

    def _make_eof_token(self) -> Token:
        """Build the EOF token positioned just after the last real token."""
        if not self.tokens:
            return Token(TokenType.EOF, "", 1, 1, self.filename)
        last = self.tokens[-1]
        return Token(
            TokenType.EOF, "", last.line, last.column + len(last.value), self.filename
        )

    def _at_end(self) -> bool:
        return self._pos >= len(self.tokens)

    def _peek(self) -> Token:
        """Look at the current token without consuming it."""
        if self._at_end():
            return self._eof
        return self.tokens[self._pos]

    def _advance(self) -> Token:
        """Consume and return the current token."""
        token = self._peek()
        if not self._at_end():
            self._pos += 1
        return token

    def _check(self, *types: TokenType) -> bool:
        """Check if current token is one of the given types."""
        return self._peek().type in types

    def _expect(self, token_type: TokenType) -> Token:
        """
        Expect and consume a specific token type.

        Raises:
            ParseError: If the current token has a different type
        """
        if self._check(token_type):
            return self._advance()
        raise self._error(token_type.name)

    def _error(self, expected: str, hint: Optional[str] = None) -> ParseError:
        """Create a ParseError describing the current token."""
        current = self._peek()
        return ParseError(
            expected,
            current.describe(),
            location=current.location,
            source_line=self._get_source_line(current.line),
            hint=hint,
        )

    def _get_source_line(self, line: int) -> Optional[str]:
        """Get source line for error reporting."""
        if 0 < line <= len(self.source_lines):
            return self.source_lines[line - 1].rstrip("\r")
        return None

    # =========================================================================
    # Function
    # =========================================================================

    def _parse_function(self) -> Function:
        """Parse ``int NAME ( ) { statement* }``."""
        start = self._expect(TokenType.INT)
        name = self._expect(TokenType.ID).value
        self._expect(TokenType.LPAREN)
        self._expect(TokenType.RPAREN)
        self._expect(TokenType.LBRACE)

        body: list[Statement] = []
        while not self._check(TokenType.RBRACE):
            if self._at_end():
                raise self._error(TokenType.RBRACE.name)
            body.append(self._parse_statement())

        self._expect(TokenType.RBRACE)
        return Function(name, body, location=start.location)

    # =========================================================================
    # Statements
    # =========================================================================

    def _parse_statement(self) -> Statement:
        """Dispatch on the lookahead token's kind."""
        if self._check(TokenType.RETURN):
            return self._parse_return()
        if self._check(TokenType.INT):
            return self._parse_declaration()
        if self._check(TokenType.ID):
            return self._parse_assignment()
        raise self._error(
            "statement",
            hint="a statement starts with 'int', 'return' or a variable name",
        )

    def _parse_return(self) -> Return:
        start = self._expect(TokenType.RETURN)
        expr = self._parse_expression()
        self._expect(TokenType.SEMI)
        return Return(expr, location=start.location)

    def _parse_declaration(self) -> VarDecl:
        """Parse ``int NAME ;`` or ``int NAME = expr ;``."""
        start = self._expect(TokenType.INT)
        name = self._expect(TokenType.ID).value

        expr = None
        if self._check(TokenType.OP):
            self._expect_assignment_operator()
            expr = self._parse_expression()

        self._expect(TokenType.SEMI)
        return VarDecl(name, expr, location=start.location)

    def _parse_assignment(self) -> Assign:
        """Parse ``NAME = expr ;``."""
        start = self._expect(TokenType.ID)
        self._expect_assignment_operator()
        expr = self._parse_expression()
        self._expect(TokenType.SEMI)
        return Assign(start.value, expr, location=start.location)

    def _expect_assignment_operator(self) -> Token:
        """Consume the OP token that stands for '='."""
        if self.strict_assignment and not (
            self._check(TokenType.OP) and self._peek().value == "="
        ):
            raise self._error("'='")
        return self._expect(TokenType.OP)

    # =========================================================================
    # Expressions
    # =========================================================================

    def _parse_expression(self) -> Expression:
        """
        Parse ``term (OPERATOR term)*`` into a left-leaning BinaryOp chain.

        Each new operator takes the expression built so far as its left
        operand, so there is no precedence between + - and * /.
        """
        left = self._parse_operand()

        while self._check(TokenType.OP) and self._peek().value in ARITHMETIC_OPERATORS:
            op_token = self._advance()
            right = self._parse_operand()
            left = BinaryOp(
                BinaryOperator(op_token.value), left, right,
                location=op_token.location,
            )

        return left

    def _parse_operand(self) -> Expression:
        """Parse a single NUMBER or ID operand."""
        if self._check(TokenType.NUMBER):
            token = self._peek()
            try:
                value = int(token.value)
            except ValueError:
                # Digit count exceeds the interpreter's int conversion limit
                raise ParseError(
                    "integer literal",
                    f"NUMBER of {len(token.value)} digits",
                    location=token.location,
                    source_line=self._get_source_line(token.line),
                    hint="integer literal has too many digits",
                ) from None
            self._advance()
            return IntegerLiteral(value, location=token.location)
        if self._check(TokenType.ID):
            token = self._advance()
            return Identifier(token.value, location=token.location)
        raise self._error("NUMBER or ID")


# =============================================================================
# Convenience Functions
# =============================================================================

def parse_source(
    source: str,
    filename: str = "<input>",
    strict_assignment: bool = True,
) -> Function:
    """
    Tokenize and parse source text in one step.

    Raises:
        LexError: If the source contains an unrecognized character
        ParseError: If the tokens do not match the grammar
    """
    tokens = Lexer(source, filename).tokenize()
    parser = Parser(
        tokens, filename, source.split("\n"), strict_assignment=strict_assignment
    )
    return parser.parse()
