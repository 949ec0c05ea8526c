"""
minic Lexer (Tokenizer)
=======================

This module converts minic source text into a list of classified tokens
for the parser.

Token Table
-----------
Tokens are recognised by a fixed, ordered table of regular expressions.
At each position the patterns are tried in table order and the first
one that matches wins (ordered choice, not longest match):

| Order | Kind     | Pattern        | Notes                              |
|-------|----------|----------------|------------------------------------|
| 1     | NUMBER   | [0-9]+         | text kept as-is, parsed later      |
| 2     | ID       | [A-Za-z_]\\w*   | "int"/"return" become keyword kinds |
| 3     | OP       | [+\\-*/=]       | '=' shares the OP kind             |
| 4-8   | ( ) { } ;|                |                                    |
| 9     | SKIP     | whitespace     | discarded                          |
| 10    | MISMATCH | any character  | fatal LexError                     |

Example Usage
-------------
>>> from minic.lexer import Lexer
>>> for token in Lexer('int main() { return 42; }', "test.mc").tokenize():
...     print(token)
Token(INT, 'int', 1:1)
Token(ID, 'main', 1:5)
Token(LPAREN, '(', 1:9)
Token(RPAREN, ')', 1:10)
Token(LBRACE, '{', 1:12)
Token(RETURN, 'return', 1:14)
Token(NUMBER, '42', 1:21)
Token(SEMI, ';', 1:23)
Token(RBRACE, '}', 1:25)
"""

import re
from dataclasses import dataclass
from enum import Enum, auto
from types import MappingProxyType

from minic.errors import LexError, SourceLocation


# =============================================================================
# Token Type Enumeration
# =============================================================================

class TokenType(Enum):
    """
    Token kinds for the minic language.

    Keywords get their own kind so the parser can dispatch on the
    lookahead kind alone.
    """

    # === Literals and Names ===
    NUMBER = auto()         # Decimal integer literal
    ID = auto()             # Identifier

    # === Keywords ===
    INT = auto()            # int
    RETURN = auto()         # return

    # === Operators and Delimiters ===
    OP = auto()             # + - * / =
    LPAREN = auto()         # (
    RPAREN = auto()         # )
    LBRACE = auto()         # {
    RBRACE = auto()         # }
    SEMI = auto()           # ;

    # === Structural ===
    EOF = auto()            # Synthesized by the parser past the last token


# =============================================================================
# Static Lexical Tables
# =============================================================================

# Ordered (name, pattern) pairs. Order is significant: the first
# alternative that matches at a position is taken.
TOKEN_SPEC: tuple[tuple[str, str], ...] = (
    ("NUMBER", r"[0-9]+"),
    ("ID", r"[A-Za-z_]\w*"),
    ("OP", r"[+\-*/=]"),
    ("LPAREN", r"\("),
    ("RPAREN", r"\)"),
    ("LBRACE", r"\{"),
    ("RBRACE", r"\}"),
    ("SEMI", r";"),
    ("SKIP", r"[ \t\r\n]+"),
    ("MISMATCH", r"."),
)

# Reserved words and the token kind each one is reclassified to
KEYWORDS = MappingProxyType({
    "int": TokenType.INT,
    "return": TokenType.RETURN,
})

# Operator characters accepted between expression operands
ARITHMETIC_OPERATORS = frozenset("+-*/")

TOKEN_REGEX = re.compile(
    "|".join(f"(?P<{name}>{pattern})" for name, pattern in TOKEN_SPEC),
    re.ASCII | re.DOTALL,
)


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single classified lexical unit.

    Attributes:
        type: The TokenType classification
        value: The literal source text of the token
        line: Line number in source (1-indexed)
        column: Column number in source (1-indexed)
        filename: Name of the source file
    """
    type: TokenType
    value: str
    line: int = 0
    column: int = 0
    filename: str = "<input>"

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column)

    def describe(self) -> str:
        """Short description used in parser error messages."""
        if self.type == TokenType.EOF:
            return "end of input"
        return f"{self.type.name} {self.value!r}"


# =============================================================================
# Lexer Implementation
# =============================================================================

class Lexer:
    """
    Tokenizes minic source code.

    Usage:
        lexer = Lexer(source_text, filename)
        tokens = lexer.tokenize()

    Attributes:
        source: The source code being tokenized
        filename: Name of the source file (for error reporting)
    """

    def __init__(self, source: str, filename: str = "<input>"):
        self.source = source
        self.filename = filename

    def tokenize(self) -> list[Token]:
        """
        Convert the whole source into tokens.

        Returns:
            Tokens in source order. Whitespace is never included and
            no EOF marker is appended.

        Raises:
            LexError: On the first character no pattern recognises
        """
        tokens: list[Token] = []
        line = 1
        line_start = 0

        for match in TOKEN_REGEX.finditer(self.source):
            kind = match.lastgroup
            value = match.group()
            column = match.start() - line_start + 1

            if kind == "SKIP":
                newlines = value.count("\n")
                if newlines:
                    line += newlines
                    line_start = match.start() + value.rindex("\n") + 1
                continue

            if kind == "MISMATCH":
                raise LexError(
                    value,
                    SourceLocation(self.filename, line, column),
                    self._line_text(line_start),
                )

            if kind == "ID" and value in KEYWORDS:
                token_type = KEYWORDS[value]
            else:
                token_type = TokenType[kind]

            tokens.append(Token(token_type, value, line, column, self.filename))

        return tokens

    def _line_text(self, line_start: int) -> str:
        """Get the source line starting at line_start for error context."""
        line_end = self.source.find("\n", line_start)
        if line_end == -1:
            line_end = len(self.source)
        return self.source[line_start:line_end].rstrip("\r")


def tokenize(source: str, filename: str = "<input>") -> list[Token]:
    """Tokenize source text with a fresh Lexer."""
    return Lexer(source, filename).tokenize()
