"""
minic - Minimal C-like Language to C99 Translator
=================================================

minic translates a tiny C-like language (one parameterless int
function, int variables, assignment, + - * / arithmetic, return) into
C99 source text, and can hand that text to a native C compiler.

Pipeline
--------
    Source → Lexer → Parser → AST → CodeGenerator → C99 text → gcc

Main Components
---------------
- **lexer**: ordered-choice regular-expression tokenizer
- **parser**: single-lookahead recursive descent parser
- **ast**: node dataclasses, visitor base, and debug printer
- **codegen**: C99 renderer
- **compiler**: pipeline orchestration and options
- **toolchain**: native C compiler driver

Quick Start
-----------
    >>> from minic import translate
    >>> print(translate('int main() { int x; x = 5; return x; }'), end="")
    int main(void) {
        int x;
        x = 5;
        return x;
    }

Or use the command-line tool:
    $ minicc sample.mc            # builds ./sample
    $ minicc -S -o - sample.mc    # prints the C text
    $ minicc --ast sample.mc      # dumps the AST
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from minic.compiler import (
    MinicCompiler,
    CompilerOptions,
    CompilerResult,
    translate,
    translate_file,
)
from minic.errors import (
    MinicError,
    LexError,
    ParseError,
    InternalConsistencyError,
    ToolchainError,
    SourceEncodingError,
    SourceLocation,
)
from minic.lexer import Lexer, Token, TokenType, tokenize
from minic.parser import Parser, parse_source
from minic.codegen import CodeGenerator, generate_c99
from minic.ast import (
    ASTNode,
    ASTPrinter,
    Function,
    Return,
    VarDecl,
    Assign,
    IntegerLiteral,
    Identifier,
    BinaryOp,
    BinaryOperator,
)

__all__ = [
    # Version
    "__version__",
    # Main API
    "MinicCompiler",
    "CompilerOptions",
    "CompilerResult",
    "translate",
    "translate_file",
    # Errors
    "MinicError",
    "LexError",
    "ParseError",
    "InternalConsistencyError",
    "ToolchainError",
    "SourceEncodingError",
    "SourceLocation",
    # Lexer
    "Lexer",
    "Token",
    "TokenType",
    "tokenize",
    # Parser
    "Parser",
    "parse_source",
    # Code Generator
    "CodeGenerator",
    "generate_c99",
    # AST Nodes
    "ASTNode",
    "ASTPrinter",
    "Function",
    "Return",
    "VarDecl",
    "Assign",
    "IntegerLiteral",
    "Identifier",
    "BinaryOp",
    "BinaryOperator",
]
