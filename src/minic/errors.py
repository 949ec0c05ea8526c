"""
minic Error Hierarchy
=====================

This module defines the exception hierarchy for the minic translator.
All exceptions inherit from MinicError, allowing callers to catch every
translator error with a single except clause.

Exception Hierarchy
-------------------
MinicError (base)
├── SourceEncodingError - source file is not valid UTF-8
├── LexError - character matches no token pattern
├── ParseError - token does not satisfy the grammar rule in effect
├── InternalConsistencyError - code generator met an unknown AST shape
└── ToolchainError - native C compiler missing, failed, or timed out

Error Message Format
--------------------
Errors that know their source location follow this format:

    filename:line:column: error: description
        source_line_text
        ^ (pointer to error location)
    hint: suggestion for fixing

Example:
    prog.mc:1:25: error: expected SEMI, found RBRACE '}'
        int main() { return 1 }
                            ^
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source code for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Base Exception
# =============================================================================

class MinicError(Exception):
    """
    Base exception for all minic errors.

    Provides common formatting for error messages including source
    location, source line context, and an optional hint.

    Attributes:
        message: The error description
        location: Where in the source the error occurred
        hint: A suggestion for fixing the error
        source_line: The actual source text at the error location
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

            prog.mc:3:5: error: unexpected character '#'
                #define X 1
                ^
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


# =============================================================================
# Front-End Errors
# =============================================================================

class SourceEncodingError(MinicError):
    """
    Source file bytes that do not decode as UTF-8.

    Attributes:
        byte: The first undecodable byte value
    """

    def __init__(self, byte: int, location: Optional[SourceLocation] = None):
        self.byte = byte
        super().__init__(
            f"source is not valid UTF-8 (byte 0x{byte:02X})",
            location=location,
            hint="save the file with UTF-8 encoding",
        )


class LexError(MinicError):
    """
    Unrecognized character in source text.

    Raised by the lexer on the first character that no token pattern
    accepts. Tokenization stops at that point.
    """

    def __init__(
        self,
        char: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.char = char
        super().__init__(
            f"unexpected character '{char}' (0x{ord(char):02X})",
            location=location,
            source_line=source_line,
        )


class ParseError(MinicError):
    """
    Token stream does not match the grammar.

    Raised when the lookahead token does not satisfy the rule being
    parsed: wrong leading keyword, missing terminator, stray operator,
    or tokens left over after the function body.

    Attributes:
        expected: Description of what the parser wanted (e.g. "SEMI")
        found: Description of the token actually present
    """

    def __init__(
        self,
        expected: str,
        found: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        hint: Optional[str] = None,
    ):
        self.expected = expected
        self.found = found
        super().__init__(
            f"expected {expected}, found {found}",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class InternalConsistencyError(MinicError):
    """
    Code generator reached an AST shape outside the known node set.

    The parser never builds such trees, so this indicates a bug or a
    hand-built AST that does not follow the node definitions.
    """

    def __init__(self, node: object):
        self.node = node
        super().__init__(
            f"internal error: cannot generate code for {type(node).__name__}",
        )


# =============================================================================
# Toolchain Errors
# =============================================================================

class ToolchainError(MinicError):
    """
    Error running the native C compiler on generated code.

    Attributes:
        command: The command line that was run
        stdout: Captured standard output
        stderr: Captured standard error (compiler diagnostics)
        return_code: Process exit status, or None if it never finished
    """

    def __init__(
        self,
        message: str,
        command: Optional[list[str]] = None,
        stdout: str = "",
        stderr: str = "",
        return_code: Optional[int] = None,
    ):
        self.command = command or []
        self.stdout = stdout
        self.stderr = stderr
        self.return_code = return_code
        super().__init__(message)

    def _format_message(self) -> str:
        parts = [f"error: {self.message}"]
        diagnostics = (self.stderr or self.stdout).rstrip()
        if diagnostics:
            parts.append(diagnostics)
        return "\n".join(parts)
