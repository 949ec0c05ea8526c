"""
minic Compiler Main Module
==========================

This module orchestrates the translation pipeline:

    Source → Lex → Parse → Generate → C99 text (→ native compiler)

Usage
-----
Command line:
    $ minicc sample.mc            # builds ./sample with gcc
    $ minicc -S sample.mc         # writes sample.c

Programmatic:
    >>> from minic import translate
    >>> print(translate('int main() { return 1+2; }'), end="")
    int main(void) {
        return 1 + 2;
    }

Error Handling
--------------
Every error is fatal. The first LexError or ParseError ends the run
and no output text is produced. Each call builds fresh Lexer, Parser
and CodeGenerator instances, so nothing is shared between runs.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from minic.lexer import Lexer, Token
from minic.parser import Parser
from minic.codegen import CodeGenerator
from minic.ast import Function
from minic.errors import SourceEncodingError, SourceLocation
from minic.toolchain import DEFAULT_TIMEOUT, compile_c_source, default_cc

logger = logging.getLogger(__name__)


@dataclass
class CompilerOptions:
    """
    Compiler configuration options.

    Attributes:
        strict_assignment: Require '=' in declarations and assignments.
                     False accepts any operator token there.
        indent: Indentation placed before each generated statement
        cc: Native C compiler command ($CC or gcc by default)
        cflags: Extra flags passed to the native compiler
        cc_timeout: Seconds before the native compiler is killed
    """
    strict_assignment: bool = True
    indent: str = "    "
    cc: str = field(default_factory=default_cc)
    cflags: list[str] = field(default_factory=list)
    cc_timeout: float = DEFAULT_TIMEOUT


@dataclass
class CompilerResult:
    """
    Result of a translation.

    Attributes:
        filename: Source filename
        success: True if translation succeeded
        tokens: Tokens produced by the lexer
        ast: Parsed Function root
        c_source: Generated C99 text
    """
    filename: str = ""
    success: bool = False
    tokens: list[Token] = field(default_factory=list)
    ast: Optional[Function] = None
    c_source: str = ""

    @property
    def token_count(self) -> int:
        return len(self.tokens)


class MinicCompiler:
    """
    minic to C99 translator.

    Example:
        compiler = MinicCompiler()
        result = compiler.compile_file("sample.mc")
        print(result.c_source)

    Attributes:
        options: Compiler configuration options
    """

    def __init__(self, options: Optional[CompilerOptions] = None):
        self.options = options or CompilerOptions()

    def compile_source(self, source: str, filename: str = "<input>") -> CompilerResult:
        """
        Translate minic source code to C99.

        Args:
            source: minic source code
            filename: Source filename for error messages

        Returns:
            CompilerResult with tokens, AST and generated text

        Raises:
            LexError: If the source contains an unrecognized character
            ParseError: If the tokens do not match the grammar
            InternalConsistencyError: If code generation meets an unknown node
        """
        result = CompilerResult(filename=filename)

        result.tokens = self._lex(source, filename)
        logger.debug("%s: %d tokens", filename, result.token_count)

        result.ast = self._parse(result.tokens, filename, source.split("\n"))
        logger.debug(
            "%s: parsed function '%s' with %d statements",
            filename, result.ast.name, len(result.ast.body),
        )

        result.c_source = self._generate(result.ast)
        logger.debug("%s: generated %d bytes of C", filename, len(result.c_source))

        result.success = True
        return result

    def compile_file(self, filepath: str | Path) -> CompilerResult:
        """
        Translate a minic source file.

        Raises:
            FileNotFoundError: If the source file does not exist
            SourceEncodingError: If the file is not valid UTF-8
            MinicError: If translation fails
        """
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"Source file not found: {filepath}")

        data = path.read_bytes()
        try:
            source = data.decode("utf-8")
        except UnicodeDecodeError as e:
            line_start = data.rfind(b"\n", 0, e.start) + 1
            location = SourceLocation(
                str(filepath), data.count(b"\n", 0, e.start) + 1, e.start - line_start + 1
            )
            raise SourceEncodingError(data[e.start], location) from None
        return self.compile_source(source, str(filepath))

    def build_executable(self, result: CompilerResult, output: Path) -> Path:
        """
        Compile a translation result to a native executable.

        Raises:
            ToolchainError: If the native compiler is missing or fails
        """
        return compile_c_source(
            result.c_source,
            output,
            cc=self.options.cc,
            cflags=self.options.cflags,
            timeout=self.options.cc_timeout,
        )

    def _lex(self, source: str, filename: str) -> list[Token]:
        return Lexer(source, filename).tokenize()

    def _parse(self, tokens: list[Token], filename: str, source_lines: list[str]) -> Function:
        parser = Parser(
            tokens,
            filename,
            source_lines,
            strict_assignment=self.options.strict_assignment,
        )
        return parser.parse()

    def _generate(self, ast: Function) -> str:
        return CodeGenerator(indent=self.options.indent).generate(ast)


# =============================================================================
# Convenience Functions
# =============================================================================

def translate(source: str, filename: str = "<input>") -> str:
    """
    Translate minic source code to C99 text.

    Raises:
        MinicError: If translation fails
    """
    return MinicCompiler().compile_source(source, filename).c_source


def translate_file(
    filepath: str | Path,
    output_path: Optional[str | Path] = None,
) -> str:
    """
    Translate a minic source file, optionally writing the C text.

    Raises:
        MinicError: If translation fails
        FileNotFoundError: If the source file does not exist
    """
    result = MinicCompiler().compile_file(filepath)

    if output_path:
        Path(output_path).write_text(result.c_source, encoding="utf-8")

    return result.c_source
