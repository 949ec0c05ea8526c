"""
Compiler Pipeline Tests
=======================

End-to-end tests for MinicCompiler and the convenience functions.
"""

import subprocess

import pytest
from minic import translate, translate_file, MinicCompiler, CompilerOptions
from minic.ast import ASTPrinter, ASTVisitor, Function, Identifier
from minic.errors import (
    InternalConsistencyError,
    LexError,
    ParseError,
    SourceEncodingError,
    SourceLocation,
    ToolchainError,
)
from minic.lexer import TokenType


SAMPLE = """\
int main() {
    int x = 5;
    int y;
    y = x * 2;
    return y;
}
"""

SAMPLE_C = (
    "int main(void) {\n"
    "    int x = 5;\n"
    "    int y;\n"
    "    y = x * 2;\n"
    "    return y;\n"
    "}\n"
)


class FakeRun:
    """Stands in for subprocess.run, recording each call."""

    def __init__(self, returncode=0, stdout="", stderr=""):
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        self.calls = []

    def __call__(self, cmd, **kwargs):
        self.calls.append((cmd, kwargs))
        return subprocess.CompletedProcess(cmd, self.returncode, self.stdout, self.stderr)


class TestTranslate:

    def test_translate_sample(self):
        assert translate(SAMPLE) == SAMPLE_C

    def test_translate_return_sum(self):
        assert translate("int main() { return 1+2; }") == (
            "int main(void) {\n    return 1 + 2;\n}\n"
        )

    def test_translate_is_deterministic(self):
        assert translate(SAMPLE) == translate(SAMPLE)

    def test_lex_error_propagates(self):
        with pytest.raises(LexError):
            translate("int main() { return 1 @ 2; }")

    def test_overlong_literal_is_parse_error(self):
        with pytest.raises(ParseError):
            translate("int main() { return " + "9" * 5000 + "; }")

    def test_parse_error_propagates(self):
        with pytest.raises(ParseError) as exc_info:
            translate("int main() { return 1 }", "bad.mc")
        assert str(exc_info.value).startswith("bad.mc:1:23: error:")


class TestCompilerResult:

    def test_result_fields(self):
        result = MinicCompiler().compile_source(SAMPLE, "sample.mc")
        assert result.success
        assert result.filename == "sample.mc"
        assert result.tokens[0].type == TokenType.INT
        assert result.token_count == len(result.tokens)
        assert isinstance(result.ast, Function)
        assert result.ast.name == "main"
        assert result.c_source == SAMPLE_C

    def test_tokens_carry_filename(self):
        result = MinicCompiler().compile_source("int f() { }", "f.mc")
        assert all(t.filename == "f.mc" for t in result.tokens)

    def test_ast_printer_view(self):
        result = MinicCompiler().compile_source(SAMPLE)
        assert ASTPrinter().print(result.ast) == (
            "Function main\n"
            "  VarDecl x = 5\n"
            "  VarDecl y\n"
            "  Assign y = (x * 2)\n"
            "  Return y"
        )


class TestOptions:

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("CC", raising=False)
        options = CompilerOptions()
        assert options.strict_assignment
        assert options.indent == "    "
        assert options.cc == "gcc"
        assert options.cflags == []

    def test_cc_from_environment(self, monkeypatch):
        monkeypatch.setenv("CC", "clang")
        assert CompilerOptions().cc == "clang"

    def test_indent_option(self):
        compiler = MinicCompiler(CompilerOptions(indent="  "))
        c_source = compiler.compile_source("int main() { return 0; }").c_source
        assert c_source == "int main(void) {\n  return 0;\n}\n"

    def test_strict_by_default(self):
        with pytest.raises(ParseError):
            MinicCompiler().compile_source("int main() { x + 1; }")

    def test_permissive_option(self):
        compiler = MinicCompiler(CompilerOptions(strict_assignment=False))
        c_source = compiler.compile_source("int main() { x + 1; }").c_source
        assert "    x = 1;\n" in c_source


class TestFiles:

    def test_compile_file(self, tmp_path):
        source = tmp_path / "sample.mc"
        source.write_text(SAMPLE)
        result = MinicCompiler().compile_file(source)
        assert result.c_source == SAMPLE_C
        assert result.filename == str(source)

    def test_compile_file_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            MinicCompiler().compile_file(tmp_path / "nope.mc")

    def test_translate_file_writes_output(self, tmp_path):
        source = tmp_path / "sample.mc"
        source.write_text(SAMPLE)
        target = tmp_path / "sample.c"
        assert translate_file(source, target) == SAMPLE_C
        assert target.read_text() == SAMPLE_C

    def test_translate_file_without_output(self, tmp_path):
        source = tmp_path / "sample.mc"
        source.write_text(SAMPLE)
        assert translate_file(source) == SAMPLE_C
        assert sorted(p.name for p in tmp_path.iterdir()) == ["sample.mc"]

    def test_error_names_file(self, tmp_path):
        source = tmp_path / "bad.mc"
        source.write_text("int main() {\n  return $;\n}\n")
        with pytest.raises(LexError) as exc_info:
            MinicCompiler().compile_file(source)
        assert str(exc_info.value).startswith(f"{source}:2:10: error:")


    def test_file_not_utf8(self, tmp_path):
        source = tmp_path / "latin1.mc"
        source.write_bytes(b"int main() {\n  return \xff;\n}\n")
        with pytest.raises(SourceEncodingError) as exc_info:
            MinicCompiler().compile_file(source)
        err = exc_info.value
        assert err.byte == 0xFF
        assert err.location == SourceLocation(str(source), 2, 10)
        assert "not valid UTF-8 (byte 0xFF)" in str(err)

    def test_crlf_file(self, tmp_path):
        source = tmp_path / "dos.mc"
        source.write_bytes(SAMPLE.replace("\n", "\r\n").encode())
        assert MinicCompiler().compile_file(source).c_source == SAMPLE_C


class TestVisitorBase:

    def test_unhandled_node_raises(self):
        with pytest.raises(InternalConsistencyError) as exc_info:
            ASTVisitor().visit(Identifier("x"))
        assert isinstance(exc_info.value.node, Identifier)

    def test_printer_marks_unknown_nodes(self):
        assert ASTPrinter().print(Function("f", [Identifier("x")])) == (
            "Function f\n  <Identifier>"
        )


class TestBuildExecutable:

    def test_build_runs_configured_compiler(self, monkeypatch, tmp_path):
        fake = FakeRun()
        monkeypatch.setattr(subprocess, "run", fake)
        compiler = MinicCompiler(CompilerOptions(cc="clang", cflags=["-O2"]))
        result = compiler.compile_source(SAMPLE)

        output = compiler.build_executable(result, tmp_path / "sample")

        assert output == tmp_path / "sample"
        (cmd, kwargs), = fake.calls
        assert cmd[:2] == ["clang", "-O2"]
        assert cmd[-2:] == ["-o", str(tmp_path / "sample")]
        assert kwargs["timeout"] == compiler.options.cc_timeout

    def test_build_failure(self, monkeypatch, tmp_path):
        monkeypatch.setattr(subprocess, "run", FakeRun(returncode=1, stderr="boom"))
        compiler = MinicCompiler(CompilerOptions(cc="gcc"))
        result = compiler.compile_source(SAMPLE)
        with pytest.raises(ToolchainError) as exc_info:
            compiler.build_executable(result, tmp_path / "sample")
        assert exc_info.value.stderr == "boom"
