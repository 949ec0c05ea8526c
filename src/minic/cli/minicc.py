"""
minicc - minic Translator Command-Line Interface
================================================

This module implements the command-line interface for minic. It
translates a minic source file to C99 and, by default, builds an
executable from it with the native C compiler.

Usage Examples
--------------
Build an executable (./sample):
    $ minicc sample.mc

Choose the executable name:
    $ minicc sample.mc -o bin/sample

Write the C text only:
    $ minicc -S sample.mc            # writes sample.c
    $ minicc -S -o - sample.mc       # prints to stdout

Debug dumps:
    $ minicc --tokens sample.mc
    $ minicc --ast sample.mc

Use another compiler:
    $ minicc --cc clang --cflag -O2 sample.mc
    $ CC=clang minicc sample.mc
"""

import logging
from pathlib import Path
from typing import Optional

import click

from minic import __version__
from minic.ast import ASTPrinter
from minic.compiler import MinicCompiler, CompilerOptions
from minic.toolchain import DEFAULT_CC, default_executable_path
from minic.cli.errors import handle_cli_exception

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


def _check_not_input(target: Path, input_file: Path) -> None:
    """Refuse an output path that would overwrite the source file."""
    if target.resolve() == input_file.resolve():
        raise click.BadParameter(
            f"output '{target}' would overwrite the input file",
            param_hint="'-o' / '--output'",
        )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, allow_dash=True, path_type=Path),
    help="Output file (default: ./<stem>, or <stem>.c with -S; '-' for stdout with -S)",
)
@click.option(
    "-S", "--emit-c",
    is_flag=True,
    help="Write the generated C instead of building an executable",
)
@click.option(
    "--tokens", "dump_tokens",
    is_flag=True,
    help="Print the token list and exit (for debugging)",
)
@click.option(
    "--ast", "dump_ast",
    is_flag=True,
    help="Print the AST and exit (for debugging)",
)
@click.option(
    "--cc",
    envvar=["MINIC_CC", "CC"],
    default=DEFAULT_CC,
    show_default=True,
    help="Native C compiler command (env: MINIC_CC, CC)",
)
@click.option(
    "--cflag", "cflags",
    multiple=True,
    help="Extra flag for the native C compiler (can be repeated)",
)
@click.option(
    "--strict/--permissive",
    default=True,
    help="Require '=' in assignments (default) or accept any operator there",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="minicc")
def main(
    input_file: Path,
    output: Optional[Path],
    emit_c: bool,
    dump_tokens: bool,
    dump_ast: bool,
    cc: str,
    cflags: tuple[str, ...],
    strict: bool,
    verbose: bool,
) -> None:
    """
    Translate a minic program to C99 and build it.

    INPUT_FILE is the minic source file to translate.

    \b
    Examples:
        minicc sample.mc               # Builds ./sample
        minicc -S sample.mc            # Writes sample.c
        minicc -S -o - sample.mc       # Prints C to stdout
        minicc --ast sample.mc         # Dumps the AST
    """
    setup_logging(verbose)

    options = CompilerOptions(
        strict_assignment=strict,
        cc=cc,
        cflags=list(cflags),
    )
    logger.debug("Options: %s", options)

    try:
        if verbose:
            click.echo(f"Translating {input_file}...")

        compiler = MinicCompiler(options)
        result = compiler.compile_file(input_file)

        if verbose:
            click.echo(f"Tokenized: {result.token_count} tokens")
            click.echo(f"Parsed: {len(result.ast.body)} statements")

        # Debug dump modes
        if dump_tokens or dump_ast:
            if dump_tokens:
                for token in result.tokens:
                    click.echo(repr(token))
            if dump_ast:
                click.echo(ASTPrinter().print(result.ast))
            return

        if emit_c:
            if output is not None and str(output) == "-":
                click.echo(result.c_source, nl=False)
                return
            target = output or input_file.with_suffix(".c")
            _check_not_input(target, input_file)
            target.write_text(result.c_source, encoding="utf-8")
            click.echo(f"Translated {input_file} -> {target}")
            return

        target = output or default_executable_path(input_file)
        _check_not_input(target, input_file)
        if verbose:
            click.echo(f"Compiler: {cc} {' '.join(cflags)}".rstrip())
        compiler.build_executable(result, target)
        click.echo(f"Built {input_file} -> {target}")

    except Exception as e:
        handle_cli_exception(e, verbose)


if __name__ == "__main__":
    main()
