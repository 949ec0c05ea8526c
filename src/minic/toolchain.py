"""
Native Toolchain Driver
=======================

Runs a native C compiler (gcc by default) over generated C99 text to
produce an executable.

The generated text is written to a .c file inside a temporary
directory, the compiler is invoked as

    <cc> [cflags...] <tmpdir>/<name>.c -o <output>

and the temporary directory is removed whether or not compilation
succeeds. Compiler diagnostics are captured and carried by
ToolchainError.

Compiler Selection
------------------
1. An explicit ``cc`` argument
2. The ``CC`` environment variable
3. ``gcc``

``cc`` may hold a launcher prefix such as ``"ccache gcc"``; it is split
with shell quoting rules.
"""

import logging
import os
import shlex
import subprocess
import tempfile
from pathlib import Path
from typing import Optional, Sequence

from minic.errors import ToolchainError

logger = logging.getLogger(__name__)

DEFAULT_CC = "gcc"
DEFAULT_TIMEOUT = 60.0


def default_cc() -> str:
    """Return the C compiler named by $CC, falling back to gcc."""
    return os.environ.get("CC") or DEFAULT_CC


def default_executable_path(input_file: Path) -> Path:
    """
    Derive the executable path for an input file.

    The executable lands in the current directory and is named after
    the input's stem: ``examples/sample.mc`` builds ``./sample``.
    """
    return Path(".") / input_file.stem


def build_command(
    cc: str,
    c_file: Path,
    output: Path,
    cflags: Sequence[str] = (),
) -> list[str]:
    """Build the native compiler command line."""
    return [*shlex.split(cc), *cflags, str(c_file), "-o", str(output)]


def compile_c_source(
    c_source: str,
    output: Path,
    cc: Optional[str] = None,
    cflags: Sequence[str] = (),
    timeout: float = DEFAULT_TIMEOUT,
) -> Path:
    """
    Compile C source text to an executable.

    Args:
        c_source: Complete C translation unit
        output: Path of the executable to produce
        cc: Compiler command (default: $CC or gcc)
        cflags: Extra flags placed before the source file
        timeout: Seconds to wait before killing the compiler

    Returns:
        The output path

    Raises:
        ToolchainError: If the compiler is missing, fails, or times out
    """
    cc = cc or default_cc()
    output = Path(output)

    with tempfile.TemporaryDirectory(prefix="minic_") as temp_dir:
        c_file = Path(temp_dir) / f"{output.stem or 'out'}.c"
        c_file.write_text(c_source, encoding="utf-8")

        cmd = build_command(cc, c_file, output, cflags)
        logger.info("Running %s", " ".join(cmd))

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=timeout,
            )
        except subprocess.TimeoutExpired:
            raise ToolchainError(
                f"C compiler timed out after {timeout:g}s",
                command=cmd,
            )
        except FileNotFoundError:
            raise ToolchainError(
                f"C compiler '{cc}' not found - set CC or pass --cc",
                command=cmd,
            )

        if result.returncode != 0:
            raise ToolchainError(
                f"C compiler failed with exit status {result.returncode}",
                command=cmd,
                stdout=result.stdout,
                stderr=result.stderr,
                return_code=result.returncode,
            )

        if result.stderr:
            logger.warning("%s", result.stderr.rstrip())

    logger.debug("Built %s", output)
    return output
