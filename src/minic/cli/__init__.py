"""
minic Command-Line Interface
============================

This package provides the command-line tool for minic:

- **minicc**: translate a minic source file to C99 and build it with
  the native C compiler

The tool is a Click-based application with built-in help and
consistent exit codes (see ``minic.cli.errors``).
"""

__all__ = ["minicc"]
