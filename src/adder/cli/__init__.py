"""
Adder Command-Line Interface
============================

This package provides the command-line tool for the Adder compiler:

- **adderc**: compile an Adder source file to NASM assembly

The tool is implemented as a Click-based CLI application with
comprehensive help and error reporting.
"""

__all__ = ["adderc"]
