"""
Adder Compiler Main Module
==========================

This module provides the main compiler interface for Adder.
It orchestrates the complete compilation process:

    Source → Read → Build AST → Generate → Assembly

Usage
-----
Command line:
    $ adderc program.snek program.s

Programmatic:
    >>> from adder import compile_adder
    >>> print(compile_adder("(add1 5)"))
    section .text
    global our_code_starts_here
    our_code_starts_here:
      mov rax, 5
      add rax, 1
      ret

The output is NASM x86-64 assembly defining one exported function that
returns the program's value in RAX. Link it with a small C driver that
calls the entry label and prints the result.

Error Handling
--------------
The first error aborts compilation. Errors from every stage are raised
as AdderError subclasses; there is no partial result.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from adder.ast import Expr
from adder.codegen import DEFAULT_ENTRY_LABEL, CodeGenerator, Instruction, render_program
from adder.parser import parse_expr
from adder.reader import read_sexpr

logger = logging.getLogger(__name__)


@dataclass
class CompilerOptions:
    """
    Compiler configuration options.

    Attributes:
        entry_label: Name of the exported function the program body
                     is placed in
        output_comments: Include the source text as a comment above the
                         generated body
    """
    entry_label: str = DEFAULT_ENTRY_LABEL
    output_comments: bool = False


@dataclass
class CompilerResult:
    """
    Result of compiling one source text.

    Attributes:
        filename: Source name used in messages
        sexpr: Symbolic expression produced by the reader
        ast: The built AST
        instructions: Generated body instructions
        assembly: Complete assembly program text
        success: True once every stage has completed
    """
    filename: str = "<input>"
    sexpr: Any = None
    ast: Optional[Expr] = None
    instructions: list[Instruction] = field(default_factory=list)
    assembly: str = ""
    success: bool = False


class AdderCompiler:
    """
    Adder compiler for x86-64.

    Example:
        compiler = AdderCompiler()
        result = compiler.compile_file("program.snek")
        print(result.assembly)

    Attributes:
        options: Compiler configuration options
    """

    def __init__(self, options: Optional[CompilerOptions] = None):
        """
        Initialize the compiler.

        Args:
            options: Compiler configuration (uses defaults if None)
        """
        self.options = options or CompilerOptions()

    def compile_source(self, source: str, filename: str = "<input>") -> CompilerResult:
        """
        Compile Adder source code to assembly.

        Args:
            source: Adder source text
            filename: Source filename for log messages

        Returns:
            CompilerResult containing every intermediate stage

        Raises:
            AdderError: If reading, parsing or generation fails
        """
        result = CompilerResult(filename=filename)

        # Stage 1: Read the s-expression
        logger.debug(f"{filename}: reading")
        result.sexpr = read_sexpr(source)

        # Stage 2: Build the AST
        logger.debug(f"{filename}: building AST")
        result.ast = parse_expr(result.sexpr)

        # Stage 3: Generate code
        logger.debug(f"{filename}: generating code")
        result.instructions = CodeGenerator().generate(result.ast)

        comment = " ".join(source.split()) if self.options.output_comments else None
        result.assembly = render_program(
            result.instructions,
            entry_label=self.options.entry_label,
            comment=comment,
        )
        result.success = True

        logger.info(f"Compiled {filename}: {len(result.instructions)} instructions")
        return result

    def compile_file(self, filepath: str) -> CompilerResult:
        """
        Compile an Adder source file to assembly.

        Args:
            filepath: Path to the source file

        Returns:
            CompilerResult containing assembly output

        Raises:
            AdderError: If compilation fails
            FileNotFoundError: If source file not found
        """
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"Source file not found: {filepath}")

        source = path.read_text(encoding="utf-8")
        return self.compile_source(source, str(path))


def compile_adder(source: str, options: Optional[CompilerOptions] = None) -> str:
    """
    Compile Adder source text and return the assembly program.

    Args:
        source: Adder source text
        options: Compiler configuration (uses defaults if None)

    Returns:
        Complete NASM assembly source
    """
    return AdderCompiler(options).compile_source(source).assembly
