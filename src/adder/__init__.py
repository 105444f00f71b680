"""
Adder - A Tiny Compiler for Unary Arithmetic
============================================

This package compiles Adder programs to x86-64 NASM assembly.

Adder programs are single s-expressions built from integer literals and
three unary operators:

    5
    (add1 5)
    (negate (add1 5))
    (sub1 (sub1 10))

Main Components
---------------
- **reader**: s-expression reader (built on sexpdata)
- **parser**: AST builder validating the Adder grammar
- **codegen**: x86-64 code generator targeting a single accumulator
- **interpreter**: reference interpreter used to check generated code
- **machine**: emulator for the generated instruction subset
- **compiler**: pipeline driver and options

Quick Start
-----------
Compile a program:
    >>> from adder import compile_adder
    >>> asm = compile_adder("(negate (add1 5))")

Evaluate a program without compiling it:
    >>> from adder import eval_expr, parse_source
    >>> eval_expr(parse_source("(add1 (negate 3))"))
    -2

Or use the command-line tool:
    $ adderc program.snek program.s
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from adder.ast import (
    Expr,
    UnaryExpr,
    Num,
    Add1,
    Sub1,
    Negate,
    ASTPrinter,
    iter_postorder,
)
from adder.reader import read_sexpr
from adder.parser import parse_expr, parse_source
from adder.codegen import Instruction, compile_expr, render_program
from adder.interpreter import eval_expr
from adder.machine import AccumulatorMachine, run_program
from adder.compiler import AdderCompiler, CompilerOptions, CompilerResult, compile_adder
from adder.errors import (
    AdderError,
    ReaderError,
    ParseError,
    MalformedExpressionError,
    UnknownOperatorError,
    ArityError,
    NumericRangeError,
    CodeGenError,
    EvaluationError,
    MachineError,
)

__all__ = [
    # Version info
    "__version__",
    # AST
    "Expr",
    "UnaryExpr",
    "Num",
    "Add1",
    "Sub1",
    "Negate",
    "ASTPrinter",
    "iter_postorder",
    # Pipeline stages
    "read_sexpr",
    "parse_expr",
    "parse_source",
    "Instruction",
    "compile_expr",
    "render_program",
    "eval_expr",
    # Emulator
    "AccumulatorMachine",
    "run_program",
    # Compiler driver
    "AdderCompiler",
    "CompilerOptions",
    "CompilerResult",
    "compile_adder",
    # Exception hierarchy
    "AdderError",
    "ReaderError",
    "ParseError",
    "MalformedExpressionError",
    "UnknownOperatorError",
    "ArityError",
    "NumericRangeError",
    "CodeGenError",
    "EvaluationError",
    "MachineError",
]
