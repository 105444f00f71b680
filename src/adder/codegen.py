"""
x86-64 Code Generator for Adder
===============================

This module generates NASM-syntax x86-64 assembly from the Adder AST.

Code Generation Strategy
------------------------
Every Adder operator is unary and reads and writes the same value, so
the whole program needs exactly one live value at any time. That value
lives in RAX (the accumulator):

1. A literal loads its value into RAX
2. An operator node first emits its operand's code, then one
   instruction that updates RAX in place

The emitted sequence is the post-order walk of the tree. No spills,
no stack frame and no temporaries are needed. Adding a binary operator
would require a value stack or register allocation.

Register Usage
--------------
| Register | Usage                                  |
|----------|----------------------------------------|
| RAX      | Accumulator and function return value  |

Instruction Selection
---------------------
| Node        | Instruction     |
|-------------|-----------------|
| Num(n)      | mov rax, n      |
| Add1(e)     | add rax, 1      |
| Sub1(e)     | sub rax, 1      |
| Negate(e)   | neg rax         |

Generated Assembly Format
-------------------------
    section .text
    global our_code_starts_here
    our_code_starts_here:
      mov rax, 5
      add rax, 1
      ret

Usage
-----
>>> from adder.parser import parse_source
>>> from adder.codegen import compile_expr
>>> [str(i) for i in compile_expr(parse_source("(add1 5)"))]
['mov rax, 5', 'add rax, 1']
"""

import logging
from dataclasses import dataclass
from typing import Optional

from adder.ast import ASTVisitor, Add1, Expr, Negate, Num, Sub1, iter_postorder
from adder.errors import CodeGenError

logger = logging.getLogger(__name__)


ACCUMULATOR = "rax"
DEFAULT_ENTRY_LABEL = "our_code_starts_here"


# =============================================================================
# Instructions
# =============================================================================

@dataclass(frozen=True)
class Instruction:
    """
    A single assembly instruction.

    Attributes:
        mnemonic: Instruction mnemonic (mov, add, sub, neg, ...)
        operands: Operands in NASM order (destination first)
    """
    mnemonic: str
    operands: tuple[str, ...] = ()

    def __str__(self) -> str:
        """Render as one line of NASM source, e.g. 'mov rax, 5'."""
        if self.operands:
            return f"{self.mnemonic} {', '.join(self.operands)}"
        return self.mnemonic


def mov_imm(value: int) -> Instruction:
    """Load an immediate value into the accumulator."""
    return Instruction("mov", (ACCUMULATOR, str(value)))


def add_imm(value: int) -> Instruction:
    """Add an immediate value to the accumulator."""
    return Instruction("add", (ACCUMULATOR, str(value)))


def sub_imm(value: int) -> Instruction:
    """Subtract an immediate value from the accumulator."""
    return Instruction("sub", (ACCUMULATOR, str(value)))


def neg() -> Instruction:
    """Two's-complement negate the accumulator."""
    return Instruction("neg", (ACCUMULATOR,))


# =============================================================================
# Code Generator Class
# =============================================================================

class CodeGenerator(ASTVisitor):
    """
    Generates x86-64 instructions from an Adder AST.

    The generator drives the visitor from iter_postorder(), so each
    visit_* method only appends the instruction for its own node; the
    operand's code is already in place when an operator is visited.

    Attributes:
        output: Instructions generated by the last call to generate()
    """

    def __init__(self):
        self._output: list[Instruction] = []

    @property
    def output(self) -> list[Instruction]:
        return list(self._output)

    def generate(self, root: Expr) -> list[Instruction]:
        """
        Generate the instruction sequence for an expression.

        Args:
            root: The root AST node

        Returns:
            Instructions leaving the expression's value in RAX

        Raises:
            CodeGenError: If the tree contains an unknown node kind
        """
        self._output = []
        for node in iter_postorder(root):
            self.visit(node)
        logger.debug(f"Generated {len(self._output)} instructions")
        return list(self._output)

    def _emit(self, instruction: Instruction) -> None:
        """Append an instruction to the output."""
        self._output.append(instruction)

    def generic_visit(self, node: Expr) -> None:
        raise CodeGenError(f"cannot generate code for {node.__class__.__name__}")

    # =========================================================================
    # Node Handlers
    # =========================================================================

    def visit_Num(self, node: Num) -> None:
        self._emit(mov_imm(node.value))

    def visit_Add1(self, node: Add1) -> None:
        self._emit(add_imm(1))

    def visit_Sub1(self, node: Sub1) -> None:
        self._emit(sub_imm(1))

    def visit_Negate(self, node: Negate) -> None:
        self._emit(neg())


def compile_expr(expr: Expr) -> list[Instruction]:
    """Generate the instruction sequence for an expression."""
    return CodeGenerator().generate(expr)


# =============================================================================
# Program Template
# =============================================================================

def render_program(
    instructions: list[Instruction],
    entry_label: str = DEFAULT_ENTRY_LABEL,
    comment: Optional[str] = None,
) -> str:
    """
    Wrap an instruction sequence into a complete NASM program.

    The program exports a single function, entry_label, which leaves
    the result in RAX and returns.

    Args:
        instructions: Body instructions, in order
        entry_label: Name of the exported entry point
        comment: Optional comment line placed before the body

    Returns:
        Assembly source text ending with a newline
    """
    lines = [
        "section .text",
        f"global {entry_label}",
        f"{entry_label}:",
    ]
    if comment:
        lines.append(f"  ;; {comment}")
    lines.extend(f"  {instruction}" for instruction in instructions)
    lines.append("  ret")
    return "\n".join(lines) + "\n"
