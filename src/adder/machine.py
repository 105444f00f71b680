"""
Accumulator Machine Emulator
============================

Executes generated Adder instruction sequences on a model of the x86-64
RAX register, so the code generator can be checked against the reference
interpreter without assembling and linking real binaries.

Modelled Subset
---------------
| Instruction   | Effect                         |
|---------------|--------------------------------|
| mov rax, imm  | RAX = imm                      |
| add rax, imm  | RAX = RAX + imm (mod 2**64)    |
| sub rax, imm  | RAX = RAX - imm (mod 2**64)    |
| neg rax       | RAX = -RAX (mod 2**64)         |

RAX is stored unsigned (0 .. 2**64-1) and read back as a signed value,
matching how the C driver of a compiled Adder program sees the result.

Example:
    >>> from adder.codegen import compile_expr
    >>> from adder.parser import parse_source
    >>> run_program(compile_expr(parse_source("(sub1 (sub1 10))")))
    8
"""

from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Union

from adder.codegen import ACCUMULATOR, Instruction
from adder.errors import MachineError


REGISTER_MASK = (1 << 64) - 1


@dataclass
class MachineState:
    """
    Complete machine state.

    Attributes:
        rax: Accumulator, 64-bit unsigned representation
        steps: Number of instructions executed since reset
    """
    rax: int = 0
    steps: int = 0


class AccumulatorMachine:
    """
    Emulator for the single-register instruction subset used by Adder.

    Instrumentation:
        on_instruction(step, instruction) is called before each
        instruction executes.

    Example:
        >>> machine = AccumulatorMachine()
        >>> machine.execute([Instruction("mov", ("rax", "41")),
        ...                  Instruction("add", ("rax", "1"))])
        42
    """

    def __init__(self):
        self.state = MachineState()
        self.on_instruction: Optional[Callable[[int, Instruction], None]] = None

    # ========================================
    # Register Access
    # ========================================

    @property
    def rax(self) -> int:
        """Accumulator as a signed 64-bit value."""
        value = self.state.rax
        return value - (1 << 64) if value >> 63 else value

    @rax.setter
    def rax(self, value: int) -> None:
        self.state.rax = value & REGISTER_MASK

    def reset(self) -> None:
        """Clear the accumulator and step counter."""
        self.state = MachineState()

    # ========================================
    # Execution
    # ========================================

    def execute(self, program: Iterable[Union[Instruction, str]]) -> int:
        """
        Reset the machine, run a program and return RAX.

        Args:
            program: Instructions, or NASM source lines as produced by
                     str(Instruction)

        Returns:
            The signed value left in RAX

        Raises:
            MachineError: If an instruction is outside the modelled subset
        """
        self.reset()
        for item in program:
            instruction = parse_instruction(item) if isinstance(item, str) else item
            self.step(instruction)
        return self.rax

    def step(self, instruction: Instruction) -> None:
        """Execute a single instruction."""
        if self.on_instruction is not None:
            self.on_instruction(self.state.steps, instruction)

        mnemonic = instruction.mnemonic
        operands = instruction.operands

        if not operands or operands[0] != ACCUMULATOR:
            raise MachineError(f"unsupported operands for '{instruction}'")

        if mnemonic == "neg" and len(operands) == 1:
            self.rax = -self.rax
        elif mnemonic in ("mov", "add", "sub") and len(operands) == 2:
            value = _immediate(instruction, operands[1])
            if mnemonic == "mov":
                self.rax = value
            elif mnemonic == "add":
                self.rax = self.rax + value
            else:
                self.rax = self.rax - value
        else:
            raise MachineError(f"unsupported instruction '{instruction}'")

        self.state.steps += 1


def parse_instruction(line: str) -> Instruction:
    """
    Parse one NASM source line into an Instruction.

    Example:
        >>> parse_instruction("  add rax, 1")
        Instruction(mnemonic='add', operands=('rax', '1'))
    """
    text = line.split(";", 1)[0].strip()
    if not text:
        raise MachineError("empty instruction line")
    mnemonic, _, rest = text.partition(" ")
    operands = tuple(op.strip() for op in rest.split(",")) if rest.strip() else ()
    return Instruction(mnemonic.lower(), operands)


def run_program(program: Iterable[Union[Instruction, str]]) -> int:
    """Run a program on a fresh machine and return RAX."""
    return AccumulatorMachine().execute(program)


def _immediate(instruction: Instruction, operand: str) -> int:
    try:
        return int(operand, 0)
    except ValueError:
        raise MachineError(f"expected an immediate operand in '{instruction}'") from None
