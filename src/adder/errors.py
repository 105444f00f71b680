"""
Adder Compiler Error Hierarchy
==============================

This module defines the exception hierarchy for the Adder compiler.
All exceptions inherit from AdderError, allowing callers to catch every
compiler-related error with a single except clause if desired.

Exception Hierarchy
-------------------
AdderError (base)
├── ReaderError - source text is not a single well-formed s-expression
├── ParseError - s-expression does not describe a valid program
│   ├── MalformedExpressionError - shape matches no production
│   │   ├── UnknownOperatorError - list headed by an unknown symbol
│   │   └── ArityError - operator applied to the wrong number of operands
│   └── NumericRangeError - integer literal outside the 32-bit range
├── CodeGenError - node kind the code generator cannot handle
├── EvaluationError - node kind the interpreter cannot handle
└── MachineError - emulator met an instruction it does not model

Error Message Format
--------------------
All errors follow this format:

    error: description
    hint: suggestion for fixing (when available)

Example:
    error: unknown operator 'mul'
    hint: expected one of 'add1', 'sub1', 'negate'
"""

from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class AdderError(Exception):
    """
    Base exception for all Adder compiler errors.

    Attributes:
        message: The error description
        hint: A suggestion for fixing the error (optional)
    """

    def __init__(self, message: str, hint: Optional[str] = None):
        self.message = message
        self.hint = hint
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with its hint.

        Example output:
            error: operator 'add1' expects 1 operand, got 2
            hint: write (add1 <expr>)
        """
        parts = [f"error: {self.message}"]

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


# =============================================================================
# Reader Errors
# =============================================================================

class ReaderError(AdderError):
    """
    Source text could not be read as one s-expression.

    Examples:
        - Empty source
        - Unbalanced parentheses
        - More than one top-level expression
    """
    pass


# =============================================================================
# Parse Errors (AST Builder)
# =============================================================================

class ParseError(AdderError):
    """
    Base class for errors raised while building the AST.

    Attributes:
        form: The offending s-expression rendered back to text (optional)
    """

    def __init__(
        self,
        message: str,
        form: Optional[str] = None,
        hint: Optional[str] = None,
    ):
        self.form = form
        if form is not None:
            message = f"{message} in '{form}'"
        super().__init__(message, hint=hint)


class MalformedExpressionError(ParseError):
    """
    The s-expression matches none of the accepted productions.

    Raised for empty lists, bare symbols in leaf position, lists whose
    head is not a symbol, and atoms that are not integers.
    """
    pass


class UnknownOperatorError(MalformedExpressionError):
    """
    A list is headed by a symbol that is not a known operator.

    Example:
        (mul 1 2)
    """

    def __init__(
        self,
        operator: str,
        known_operators: tuple[str, ...],
        form: Optional[str] = None,
    ):
        self.operator = operator
        self.known_operators = known_operators
        suggestions = ", ".join(f"'{op}'" for op in known_operators)
        super().__init__(
            f"unknown operator '{operator}'",
            form=form,
            hint=f"expected one of {suggestions}",
        )


class ArityError(MalformedExpressionError):
    """
    An operator is applied to the wrong number of operands.

    Examples:
        (add1)
        (add1 1 2)
    """

    def __init__(
        self,
        operator: str,
        expected: int,
        actual: int,
        form: Optional[str] = None,
    ):
        self.operator = operator
        self.expected = expected
        self.actual = actual

        word = "operand" if expected == 1 else "operands"
        super().__init__(
            f"operator '{operator}' expects {expected} {word}, got {actual}",
            form=form,
            hint=f"write ({operator} <expr>)",
        )


class NumericRangeError(ParseError):
    """
    Integer literal does not fit the target word.

    Literals are limited to the signed 32-bit range so that every
    literal can be loaded with a sign-extended immediate move.
    """

    def __init__(self, value: int, minimum: int, maximum: int):
        self.value = value
        self.minimum = minimum
        self.maximum = maximum
        super().__init__(
            f"integer literal {value} out of range",
            hint=f"literals must lie between {minimum} and {maximum}",
        )


# =============================================================================
# Back End Errors
# =============================================================================

class CodeGenError(AdderError):
    """
    Error during code generation.

    Only reachable with hand-built nodes that the AST builder never
    produces.
    """
    pass


class EvaluationError(AdderError):
    """
    The reference interpreter met a node kind it cannot evaluate.

    Like CodeGenError, only reachable with hand-built nodes.
    """
    pass


class MachineError(AdderError):
    """
    The emulator was asked to execute an instruction it does not model.
    """
    pass
