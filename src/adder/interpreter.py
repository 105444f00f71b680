"""
Adder Reference Interpreter
===========================

Evaluates an Adder AST directly. The interpreter is only used to check
the code generator: the value it computes must equal what the generated
code leaves in RAX.

Numeric Semantics
-----------------
The generated code computes in the 64-bit RAX register, so every
intermediate result here is wrapped to the signed 64-bit range using
two's-complement arithmetic, exactly as add, sub and neg do on RAX.
Programs that stay inside that range get the mathematical result.

Example:
    >>> from adder.parser import parse_source
    >>> eval_expr(parse_source("(negate (add1 5))"))
    -6
"""

from adder.ast import ASTVisitor, Add1, Expr, Negate, Num, Sub1, iter_postorder
from adder.errors import EvaluationError


WORD_BITS = 64
_WORD_MASK = (1 << WORD_BITS) - 1
_SIGN_BIT = 1 << (WORD_BITS - 1)


def wrap_word(value: int) -> int:
    """
    Reduce an integer to the signed 64-bit range.

    Example:
        >>> wrap_word(2 ** 63)
        -9223372036854775808
    """
    value &= _WORD_MASK
    return value - (1 << WORD_BITS) if value & _SIGN_BIT else value


class Interpreter(ASTVisitor):
    """
    Evaluates an AST bottom-up.

    Nodes are visited in post-order; each visit pops its operand's
    value (if any) and pushes its own, so after the walk the stack holds
    exactly the root's value.
    """

    def __init__(self):
        self._values: list[int] = []

    def evaluate(self, root: Expr) -> int:
        """Return the value of the expression rooted at root."""
        self._values = []
        for node in iter_postorder(root):
            self._values.append(self.visit(node))
        return self._values.pop()

    def generic_visit(self, node: Expr) -> int:
        raise EvaluationError(f"cannot evaluate {node.__class__.__name__}")

    def visit_Num(self, node: Num) -> int:
        return wrap_word(node.value)

    def visit_Add1(self, node: Add1) -> int:
        return wrap_word(self._values.pop() + 1)

    def visit_Sub1(self, node: Sub1) -> int:
        return wrap_word(self._values.pop() - 1)

    def visit_Negate(self, node: Negate) -> int:
        return wrap_word(self._values.pop() * -1)


def eval_expr(expr: Expr) -> int:
    """Evaluate an expression with the reference interpreter."""
    return Interpreter().evaluate(expr)
