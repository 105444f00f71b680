"""
Adder AST Builder
=================

Validates a generic s-expression and converts it into the typed AST.

Grammar
-------
    expr ::= integer
           | "(" "add1" expr ")"
           | "(" "sub1" expr ")"
           | "(" "negate" expr ")"

Integer literals must fit a signed 32-bit word.

The builder checks shape, operator names and literal range only. It
never evaluates anything, so it does not care whether the program's
intermediate results overflow.

Usage
-----
>>> from adder.parser import parse_source
>>> parse_source("(add1 5)")
Add1(operand=Num(value=5))
"""

import logging
from typing import Any

from sexpdata import Symbol

from adder.ast import Expr, Num, UNARY_OPERATORS
from adder.errors import (
    ArityError,
    MalformedExpressionError,
    NumericRangeError,
    UnknownOperatorError,
)
from adder.reader import SExpr, preview_sexpr, read_sexpr

logger = logging.getLogger(__name__)


# Literal range of the target word (signed 32-bit)
INT_MIN = -(2 ** 31)
INT_MAX = 2 ** 31 - 1


def parse_expr(sexpr: SExpr) -> Expr:
    """
    Build the AST for a symbolic expression.

    Operator applications are unwound iteratively: the walk descends
    through the chain of operators, checks the leaf, then wraps the
    leaf back up from the innermost operator outwards.

    Args:
        sexpr: Symbolic expression produced by the reader

    Returns:
        The root AST node

    Raises:
        MalformedExpressionError: If the shape matches no production
        NumericRangeError: If an integer literal does not fit 32 bits
    """
    operators: list[str] = []
    current = sexpr
    while isinstance(current, list):
        operator, current = _split_application(current)
        operators.append(operator)

    node: Expr = _parse_leaf(current)
    for operator in reversed(operators):
        node = UNARY_OPERATORS[operator](node)
    return node


def parse_source(text: str) -> Expr:
    """
    Read source text and build its AST.

    Raises:
        ReaderError: If the text is not a single s-expression
        ParseError: If the s-expression is not a valid program
    """
    ast = parse_expr(read_sexpr(text))
    logger.debug(f"Built AST rooted at {ast.__class__.__name__}")
    return ast


# =============================================================================
# Helpers
# =============================================================================

def _split_application(form: list) -> tuple[str, Any]:
    """
    Check an operator application and return (operator name, operand).
    """
    if not form:
        raise MalformedExpressionError(
            "empty list is not an expression",
            form="()",
            hint="write an integer or (add1|sub1|negate <expr>)",
        )

    head = form[0]
    if not isinstance(head, Symbol):
        raise MalformedExpressionError(
            "expected an operator name at the head of a list",
            form=preview_sexpr(form),
        )

    operator = str(head)
    if operator not in UNARY_OPERATORS:
        raise UnknownOperatorError(
            operator,
            tuple(UNARY_OPERATORS),
            form=preview_sexpr(form),
        )

    if len(form) != 2:
        raise ArityError(operator, expected=1, actual=len(form) - 1, form=preview_sexpr(form))

    return operator, form[1]


def _parse_leaf(atom: Any) -> Num:
    """Convert a leaf atom into a Num node."""
    # bool is a subclass of int but never an Adder literal
    if isinstance(atom, int) and not isinstance(atom, bool):
        if not INT_MIN <= atom <= INT_MAX:
            raise NumericRangeError(atom, INT_MIN, INT_MAX)
        return Num(atom)

    if isinstance(atom, Symbol):
        if str(atom).lstrip("+-")[:1].isdigit():
            raise MalformedExpressionError(
                f"malformed integer literal '{atom}'",
                hint="integer literals are decimal digits 0-9 with an optional sign",
            )
        raise MalformedExpressionError(
            f"unexpected symbol '{atom}'",
            hint="operators must be applied inside parentheses, e.g. (add1 5)",
        )

    raise MalformedExpressionError(
        f"unsupported literal {preview_sexpr(atom)}",
        hint="only integer literals are allowed",
    )
