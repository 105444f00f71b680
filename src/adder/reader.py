"""
S-Expression Reader
===================

Converts Adder source text into a generic symbolic expression using the
sexpdata library. The reader knows nothing about Adder operators: it
only guarantees that the text holds exactly one balanced s-expression.

Symbolic Expressions
--------------------
The reader produces values of this recursive union:

    SExpr = int | Symbol | list[SExpr]

Only plain decimal tokens ([+-]?[0-9]+) are read as integers. Tokens
that Python's int() would also accept, such as '1_000' or digits from
other scripts, are read as symbols so the AST builder rejects them.

sexpdata can also produce floats, strings, quoted forms and bracket
forms; those are passed through unchanged and rejected later by the
AST builder, which owns the grammar.

Example:
    >>> read_sexpr("(add1 (negate 5))")
    [Symbol('add1'), [Symbol('negate'), 5]]
"""

import logging
import re
from typing import Any, Union

import sexpdata
from sexpdata import Symbol

from adder.errors import ReaderError

logger = logging.getLogger(__name__)

SExpr = Union[int, Symbol, list]

# Integer literal syntax: optional sign, ASCII decimal digits
DECIMAL_INTEGER = re.compile(r"[+-]?[0-9]+")


class SourceParser(sexpdata.Parser):
    """
    sexpdata parser restricted to Adder's integer syntax.

    The literals 't' and 'nil' are read as plain symbols rather than
    sexpdata's boolean and empty-list shortcuts.
    """

    def __init__(self, text: str):
        super().__init__(text, nil=None, true=None, false=None)

    def atom(self, token: str) -> Any:
        if DECIMAL_INTEGER.fullmatch(token):
            return int(token)
        value = super().atom(token)
        if isinstance(value, int) and not isinstance(value, bool):
            return Symbol(token)
        return value


def read_sexpr(text: str) -> SExpr:
    """
    Read exactly one s-expression from source text.

    Args:
        text: Source text

    Returns:
        The symbolic expression

    Raises:
        ReaderError: If the text is empty, malformed, or holds more
                     than one top-level expression
    """
    try:
        forms = SourceParser(text).parse()
    except (sexpdata.ExpectClosingBracket, sexpdata.ExpectNothing) as e:
        raise ReaderError(
            f"unbalanced parentheses: {e}",
            hint="every '(' needs a matching ')'",
        ) from e
    except RecursionError as e:
        raise ReaderError("expression nested too deeply to read") from e
    except Exception as e:
        # sexpdata reports unterminated strings and dangling escapes
        # with whatever exception its scanner happens to hit
        raise ReaderError(
            "malformed source text",
            hint="check for unterminated strings and stray backslashes",
        ) from e

    if not forms:
        raise ReaderError("empty program", hint="write a single expression such as 5 or (add1 5)")
    if len(forms) > 1:
        raise ReaderError(
            f"expected a single expression, found {len(forms)}",
            hint="wrap the program in one expression",
        )

    logger.debug(f"Read one s-expression from {len(text)} characters")
    return forms[0]


def preview_sexpr(sexpr: Any) -> str:
    """
    Render a form one level deep for error messages.

    Nested lists are shown as (...), so the cost does not depend on
    how deep the form is.

    Example:
        >>> preview_sexpr([Symbol("add1"), [Symbol("add1"), 1], 2])
        '(add1 (...) 2)'
    """
    if isinstance(sexpr, list):
        return "(" + " ".join(_preview_item(item) for item in sexpr) + ")"
    return _preview_item(sexpr)


def _preview_item(item: Any) -> str:
    if isinstance(item, list):
        return "(...)"
    if isinstance(item, (int, float, str)):
        return sexpdata.dumps(item)
    if isinstance(item, sexpdata.Quoted):
        return "'..."
    if isinstance(item, sexpdata.Delimiters):
        return f"{item.opener}...{item.closer}"
    return "..."
