"""
Reader and AST Builder Tests
============================

Tests for turning source text into the Adder AST.

Test Organization
-----------------
- TestReader: s-expression reading
- TestParseValid: accepted productions
- TestParseMalformed: rejected shapes
- TestNumericRange: literal range checks
- TestDeepNesting: programs deeper than the Python call stack
"""

from typing import get_type_hints

import pytest
from sexpdata import Symbol

from adder.ast import Add1, Negate, Num, Sub1, depth
from adder.errors import (
    ArityError,
    MalformedExpressionError,
    NumericRangeError,
    ParseError,
    ReaderError,
    UnknownOperatorError,
)
from adder.parser import INT_MAX, INT_MIN, parse_expr, parse_source
from adder.reader import SExpr, preview_sexpr, read_sexpr


# =============================================================================
# Reader Tests
# =============================================================================

class TestReader:
    """Tests for the s-expression reader."""

    def test_integer_atom(self):
        """A bare integer should read as an int."""
        assert read_sexpr("5") == 5
        assert read_sexpr("-12") == -12

    def test_list(self):
        """A parenthesized form should read as a list headed by a symbol."""
        sexpr = read_sexpr("(add1 5)")
        assert isinstance(sexpr, list)
        assert isinstance(sexpr[0], Symbol)
        assert sexpr == [Symbol("add1"), 5]

    def test_nested_list(self):
        """Nested forms should read as nested lists."""
        assert read_sexpr("(negate (add1 5))") == [
            Symbol("negate"),
            [Symbol("add1"), 5],
        ]

    def test_surrounding_whitespace(self):
        """Whitespace and newlines around the program are ignored."""
        assert read_sexpr("\n  (sub1   7)  \n") == [Symbol("sub1"), 7]

    def test_empty_source(self):
        """Empty source is not a program."""
        with pytest.raises(ReaderError, match="empty program"):
            read_sexpr("")

    def test_whitespace_only(self):
        """Whitespace-only source is not a program."""
        with pytest.raises(ReaderError):
            read_sexpr("   \n\t ")

    def test_multiple_expressions(self):
        """Only one top-level expression is allowed."""
        with pytest.raises(ReaderError, match="single expression"):
            read_sexpr("5 6")

    def test_unclosed_paren(self):
        """A missing ')' is a reader error."""
        with pytest.raises(ReaderError):
            read_sexpr("(add1 5")

    def test_extra_close_paren(self):
        """A stray ')' is a reader error."""
        with pytest.raises(ReaderError):
            read_sexpr("(add1 5))")

    def test_unterminated_string(self):
        """A string literal without its closing quote is a reader error."""
        with pytest.raises(ReaderError, match="malformed source text"):
            read_sexpr('"abc')
        with pytest.raises(ReaderError):
            read_sexpr('(add1 "a)')

    def test_dangling_backslash(self):
        """A backslash with nothing to escape is a reader error."""
        with pytest.raises(ReaderError):
            read_sexpr("\\")

    def test_too_deep_to_read(self):
        """Text nested beyond the reader's limit is a reader error."""
        levels = 5000
        with pytest.raises(ReaderError, match="nested too deeply"):
            read_sexpr("(add1 " * levels + "1" + ")" * levels)

    def test_non_decimal_integers_read_as_symbols(self):
        """Only plain decimal tokens become ints."""
        assert read_sexpr("-0") == 0
        assert read_sexpr("+5") == 5
        assert read_sexpr("1_000") == Symbol("1_000")
        assert read_sexpr("\u0663") == Symbol("\u0663")

    def test_reader_and_builder_share_sexpr_type(self):
        """The reader's result type is what parse_expr accepts."""
        assert get_type_hints(read_sexpr)["return"] == SExpr
        assert get_type_hints(parse_expr)["sexpr"] == SExpr

    def test_preview_is_shallow(self):
        """Nested forms are elided in error previews."""
        assert preview_sexpr([Symbol("mul"), 2, 3]) == "(mul 2 3)"
        assert preview_sexpr([Symbol("add1"), [Symbol("add1"), 1], 2]) == "(add1 (...) 2)"
        assert preview_sexpr(7) == "7"


# =============================================================================
# Valid Programs
# =============================================================================

class TestParseValid:
    """Tests for the accepted productions."""

    def test_number(self):
        """An integer literal maps to Num."""
        assert parse_source("5") == Num(5)

    def test_negative_number(self):
        """Signed literals are accepted."""
        assert parse_source("-7") == Num(-7)
        assert parse_source("+7") == Num(7)

    def test_add1(self):
        """(add1 e) maps to Add1."""
        assert parse_source("(add1 5)") == Add1(Num(5))

    def test_sub1(self):
        """(sub1 e) maps to Sub1."""
        assert parse_source("(sub1 5)") == Sub1(Num(5))

    def test_negate(self):
        """(negate e) maps to Negate."""
        assert parse_source("(negate 5)") == Negate(Num(5))

    def test_nested(self):
        """Operators nest to any depth, innermost first."""
        assert parse_source("(negate (add1 5))") == Negate(Add1(Num(5)))
        assert parse_source("(sub1 (sub1 10))") == Sub1(Sub1(Num(10)))
        assert parse_source("(add1 (negate 3))") == Add1(Negate(Num(3)))

    def test_parse_expr_accepts_reader_values(self):
        """parse_expr works directly on symbolic expressions."""
        sexpr = [Symbol("negate"), [Symbol("sub1"), 0]]
        assert parse_expr(sexpr) == Negate(Sub1(Num(0)))

    def test_operator_nodes_are_distinct(self):
        """Nodes of different kinds never compare equal."""
        assert parse_source("(add1 1)") != parse_source("(sub1 1)")


# =============================================================================
# Malformed Programs
# =============================================================================

class TestParseMalformed:
    """Tests for shapes the builder must reject."""

    def test_unknown_operator(self):
        """(mul 1 2) names an operator the language does not have."""
        with pytest.raises(UnknownOperatorError) as exc_info:
            parse_source("(mul 1 2)")
        assert exc_info.value.operator == "mul"
        assert "unknown operator 'mul'" in str(exc_info.value)
        assert "add1" in str(exc_info.value)

    def test_unknown_operator_single_operand(self):
        """An unknown operator is rejected even with the right arity."""
        with pytest.raises(UnknownOperatorError):
            parse_source("(foo 1)")

    def test_missing_operand(self):
        """(add1) has no operand."""
        with pytest.raises(ArityError) as exc_info:
            parse_source("(add1)")
        assert exc_info.value.expected == 1
        assert exc_info.value.actual == 0

    def test_extra_operand(self):
        """(add1 1 2) has one operand too many."""
        with pytest.raises(ArityError) as exc_info:
            parse_source("(add1 1 2)")
        assert exc_info.value.actual == 2
        assert "expects 1 operand, got 2" in str(exc_info.value)

    def test_bare_symbol(self):
        """A symbol in leaf position is not a value."""
        with pytest.raises(MalformedExpressionError, match="unexpected symbol 'x'"):
            parse_source("x")

    def test_bare_operator_name(self):
        """An operator name on its own is not a value."""
        with pytest.raises(MalformedExpressionError):
            parse_source("add1")

    def test_empty_list(self):
        """() is not an expression."""
        with pytest.raises(MalformedExpressionError):
            parse_source("()")

    def test_number_in_operator_position(self):
        """A list must be headed by an operator name."""
        with pytest.raises(MalformedExpressionError):
            parse_source("(1 2)")

    def test_list_in_operator_position(self):
        """A nested list cannot stand in for an operator."""
        with pytest.raises(MalformedExpressionError):
            parse_source("((add1 1) 2)")

    def test_float_literal(self):
        """Only integer literals are allowed."""
        with pytest.raises(MalformedExpressionError, match="unsupported literal"):
            parse_source("5.5")

    def test_string_literal(self):
        """String literals are not part of the language."""
        with pytest.raises(MalformedExpressionError):
            parse_source('"five"')

    def test_underscore_literal(self):
        """Python's digit separators are not Adder syntax."""
        with pytest.raises(MalformedExpressionError, match="malformed integer literal '1_000'"):
            parse_source("1_000")

    def test_non_ascii_digit(self):
        """Digits from other scripts are not coerced to integers."""
        with pytest.raises(MalformedExpressionError, match="malformed integer literal"):
            parse_source("(add1 \u0663)")
        with pytest.raises(MalformedExpressionError):
            parse_source("\uff15")

    def test_boolean_shorthands(self):
        """'t' and 'nil' are never coerced into values."""
        with pytest.raises(MalformedExpressionError):
            parse_source("t")
        with pytest.raises(MalformedExpressionError):
            parse_source("nil")
        with pytest.raises(MalformedExpressionError):
            parse_expr(True)

    def test_error_deep_inside(self):
        """A bad form nested inside valid operators is still rejected."""
        with pytest.raises(UnknownOperatorError) as exc_info:
            parse_source("(add1 (negate (mul 2 3)))")
        assert exc_info.value.form == "(mul 2 3)"

    def test_all_shape_errors_are_parse_errors(self):
        """Every builder failure derives from ParseError."""
        for source in ["(mul 1 2)", "(add1)", "x", "()", "9999999999"]:
            with pytest.raises(ParseError):
                parse_source(source)


# =============================================================================
# Numeric Range
# =============================================================================

class TestNumericRange:
    """Tests for the signed 32-bit literal range."""

    def test_bounds_accepted(self):
        """The extreme 32-bit values are valid literals."""
        assert parse_source(str(INT_MAX)) == Num(2147483647)
        assert parse_source(str(INT_MIN)) == Num(-2147483648)

    def test_above_range(self):
        """2**31 does not fit."""
        with pytest.raises(NumericRangeError) as exc_info:
            parse_source("2147483648")
        assert exc_info.value.value == 2147483648

    def test_below_range(self):
        """-2**31 - 1 does not fit."""
        with pytest.raises(NumericRangeError):
            parse_source("-2147483649")

    def test_range_error_is_not_shape_error(self):
        """Overflow is reported separately from malformed shapes."""
        with pytest.raises(NumericRangeError) as exc_info:
            parse_source("(add1 99999999999)")
        assert not isinstance(exc_info.value, MalformedExpressionError)


# =============================================================================
# Deep Nesting
# =============================================================================

class TestDeepNesting:
    """The builder must not depend on Python recursion depth."""

    def test_deep_symbolic_expression(self):
        """A 20,000-level chain builds without RecursionError."""
        levels = 20_000
        sexpr = 1
        for _ in range(levels):
            sexpr = [Symbol("add1"), sexpr]

        ast = parse_expr(sexpr)

        assert isinstance(ast, Add1)
        assert depth(ast) == levels + 1

    def test_bad_outer_form_on_deep_program(self):
        """An arity error above a deep operand is still reported."""
        levels = 500
        inner = "(add1 " * levels + "1" + ")" * levels
        with pytest.raises(ArityError) as exc_info:
            parse_source(f"(add1 {inner} 2)")
        assert exc_info.value.form == "(add1 (...) 2)"

    def test_bad_outer_form_on_deep_expression(self):
        """Error reporting does not walk the offending subtree."""
        deep = 1
        for _ in range(20_000):
            deep = [Symbol("sub1"), deep]

        with pytest.raises(ArityError):
            parse_expr([Symbol("negate"), deep, 2])
        with pytest.raises(UnknownOperatorError) as exc_info:
            parse_expr([Symbol("mul"), deep, deep])
        assert exc_info.value.form == "(mul (...) (...))"
