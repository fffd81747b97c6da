"""Tests for the arithmetic expression grammar and evaluator.

Python 3.13+.
"""

from __future__ import annotations

import pytest
from hypothesis import given, settings

from parsecengine import EvaluationError, ParseConfig
from parsecengine.diagnostics import DiagnosticCode
from parsecengine.grammars.calculator import (
    BinaryExpr,
    Expr,
    IdentifierExpr,
    IntExpr,
    evaluate,
    expression_parser,
    parse_expression,
    render,
)
from tests.strategies import expressions


def _value(text: str, **variables: int) -> int:
    outcome = parse_expression(text)
    assert outcome.ok, outcome.message
    assert outcome.value is not None
    return evaluate(outcome.value, variables)


# ============================================================================
# PARSING
# ============================================================================


class TestParsing:
    """Test the grammar's trees."""

    def test_example_expression(self) -> None:
        """Precedence, associativity and whitespace in one expression."""
        outcome = parse_expression("(0 + 3) * x + 4*y - 1")

        assert outcome.ok
        assert outcome.consumed == len("(0 + 3) * x + 4*y - 1")
        assert outcome.value is not None
        assert render(outcome.value) == "((((0 + 3) * x) + (4 * y)) - 1)"
        assert evaluate(outcome.value, {"x": 3, "y": 5}) == 28

    def test_tree_shape(self) -> None:
        """Multiplication binds tighter than addition."""
        outcome = parse_expression("1 + 2 * a")

        assert outcome.value == BinaryExpr(
            IntExpr(1), "+", BinaryExpr(IntExpr(2), "*", IdentifierExpr("a"))
        )

    def test_left_associative(self) -> None:
        """Operators of one level fold to the left."""
        assert _value("10 - 4 - 3") == 3
        assert _value("64 / 4 / 2") == 8

    def test_signed_literals(self) -> None:
        """Integer literals may carry a sign."""
        assert _value("1 - -2") == 3
        assert _value("-3 * +2") == -6

    def test_binary_minus_without_space(self) -> None:
        """'1 -2' is subtraction, not juxtaposition."""
        assert _value("1 -2") == -1

    def test_surrounding_whitespace(self) -> None:
        """Whitespace is allowed before, between and after tokens."""
        assert _value("  1 +\t2\n") == 3

    def test_identifiers(self) -> None:
        """Identifiers start with a letter and may contain digits."""
        outcome = parse_expression("abc1 + B")

        assert outcome.value == BinaryExpr(IdentifierExpr("abc1"), "+", IdentifierExpr("B"))

    def test_parser_is_shared(self) -> None:
        """The grammar is built once."""
        assert expression_parser() is expression_parser()

    def test_long_chain(self) -> None:
        """Long operator chains parse, render and evaluate iteratively."""
        text = " + ".join(["1"] * 5000)

        assert _value(text) == 5000

    def test_nesting_within_limit(self) -> None:
        """Parentheses nest up to the configured depth."""
        assert _value("(" * 60 + "7" + ")" * 60) == 7


# ============================================================================
# DIAGNOSTICS
# ============================================================================


class TestDiagnostics:
    """Test error messages for malformed expressions."""

    def test_missing_operand(self) -> None:
        """Every way an operand can start is listed."""
        outcome = parse_expression("1 + )")

        assert not outcome.ok
        assert outcome.message == (
            "error[UNEXPECTED_INPUT]: expected '(', identifier or integer\n"
            "  --> line 1, column 5\n"
            "    |\n"
            "  1 | 1 + )\n"
            "    |     ^\n"
            "  = found: ')'"
        )

    def test_missing_operand_at_end(self) -> None:
        """End of input after an operator is an EOF error."""
        outcome = parse_expression("1+(2+")

        assert outcome.diagnostic is not None
        assert outcome.diagnostic.code == DiagnosticCode.UNEXPECTED_EOF
        assert outcome.diagnostic.message == "expected '(', identifier or integer"
        assert outcome.diagnostic.found == "end of input"

    def test_unclosed_group(self) -> None:
        """An unclosed group lists operators and the closer."""
        outcome = parse_expression("(1 + 2")

        assert outcome.diagnostic is not None
        assert outcome.diagnostic.message == "expected '%', ')', '*', '+', '-' or '/'"

    def test_trailing_input(self) -> None:
        """Juxtaposed operands are rejected at the second one."""
        outcome = parse_expression("x y")

        assert outcome.diagnostic is not None
        assert outcome.diagnostic.span is not None
        assert outcome.diagnostic.span.column == 3
        assert "end of input" in outcome.diagnostic.expected

    def test_nesting_limit(self) -> None:
        """Excessive nesting fails with a dedicated message."""
        outcome = parse_expression("(" * 100 + "1" + ")" * 100)

        assert outcome.diagnostic is not None
        assert outcome.diagnostic.message == "unexpected nesting deeper than 64 levels"
        assert outcome.error_position == 64

    def test_configured_nesting_limit(self) -> None:
        """The limit comes from ParseConfig."""
        outcome = parse_expression("((1))", ParseConfig(max_nesting_depth=2))

        assert not outcome.ok
        assert "nesting deeper than 2 levels" in outcome.message


# ============================================================================
# EVALUATION
# ============================================================================


class TestEvaluation:
    """Test C-style integer evaluation."""

    @pytest.mark.parametrize(
        ("text", "value"),
        [
            ("7 / 2", 3),
            ("-7 / 2", -3),
            ("7 / -2", -3),
            ("7 % 3", 1),
            ("-7 % 2", -1),
            ("7 % -2", 1),
            ("2 * 3 % 4", 2),
        ],
    )
    def test_truncating_division(self, text: str, value: int) -> None:
        """'/' and '%' truncate toward zero."""
        assert _value(text) == value

    def test_big_integers(self) -> None:
        """Arithmetic does not overflow."""
        assert _value("99999999999999999999 * 10") == 999999999999999999990

    def test_unknown_variable(self) -> None:
        """A free identifier without a value is an evaluation error."""
        with pytest.raises(EvaluationError) as exc_info:
            _value("x + 1")

        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.UNKNOWN_VARIABLE
        assert str(exc_info.value) == "Variable 'x' is not defined"

    @pytest.mark.parametrize("text", ["1 / 0", "1 % (2 - 2)"])
    def test_division_by_zero(self, text: str) -> None:
        """Division and remainder by zero are evaluation errors."""
        with pytest.raises(EvaluationError) as exc_info:
            _value(text)

        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.DIVISION_BY_ZERO


# ============================================================================
# PROPERTIES
# ============================================================================


class TestProperties:
    """Property-based tests over generated trees."""

    @given(expressions())
    @settings(max_examples=200)
    def test_render_parse_roundtrip(self, expr: Expr) -> None:
        """PROPERTY: parsing the rendering of a tree gives the tree back."""
        outcome = parse_expression(render(expr))

        assert outcome.ok, outcome.message
        assert outcome.value == expr
