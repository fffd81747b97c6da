"""Arithmetic expression grammar.

Integers, identifiers, parentheses and the five binary operators in two
precedence levels, all left-associative:

    expr   := term (('+' | '-') term)*
    term   := atom (('*' | '/' | '%') atom)*
    atom   := integer | identifier | '(' expr ')'

Whitespace is allowed between tokens. Evaluation follows C integer
semantics: '/' and '%' truncate toward zero.

Example:
    >>> outcome = parse_expression("(0 + 3) * x + 4*y - 1")
    >>> render(outcome.value)
    '((((0 + 3) * x) + (4 * y)) - 1)'
    >>> evaluate(outcome.value, {"x": 3, "y": 5})
    28
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from parsecengine.config import ParseConfig
from parsecengine.diagnostics import EvaluationError
from parsecengine.diagnostics.templates import ErrorTemplate
from parsecengine.syntax.parser import (
    ForwardRef,
    ParseOutcome,
    Parser,
    ParserDriver,
    between,
    char,
    choice,
    eos,
    satisfy,
    sep_fold,
    sint,
    skip_whitespace,
)
from parsecengine.syntax.source import SubString

__all__ = [
    "BinaryExpr",
    "Expr",
    "IdentifierExpr",
    "IntExpr",
    "evaluate",
    "expression_parser",
    "parse_expression",
    "render",
]


@dataclass(frozen=True, slots=True)
class IntExpr:
    """Integer literal."""

    value: int


@dataclass(frozen=True, slots=True)
class IdentifierExpr:
    """Variable reference."""

    name: str


@dataclass(frozen=True, slots=True)
class BinaryExpr:
    """``left op right`` for op in + - * / %."""

    left: Expr
    op: str
    right: Expr


type Expr = IntExpr | IdentifierExpr | BinaryExpr


# ============================================================================
# GRAMMAR
# ============================================================================


def _identifier_char(offset: int, ch: str) -> bool:
    if "a" <= ch <= "z" or "A" <= ch <= "Z":
        return True
    return offset > 0 and "0" <= ch <= "9"


def _identifier(run: SubString) -> IdentifierExpr:
    return IdentifierExpr(str(run))


def _build() -> Parser[Expr]:
    whitespace = skip_whitespace()

    def token[T](parser: Parser[T]) -> Parser[T]:
        return parser << whitespace

    expr = ForwardRef[Expr]("expression")

    integer = sint().map(IntExpr)
    identifier = satisfy("identifier", _identifier_char).map(_identifier)
    group = between(token(char("(")), expr.parser, char(")"))
    atom = token(choice(integer, identifier, group))

    mul_op = token(choice(char("*"), char("/"), char("%")))
    add_op = token(choice(char("+"), char("-")))

    term = sep_fold(atom, mul_op, BinaryExpr)
    expr.define(sep_fold(term, add_op, BinaryExpr))

    return whitespace >> expr.parser << eos()


_EXPRESSION: Parser[Expr] = _build()


def expression_parser() -> Parser[Expr]:
    """The full-input expression grammar (leading whitespace allowed)."""
    return _EXPRESSION


def parse_expression(text: str, config: ParseConfig | None = None) -> ParseOutcome[Expr]:
    """Parse text as one complete expression."""
    return ParserDriver(config).parse(_EXPRESSION, text)


# ============================================================================
# EVALUATION
# ============================================================================


def _truncating_div(left: int, right: int) -> int:
    quotient = abs(left) // abs(right)
    return quotient if (left >= 0) == (right >= 0) else -quotient


def _apply(op: str, lhs: int, rhs: int) -> int:
    match op:
        case "+":
            return lhs + rhs
        case "-":
            return lhs - rhs
        case "*":
            return lhs * rhs
        case "/" | "%" if rhs == 0:
            raise EvaluationError(ErrorTemplate.division_by_zero(op))
        case "/":
            return _truncating_div(lhs, rhs)
        case "%":
            return lhs - rhs * _truncating_div(lhs, rhs)
    msg = f"Unknown operator {op!r}"
    raise ValueError(msg)


def evaluate(expr: Expr, variables: Mapping[str, int] | None = None) -> int:
    """Evaluate expr with C integer semantics.

    Walks the tree with an explicit stack, so long operator chains
    (which fold into deep left spines) cannot exhaust the interpreter stack.

    Args:
        expr: Parsed expression
        variables: Values for identifiers

    Returns:
        Integer value

    Raises:
        EvaluationError: Unknown variable, or division by zero
    """
    variables = variables or {}
    values: list[int] = []
    # Pending work: expressions to evaluate, or operators whose operands are
    # the top two values
    stack: list[Expr | str] = [expr]
    while stack:
        match stack.pop():
            case IntExpr(value=value):
                values.append(value)
            case IdentifierExpr(name=name):
                if name not in variables:
                    raise EvaluationError(ErrorTemplate.unknown_variable(name))
                values.append(variables[name])
            case BinaryExpr(left=left, op=op, right=right):
                stack.extend((op, right, left))
            case str() as op:
                rhs = values.pop()
                lhs = values.pop()
                values.append(_apply(op, lhs, rhs))
    return values.pop()


def render(expr: Expr) -> str:
    """Fully parenthesised rendering, e.g. ``((0 + 3) * x)``."""
    parts: list[str] = []
    # Expressions still to render, interleaved with literal text
    stack: list[Expr | str] = [expr]
    while stack:
        match stack.pop():
            case IntExpr(value=value):
                parts.append(str(value))
            case IdentifierExpr(name=name):
                parts.append(name)
            case BinaryExpr(left=left, op=op, right=right):
                stack.extend((")", right, f" {op} ", left, "("))
            case str() as text:
                parts.append(text)
    return "".join(parts)
