"""Tests for ForwardRef: recursive grammars and the nesting limit.

Python 3.13+.
"""

from __future__ import annotations

import logging

import pytest

from parsecengine import (
    ForwardRef,
    GrammarError,
    ParseConfig,
    Parser,
    UnresolvedReferenceError,
    between,
    char,
    eos,
    parse,
    pure,
    sequence,
    uint,
)
from parsecengine.diagnostics import DiagnosticCode
from parsecengine.syntax.session import ParseSession
from parsecengine.syntax.source import Source


def _nested_parens() -> tuple[ForwardRef[int], Parser[int]]:
    """Grammar counting balanced parentheses: '((()))' -> 3."""
    nested = ForwardRef[int]("nested")
    deeper = between(char("("), nested.parser, char(")")).map(lambda depth: depth + 1)
    nested.define(deeper | pure(0))
    return nested, nested.parser << eos()


class TestDefinition:
    """Test define() and the reference's state."""

    def test_define_once(self) -> None:
        """A reference is defined exactly once."""
        ref = ForwardRef[int]("expr")

        assert not ref.is_defined
        ref.define(uint())
        assert ref.is_defined

    def test_define_twice(self) -> None:
        """Redefinition is a grammar error."""
        ref = ForwardRef[int]("expr")
        ref.define(uint())

        with pytest.raises(GrammarError) as exc_info:
            ref.define(uint())

        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.REFERENCE_ALREADY_DEFINED

    def test_repr(self) -> None:
        """repr() shows the name and state."""
        ref = ForwardRef[int]("expr")

        assert repr(ref) == "<ForwardRef expr (undefined)>"
        ref.define(uint())
        assert repr(ref) == "<ForwardRef expr (defined)>"

    def test_front_is_stable(self) -> None:
        """The front parser exists before definition and never changes."""
        ref = ForwardRef[int]("expr")
        front = ref.parser

        ref.define(uint())

        assert ref.parser is front
        assert parse(front, "42").value == 42

    def test_define_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """Definition is logged at DEBUG."""
        ref = ForwardRef[int]("expr")

        with caplog.at_level(logging.DEBUG, logger="parsecengine.syntax.parser.forward"):
            ref.define(uint())

        assert "Forward reference 'expr' defined as uint" in caplog.text


class TestUnresolved:
    """Test use before definition."""

    def test_raises(self) -> None:
        """Invoking an undefined reference aborts the parse."""
        ref = ForwardRef[int]("expr")

        with pytest.raises(UnresolvedReferenceError) as exc_info:
            parse(ref.parser, "1")

        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.UNRESOLVED_REFERENCE
        assert "'expr'" in str(exc_info.value)

    def test_is_grammar_error(self) -> None:
        """UnresolvedReferenceError is a GrammarError."""
        assert issubclass(UnresolvedReferenceError, GrammarError)


class TestRecursion:
    """Test recursive parsing through the front."""

    @pytest.mark.parametrize(("text", "depth"), [("", 0), ("()", 1), ("((()))", 3)])
    def test_balanced(self, text: str, depth: int) -> None:
        """Nested structures parse to their depth."""
        _, grammar = _nested_parens()

        assert parse(grammar, text).value == depth

    def test_unbalanced(self) -> None:
        """A missing closer is reported where it was due."""
        _, grammar = _nested_parens()

        outcome = parse(grammar, "(()")

        assert not outcome.ok
        assert outcome.error_position == 3
        assert outcome.diagnostic is not None
        assert "')'" in outcome.diagnostic.expected

    def test_depth_restored_after_parse(self) -> None:
        """The nesting counter returns to zero."""
        nested, _ = _nested_parens()
        session = ParseSession(Source("((()))"))

        assert nested.parser.fn(session, 0).ok
        assert session.depth.current_depth == 0


class TestNestingLimit:
    """Test the per-parse nesting limit."""

    def test_limit_reported(self) -> None:
        """Input nested past the limit fails with a dedicated message."""
        _, grammar = _nested_parens()
        text = "(" * 10 + ")" * 10

        outcome = parse(grammar, text, ParseConfig(max_nesting_depth=5))

        assert not outcome.ok
        assert outcome.error_position == 5
        assert "unexpected nesting deeper than 5 levels" in outcome.message

    def test_limit_boundary(self) -> None:
        """Exactly max_nesting_depth levels of recursion are allowed."""
        _, grammar = _nested_parens()
        config = ParseConfig(max_nesting_depth=5)

        # The outermost front call is level one; 4 brackets need 5 levels.
        assert parse(grammar, "(" * 4 + ")" * 4, config).value == 4
        assert not parse(grammar, "(" * 5 + ")" * 5, config).ok

    def test_default_limit_handles_deep_input(self) -> None:
        """Far deeper input than the limit fails cleanly, never RecursionError."""
        _, grammar = _nested_parens()
        text = "(" * 5000 + ")" * 5000

        outcome = parse(grammar, text)

        assert not outcome.ok
        assert "nesting deeper than 64 levels" in outcome.message

    def test_left_recursion_terminates(self) -> None:
        """Runaway left recursion hits the limit instead of the stack."""
        expr = ForwardRef[object]("left")
        expr.define(sequence(expr.parser, char("a")) | char("a"))

        outcome = parse(expr.parser, "b")

        assert not outcome.ok
        assert "nesting deeper than 64 levels" in outcome.message
        assert "'a'" in outcome.message
