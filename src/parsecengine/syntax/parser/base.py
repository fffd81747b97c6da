"""The Parser value.

A parser is an immutable callable ``(session, position) -> Result[T]``.
Grammars are built once by composing parsers and then run any number of
times, from any number of threads, each run with its own ParseSession.

Operators:
    a << b    run a then b, keep a's value
    a >> b    run a then b, keep b's value
    a | b     try a, then b from the same position

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from parsecengine.diagnostics import GrammarError
from parsecengine.diagnostics.templates import ErrorTemplate

if TYPE_CHECKING:
    from parsecengine.syntax.result import Result
    from parsecengine.syntax.session import ParseSession

__all__ = ["ParseFn", "Parser", "check_bounds"]

type ParseFn[T] = Callable[[ParseSession, int], Result[T]]


class Parser[T]:
    """Composable parser producing values of type T.

    Combinators call each other through ``.fn`` directly; ``__call__`` is the
    same function for callers that prefer ``parser(session, position)``.

    Attributes:
        fn: The parse function
        name: Short description used in reprs and trace logs
    """

    __slots__ = ("fn", "name")

    def __init__(self, fn: ParseFn[T], name: str = "parser") -> None:
        self.fn = fn
        self.name = name

    def __call__(self, session: ParseSession, position: int) -> Result[T]:
        return self.fn(session, position)

    def __repr__(self) -> str:
        return f"<Parser {self.name}>"

    # Operators delegate to combinators; imported lazily to avoid a cycle.

    def __lshift__(self, other: Parser[object]) -> Parser[T]:
        from .combinators import keep_left  # noqa: PLC0415 - circular

        return keep_left(self, other)

    def __rshift__[U](self, other: Parser[U]) -> Parser[U]:
        from .combinators import keep_right  # noqa: PLC0415 - circular

        return keep_right(self, other)

    def __or__[U](self, other: Parser[U]) -> Parser[T | U]:
        from .combinators import either  # noqa: PLC0415 - circular

        return either(self, other)

    def bind[U](self, continuation: Callable[[T], Parser[U]]) -> Parser[U]:
        """Run a parser chosen from this parser's value."""
        from .combinators import bind  # noqa: PLC0415 - circular

        return bind(self, continuation)

    def map[U](self, transform: Callable[[T], U]) -> Parser[U]:
        """Transform the value of a successful match."""
        from .combinators import pmap  # noqa: PLC0415 - circular

        return pmap(self, transform)

    def optional[D](self, default: D = None) -> Parser[T | D]:  # type: ignore[assignment]
        """Match or produce default without consuming input."""
        from .combinators import optional  # noqa: PLC0415 - circular

        return optional(self, default)

    def many(self, at_least: int = 0, at_most: int | None = None) -> Parser[list[T]]:
        """Repeat between at_least and at_most times."""
        from .combinators import many  # noqa: PLC0415 - circular

        return many(self, at_least, at_most)

    def label(self, description: str) -> Parser[T]:
        """Report failures at the start position as "expected <description>"."""
        from .combinators import label  # noqa: PLC0415 - circular

        return label(self, description)


def check_bounds(combinator: str, at_least: int, at_most: int | None) -> None:
    """Validate repetition bounds at construction time.

    Raises:
        GrammarError: If at_least < 0 or at_most < at_least
    """
    if at_least < 0 or (at_most is not None and at_most < at_least):
        raise GrammarError(
            ErrorTemplate.invalid_repetition_bounds(
                combinator, at_least, -1 if at_most is None else at_most
            )
        )
