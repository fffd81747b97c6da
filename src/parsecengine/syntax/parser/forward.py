"""Forward references for recursive grammars.

A rule that mentions itself, directly or through other rules, cannot be
built in one expression. ForwardRef hands out a front parser first and
receives the real rule later:

    expr = ForwardRef[Expr]("expr")
    atom = uint().map(IntExpr) | between(char("("), expr.parser, char(")"))
    expr.define(sep_fold(atom, any_of("+-"), BinaryExpr))

The reference is the only mutable object in a grammar. It is written once,
before any parse runs, and only read afterwards, so a finished grammar can
be shared between threads.

Python 3.13+.
"""

import logging

from parsecengine.diagnostics import GrammarError, UnresolvedReferenceError
from parsecengine.diagnostics.templates import ErrorTemplate
from parsecengine.syntax.errors import UnexpectedError
from parsecengine.syntax.result import Result
from parsecengine.syntax.session import ParseSession

from .base import Parser

__all__ = ["ForwardRef"]

logger = logging.getLogger(__name__)


class ForwardRef[T]:
    """Late-bound slot holding a parser.

    Each pass through the front parser counts one nesting level on the
    session's DepthGuard. Past the limit the front fails with
    "unexpected nesting deeper than N levels" instead of exhausting the
    interpreter stack; this also stops runaway left recursion.

    Attributes:
        name: Rule name used in messages
        parser: Front parser delegating to the defined rule
    """

    __slots__ = ("_target", "name", "parser")

    def __init__(self, name: str = "forward") -> None:
        self.name = name
        self._target: Parser[T] | None = None
        self.parser: Parser[T] = Parser(self._invoke, name)

    def __repr__(self) -> str:
        state = "defined" if self._target is not None else "undefined"
        return f"<ForwardRef {self.name} ({state})>"

    @property
    def is_defined(self) -> bool:
        """True once define() has been called."""
        return self._target is not None

    def define(self, parser: Parser[T]) -> None:
        """Populate the reference. Allowed exactly once.

        Raises:
            GrammarError: If the reference is already defined
        """
        if self._target is not None:
            raise GrammarError(ErrorTemplate.reference_already_defined(self.name))
        self._target = parser
        logger.debug("Forward reference %r defined as %s", self.name, parser.name)

    def _invoke(self, session: ParseSession, position: int) -> Result[T]:
        target = self._target
        if target is None:
            raise UnresolvedReferenceError(ErrorTemplate.unresolved_reference(self.name))
        guard = session.depth
        if guard.is_exceeded():
            error = UnexpectedError(ErrorTemplate.nesting_depth_exceeded(guard.max_depth))
            session.emit(position, error)
            return Result.failure(position, error)
        with guard:
            return target.fn(session, position)
