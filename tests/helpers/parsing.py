"""Helpers for running parsers below the driver.

The driver hides Result objects behind ParseOutcome. Unit tests of single
combinators need the raw Result, and sometimes the diagnostic log of a
collection pass, so these helpers build the session by hand.
"""

from __future__ import annotations

from parsecengine.syntax.errors import ErrorNode
from parsecengine.syntax.parser import Parser
from parsecengine.syntax.result import Result
from parsecengine.syntax.session import ParseSession
from parsecengine.syntax.source import Source


def run[T](parser: Parser[T], text: str, position: int = 0) -> Result[T]:
    """Run parser once (discovery mode) and return its Result."""
    return parser.fn(ParseSession(Source(text)), position)


def collect(
    parser: Parser[object], text: str, error_position: int, position: int = 0
) -> list[ErrorNode]:
    """Run parser in collection mode and return the nodes logged at error_position."""
    session = ParseSession(Source(text), error_position)
    parser.fn(session, position)
    return session.errors
