"""Parsing package: input model, result and error model, parsers, driver.

Python 3.13+.
"""

from parsecengine.config import ParseConfig

from .errors import (
    ErrorNode,
    ExpectedError,
    ForkError,
    GroupError,
    UnexpectedError,
)
from .parser import ForwardRef, ParseOutcome, Parser, ParserDriver
from .result import Result
from .session import ParseSession
from .source import EOS, Source, SubString

__all__ = [
    "EOS",
    "ErrorNode",
    "ExpectedError",
    "ForkError",
    "ForwardRef",
    "GroupError",
    "ParseOutcome",
    "ParseSession",
    "Parser",
    "ParserDriver",
    "Result",
    "Source",
    "SubString",
    "UnexpectedError",
    "parse",
]


def parse[T](parser: Parser[T], text: str, config: ParseConfig | None = None) -> ParseOutcome[T]:
    """Run parser over text.

    Convenience function for ParserDriver(config).parse(parser, text).

    Args:
        parser: Grammar to run
        text: Input text
        config: Parse configuration (default: ParseConfig())

    Returns:
        ParseOutcome: consumed length, value on success, message on failure

    Example:
        >>> from parsecengine import parse, uint
        >>> outcome = parse(uint(), "1234 + 5678")
        >>> (outcome.consumed, outcome.value, outcome.message)
        (4, 1234, '')
    """
    return ParserDriver(config).parse(parser, text)
