"""Primitive parsers.

Atomic matchers that read the input directly: literal characters and
strings, predicate-driven character runs, end of input and integer
literals. Every primitive that fails emits its error node to the session at
the position where it stopped, so the diagnostic pass sees it.

Digits are ASCII 0-9 only. str.isdigit() accepts Unicode digits such as
superscripts, which int() then rejects.
"""

from collections.abc import Callable

from parsecengine.constants import MAX_INTEGER_DIGITS
from parsecengine.diagnostics import GrammarError
from parsecengine.diagnostics.templates import ErrorTemplate
from parsecengine.syntax.errors import ExpectedError, UnexpectedError
from parsecengine.syntax.result import Result
from parsecengine.syntax.session import ParseSession
from parsecengine.syntax.source import CharPredicate, SubString

from .base import Parser, check_bounds

__all__ = [
    "any_of",
    "char",
    "eos",
    "fail",
    "none_of",
    "pure",
    "satisfy",
    "satisfy_char",
    "sint",
    "skip_satisfy",
    "skip_whitespace",
    "string",
    "uint",
]

_ASCII_DIGITS: frozenset[str] = frozenset("0123456789")

# Whitespace accepted by skip_whitespace(): space, tab, LF, CR, backspace.
_WHITESPACE: str = " \t\n\r\b"

_END_OF_INPUT = ExpectedError("end of input")
_INTEGER = ExpectedError("integer")
_INTEGER_TOO_LONG = UnexpectedError(ErrorTemplate.integer_too_long(MAX_INTEGER_DIGITS))


def _digit(offset: int, ch: str) -> bool:  # noqa: ARG001 - CharPredicate signature
    return ch in _ASCII_DIGITS


def _fail(session: ParseSession, position: int, error: ExpectedError | UnexpectedError) -> Result:
    session.emit(position, error)
    return Result.failure(position, error)


def char(c: str) -> Parser[str]:
    """Match exactly the character c.

    Raises:
        GrammarError: If c is not a single character
    """
    if len(c) != 1:
        raise GrammarError(ErrorTemplate.invalid_char_literal(c))
    expected = ExpectedError(repr(c))

    def parse_char(session: ParseSession, position: int) -> Result[str]:
        text = session.source.text
        if position < len(text) and text[position] == c:
            return Result.success(position + 1, c)
        return _fail(session, position, expected)

    return Parser(parse_char, f"char({c!r})")


def string(literal: str) -> Parser[str]:
    """Match literal character by character.

    On mismatch the failure is reported at the first diverging position,
    not at the start, so "nul" against string("null") fails at offset 3.

    Raises:
        GrammarError: If literal is empty
    """
    if not literal:
        raise GrammarError(ErrorTemplate.empty_literal("string"))
    expected = ExpectedError(repr(literal))
    size = len(literal)

    def parse_string(session: ParseSession, position: int) -> Result[str]:
        text = session.source.text
        if text.startswith(literal, position):
            return Result.success(position + size, literal)
        offset = 0
        while position + offset < len(text) and text[position + offset] == literal[offset]:
            offset += 1
        return _fail(session, position + offset, expected)

    return Parser(parse_string, f"string({literal!r})")


def satisfy(
    description: str,
    predicate: CharPredicate,
    at_least: int = 1,
    at_most: int | None = None,
) -> Parser[SubString]:
    """Greedy run of characters accepted by predicate(offset, char).

    Succeeds with the matched SubString when the run holds at least
    at_least characters; the run is truncated at at_most. On failure the
    error is reported where the run stopped.

    Args:
        description: What the run is, for "expected <description>"
        predicate: Receives (offset within the run, character)
        at_least: Minimum run length
        at_most: Maximum run length (None = unbounded)

    Raises:
        GrammarError: If the bounds are negative or inverted

    Example:
        >>> identifier = satisfy(
        ...     "identifier",
        ...     lambda i, ch: ch.isalpha() or (i > 0 and ch.isdigit()),
        ... )
    """
    check_bounds("satisfy", at_least, at_most)
    expected = ExpectedError(description)

    def parse_satisfy(session: ParseSession, position: int) -> Result[SubString]:
        run = session.source.satisfy(position, predicate, at_most)
        if len(run) >= at_least:
            return Result.success(run.end, run)
        return _fail(session, run.end, expected)

    return Parser(parse_satisfy, description)


def satisfy_char(description: str, predicate: Callable[[str], bool]) -> Parser[str]:
    """Match one character accepted by predicate."""
    expected = ExpectedError(description)

    def parse_satisfy_char(session: ParseSession, position: int) -> Result[str]:
        text = session.source.text
        if position < len(text) and predicate(text[position]):
            return Result.success(position + 1, text[position])
        return _fail(session, position, expected)

    return Parser(parse_satisfy_char, description)


def any_of(chars: str) -> Parser[str]:
    """Match one character from chars."""
    allowed = frozenset(chars)
    return satisfy_char(f"one of {chars!r}", allowed.__contains__)


def none_of(chars: str) -> Parser[str]:
    """Match one character not in chars (end of input never matches)."""
    rejected = frozenset(chars)
    return satisfy_char(f"none of {chars!r}", lambda ch: ch not in rejected)


def skip_satisfy(
    predicate: CharPredicate,
    at_least: int = 0,
    at_most: int | None = None,
    description: str = "character",
) -> Parser[None]:
    """Like satisfy(), but discards the run."""
    return satisfy(description, predicate, at_least, at_most).map(_discard)


def skip_whitespace(chars: str = _WHITESPACE) -> Parser[None]:
    """Skip any run of whitespace, including none. Never fails."""
    allowed = frozenset(chars)

    def parse_whitespace(session: ParseSession, position: int) -> Result[None]:
        text = session.source.text
        end = position
        while end < len(text) and text[end] in allowed:
            end += 1
        return Result.success(end, None)

    return Parser(parse_whitespace, "whitespace")


def eos() -> Parser[None]:
    """Match the end of input without consuming anything."""

    def parse_eos(session: ParseSession, position: int) -> Result[None]:
        if position >= len(session.source.text):
            return Result.success(position, None)
        return _fail(session, position, _END_OF_INPUT)

    return Parser(parse_eos, "eos")


def _digits(session: ParseSession, start: int, value_start: int) -> Result[int]:
    """Fold the ASCII digit run at start into an int."""
    run = session.source.satisfy(start, _digit)
    if run.is_empty:
        return _fail(session, start, _INTEGER)
    if len(run) > MAX_INTEGER_DIGITS:
        return _fail(session, start, _INTEGER_TOO_LONG)
    return Result.success(run.end, int(session.source.text[value_start : run.end]))


def uint() -> Parser[int]:
    """Unsigned decimal integer: one or more ASCII digits.

    Values are Python ints, so there is no wraparound. A run longer than
    MAX_INTEGER_DIGITS fails with an UnexpectedError instead.

    Example:
        >>> parse(uint(), "1234 + 5678").value
        1234
    """

    def parse_uint(session: ParseSession, position: int) -> Result[int]:
        return _digits(session, position, position)

    return Parser(parse_uint, "uint")


def sint() -> Parser[int]:
    """Signed decimal integer: optional '+' or '-', then one or more digits."""

    def parse_sint(session: ParseSession, position: int) -> Result[int]:
        text = session.source.text
        start = position
        if position < len(text) and text[position] in "+-":
            start += 1
        return _digits(session, start, position)

    return Parser(parse_sint, "sint")


def pure[T](value: T) -> Parser[T]:
    """Succeed with value without consuming input."""

    def parse_pure(session: ParseSession, position: int) -> Result[T]:  # noqa: ARG001
        return Result.success(position, value)

    return Parser(parse_pure, f"pure({value!r})")


def fail(description: str | None = None) -> Parser[None]:
    """Fail without consuming input.

    Args:
        description: Reported as "unexpected <description>" when given
    """
    error = UnexpectedError(description) if description else None

    def parse_fail(session: ParseSession, position: int) -> Result[None]:
        if error is not None:
            session.emit(position, error)
        return Result.failure(position, error)

    return Parser(parse_fail, "fail")


def _discard(value: object) -> None:  # noqa: ARG001
    return None

