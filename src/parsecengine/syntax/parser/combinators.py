"""Combinators: parsers built from parsers.

Every combinator returns a new Parser and leaves its arguments untouched.
Failures are ordinary return values; nothing here raises while parsing.

Error bookkeeping follows one rule: a combinator that observed several
failures keeps the explanation recorded at the deepest error_position,
because the branch that got furthest before giving up is the most useful
one to report. Explanations at the same position are kept together.
"""

import logging
from collections.abc import Callable

from parsecengine.diagnostics import GrammarError
from parsecengine.diagnostics.templates import ErrorTemplate
from parsecengine.syntax.errors import ExpectedError, GroupError, UnexpectedError, fork
from parsecengine.syntax.result import Result
from parsecengine.syntax.session import ParseSession
from parsecengine.syntax.source import SubString

from .base import Parser, check_bounds

__all__ = [
    "between",
    "bind",
    "choice",
    "either",
    "keep_left",
    "keep_right",
    "label",
    "lookahead",
    "many",
    "many_sep",
    "not_followed_by",
    "optional",
    "pmap",
    "recognize",
    "record",
    "sep_fold",
    "sequence",
    "traced",
]

logger = logging.getLogger(__name__)


# ============================================================================
# SEQUENCING
# ============================================================================


def keep_left[T](first: Parser[T], second: Parser[object]) -> Parser[T]:
    """Run first then second; produce first's value at second's end."""

    def parse_keep_left(session: ParseSession, position: int) -> Result[T]:
        left = first.fn(session, position)
        if not left.ok:
            return left
        right = second.fn(session, left.position)
        if not right.ok:
            return right.merge_with(left)
        return Result.success(right.position, left.value).merge_with(left).merge_with(right)

    return Parser(parse_keep_left, f"{first.name} << {second.name}")


def keep_right[U](first: Parser[object], second: Parser[U]) -> Parser[U]:
    """Run first then second; produce second's value."""

    def parse_keep_right(session: ParseSession, position: int) -> Result[U]:
        left = first.fn(session, position)
        if not left.ok:
            return left
        return second.fn(session, left.position).merge_with(left)

    return Parser(parse_keep_right, f"{first.name} >> {second.name}")


def bind[T, U](parser: Parser[T], continuation: Callable[[T], Parser[U]]) -> Parser[U]:
    """Monadic bind: choose the next parser from the value just parsed.

    Example:
        >>> # a length prefix followed by exactly that many letters
        >>> counted = uint().bind(lambda n: many(any_of("ab"), n, n))
    """

    def parse_bind(session: ParseSession, position: int) -> Result[U]:
        first = parser.fn(session, position)
        if not first.ok:
            return first
        return continuation(first.value).fn(session, first.position).merge_with(first)

    return Parser(parse_bind, f"bind({parser.name})")


def pmap[T, U](parser: Parser[T], transform: Callable[[T], U]) -> Parser[U]:
    """Apply a pure transform to the value of a successful match."""

    def parse_map(session: ParseSession, position: int) -> Result[U]:
        result = parser.fn(session, position)
        if not result.ok:
            return result
        return result.with_value(transform(result.value))

    return Parser(parse_map, parser.name)


def sequence(*parsers: Parser[object]) -> Parser[tuple[object, ...]]:
    """Run parsers in order, collecting their values into a tuple."""

    def parse_sequence(session: ParseSession, position: int) -> Result[tuple[object, ...]]:
        values: list[object] = []
        trail: Result[object] = Result.success(position, None)
        for parser in parsers:
            result = parser.fn(session, trail.position)
            trail = result.merge_with(trail)
            if not result.ok:
                return trail
            values.append(result.value)
        return Result.success(trail.position, tuple(values)).merge_with(trail)

    return Parser(parse_sequence, "sequence")


def record(**fields: Parser[object]) -> Parser[dict[str, object]]:
    """Run named parsers in keyword order, collecting a dict of their values.

    Example:
        >>> point = record(x=sint() << char(","), y=sint())
        >>> parse(point, "3,-4").value
        {'x': 3, 'y': -4}
    """
    names = tuple(fields)
    return pmap(sequence(*fields.values()), lambda values: dict(zip(names, values, strict=True)))


def between[T](open_: Parser[object], parser: Parser[T], close: Parser[object]) -> Parser[T]:
    """``open_ >> parser << close``: bracketed structures."""

    def parse_between(session: ParseSession, position: int) -> Result[T]:
        start = open_.fn(session, position)
        if not start.ok:
            return start
        inner = parser.fn(session, start.position).merge_with(start)
        if not inner.ok:
            return inner
        end = close.fn(session, inner.position).merge_with(inner)
        if not end.ok:
            return end
        return end.with_value(inner.value)

    return Parser(parse_between, f"between({parser.name})")


# ============================================================================
# REPETITION
# ============================================================================


def _stopped_short[T](
    session: ParseSession, parser: Parser[object], trail: Result[object]
) -> Result[list[T]]:
    """Failure for a repetition that an empty match ended below its minimum."""
    missing = ExpectedError(parser.name)
    session.emit(trail.position, missing)
    return Result.failure(trail.position, missing).merge_with(trail)


def many[T](parser: Parser[T], at_least: int = 0, at_most: int | None = None) -> Parser[list[T]]:
    """Repeat parser greedily, between at_least and at_most times.

    Stops at the first failure or once at_most values are collected.
    A success that consumed nothing ends the repetition after its value is
    kept, so a parser that can match empty never loops forever.

    Raises:
        GrammarError: If the bounds are negative or inverted
    """
    check_bounds("many", at_least, at_most)

    def parse_many(session: ParseSession, position: int) -> Result[list[T]]:
        values: list[T] = []
        trail: Result[object] = Result.success(position, None)
        while at_most is None or len(values) < at_most:
            result = parser.fn(session, trail.position)
            if not result.ok:
                if len(values) < at_least:
                    return result.merge_with(trail)
                trail = trail.merge_with(result)
                break
            values.append(result.value)
            consumed = result.position > trail.position
            trail = result.merge_with(trail)
            if not consumed:
                break
        if len(values) < at_least:
            return _stopped_short(session, parser, trail)
        return Result.success(trail.position, values).merge_with(trail)

    return Parser(parse_many, f"many({parser.name})")


def many_sep[T](
    parser: Parser[T],
    separator: Parser[object],
    at_least: int = 0,
    at_most: int | None = None,
    allow_trailing: bool = False,
) -> Parser[list[T]]:
    """Items separated by separator: ``item (sep item)*``.

    After each item the separator is tried. If it fails, the list ends.
    If it matches but no item follows, the parse fails, unless
    allow_trailing is set, in which case the list ends after the separator.

    Raises:
        GrammarError: If the bounds are negative or inverted
    """
    check_bounds("many_sep", at_least, at_most)

    def parse_many_sep(session: ParseSession, position: int) -> Result[list[T]]:
        values: list[T] = []
        if at_most == 0:
            return Result.success(position, values)
        first = parser.fn(session, position)
        if not first.ok:
            if at_least > 0:
                return first
            return Result.success(position, values).merge_with(first)
        values.append(first.value)
        trail: Result[object] = first
        while at_most is None or len(values) < at_most:
            sep = separator.fn(session, trail.position)
            if not sep.ok:
                trail = trail.merge_with(sep)
                break
            item = parser.fn(session, sep.position)
            if not item.ok:
                if allow_trailing:
                    trail = sep.merge_with(trail).merge_with(item)
                    break
                return item.merge_with(sep).merge_with(trail)
            values.append(item.value)
            consumed = item.position > trail.position
            trail = item.merge_with(sep).merge_with(trail)
            if not consumed:
                break
        if len(values) < at_least:
            return _stopped_short(session, parser, trail)
        return Result.success(trail.position, values).merge_with(trail)

    return Parser(parse_many_sep, f"many_sep({parser.name})")


def sep_fold[T, S](
    parser: Parser[T],
    separator: Parser[S],
    combine: Callable[[T, S, T], T],
) -> Parser[T]:
    """Left-associative fold over ``item (sep item)*``.

    ``a - b - c`` folds to ``combine(combine(a, '-', b), '-', c)``, which is
    exactly one binary-operator precedence level. A separator with no item
    after it is a failure.
    """

    def parse_sep_fold(session: ParseSession, position: int) -> Result[T]:
        first = parser.fn(session, position)
        if not first.ok:
            return first
        accumulator = first.value
        trail: Result[object] = first
        while True:
            sep = separator.fn(session, trail.position)
            if not sep.ok:
                trail = trail.merge_with(sep)
                break
            item = parser.fn(session, sep.position)
            if not item.ok:
                return item.merge_with(sep).merge_with(trail)
            accumulator = combine(accumulator, sep.value, item.value)
            consumed = item.position > trail.position
            trail = item.merge_with(sep).merge_with(trail)
            if not consumed:
                break
        return Result.success(trail.position, accumulator).merge_with(trail)

    return Parser(parse_sep_fold, f"sep_fold({parser.name})")


def optional[T, D](parser: Parser[T], default: D = None) -> Parser[T | D]:  # type: ignore[assignment]
    """Match parser, or succeed with default at the original position.

    Never fails. A failed attempt never moves the position, though its
    error is kept as a possible explanation of what comes next.
    """

    def parse_optional(session: ParseSession, position: int) -> Result[T | D]:
        result = parser.fn(session, position)
        if result.ok:
            return result
        return Result.success(position, default).merge_with(result)

    return Parser(parse_optional, f"optional({parser.name})")


# ============================================================================
# CHOICE
# ============================================================================


def choice[T](*alternatives: Parser[T]) -> Parser[T]:
    """Ordered choice: the first alternative that succeeds wins.

    When every alternative fails, the result explains all of them that got
    furthest: their errors are grouped at the deepest error position and
    shallower explanations are discarded.

    Raises:
        GrammarError: If no alternatives are given
    """
    if not alternatives:
        raise GrammarError(ErrorTemplate.empty_choice())
    if len(alternatives) == 1:
        return alternatives[0]

    def parse_choice(session: ParseSession, position: int) -> Result[T]:
        failures: list[Result[T]] = []
        for alternative in alternatives:
            result = alternative.fn(session, position)
            if result.ok:
                for failure in failures:
                    result = result.merge_with(failure)
                return result
            failures.append(result)
        deepest = max(failure.error_position for failure in failures)
        errors = tuple(
            failure.error
            for failure in failures
            if failure.error_position == deepest and failure.error is not None
        )
        furthest = max(failure.position for failure in failures)
        match errors:
            case ():
                error = None
            case (single,):
                error = single
            case _:
                error = GroupError(errors)
        return Result(furthest, False, None, error, deepest)

    return Parser(parse_choice, " | ".join(alt.name for alt in alternatives))


def either[T, U](first: Parser[T], second: Parser[U]) -> Parser[T | U]:
    """Two-way alternation.

    Tries first, then second from the same position. When both fail, the
    one whose error lies further ahead is reported; a tie reports both as
    a ForkError.
    """

    def parse_either(session: ParseSession, position: int) -> Result[T | U]:
        left = first.fn(session, position)
        if left.ok:
            return left
        right = second.fn(session, position)
        if right.ok:
            return right.merge_with(left)
        if left.error_position > right.error_position:
            return left
        if left.error_position < right.error_position:
            return right
        return Result(
            max(left.position, right.position),
            False,
            None,
            fork(left.error, right.error),
            left.error_position,
        )

    return Parser(parse_either, f"{first.name} | {second.name}")


# ============================================================================
# LOOKAHEAD AND REPORTING
# ============================================================================


def recognize(parser: Parser[object]) -> Parser[SubString]:
    """Run parser and produce the input it consumed instead of its value."""

    def parse_recognize(session: ParseSession, position: int) -> Result[SubString]:
        result = parser.fn(session, position)
        if not result.ok:
            return result
        return result.with_value(SubString(session.source.text, position, result.position))

    return Parser(parse_recognize, f"recognize({parser.name})")


def lookahead[T](parser: Parser[T]) -> Parser[T]:
    """Match parser without consuming input."""

    def parse_lookahead(session: ParseSession, position: int) -> Result[T]:
        result = parser.fn(session, position)
        if not result.ok:
            return result
        return Result.success(position, result.value)

    return Parser(parse_lookahead, f"lookahead({parser.name})")


def not_followed_by(parser: Parser[object], description: str | None = None) -> Parser[None]:
    """Succeed, consuming nothing, only where parser does not match.

    A match is reported as "unexpected <description>" at the start
    position; without a description, the matched text is quoted instead.
    Errors raised by the inner attempt are never reported.
    """

    def parse_not_followed_by(session: ParseSession, position: int) -> Result[None]:
        mark = session.mark()
        result = parser.fn(session, position)
        session.rewind(mark)
        if not result.ok:
            return Result.success(position, None)
        if description is None:
            found = repr(session.source.text[position : result.position])
        else:
            found = description
        error = UnexpectedError(found)
        session.emit(position, error)
        return Result.failure(position, error)

    return Parser(parse_not_followed_by, f"not_followed_by({parser.name})")


def label[T](parser: Parser[T], description: str) -> Parser[T]:
    """Name what parser matches for error messages.

    Any explanation the inner parser produced at the start position is
    replaced with "expected <description>"; explanations further ahead, for
    input the parser had already committed to, are left alone.
    """
    expected = ExpectedError(description)

    def parse_label(session: ParseSession, position: int) -> Result[T]:
        mark = session.mark()
        result = parser.fn(session, position)
        if session.error_position == position and session.mark() > mark:
            session.rewind(mark)
            session.emit(position, expected)
        if result.error_position == position:
            return Result(result.position, result.ok, result.value, expected, position)
        return result

    return Parser(parse_label, description)


def traced[T](parser: Parser[T], name: str | None = None) -> Parser[T]:
    """Log entry and exit of parser at DEBUG level.

    Example:
        >>> logging.basicConfig(level=logging.DEBUG)
        >>> term = traced(term, "term")
    """
    tag = name or parser.name

    def parse_traced(session: ParseSession, position: int) -> Result[T]:
        logger.debug("enter %s at %d", tag, position)
        result = parser.fn(session, position)
        logger.debug(
            "exit %s at %d: %s at %d",
            tag,
            position,
            "ok" if result.ok else "failed",
            result.position,
        )
        return result

    return Parser(parse_traced, tag)
