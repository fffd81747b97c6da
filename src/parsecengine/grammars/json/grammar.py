"""RFC 8259 JSON grammar.

Python 3.13+.
"""

import math

from parsecengine.config import ParseConfig
from parsecengine.constants import MAX_INTEGER_DIGITS
from parsecengine.syntax.parser import (
    ForwardRef,
    ParseOutcome,
    Parser,
    ParserDriver,
    any_of,
    between,
    char,
    choice,
    eos,
    fail,
    many,
    many_sep,
    not_followed_by,
    optional,
    pure,
    recognize,
    satisfy,
    sequence,
    skip_whitespace,
    string,
)
from parsecengine.syntax.source import SubString

from .ast import (
    JsonArray,
    JsonBool,
    JsonNull,
    JsonNumber,
    JsonObject,
    JsonString,
    JsonValue,
)

__all__ = ["json_parser", "parse_json"]

# Insignificant whitespace per RFC 8259 section 2.
_WHITESPACE: str = " \t\n\r"

_HEX_DIGITS: frozenset[str] = frozenset("0123456789abcdefABCDEF")

_ESCAPES: dict[str, str] = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}

# UTF-16 surrogate ranges. A high surrogate escape must be followed by a
# low surrogate escape; the pair encodes one supplementary code point.
_HIGH_SURROGATES = range(0xD800, 0xDC00)
_LOW_SURROGATES = range(0xDC00, 0xE000)


def _digit(offset: int, ch: str) -> bool:  # noqa: ARG001 - CharPredicate signature
    return "0" <= ch <= "9"


def _nonzero_lead(offset: int, ch: str) -> bool:
    return ("1" if offset == 0 else "0") <= ch <= "9"


def _hex(offset: int, ch: str) -> bool:  # noqa: ARG001
    return ch in _HEX_DIGITS


def _unescaped(offset: int, ch: str) -> bool:  # noqa: ARG001
    return ch not in '"\\' and ch >= " "


def _to_number(run: SubString) -> Parser[JsonNumber]:
    text = str(run)
    if not any(ch in text for ch in ".eE"):
        return pure(JsonNumber(int(text)))
    value = float(text)
    # Exponents past the float range round to inf, which has no JSON rendering.
    if not math.isfinite(value):
        return fail("number out of range")
    return pure(JsonNumber(value))


def _code_unit(run: SubString) -> int:
    return int(str(run), 16)


def _build() -> Parser[JsonValue]:
    whitespace = skip_whitespace(_WHITESPACE)

    def token[T](parser: Parser[T]) -> Parser[T]:
        return parser << whitespace

    value = ForwardRef[JsonValue]("value")

    # Literals
    null = string("null") >> pure(JsonNull())
    true = string("true") >> pure(JsonBool(True))
    false = string("false") >> pure(JsonBool(False))

    # Numbers: -?(0|[1-9][0-9]*)(\.[0-9]+)?([eE][+-]?[0-9]+)?
    digits = satisfy("digit", _digit)
    integer_part = choice(
        char("0") << not_followed_by(digits, "digit after leading zero"),
        satisfy("digit", _nonzero_lead, at_most=MAX_INTEGER_DIGITS),
    )
    fraction = char(".") >> digits
    exponent = any_of("eE") >> optional(any_of("+-")) >> digits
    number = recognize(
        sequence(optional(char("-")), integer_part, optional(fraction), optional(exponent))
    ).bind(_to_number)

    # Strings
    hex4 = satisfy("hex digit", _hex, at_least=4, at_most=4).map(_code_unit)

    def pair_surrogate(high: int) -> Parser[str]:
        if high in _LOW_SURROGATES:
            return fail("unpaired surrogate")
        if high not in _HIGH_SURROGATES:
            return pure(chr(high))

        def combine(low: int) -> Parser[str]:
            if low not in _LOW_SURROGATES:
                return fail("unpaired surrogate")
            return pure(chr(0x10000 + ((high - 0xD800) << 10) + (low - 0xDC00)))

        return (string("\\u") >> hex4).label("low surrogate escape").bind(combine)

    simple_escape = any_of("".join(_ESCAPES)).map(_ESCAPES.__getitem__)
    unicode_escape = char("u") >> hex4.bind(pair_surrogate)
    escape = char("\\") >> choice(simple_escape, unicode_escape).label("escape sequence")
    unescaped = satisfy("character", _unescaped).map(str)
    chunks = many(choice(unescaped, escape))
    json_string = between(char('"'), chunks.map("".join), char('"')).label("string")

    # Containers
    comma = token(char(","))
    array = between(token(char("[")), many_sep(value.parser, comma), char("]")).map(
        lambda items: JsonArray(tuple(items))
    )
    member = sequence(token(json_string) << token(char(":")), value.parser)
    obj = between(token(char("{")), many_sep(member, comma), char("}")).map(
        lambda members: JsonObject(tuple(members))
    )

    value.define(
        token(
            choice(
                obj,
                array,
                json_string.map(JsonString),
                number,
                true,
                false,
                null,
            ).label("value")
        )
    )

    return whitespace >> value.parser << eos()


_DOCUMENT: Parser[JsonValue] = _build()


def json_parser() -> Parser[JsonValue]:
    """The full-document JSON grammar (surrounding whitespace allowed)."""
    return _DOCUMENT


def parse_json(text: str, config: ParseConfig | None = None) -> ParseOutcome[JsonValue]:
    """Parse text as one JSON document.

    Example:
        >>> parse_json('{"x":3, "y":null}').value
        JsonObject(members=(('x', JsonNumber(value=3)), ('y', JsonNull())))
    """
    return ParserDriver(config).parse(_DOCUMENT, text)
