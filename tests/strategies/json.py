"""Hypothesis strategies for JSON syntax trees.

Events emitted:
- json_number_kind={int|float}: Number representation
- json_string_kind={empty|ascii|escaped|unicode}: String content class
- json_root={scalar|array|object}: Shape of the generated document
"""

from __future__ import annotations

from hypothesis import event
from hypothesis import strategies as st

from parsecengine.grammars.json import (
    JsonArray,
    JsonBool,
    JsonNull,
    JsonNumber,
    JsonObject,
    JsonString,
    JsonValue,
)

_ESCAPE_HEAVY = '"\\/\b\f\n\r\t\x00\x1f'


@st.composite
def json_numbers(draw: st.DrawFn) -> JsonNumber:
    """Ints and finite floats."""
    if draw(st.booleans()):
        event("json_number_kind=int")
        return JsonNumber(draw(st.integers(min_value=-(10**30), max_value=10**30)))
    event("json_number_kind=float")
    return JsonNumber(draw(st.floats(allow_nan=False, allow_infinity=False)))


@st.composite
def json_strings(draw: st.DrawFn) -> str:
    """String contents, including characters that must be escaped."""
    text = draw(
        st.one_of(
            st.text(alphabet=_ESCAPE_HEAVY + "ab", max_size=10),
            st.text(max_size=20),
        )
    )
    if not text:
        event("json_string_kind=empty")
    elif any(ch in _ESCAPE_HEAVY or ch < " " for ch in text):
        event("json_string_kind=escaped")
    elif text.isascii():
        event("json_string_kind=ascii")
    else:
        event("json_string_kind=unicode")
    return text


_scalars: st.SearchStrategy[JsonValue] = st.one_of(
    st.just(JsonNull()),
    st.booleans().map(JsonBool),
    json_numbers(),
    json_strings().map(JsonString),
)


def _containers(children: st.SearchStrategy[JsonValue]) -> st.SearchStrategy[JsonValue]:
    return st.one_of(
        st.lists(children, max_size=5).map(lambda items: JsonArray(tuple(items))),
        st.lists(st.tuples(json_strings(), children), max_size=5).map(
            lambda members: JsonObject(tuple(members))
        ),
    )


@st.composite
def json_values(draw: st.DrawFn) -> JsonValue:
    """Arbitrary JSON trees, bounded well below the nesting limit."""
    value = draw(st.recursive(_scalars, _containers, max_leaves=25))
    match value:
        case JsonArray():
            event("json_root=array")
        case JsonObject():
            event("json_root=object")
        case _:
            event("json_root=scalar")
    return value
