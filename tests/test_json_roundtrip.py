"""Property-based tests for the JSON renderer and grammar together.

Python 3.13+.
"""

from __future__ import annotations

import json
import math

import pytest
from hypothesis import given, settings

from parsecengine.core.depth_guard import DepthLimitExceededError
from parsecengine.grammars.json import (
    JsonArray,
    JsonBool,
    JsonNull,
    JsonNumber,
    JsonObject,
    JsonSerializer,
    JsonString,
    JsonValue,
    parse_json,
    render,
    to_python,
)
from tests.strategies import json_strings, json_values

# ============================================================================
# RENDERING
# ============================================================================


class TestRender:
    """Test the renderer on fixed inputs."""

    def test_compact(self) -> None:
        """Compact output has no whitespace."""
        value = JsonObject((("x", JsonNumber(3)), ("y", JsonNull())))

        assert render(value) == '{"x":3,"y":null}'

    def test_indented(self) -> None:
        """Indented output puts each item on its own line."""
        value = JsonObject((("a", JsonArray((JsonNumber(1), JsonBool(False)))),))

        assert render(value, indent=2) == (
            '{\n  "a": [\n    1,\n    false\n  ]\n}'
        )

    def test_empty_containers(self) -> None:
        """Empty containers stay on one line even when indenting."""
        assert render(JsonArray(), indent=4) == "[]"
        assert render(JsonObject(), indent=4) == "{}"

    def test_string_escapes(self) -> None:
        """Quotes, backslashes and control characters are escaped."""
        assert render(JsonString('a"b\\c\n\x01é')) == '"a\\"b\\\\c\\n\\u0001é"'

    def test_floats(self) -> None:
        """Floats use their shortest repr; non-finite floats are rejected."""
        assert render(JsonNumber(1.5)) == "1.5"
        assert render(JsonNumber(1e16)) == "1e+16"
        with pytest.raises(ValueError, match="no JSON representation"):
            render(JsonNumber(math.inf))

    def test_depth_limit(self) -> None:
        """Rendering nests no deeper than max_depth."""
        value: JsonValue = JsonNumber(0)
        for _ in range(10):
            value = JsonArray((value,))

        assert JsonSerializer(max_depth=10).render(value).count("[") == 10
        with pytest.raises(DepthLimitExceededError):
            JsonSerializer(max_depth=9).render(value)

    def test_to_python_depth_limit(self) -> None:
        """to_python() refuses trees deeper than the default limit."""
        value: JsonValue = JsonNull()
        for _ in range(100):
            value = JsonArray((value,))

        with pytest.raises(DepthLimitExceededError):
            to_python(value)


# ============================================================================
# ROUNDTRIP PROPERTIES
# ============================================================================


class TestRoundtrip:
    """render() and parse_json() are inverses."""

    @given(json_values())
    @settings(max_examples=300)
    def test_compact_roundtrip(self, value: JsonValue) -> None:
        """PROPERTY: parse_json(render(v)) == v."""
        outcome = parse_json(render(value))

        assert outcome.ok, outcome.message
        assert outcome.value == value

    @given(json_values())
    @settings(max_examples=100)
    def test_indented_roundtrip(self, value: JsonValue) -> None:
        """PROPERTY: indentation does not change the parsed tree."""
        outcome = parse_json(render(value, indent=2))

        assert outcome.ok, outcome.message
        assert outcome.value == value

    @given(json_values())
    @settings(max_examples=200)
    def test_agrees_with_stdlib(self, value: JsonValue) -> None:
        """PROPERTY: the standard json module reads the rendering the same way."""
        text = render(value)

        assert json.loads(text) == to_python(value)

    @given(json_strings())
    @settings(max_examples=300)
    def test_string_roundtrip(self, text: str) -> None:
        """PROPERTY: every string survives quoting and unquoting."""
        assert parse_json(render(JsonString(text))).value == JsonString(text)

    @given(json_values())
    @settings(max_examples=100)
    def test_stdlib_output_parses(self, value: JsonValue) -> None:
        """PROPERTY: json.dumps() output of the same data parses to equal Python data."""
        data = to_python(value)
        outcome = parse_json(json.dumps(data))

        assert outcome.ok, outcome.message
        assert outcome.value is not None
        assert to_python(outcome.value) == data
