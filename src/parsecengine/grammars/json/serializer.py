"""Render JSON syntax trees as text and convert them to Python values.

Converts AST nodes back to JSON. Useful for:
- Pretty-printing parsed documents
- Property-based testing (roundtrip: render -> parse -> render)

Python 3.13+.
"""

import math

from parsecengine.constants import MAX_DEPTH
from parsecengine.core.depth_guard import DepthGuard

from .ast import (
    JsonArray,
    JsonBool,
    JsonNull,
    JsonNumber,
    JsonObject,
    JsonString,
    JsonValue,
)

__all__ = ["JsonSerializer", "render", "to_python"]

_ESCAPES: dict[str, str] = {
    '"': '\\"',
    "\\": "\\\\",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def _quote(text: str) -> str:
    """JSON string literal for text. Non-ASCII characters are kept as-is."""
    parts = ['"']
    for ch in text:
        escaped = _ESCAPES.get(ch)
        if escaped is not None:
            parts.append(escaped)
        elif ch < " ":
            parts.append(f"\\u{ord(ch):04x}")
        else:
            parts.append(ch)
    parts.append('"')
    return "".join(parts)


def _number(value: int | float) -> str:
    if isinstance(value, float):
        if not math.isfinite(value):
            msg = f"{value!r} has no JSON representation"
            raise ValueError(msg)
        return repr(value)
    return str(value)


class JsonSerializer:
    """Converts JSON AST to text.

    Thread-safe: all rendering state is local to the render() call.

    Usage:
        >>> serializer = JsonSerializer(indent=2)
        >>> print(serializer.render(JsonArray((JsonNumber(1), JsonNull()))))
        [
          1,
          null
        ]
    """

    __slots__ = ("_indent", "_max_depth")

    def __init__(self, indent: int | None = None, max_depth: int = MAX_DEPTH) -> None:
        """Initialize serializer.

        Args:
            indent: Spaces per nesting level; None renders compactly
            max_depth: Deepest container nesting accepted
        """
        self._indent = indent
        self._max_depth = max_depth

    def render(self, value: JsonValue) -> str:
        """Render value as a JSON document.

        Raises:
            DepthLimitExceededError: If containers nest deeper than max_depth
            ValueError: If a number is NaN or infinite
        """
        out: list[str] = []
        self._render(value, out, 0, DepthGuard(max_depth=self._max_depth))
        return "".join(out)

    def _newline(self, out: list[str], level: int) -> None:
        if self._indent is not None:
            out.append("\n" + " " * (self._indent * level))

    def _render(self, value: JsonValue, out: list[str], level: int, guard: DepthGuard) -> None:
        match value:
            case JsonNull():
                out.append("null")
            case JsonBool(value=flag):
                out.append("true" if flag else "false")
            case JsonNumber(value=number):
                out.append(_number(number))
            case JsonString(value=text):
                out.append(_quote(text))
            case JsonArray(items=()):
                out.append("[]")
            case JsonObject(members=()):
                out.append("{}")
            case JsonArray(items=items):
                with guard:
                    out.append("[")
                    for index, item in enumerate(items):
                        if index:
                            out.append(",")
                        self._newline(out, level + 1)
                        self._render(item, out, level + 1, guard)
                    self._newline(out, level)
                    out.append("]")
            case JsonObject(members=members):
                separator = ": " if self._indent is not None else ":"
                with guard:
                    out.append("{")
                    for index, (key, item) in enumerate(members):
                        if index:
                            out.append(",")
                        self._newline(out, level + 1)
                        out.append(_quote(key))
                        out.append(separator)
                        self._render(item, out, level + 1, guard)
                    self._newline(out, level)
                    out.append("}")


def render(value: JsonValue, indent: int | None = None) -> str:
    """Render value as JSON.

    Convenience function for JsonSerializer(indent).render().

    Example:
        >>> render(JsonObject((("x", JsonNumber(3)), ("y", JsonNull()))))
        '{"x":3,"y":null}'
    """
    return JsonSerializer(indent=indent).render(value)


def to_python(value: JsonValue) -> object:
    """Convert a JSON AST to plain Python values.

    Objects become dicts (a repeated key keeps its last value), arrays become
    lists, null becomes None.

    Raises:
        DepthLimitExceededError: If containers nest deeper than MAX_DEPTH
    """
    return _to_python(value, DepthGuard())


def _to_python(value: JsonValue, guard: DepthGuard) -> object:
    match value:
        case JsonNull():
            return None
        case JsonBool(value=flag):
            return flag
        case JsonNumber(value=number):
            return number
        case JsonString(value=text):
            return text
        case JsonArray(items=items):
            with guard:
                return [_to_python(item, guard) for item in items]
        case JsonObject(members=members):
            with guard:
                return {key: _to_python(item, guard) for key, item in members}
    msg = f"Not a JSON value: {value!r}"
    raise TypeError(msg)
