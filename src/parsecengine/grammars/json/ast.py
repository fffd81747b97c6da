"""JSON syntax tree.

All nodes are frozen dataclasses; object members keep their source order
and may repeat a key, exactly as written.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = [
    "JsonArray",
    "JsonBool",
    "JsonNull",
    "JsonNumber",
    "JsonObject",
    "JsonString",
    "JsonValue",
]


@dataclass(frozen=True, slots=True)
class JsonNull:
    """``null``"""


@dataclass(frozen=True, slots=True)
class JsonBool:
    """``true`` or ``false``"""

    value: bool


@dataclass(frozen=True, slots=True)
class JsonNumber:
    """Number literal.

    Literals with a fraction or exponent are floats, all others ints.
    """

    value: int | float


@dataclass(frozen=True, slots=True)
class JsonString:
    """String literal with escapes decoded."""

    value: str


@dataclass(frozen=True, slots=True)
class JsonArray:
    """``[item, ...]``"""

    items: tuple[JsonValue, ...] = ()


@dataclass(frozen=True, slots=True)
class JsonObject:
    """``{"key": value, ...}`` as ordered (key, value) pairs."""

    members: tuple[tuple[str, JsonValue], ...] = ()

    def get(self, key: str) -> JsonValue | None:
        """Value of the last member named key, or None."""
        for name, value in reversed(self.members):
            if name == key:
                return value
        return None


type JsonValue = JsonNull | JsonBool | JsonNumber | JsonString | JsonArray | JsonObject
