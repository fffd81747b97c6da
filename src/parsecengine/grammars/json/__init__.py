"""JSON demo grammar.

Public API:
    parse_json - Parse a JSON document into a JsonValue tree
    json_parser - The document grammar as a Parser
    render - Compact or indented JSON text from a tree
    to_python - Plain dict/list/str/int/float/bool/None from a tree
"""

from .ast import (
    JsonArray,
    JsonBool,
    JsonNull,
    JsonNumber,
    JsonObject,
    JsonString,
    JsonValue,
)
from .grammar import json_parser, parse_json
from .serializer import JsonSerializer, render, to_python

__all__ = [
    "JsonArray",
    "JsonBool",
    "JsonNull",
    "JsonNumber",
    "JsonObject",
    "JsonString",
    "JsonSerializer",
    "JsonValue",
    "json_parser",
    "parse_json",
    "render",
    "to_python",
]
