"""Hypothesis strategies for ParsecEngine property-based testing.

This package provides reusable strategies for generating test data
across multiple test modules. Strategies are organized by domain:

- text: Arbitrary input text and positions for primitive parsers
- json: JSON syntax trees for the JSON grammar
- calculator: Expression trees and variable bindings for the calculator

Usage:
    from tests.strategies import json_values, expressions
    from tests.strategies.text import parser_inputs

Event-Emitting Strategies (HypoFuzz-Optimized):
    These strategies emit hypothesis.event() calls for coverage-guided fuzzing:
    - json_values, json_numbers, json_strings
    - expressions
"""

from .calculator import expressions, identifiers, variable_bindings
from .json import json_numbers, json_strings, json_values
from .text import ascii_text, literal_texts, parser_inputs, positions

__all__ = [
    "ascii_text",
    "expressions",
    "identifiers",
    "json_numbers",
    "json_strings",
    "json_values",
    "literal_texts",
    "parser_inputs",
    "positions",
    "variable_bindings",
]
