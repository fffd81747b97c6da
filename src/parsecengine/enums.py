"""Enumerations for ParsecEngine type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class OutputFormat(StrEnum):
    """Output format options for diagnostic formatting.

    StrEnum provides automatic string conversion: str(OutputFormat.RUST) == "rust"
    """

    RUST = "rust"
    """Rust compiler-style output with source excerpt and caret (default)"""

    SIMPLE = "simple"
    """Single-line format: CODE: message"""

    JSON = "json"
    """JSON object for tooling integration"""


class ErrorKind(StrEnum):
    """Kind of a leaf error node collected during parsing.

    StrEnum provides automatic string conversion: str(ErrorKind.EXPECTED) == "expected"
    """

    EXPECTED = "expected"
    """A specific token or character class was required and absent"""

    UNEXPECTED = "unexpected"
    """An explicit rejection, such as a failed negative lookahead"""


__all__ = [
    "ErrorKind",
    "OutputFormat",
]
