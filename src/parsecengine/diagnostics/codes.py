"""Diagnostic codes and data structures.

Defines error codes, source spans, and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "SourceSpan",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Grammar definition errors (raised at construction time)
        3000-3999: Syntax errors (reported by a failed parse)
        4000-4999: Evaluation errors (demo grammar collaborators)
    """

    # Grammar definition errors (1000-1999)
    UNRESOLVED_REFERENCE = 1001
    REFERENCE_ALREADY_DEFINED = 1002
    INVALID_REPETITION_BOUNDS = 1003
    INVALID_LITERAL = 1004
    EMPTY_CHOICE = 1005

    # Syntax errors (3000-3999)
    UNEXPECTED_EOF = 3001
    UNEXPECTED_INPUT = 3002
    NESTING_DEPTH_EXCEEDED = 3005
    SOURCE_TOO_LARGE = 3006

    # Evaluation errors (4000-4999)
    UNKNOWN_VARIABLE = 4001
    DIVISION_BY_ZERO = 4002


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Source code location for error reporting.

    Note:
        Python strings measure positions in characters (Unicode code points),
        not bytes. For multi-byte UTF-8 characters, character offset differs
        from byte offset.

    Attributes:
        start: Starting character offset (0-indexed)
        end: Ending character offset (exclusive)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """

    start: int
    end: int
    line: int
    column: int

    def __post_init__(self) -> None:
        """Validate SourceSpan invariants.

        Raises:
            ValueError: If start is negative, end precedes start, line is
                less than 1 (lines are 1-indexed), or column is less than 1
                (columns are 1-indexed).
        """
        if self.start < 0:
            msg = f"SourceSpan.start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"SourceSpan.end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)
        if self.line < 1:
            msg = f"SourceSpan.line must be >= 1 (1-indexed), got {self.line}"
            raise ValueError(msg)
        if self.column < 1:
            msg = f"SourceSpan.column must be >= 1 (1-indexed), got {self.column}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics. Provides rich error information
    for both humans and tools.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        span: Source location (None for grammar definition errors)
        hint: Suggestion for fixing the error
        expected: Sorted, deduplicated descriptions of what would have matched
        unexpected: Sorted, deduplicated descriptions of explicit rejections
        found: Rendering of the input at the failure site ("end of input" at EOF)
        context: Pre-rendered source excerpt with caret (Rust output only)
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    span: SourceSpan | None = None
    hint: str | None = None
    expected: tuple[str, ...] = ()
    unexpected: tuple[str, ...] = ()
    found: str | None = None
    context: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Delegates to DiagnosticFormatter for consistent output.

        Example output:
            error[UNEXPECTED_INPUT]: expected '(', identifier or integer
              --> line 1, column 5
                |
              1 | 1 + )
                |     ^
              = found: ')'

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
