"""Parse configuration for ParserDriver.

Provides a single frozen dataclass that encapsulates every tunable of a
top-level parse: input limits, nesting depth, diagnostic excerpt size,
output style and whether the diagnostic pass runs at all.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass

from parsecengine.constants import (
    DEFAULT_CONTEXT_LINES,
    DEFAULT_CONTEXT_WIDTH,
    MAX_DEPTH,
    MAX_SOURCE_SIZE,
)
from parsecengine.enums import OutputFormat

__all__ = ["ParseConfig"]


@dataclass(frozen=True, slots=True)
class ParseConfig:
    """Immutable configuration for a top-level parse.

    All fields have sensible defaults; constructing ``ParseConfig()`` with
    no arguments produces a usable configuration. Pass an instance to
    ``ParserDriver(config)`` or ``parse(parser, text, config=...)``.

    Attributes:
        max_source_size: Maximum accepted input length in characters
            (default: 10 MB). Longer input fails without running the grammar.
        max_nesting_depth: Maximum forward-reference nesting (default: 64).
            Clamped against the interpreter recursion limit.
        context_lines: Source lines shown around the failing line (default: 1).
        context_width: Characters shown either side of the failure column
            before a long line is clipped (default: 40).
        output_format: Style of ``ParseOutcome.message`` (default: rust).
        collect_diagnostics: Re-run a failed parse in collection mode to list
            every alternative tried at the failure site (default: True). When
            False, the message is built from the single-pass error tree.

    Example:
        >>> from parsecengine import OutputFormat, ParseConfig, parse, uint
        >>> config = ParseConfig(output_format=OutputFormat.SIMPLE)
        >>> parse(uint(), "x", config=config).message
        "UNEXPECTED_INPUT: expected integer at 1:1, found 'x'"
    """

    max_source_size: int = MAX_SOURCE_SIZE
    max_nesting_depth: int = MAX_DEPTH
    context_lines: int = DEFAULT_CONTEXT_LINES
    context_width: int = DEFAULT_CONTEXT_WIDTH
    output_format: OutputFormat = OutputFormat.RUST
    collect_diagnostics: bool = True

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            ValueError: If a size or depth is not positive, or if
                context_lines is negative.
        """
        if self.max_source_size <= 0:
            msg = "max_source_size must be positive"
            raise ValueError(msg)
        if self.max_nesting_depth <= 0:
            msg = "max_nesting_depth must be positive"
            raise ValueError(msg)
        if self.context_lines < 0:
            msg = "context_lines must be >= 0"
            raise ValueError(msg)
        if self.context_width <= 0:
            msg = "context_width must be positive"
            raise ValueError(msg)
