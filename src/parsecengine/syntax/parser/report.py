"""Turn collected error nodes into a Diagnostic.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Iterable

from parsecengine.config import ParseConfig
from parsecengine.diagnostics import Diagnostic, SourceSpan
from parsecengine.diagnostics.templates import ErrorTemplate
from parsecengine.syntax.errors import ErrorNode, join_alternatives, summarize
from parsecengine.syntax.position import get_error_context
from parsecengine.syntax.source import Source

__all__ = ["build_diagnostic", "describe_found", "summary_line"]

_GENERIC_SUMMARY = "parse error"


def summary_line(expected: tuple[str, ...], unexpected: tuple[str, ...]) -> str:
    """One-line explanation of a failure.

    Example:
        >>> summary_line(("'('", "identifier", "integer"), ())
        "expected '(', identifier or integer"
        >>> summary_line(("digit",), ("'0'",))
        "expected digit; unexpected '0'"
    """
    parts: list[str] = []
    if expected:
        parts.append(f"expected {join_alternatives(expected, 'or')}")
    if unexpected:
        parts.append(f"unexpected {join_alternatives(unexpected, 'and')}")
    return "; ".join(parts) or _GENERIC_SUMMARY


def describe_found(source: Source, position: int) -> str:
    """Render the character at position ("end of input" at EOF)."""
    found = source.peek(position)
    if found is None:
        return "end of input"
    return repr(found)


def build_diagnostic(
    source: Source,
    position: int,
    nodes: Iterable[ErrorNode],
    config: ParseConfig,
) -> Diagnostic:
    """Build the diagnostic for a parse that failed at position.

    Args:
        source: Input buffer
        position: Furthest failure position
        nodes: Error trees explaining the failure at that position
        config: Context excerpt settings

    Returns:
        UNEXPECTED_EOF or UNEXPECTED_INPUT diagnostic
    """
    expected, unexpected = summarize(nodes)
    text = source.text
    position = min(position, len(text))
    line, column = source.compute_line_col(position)
    span = SourceSpan(
        start=position,
        end=min(position + 1, len(text)),
        line=line,
        column=column,
    )
    return ErrorTemplate.parse_failed(
        summary_line(expected, unexpected),
        span,
        at_eof=source.at_end(position),
        expected=expected,
        unexpected=unexpected,
        found=describe_found(source, position),
        context=get_error_context(text, position, config.context_lines, config.context_width),
    )
