"""Position utilities for parser input.

Helper functions for converting character offsets to line/column positions
and for rendering the source excerpt shown under a parse diagnostic.
"""

from parsecengine.constants import DEFAULT_CONTEXT_LINES, DEFAULT_CONTEXT_WIDTH

__all__ = [
    "column_offset",
    "get_error_context",
    "line_offset",
]

_ELLIPSIS = "..."


def line_offset(source: str, pos: int) -> int:
    """Get 0-based line number from character offset.

    Args:
        source: Complete input text
        pos: Character offset in source

    Returns:
        0-based line number

    Example:
        >>> source = "line1\\nline2\\nline3"
        >>> line_offset(source, 0)
        0
        >>> line_offset(source, 6)
        1
    """
    if pos < 0:
        msg = f"Position must be >= 0, got {pos}"
        raise ValueError(msg)
    pos = min(pos, len(source))
    return source.count("\n", 0, pos)


def column_offset(source: str, pos: int) -> int:
    """Get 0-based column number from character offset.

    Args:
        source: Complete input text
        pos: Character offset in source

    Returns:
        0-based column number (characters from line start)

    Example:
        >>> source = "hello\\nworld"
        >>> column_offset(source, 2)
        2
        >>> column_offset(source, 6)
        0
    """
    if pos < 0:
        msg = f"Position must be >= 0, got {pos}"
        raise ValueError(msg)
    pos = min(pos, len(source))
    line_start = source.rfind("\n", 0, pos)
    if line_start == -1:
        return pos
    return pos - line_start - 1


def _clip(line: str, window_start: int, window_end: int) -> str:
    """Cut line to [window_start, window_end), marking removed text."""
    clipped = line[window_start:window_end]
    if window_start > 0:
        clipped = _ELLIPSIS + clipped
    if window_end < len(line):
        clipped += _ELLIPSIS
    return clipped


def get_error_context(
    source: str,
    pos: int,
    context_lines: int = DEFAULT_CONTEXT_LINES,
    context_width: int = DEFAULT_CONTEXT_WIDTH,
    marker: str = "^",
) -> str:
    """Get formatted error context showing position in source.

    Creates a gutter-numbered excerpt with the failing line, up to
    context_lines lines on either side, and a marker under the failing
    column. Lines longer than the window are clipped horizontally around
    the failing column, with "..." marking the removed text.

    Args:
        source: Complete input text
        pos: Character offset of the error (may equal len(source))
        context_lines: Number of lines to show before/after error
        context_width: Characters kept on each side of the error column
        marker: Character to use for error marker

    Returns:
        Formatted error context string

    Example:
        >>> print(get_error_context("a = 1\\nb = )\\nc = 3", 10, context_lines=1))
          |
        1 | a = 1
        2 | b = )
          |     ^
        3 | c = 3
    """
    line_num = line_offset(source, pos)
    col_num = column_offset(source, pos)

    lines = [line.removesuffix("\r") for line in source.split("\n")]

    start_line = max(0, line_num - context_lines)
    end_line = min(len(lines), line_num + context_lines + 1)

    window_start = max(0, col_num - context_width)
    window_end = col_num + context_width + 1

    gutter = len(str(end_line))
    blank = " " * gutter + " |"

    context = [blank]
    for i in range(start_line, end_line):
        text = _clip(lines[i], window_start, window_end)
        context.append(f"{i + 1:>{gutter}} | {text}".rstrip())
        if i == line_num:
            caret_col = col_num - window_start
            if window_start > 0:
                caret_col += len(_ELLIPSIS)
            context.append(f"{blank} {' ' * caret_col}{marker}")

    return "\n".join(context)
