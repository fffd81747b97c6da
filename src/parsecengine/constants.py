"""Shared constants for ParsecEngine.

This module provides centralized configuration constants used across
the syntax and diagnostics packages. Placing constants here avoids
circular imports and provides a single source of truth.

Constants are grouped by domain:
- Depth limits: Recursion protection for recursive grammars
- Input limits: DoS prevention via size constraints
- Literal limits: Bounds for integer literal parsing
- Reporting: Defaults for diagnostic context excerpts

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Depth limits
    "MAX_DEPTH",
    "FRAMES_PER_NESTING_LEVEL",
    "RESERVED_STACK_FRAMES",
    # Input limits
    "MAX_SOURCE_SIZE",
    # Literal limits
    "MAX_INTEGER_DIGITS",
    # Reporting
    "DEFAULT_CONTEXT_LINES",
    "DEFAULT_CONTEXT_WIDTH",
]

# ============================================================================
# DEPTH LIMITS
# ============================================================================
#
# Every trip through a ForwardRef front counts as one nesting level. A grammar
# is a chain of Python closures, so each level costs several interpreter stack
# frames (forward front, choice, between, repetition, ...). The default depth
# keeps MAX_DEPTH * FRAMES_PER_NESTING_LEVEL comfortably below the default
# recursion limit of 1000, leaving room for the test runner and the caller.
#
# ============================================================================

# Maximum forward-reference nesting per parse.
# Deeper input fails with a "nesting deeper than N levels" diagnostic.
MAX_DEPTH: int = 64

# Upper estimate of interpreter frames consumed per nesting level.
# Used by depth_clamp() to translate the recursion limit into a depth budget.
FRAMES_PER_NESTING_LEVEL: int = 12

# Frames kept aside for the caller, the driver and the test harness.
RESERVED_STACK_FRAMES: int = 100

# ============================================================================
# INPUT LIMITS
# ============================================================================

# Default maximum source size in characters (10 MB of ASCII).
# Larger inputs are rejected before the grammar runs.
MAX_SOURCE_SIZE: int = 10 * 1024 * 1024

# ============================================================================
# LITERAL LIMITS
# ============================================================================

# Longest digit run accepted by uint()/sint().
# Matches CPython's default int/str conversion limit (sys.get_int_max_str_digits).
# Python ints never wrap, so this bound replaces overflow as the failure mode.
MAX_INTEGER_DIGITS: int = 4300

# ============================================================================
# REPORTING
# ============================================================================

# Lines of source shown before and after the failing line.
DEFAULT_CONTEXT_LINES: int = 1

# Characters shown on each side of the failure column for long lines.
DEFAULT_CONTEXT_WIDTH: int = 40
