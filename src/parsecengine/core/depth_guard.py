"""Unified depth limiting for recursion protection.

Provides reusable depth tracking to prevent stack exhaustion from:
- Deeply nested input reaching a recursive grammar through a ForwardRef
- Deeply nested ASTs handed to the demo grammar renderers and evaluators

Thread-safe: uses explicit state, no thread-local storage.
Python 3.13+.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field

from parsecengine.constants import (
    FRAMES_PER_NESTING_LEVEL,
    MAX_DEPTH,
    RESERVED_STACK_FRAMES,
)
from parsecengine.diagnostics import ParsecEngineError
from parsecengine.diagnostics.templates import ErrorTemplate

__all__ = ["DepthGuard", "DepthLimitExceededError", "depth_clamp"]

logger = logging.getLogger(__name__)


class DepthLimitExceededError(ParsecEngineError):
    """Raised when maximum nesting depth is exceeded.

    This error indicates either:
    - Adversarial input designed to cause stack overflow
    - Malformed programmatic AST construction
    """


@dataclass(slots=True)
class DepthGuard:
    """Context manager for tracking and limiting recursion depth.

    Usage in a recursive grammar front:
        guard = session.depth
        if guard.is_exceeded():
            return failure
        with guard:
            result = target.fn(session, position)

    Usage in tree walkers:
        guard = DepthGuard(max_depth=50)
        with guard:
            self._render(child)

    Mutability Note:
        Intentionally mutable (not frozen=True) to enable stateful depth
        tracking via context manager protocol. The current_depth field is
        incremented/decremented on __enter__/__exit__.

    Thread Safety:
        Uses explicit instance state, fully reentrant.
        Each call stack maintains its own DepthGuard instance.

    Attributes:
        max_depth: Maximum allowed depth (default: MAX_DEPTH)
        current_depth: Current recursion depth
    """

    max_depth: int = MAX_DEPTH
    current_depth: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        """Clamp max_depth against Python recursion limit."""
        self.max_depth = depth_clamp(self.max_depth)

    def __enter__(self) -> DepthGuard:
        """Enter guarded section, increment depth.

        Validates depth limit BEFORE incrementing to prevent state corruption
        if DepthLimitExceededError is raised. Since __exit__ is not called when
        __enter__ raises, incrementing first would leave current_depth permanently
        elevated, causing all subsequent operations to fail.
        """
        self.check()
        self.current_depth += 1
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Exit guarded section, decrement depth."""
        self.current_depth -= 1

    def is_exceeded(self) -> bool:
        """Check if depth limit has been reached."""
        return self.current_depth >= self.max_depth

    def check(self) -> None:
        """Explicitly check depth and raise if exceeded.

        Use when context manager pattern is not convenient.

        Raises:
            DepthLimitExceededError: If depth limit exceeded
        """
        if self.current_depth >= self.max_depth:
            raise DepthLimitExceededError(
                ErrorTemplate.expression_depth_exceeded(self.max_depth)
            )


def depth_clamp(
    requested_depth: int,
    reserve_frames: int = RESERVED_STACK_FRAMES,
    frames_per_level: int = FRAMES_PER_NESTING_LEVEL,
) -> int:
    """Clamp requested depth against Python recursion limit.

    Each nesting level of a combinator grammar spends several interpreter
    frames, so the safe depth is the frame budget left after the reserve,
    divided by the per-level cost. Logs warning if clamping occurs.

    Args:
        requested_depth: Desired maximum depth
        reserve_frames: Stack frames to reserve for call overhead (default: 100)
        frames_per_level: Frames spent per nesting level (default: 12)

    Returns:
        Safe depth value (at least 1), clamped if necessary

    Example:
        >>> import sys
        >>> sys.setrecursionlimit(1000)
        >>> depth_clamp(64)  # OK, 64 * 12 fits in 900 frames
        64
        >>> depth_clamp(500)  # Exceeds limit, clamped to 900 // 12
        75
    """
    max_safe_depth = max(1, (sys.getrecursionlimit() - reserve_frames) // frames_per_level)
    if requested_depth > max_safe_depth:
        logger.warning(
            "Requested depth %d exceeds Python recursion limit (%d). "
            "Clamping to %d to prevent RecursionError. "
            "Consider increasing sys.setrecursionlimit() if needed.",
            requested_depth,
            sys.getrecursionlimit(),
            max_safe_depth,
        )
        return max_safe_depth
    return requested_depth
