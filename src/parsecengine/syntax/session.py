"""Execution context of one top-level parse.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass, field

from parsecengine.core.depth_guard import DepthGuard

from .errors import ErrorNode
from .source import Source

__all__ = ["ParseSession"]


@dataclass(slots=True)
class ParseSession:
    """Per-parse state threaded through every parser call.

    A session belongs to exactly one top-level parse and is never shared
    between concurrent parses. Parsers treat it as read-only except for two
    things: the append-only diagnostic log and the nesting counter.

    Diagnostic collection:
        With ``error_position`` set, every error node emitted exactly at that
        offset is appended to ``errors``; nodes emitted elsewhere are dropped.
        With ``error_position=None`` (the discovery pass) nothing is recorded.

    Attributes:
        source: Input buffer
        error_position: Offset to collect diagnostics for, or None
        errors: Error nodes emitted at error_position, in emission order
        depth: Forward-reference nesting guard
    """

    source: Source
    error_position: int | None = None
    errors: list[ErrorNode] = field(default_factory=list)
    depth: DepthGuard = field(default_factory=DepthGuard)

    @property
    def text(self) -> str:
        """Raw input text."""
        return self.source.text

    @property
    def collecting(self) -> bool:
        """True during the diagnostic pass."""
        return self.error_position is not None

    def emit(self, position: int, node: ErrorNode) -> None:
        """Record node if it explains a failure at the target position."""
        if position == self.error_position:
            self.errors.append(node)

    def mark(self) -> int:
        """Current length of the diagnostic log."""
        return len(self.errors)

    def rewind(self, mark: int) -> None:
        """Discard nodes emitted since mark()."""
        del self.errors[mark:]
