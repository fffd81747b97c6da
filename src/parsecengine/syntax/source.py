"""Immutable input buffer and zero-copy substrings.

Every parser addresses its input through integer offsets into one Source.
Nothing in the engine mutates or copies the buffer; a SubString is only a
(start, end) pair until someone asks for its text.
Python 3.13+. Zero external dependencies.

Line Ending Support:
    - LF (Unix, \\n): Fully supported
    - CRLF (Windows, \\r\\n): Supported (\\n is the line delimiter)
    - CR-only (Classic Mac, \\r): NOT supported

Pattern Reference:
    - Rust nom parser combinator library
    - Haskell Parsec
    - F# FParsec
"""

from collections.abc import Callable
from dataclasses import dataclass

__all__ = ["EOS", "CharPredicate", "Source", "SubString"]

EOS = None
"""End-of-stream sentinel returned by Source.peek() past the last character."""

type CharPredicate = Callable[[int, str], bool]
"""Run predicate: receives (offset within the run, character)."""


@dataclass(frozen=True, slots=True)
class SubString:
    """Half-open range [start, end) of a source text.

    Zero-copy: holds a reference to the whole text plus two offsets.
    ``str(substring)`` materializes the characters.

    Example:
        >>> sub = SubString("hello world", 6, 11)
        >>> str(sub)
        'world'
        >>> len(sub)
        5
    """

    text: str
    start: int
    end: int

    def __post_init__(self) -> None:
        """Validate 0 <= start <= end <= len(text).

        Raises:
            ValueError: If the range falls outside the text or is inverted
        """
        if not 0 <= self.start <= self.end <= len(self.text):
            msg = (
                f"SubString range [{self.start}, {self.end}) is invalid "
                f"for text of length {len(self.text)}"
            )
            raise ValueError(msg)

    def __str__(self) -> str:
        return self.text[self.start : self.end]

    def __len__(self) -> int:
        return self.end - self.start

    @property
    def is_empty(self) -> bool:
        """True when the range covers no characters."""
        return self.start == self.end


@dataclass(frozen=True, slots=True)
class Source:
    """Immutable input buffer for one top-level parse.

    Key Design Decisions:
        1. Frozen dataclass - Immutability enforced by Python
        2. Slots - Memory efficiency
        3. Positions are plain integer offsets
        4. End of input is the EOS sentinel, never an exception

    Example:
        >>> source = Source("ab")
        >>> source.peek(0)
        'a'
        >>> source.peek(2) is EOS
        True
        >>> str(source.satisfy(0, lambda i, ch: ch.isalpha()))
        'ab'
    """

    text: str

    def __len__(self) -> int:
        return len(self.text)

    def peek(self, position: int) -> str | None:
        """Character at position, or EOS at or beyond the end.

        Args:
            position: Offset into the buffer

        Returns:
            One-character string, or None (EOS) past the last character
        """
        if position >= len(self.text):
            return EOS
        return self.text[position]

    def at_end(self, position: int) -> bool:
        """Check if position is at (or past) the end of input."""
        return position >= len(self.text)

    def remaining(self, position: int) -> int:
        """Number of characters from position to the end (never negative)."""
        return max(0, len(self.text) - position)

    def satisfy(
        self,
        position: int,
        predicate: CharPredicate,
        at_most: int | None = None,
    ) -> SubString:
        """Greedy run of characters accepted by predicate.

        The predicate receives the offset within the run and the character,
        so rules like "letter, then letters or digits" are one predicate.

        Args:
            position: Start of the run
            predicate: Called as predicate(offset, char)
            at_most: Stop after this many characters (None = unbounded)

        Returns:
            SubString covering the accepted run (possibly empty)
        """
        text = self.text
        limit = len(text) if at_most is None else min(len(text), position + at_most)
        end = position
        while end < limit and predicate(end - position, text[end]):
            end += 1
        return SubString(text, position, end)

    def substring(self, start: int, end: int) -> SubString:
        """Zero-copy view of [start, end)."""
        return SubString(self.text, start, end)

    def compute_line_col(self, position: int) -> tuple[int, int]:
        """Compute line and column for a position.

        Returns:
            (line, column) tuple (1-indexed, like text editors)

        Performance:
            O(n) where n = position. Only call for error reporting,
            not during normal parsing!

        Example:
            >>> source = Source("line1\\nline2")
            >>> source.compute_line_col(8)
            (2, 3)
        """
        position = max(0, min(position, len(self.text)))
        line = self.text.count("\n", 0, position) + 1
        last_newline = self.text.rfind("\n", 0, position)
        col = position - last_newline if last_newline >= 0 else position + 1
        return (line, col)

