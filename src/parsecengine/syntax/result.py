"""Outcome of one parse step.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass

from .errors import ErrorNode, fork

__all__ = ["NO_ERROR_POSITION", "Result"]

NO_ERROR_POSITION = -1
"""error_position of a result that carries no error information."""


@dataclass(frozen=True, slots=True)
class Result[T]:
    """Tagged outcome of running a parser at a position.

    ``position`` always says how far matching got: the end of the match on
    success, the offset where matching stopped on failure. ``value`` is
    present only on success.

    ``error`` and ``error_position`` describe the deepest failure observed
    while producing this outcome. A success can carry one too: an optional
    item that was tried and rejected still explains why the match ended
    where it did. On failure ``error_position >= position``.

    Type Parameters:
        T: The type of the parsed value

    Example:
        >>> Result.success(4, 1234)
        Result(position=4, ok=True, value=1234, error=None, error_position=-1)
        >>> bool(Result.failure(0, ExpectedError("'2'")))
        False
    """

    position: int
    ok: bool
    value: T | None = None
    error: ErrorNode | None = None
    error_position: int = NO_ERROR_POSITION

    @staticmethod
    def success[V](position: int, value: V) -> Result[V]:
        """Successful match ending at position."""
        return Result(position, True, value)

    @staticmethod
    def failure[V](position: int, error: ErrorNode | None = None) -> Result[V]:
        """Failed match that stopped at position."""
        return Result(position, False, None, error, position)

    def __bool__(self) -> bool:
        return self.ok

    def merge_with(self, other: Result[object]) -> Result[T]:
        """Adopt the deeper error information of another result.

        Keeps this result's outcome (ok, value, position). The error recorded
        at the later error_position wins outright; equal positions combine
        both explanations in a ForkError.

        Args:
            other: Result whose error information competes with this one

        Returns:
            This result, or a copy carrying the merged error
        """
        if other.error_position < self.error_position:
            return self
        if other.error_position > self.error_position:
            error = other.error
        else:
            error = fork(self.error, other.error)
            if error is self.error:
                return self
        return Result(self.position, self.ok, self.value, error, other.error_position)

    def reposition(self, position: int) -> Result[T]:
        """Same outcome reported at a different position."""
        return Result(position, self.ok, self.value, self.error, self.error_position)

    def with_value[V](self, value: V) -> Result[V]:
        """Same success with a transformed value."""
        return Result(self.position, self.ok, value, self.error, self.error_position)
