"""Parse error tree.

A closed set of immutable nodes describing why matching stopped:

    ExpectedError(description)   a token or class was required and absent
    UnexpectedError(description) an explicit rejection (negative lookahead,
                                 nesting limit, oversized literal)
    ForkError(left, right)       two explanations for the same position
    GroupError(errors)           N explanations for the same position

Nodes are plain values with no back-references, so one node can be shared
by many branches of a backtracking parse. The tree is only walked when a
message is requested, never on the hot path.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import ClassVar

from parsecengine.enums import ErrorKind

__all__ = [
    "ErrorNode",
    "ExpectedError",
    "ForkError",
    "GroupError",
    "UnexpectedError",
    "fork",
    "iter_leaves",
    "join_alternatives",
    "summarize",
]


@dataclass(frozen=True, slots=True)
class ExpectedError:
    """A specific token or character class was required and absent."""

    description: str
    kind: ClassVar[ErrorKind] = ErrorKind.EXPECTED


@dataclass(frozen=True, slots=True)
class UnexpectedError:
    """An explicit rejection of what was found."""

    description: str
    kind: ClassVar[ErrorKind] = ErrorKind.UNEXPECTED


@dataclass(frozen=True, slots=True)
class ForkError:
    """Two alternative explanations merged at one position."""

    left: ErrorNode
    right: ErrorNode


@dataclass(frozen=True, slots=True)
class GroupError:
    """N alternative explanations merged at one position (ordered choice)."""

    errors: tuple[ErrorNode, ...]


type ErrorNode = ExpectedError | UnexpectedError | ForkError | GroupError


def fork(left: ErrorNode | None, right: ErrorNode | None) -> ErrorNode | None:
    """Combine two optional explanations for the same position.

    Missing sides are dropped and identical sides collapse, so forking
    an error with itself does not grow the tree.

    Example:
        >>> fork(ExpectedError("'a'"), None)
        ExpectedError(description="'a'")
        >>> fork(ExpectedError("'a'"), ExpectedError("'b'"))
        ForkError(left=ExpectedError(description="'a'"), right=ExpectedError(description="'b'"))
    """
    if left is None:
        return right
    if right is None or left == right:
        return left
    return ForkError(left, right)


def iter_leaves(node: ErrorNode) -> Iterator[ExpectedError | UnexpectedError]:
    """Yield the leaves of an error tree, left to right.

    Uses an explicit stack, so arbitrarily deep fork chains cannot
    exhaust the interpreter stack.
    """
    stack: list[ErrorNode] = [node]
    while stack:
        match stack.pop():
            case ForkError(left=left, right=right):
                stack.append(right)
                stack.append(left)
            case GroupError(errors=errors):
                stack.extend(reversed(errors))
            case ExpectedError() | UnexpectedError() as leaf:
                yield leaf


def summarize(nodes: Iterable[ErrorNode]) -> tuple[tuple[str, ...], tuple[str, ...]]:
    """Collect leaf descriptions of error trees.

    Args:
        nodes: Error trees collected at one position

    Returns:
        (expected, unexpected) descriptions, each sorted and deduplicated

    Example:
        >>> summarize([ExpectedError("'b'"), ForkError(ExpectedError("'a'"), ExpectedError("'b'"))])
        (("'a'", "'b'"), ())
    """
    expected: set[str] = set()
    unexpected: set[str] = set()
    for node in nodes:
        for leaf in iter_leaves(node):
            match leaf.kind:
                case ErrorKind.EXPECTED:
                    expected.add(leaf.description)
                case ErrorKind.UNEXPECTED:
                    unexpected.add(leaf.description)
    return tuple(sorted(expected)), tuple(sorted(unexpected))


def join_alternatives(items: Iterable[str], conjunction: str = "or") -> str:
    """Join descriptions into an English list.

    Example:
        >>> join_alternatives(["'a'", "'b'", "'c'"])
        "'a', 'b' or 'c'"
        >>> join_alternatives(["x", "y"], "and")
        'x and y'
    """
    items = list(items)
    if len(items) <= 1:
        return "".join(items)
    return f"{', '.join(items[:-1])} {conjunction} {items[-1]}"
