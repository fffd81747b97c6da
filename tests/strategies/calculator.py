"""Hypothesis strategies for calculator expressions.

Events emitted:
- calc_root={int|identifier|binary}: Kind of the root node
"""

from __future__ import annotations

from hypothesis import event
from hypothesis import strategies as st

from parsecengine.grammars.calculator import BinaryExpr, Expr, IdentifierExpr, IntExpr

identifiers = st.from_regex(r"[a-zA-Z][a-zA-Z0-9]{0,5}", fullmatch=True)

_leaves: st.SearchStrategy[Expr] = st.one_of(
    st.integers(min_value=-1000, max_value=1000).map(IntExpr),
    identifiers.map(IdentifierExpr),
)


def _binary(children: st.SearchStrategy[Expr]) -> st.SearchStrategy[Expr]:
    return st.builds(BinaryExpr, children, st.sampled_from("+-*/%"), children)


@st.composite
def expressions(draw: st.DrawFn) -> Expr:
    """Expression trees with at most 20 leaves."""
    expr = draw(st.recursive(_leaves, _binary, max_leaves=20))
    match expr:
        case IntExpr():
            event("calc_root=int")
        case IdentifierExpr():
            event("calc_root=identifier")
        case BinaryExpr():
            event("calc_root=binary")
    return expr


@st.composite
def variable_bindings(draw: st.DrawFn, names: st.SearchStrategy[str] = identifiers) -> dict[str, int]:
    """Variable environments."""
    return draw(st.dictionaries(names, st.integers(min_value=-50, max_value=50), max_size=5))
