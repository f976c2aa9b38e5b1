"""Turn surviving map groups into SOP / POS formula terms and text.

Each group becomes one term. A variable takes part in the term only when it
holds the same value on every cell of the group; its polarity compares that
value with the group's output, so the same rule yields products of literals
for ones (SOP) and sums of literals for zeros (POS).
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Dict, List, Optional, Sequence

from .geometry import Group

if TYPE_CHECKING:
    from .kmap_engine import KMap

NEGATION = "!"
AND_MARK = "x"
OR_MARK = "+"


class VarResult(Enum):
    """How a variable appears in a term."""

    TRUE = "true"
    FALSE = "false"
    NULL = "null"


Term = Dict[str, VarResult]


def group_term(kmap: "KMap", group: Group) -> Term:
    """Return the term described by ``group`` on ``kmap``."""
    coords = kmap.coords_from_group(group)
    marker: Optional[bool] = None
    if coords:
        first_h, first_v = coords[0]
        marker = kmap.value_for(first_h.coordinate, first_v.coordinate)

    term: Term = {}
    for var in sorted(set(kmap.variables)):
        fixed: Optional[bool] = None
        differs = False
        for horizontal, vertical in coords:
            value = vertical.values.get(var, horizontal.values.get(var))
            if value is None or (fixed is not None and value != fixed):
                differs = True
                break
            fixed = value
        if differs or marker is None or fixed is None:
            term[var] = VarResult.NULL
        elif fixed == marker:
            term[var] = VarResult.TRUE
        else:
            term[var] = VarResult.FALSE
    return term


def get_formula(kmap: "KMap", v: bool) -> List[Term]:
    return [group_term(kmap, group) for group in kmap.get_filtered_groups(v)]


def format_term(term: Term, v: bool) -> str:
    """Render a term as ``(A x !B)`` for SOP or ``(A + !B)`` for POS."""
    joiner = f" {AND_MARK if v else OR_MARK} "
    literals = [
        (NEGATION if result is VarResult.FALSE else "") + name
        for name, result in term.items()
        if result is not VarResult.NULL
    ]
    return f"({joiner.join(literals)})"


def format_formula(terms: Sequence[Term], v: bool) -> str:
    """Join rendered terms; an empty term list gives an empty string."""
    joiner = f" {OR_MARK if v else AND_MARK} "
    return joiner.join(format_term(term, v) for term in terms)


__all__ = [
    "AND_MARK",
    "NEGATION",
    "OR_MARK",
    "Term",
    "VarResult",
    "format_formula",
    "format_term",
    "get_formula",
    "group_term",
]
