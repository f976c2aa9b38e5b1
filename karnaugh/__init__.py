"""Convenience exports for Karnaugh map minimization."""

from .geometry import Group, Point
from .formula import VarResult, format_formula, format_term, group_term
from .kmap_engine import (
    SHAPES,
    AxisAssignment,
    Cell,
    KMap,
    filter_groups,
    gray_sequence,
    group_shapes,
    load_kmap,
    remove_contained,
    remove_redundant,
    split_variables,
)
from .logic import (
    format_expression,
    formula_expression,
    reference_expression,
    truth_minterms,
    variable_symbols,
    verify_formula,
)

__all__ = [
    "AxisAssignment",
    "Cell",
    "Group",
    "KMap",
    "Point",
    "SHAPES",
    "VarResult",
    "filter_groups",
    "format_expression",
    "format_formula",
    "format_term",
    "formula_expression",
    "gray_sequence",
    "group_shapes",
    "group_term",
    "load_kmap",
    "reference_expression",
    "remove_contained",
    "remove_redundant",
    "split_variables",
    "truth_minterms",
    "variable_symbols",
    "verify_formula",
]
__version__ = "0.1.0"
