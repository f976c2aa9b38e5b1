"""SymPy views of minimized K-map formulas: conversion, reference forms, checks."""

from __future__ import annotations

import itertools
from typing import Dict, List, Sequence, Tuple

from sympy import And, Not, Or, Symbol
from sympy.logic.boolalg import POSform, SOPform, false, true

from .formula import Term, VarResult
from .kmap_engine import Cell, KMap


def variable_symbols(kmap: KMap) -> Tuple[Symbol, ...]:
    """Return SymPy symbols for the map's declared variables, in order."""
    if not kmap.variables:
        raise ValueError("Truth table declares no variables.")
    if len(set(kmap.variables)) != len(kmap.variables):
        raise ValueError(f"Duplicate variable names: {' '.join(kmap.variables)}")
    return tuple(Symbol(name) for name in kmap.variables)


def term_to_expression(term: Term, v: bool, symbol_map: Dict[str, Symbol]):
    """Build the product (SOP) or sum (POS) of a term's literals."""
    literals = [
        symbol_map[name] if result is VarResult.TRUE else Not(symbol_map[name])
        for name, result in term.items()
        if result is not VarResult.NULL
    ]
    return And(*literals) if v else Or(*literals)


def terms_to_expression(terms: Sequence[Term], v: bool, symbol_map: Dict[str, Symbol]):
    parts = [term_to_expression(term, v, symbol_map) for term in terms]
    return Or(*parts) if v else And(*parts)


def formula_expression(kmap: KMap, v: bool):
    """Return the minimized SOP (``v`` True) or POS (``v`` False) as SymPy."""
    symbol_map = dict(zip(kmap.variables, variable_symbols(kmap)))
    return terms_to_expression(kmap.get_formula(v), v, symbol_map)


def cell_bits(kmap: KMap, cell: Cell) -> List[int]:
    """Return the cell's assignment as bits in declared variable order."""
    assignment = cell.assignment()
    return [int(assignment[name]) for name in kmap.variables]


def truth_minterms(kmap: KMap) -> List[List[int]]:
    """Return the assignments whose output is 1."""
    return [cell_bits(kmap, cell) for cell in kmap.cells if cell.value]


def missing_assignments(kmap: KMap) -> List[List[int]]:
    """Return the assignments no row of the table defines."""
    present = {tuple(cell_bits(kmap, cell)) for cell in kmap.cells}
    return [
        list(bits)
        for bits in itertools.product([0, 1], repeat=len(kmap.variables))
        if bits not in present
    ]


def reference_expression(kmap: KMap, v: bool):
    """Minimize the same table with SymPy, absent rows as don't cares."""
    symbols_ = variable_symbols(kmap)
    minterms = truth_minterms(kmap)
    dontcares = missing_assignments(kmap)
    if v:
        return SOPform(symbols_, minterms, dontcares)
    return POSform(symbols_, minterms, dontcares)


def verify_formula(kmap: KMap, v: bool) -> Tuple[bool, List[str]]:
    """
    Evaluate the minimized formula on every loaded row.

    Returns:
        Tuple of (all_correct, list of error messages)
    """
    symbols_ = variable_symbols(kmap)
    expr = formula_expression(kmap, v)
    errors = []
    for cell in kmap.cells:
        bits = cell_bits(kmap, cell)
        subs = {sym: true if bit else false for sym, bit in zip(symbols_, bits)}
        actual = bool(expr.xreplace(subs))
        if actual != cell.value:
            label = " ".join(f"{name}={bit}" for name, bit in zip(kmap.variables, bits))
            errors.append(f"{label}: expected {int(cell.value)}, got {int(actual)}")
    return len(errors) == 0, errors


def format_expression(expr, var_order: Sequence[Symbol], form: str = "dnf") -> str:
    """Format a DNF expression as ``A'B + C`` or a CNF one as ``(A + B')(C)``."""
    if expr is False or expr == false:
        return "0"
    if expr is True or expr == true:
        return "1"

    def lit_to_str(lit):
        if isinstance(lit, Not) and isinstance(lit.args[0], Symbol):
            return f"{lit.args[0]}'"
        return str(lit)

    def ordered(literals):
        result = []
        for var in var_order:
            for lit in literals:
                if lit == var or (isinstance(lit, Not) and lit.args and lit.args[0] == var):
                    result.append(lit)
                    break
        return result

    if form == "dnf":
        terms = list(expr.args) if isinstance(expr, Or) else [expr]
        parts = []
        for term in terms:
            literals = list(term.args) if isinstance(term, And) else [term]
            parts.append("".join(lit_to_str(lit) for lit in ordered(literals)) or "1")
        return " + ".join(parts)

    if form == "cnf":
        clauses = list(expr.args) if isinstance(expr, And) else [expr]
        parts = []
        for clause in clauses:
            literals = list(clause.args) if isinstance(clause, Or) else [clause]
            inside = " + ".join(lit_to_str(lit) for lit in ordered(literals)) or "0"
            parts.append(f"({inside})")
        return "".join(parts)

    raise ValueError(f"Unknown expression form: {form!r}")


__all__ = [
    "cell_bits",
    "format_expression",
    "formula_expression",
    "missing_assignments",
    "reference_expression",
    "term_to_expression",
    "terms_to_expression",
    "truth_minterms",
    "variable_symbols",
    "verify_formula",
]
