import itertools

import pytest

from karnaugh import KMap


def table_text(variables, func):
    """Render a complete truth table for ``func`` over ``variables``."""
    lines = [" ".join(variables)]
    for bits in itertools.product([0, 1], repeat=len(variables)):
        lines.append(" ".join(str(b) for b in bits) + f" {int(bool(func(*bits)))}")
    return "\n".join(lines) + "\n"


AND_TABLE = "A B\n0 0 0\n0 1 0\n1 0 0\n1 1 1\n"
TRUE_TABLE = "A B\n0 0 1\n0 1 1\n1 0 1\n1 1 1\n"
XOR_TABLE = table_text("ABCD", lambda a, b, c, d: a ^ b)
MAJORITY_TABLE = table_text("ABC", lambda a, b, c: a + b + c >= 2)


@pytest.fixture
def write_table(tmp_path):
    """Write table text to a file and return its path."""
    def _write(text, name="table.txt"):
        path = tmp_path / name
        path.write_text(text)
        return path
    return _write


@pytest.fixture
def and_map():
    return KMap.from_text(AND_TABLE)


@pytest.fixture
def xor_map():
    return KMap.from_text(XOR_TABLE)


@pytest.fixture
def majority_map():
    return KMap.from_text(MAJORITY_TABLE)
