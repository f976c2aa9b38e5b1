"""Tests for map construction, lookups, group enumeration and reduction."""

import pytest

from conftest import AND_TABLE, MAJORITY_TABLE, TRUE_TABLE, XOR_TABLE, table_text
from karnaugh import (
    SHAPES,
    KMap,
    filter_groups,
    gray_sequence,
    group_shapes,
    load_kmap,
    remove_contained,
    remove_redundant,
    split_variables,
)
from karnaugh.geometry import Group, Point


# ---------------------------------------------------------------- gray / split

def test_gray_sequence_small_sizes():
    assert gray_sequence(0) == [()]
    assert gray_sequence(1) == [(False,), (True,)]
    assert gray_sequence(2) == [
        (False, False), (False, True), (True, True), (True, False),
    ]


def test_gray_sequence_neighbours_differ_in_one_bit():
    codes = gray_sequence(4)
    assert len(set(codes)) == 16
    for a, b in zip(codes, codes[1:] + codes[:1]):
        assert sum(x != y for x, y in zip(a, b)) == 1


def test_gray_sequence_negative():
    with pytest.raises(ValueError):
        gray_sequence(-1)


@pytest.mark.parametrize(
    "variables, expected",
    [
        ("A", (["A"], [])),
        ("AB", (["A"], ["B"])),
        ("ABC", (["A", "B"], ["C"])),
        ("ABCD", (["A", "B"], ["C", "D"])),
        ("ABCDE", (["A", "B", "C"], ["D", "E"])),
        ("BA", (["B"], ["A"])),
        ("BAC", (["A", "B"], ["C"])),
        ("DCBA", (["C", "D"], ["A", "B"])),
    ],
)
def test_split_variables(variables, expected):
    assert split_variables(list(variables)) == expected


# ---------------------------------------------------------------- loading

def test_load_from_path(write_table):
    kmap = load_kmap(write_table(XOR_TABLE))
    assert kmap.variables == ["A", "B", "C", "D"]
    assert (kmap.size_x(), kmap.size_y(), kmap.size()) == (4, 4, 16)
    assert len(kmap.cells) == 16
    assert not kmap.empty()


def test_missing_path_gives_empty_map(tmp_path):
    kmap = KMap.from_path(tmp_path / "missing.txt")
    assert kmap.size() == 0
    assert kmap.empty()
    assert kmap.get_formula(True) == []
    assert kmap.get_formula_string(True) == ""
    assert kmap.get_formula_string(False) == ""


def test_variable_line_without_spaces():
    kmap = KMap.from_text("AB\n0 0 0\n0 1 0\n1 0 0\n1 1 1\n")
    assert kmap.variables == ["A", "B"]
    assert kmap.get_formula_string(True) == "(A x B)"
    assert kmap.get_formula_string(False) == "(B) x (A)"


def test_axes_sorted_by_name():
    kmap = KMap.from_text(table_text("BAC", lambda b, a, c: a == c))
    assert kmap.horizontal == ["A", "B"]
    assert kmap.vertical == ["C"]
    # column AB=01: declared row B=1 A=0 C=0
    assert kmap.var_map_for_x(1) == {"A": False, "B": True}
    assert kmap.value_for(1, 0) is True


def test_three_variable_layout():
    kmap = KMap.from_text(MAJORITY_TABLE)
    assert kmap.horizontal == ["A", "B"]
    assert kmap.vertical == ["C"]
    assert (kmap.size_x(), kmap.size_y()) == (4, 2)


def test_coordinates_follow_gray_order(xor_map):
    # AB = 11 is the third column, CD = 10 the fourth row
    h, v = xor_map.var_coord_for(2, 3)
    assert h.values == {"A": True, "B": True}
    assert v.values == {"C": True, "D": False}
    assert xor_map.value_for(2, 3) is False
    assert xor_map.value_for(3, 0) is True


def test_lookups_out_of_range_return_none(xor_map):
    assert xor_map.value_for(4, 0) is None
    assert xor_map.var_coord_for(-1, 0) is None
    assert xor_map.var_map_for_x(9) is None
    assert xor_map.var_map_for_y(4) is None


def test_row_and_column_var_maps(xor_map):
    assert xor_map.var_map_for_x(1) == {"A": False, "B": True}
    assert xor_map.var_map_for_y(2) == {"C": True, "D": True}


def test_malformed_rows_fall_back_to_defaults():
    kmap = KMap.from_text("A B\n0 0 0\n\n1 x 1\n0 1 1\nnonsense\n")
    # "1 x 1" keeps only the leading "1": A=1, B defaults to 0, output is 1
    assert kmap.value_for(1, 0) is True
    assert kmap.value_for(0, 1) is True
    assert kmap.value_for(1, 1) is None
    assert len(kmap.cells) == 3


def test_first_row_wins_on_duplicate_coordinates():
    kmap = KMap.from_text("A B\n0 0 1\n0 0 0\n")
    assert len(kmap.cells) == 2
    assert kmap.value_for(0, 0) is True


def test_grid_layout(and_map):
    assert and_map.grid() == [[False, False], [False, True]]


def test_grid_marks_missing_cells():
    kmap = KMap.from_text("A B\n0 0 1\n")
    assert kmap.grid() == [[True, None], [None, None]]


# ---------------------------------------------------------------- enumeration

def test_group_shapes_small_maps_are_fixed():
    assert group_shapes(4, 4) == list(SHAPES)
    assert group_shapes(2, 2) == list(SHAPES)


def test_group_shapes_wide_map_adds_larger_shapes():
    shapes = group_shapes(8, 4)
    assert shapes[:9] == list(SHAPES)
    assert set(shapes[9:]) == {(8, 1), (8, 2), (8, 4)}


TABLES = [
    AND_TABLE,
    TRUE_TABLE,
    XOR_TABLE,
    MAJORITY_TABLE,
    table_text("ABCD", lambda a, b, c, d: (a and not c) or (b and d)),
    table_text("ABCD", lambda a, b, c, d: a + b + c + d == 1),
]


@pytest.mark.parametrize("text", TABLES)
@pytest.mark.parametrize("v", [True, False])
def test_groups_have_allowed_shapes_inside_bounds(text, v):
    kmap = KMap.from_text(text)
    for group in kmap.get_all_groups(v):
        assert (group.width, group.height) in SHAPES
        assert 0 <= group.start.x and group.start.x + group.width <= kmap.size_x()
        assert 0 <= group.start.y and group.start.y + group.height <= kmap.size_y()


@pytest.mark.parametrize("text", TABLES)
@pytest.mark.parametrize("v", [True, False])
def test_groups_are_uniform(text, v):
    kmap = KMap.from_text(text)
    for group in kmap.get_all_groups(v):
        for point in group.to_points():
            assert kmap.value_for(point.x, point.y) == v


def test_check_group_ignores_absent_cells():
    kmap = KMap.from_text("A B\n0 0 1\n1 1 1\n")
    assert kmap.check_group(Group(Point(0, 0), Point(2, 2)), True)
    assert not kmap.check_group(Group(Point(0, 0), Point(2, 2)), False)


# ---------------------------------------------------------------- reduction

def test_remove_contained_drops_inner_groups():
    outer = Group(Point(0, 0), Point(4, 4))
    inner = Group(Point(1, 1), Point(2, 2))
    other = Group(Point(0, 0), Point(1, 1))
    assert remove_contained([inner, outer, other]) == [outer]


def test_remove_contained_collapses_duplicates():
    a = Group(Point(1, 0), Point(2, 1))
    b = Group(Point(1, 0), Point(2, 1))
    assert remove_contained([a, b]) == []


def test_remove_redundant_keeps_groups_with_unique_points():
    left = Group(Point(0, 0), Point(2, 1))
    middle = Group(Point(1, 0), Point(2, 1))
    right = Group(Point(2, 0), Point(2, 1))
    assert remove_redundant([left, middle, right]) == [left, right]


@pytest.mark.parametrize("text", TABLES)
@pytest.mark.parametrize("v", [True, False])
def test_filtered_groups_are_containment_free(text, v):
    groups = KMap.from_text(text).get_filtered_groups(v)
    for i, a in enumerate(groups):
        for j, b in enumerate(groups):
            if i != j:
                assert not a.is_in(b)


# the greedy second pass may drop mutually redundant groups, so full coverage
# is only asserted for tables checked by hand
@pytest.mark.parametrize("text", [AND_TABLE, TRUE_TABLE, XOR_TABLE, MAJORITY_TABLE])
@pytest.mark.parametrize("v", [True, False])
def test_filtered_groups_cover_every_matching_cell(text, v):
    kmap = KMap.from_text(text)
    covered = {
        (p.x, p.y) for g in kmap.get_filtered_groups(v) for p in g.to_points()
    }
    matching = {(c.x, c.y) for c in kmap.cells if c.value == v}
    assert {xy for xy in covered if kmap.value_for(*xy) == v} == matching


def test_xor_group_count(xor_map):
    ones = xor_map.get_filtered_groups(True)
    zeros = xor_map.get_filtered_groups(False)
    assert ones == [Group(Point(1, 0), Point(1, 4)), Group(Point(3, 0), Point(1, 4))]
    assert zeros == [Group(Point(0, 0), Point(1, 4)), Group(Point(2, 0), Point(1, 4))]


def test_constant_true_single_group():
    kmap = KMap.from_text(TRUE_TABLE)
    assert kmap.get_filtered_groups(True) == [Group(Point(0, 0), Point(2, 2))]
    assert kmap.get_filtered_groups(False) == []


def test_filter_groups_matches_method(majority_map):
    groups = majority_map.get_all_groups(True)
    assert filter_groups(groups) == majority_map.get_filtered_groups(True)


def test_five_variable_map_groups_only_subcubes():
    kmap = KMap.from_text(table_text("ABCDE", lambda a, b, c, d, e: a))
    assert (kmap.size_x(), kmap.size_y()) == (8, 4)
    assert kmap.get_filtered_groups(True) == [Group(Point(4, 0), Point(4, 4))]
    assert kmap.get_formula_string(True) == "(A)"
