"""Karnaugh map model, group enumeration and group reduction."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from .formula import Term, format_formula, get_formula
from .geometry import Group, Point

logger = logging.getLogger(__name__)

# Allowed (width, height) group shapes, smallest first
SHAPES: Sequence[Tuple[int, int]] = (
    (1, 1), (2, 1), (1, 2), (4, 1), (1, 4), (2, 2), (4, 2), (2, 4), (4, 4),
)

VarMap = Dict[str, bool]


@dataclass(frozen=True)
class AxisAssignment:
    """Partial assignment of one axis' variables and its map coordinate."""

    values: VarMap
    coordinate: int


@dataclass(frozen=True)
class Cell:
    """One truth-table row placed on the map."""

    horizontal: AxisAssignment
    vertical: AxisAssignment
    value: bool

    @property
    def x(self) -> int:
        return self.horizontal.coordinate

    @property
    def y(self) -> int:
        return self.vertical.coordinate

    def assignment(self) -> VarMap:
        """Return the full variable assignment of this cell."""
        return {**self.horizontal.values, **self.vertical.values}


VarCoord = Tuple[AxisAssignment, AxisAssignment]


def gray_sequence(n: int) -> List[Tuple[bool, ...]]:
    """Return the reflected Gray code over ``n`` bits as bool tuples."""
    if n < 0:
        raise ValueError("Gray sequence length must not be negative.")
    sequence: List[Tuple[bool, ...]] = [()]
    for _ in range(n):
        sequence = [(False,) + code for code in sequence] + [
            (True,) + code for code in reversed(sequence)
        ]
    return sequence


def split_variables(variables: Sequence[str]) -> Tuple[List[str], List[str]]:
    """Split declared variables in half; each axis is ordered by name."""
    half = (len(variables) + 1) // 2
    horizontal = sorted(dict.fromkeys(variables[:half]))
    vertical = sorted(dict.fromkeys(variables[half:]))
    return horizontal, vertical


def _power_sizes(limit: int) -> List[int]:
    sizes = [1]
    while sizes[-1] * 2 <= limit:
        sizes.append(sizes[-1] * 2)
    return sizes


def group_shapes(size_x: int, size_y: int) -> List[Tuple[int, int]]:
    """Return the fixed shapes plus any larger ones a wide map can hold."""
    extra = [
        (w, h)
        for w in _power_sizes(size_x)
        for h in _power_sizes(size_y)
        if (w, h) not in SHAPES
    ]
    extra.sort(key=lambda s: s[0] * s[1])
    return list(SHAPES) + extra


def _valid_span(codes: Sequence[Tuple[bool, ...]], start: int, length: int) -> bool:
    """Check that ``length`` Gray codes from ``start`` form a subcube."""
    span = codes[start:start + length]
    varying = sum(1 for bits in zip(*span) if len(set(bits)) > 1)
    return 1 << varying == length


def _parse_row(line: str) -> List[int]:
    values: List[int] = []
    for token in line.split():
        try:
            values.append(int(token))
        except ValueError:
            break
    return values


def remove_contained(groups: Sequence[Group]) -> List[Group]:
    """Drop every group lying inside some other group of the list."""
    return [
        group
        for i, group in enumerate(groups)
        if not any(group.is_in(other) for j, other in enumerate(groups) if i != j)
    ]


def remove_redundant(groups: Sequence[Group]) -> List[Group]:
    """Keep only groups owning at least one point no other group covers."""
    result: List[Group] = []
    for i, group in enumerate(groups):
        others = {
            point
            for j, other in enumerate(groups)
            if i != j
            for point in other.to_points()
        }
        if any(point not in others for point in group.to_points()):
            result.append(group)
    return result


def filter_groups(groups: Sequence[Group]) -> List[Group]:
    """Run both reduction passes over enumerated groups."""
    contained_free = remove_contained(groups)
    result = remove_redundant(contained_free)
    logger.debug(
        "filter_groups: %d -> %d -> %d group(s)",
        len(groups),
        len(contained_free),
        len(result),
    )
    return result


class KMap:
    """Karnaugh map of a truth table with up to two variables per axis.

    Variables are split in half: the first half indexes the columns (x),
    the rest the rows (y), each half sorted by name. Each axis is ordered
    by its Gray sequence so that neighbouring cells differ in exactly one
    variable. Wider axes work as well since the ordering is generated, not
    tabulated.
    """

    def __init__(
        self,
        variables: Sequence[str] = (),
        rows: Iterable[Sequence[int]] = (),
    ) -> None:
        self.variables: List[str] = list(variables)
        self.horizontal, self.vertical = split_variables(self.variables)
        self.cells: List[Cell] = []
        self._codes = (
            gray_sequence(len(self.horizontal)),
            gray_sequence(len(self.vertical)),
        )
        self._positions = tuple(
            {code: index for index, code in enumerate(codes)} for codes in self._codes
        )
        self._grid: Dict[Tuple[int, int], Cell] = {}
        self._columns: Dict[int, VarMap] = {}
        self._rows: Dict[int, VarMap] = {}
        for row in rows:
            self.add_row(row)

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "KMap":
        """Build a map from the variable line followed by one line per row."""
        variables: Optional[List[str]] = None
        rows: List[List[int]] = []
        for line in lines:
            if not line.strip():
                continue
            if variables is None:
                # one character per variable, spaces optional
                variables = [ch for token in line.split() for ch in token]
                continue
            row = _parse_row(line)
            if row:
                rows.append(row)
        kmap = cls(variables or (), rows)
        logger.debug(
            "Loaded %d row(s) over variables %s", len(kmap.cells), kmap.variables
        )
        return kmap

    @classmethod
    def from_text(cls, text: str) -> "KMap":
        return cls.from_lines(text.splitlines())

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "KMap":
        """Load a truth table file; a missing file yields an empty map."""
        path = Path(path)
        if not path.exists():
            logger.warning("Truth table %s does not exist, using an empty map", path)
            return cls()
        with path.open() as handle:
            return cls.from_lines(handle)

    def _axis_assignment(self, axis: int, row: Sequence[int]) -> AxisAssignment:
        names = self.horizontal if axis == 0 else self.vertical
        values: VarMap = dict.fromkeys(names, False)
        for name, bit in zip(self.variables, row):
            if name in values:
                values[name] = bool(bit)
        code = tuple(values[name] for name in names)
        return AxisAssignment(values, self._positions[axis].get(code, 0))

    def add_row(self, row: Sequence[int]) -> Cell:
        """Place one row (variable bits followed by the output bit)."""
        cell = Cell(
            horizontal=self._axis_assignment(0, row),
            vertical=self._axis_assignment(1, row),
            value=bool(row[-1]) if row else False,
        )
        self.cells.append(cell)
        # first row wins on a coordinate clash
        self._grid.setdefault((cell.x, cell.y), cell)
        self._columns.setdefault(cell.x, cell.horizontal.values)
        self._rows.setdefault(cell.y, cell.vertical.values)
        return cell

    def size_x(self) -> int:
        return 1 << len(self.horizontal) if self.variables else 0

    def size_y(self) -> int:
        return 1 << len(self.vertical) if self.variables else 0

    def size(self) -> int:
        return self.size_x() * self.size_y()

    def empty(self) -> bool:
        return self.size() == 0

    def value_for(self, x: int, y: int) -> Optional[bool]:
        cell = self._grid.get((x, y))
        return cell.value if cell is not None else None

    def var_coord_for(self, x: int, y: int) -> Optional[VarCoord]:
        cell = self._grid.get((x, y))
        return (cell.horizontal, cell.vertical) if cell is not None else None

    def var_map_for_x(self, x: int) -> Optional[VarMap]:
        """Return the horizontal variable values shared by column ``x``."""
        return self._columns.get(x)

    def var_map_for_y(self, y: int) -> Optional[VarMap]:
        """Return the vertical variable values shared by row ``y``."""
        return self._rows.get(y)

    def grid(self) -> List[List[Optional[bool]]]:
        """Return cell values as rows (indexed ``[y][x]``), None where absent."""
        return [
            [self.value_for(x, y) for x in range(self.size_x())]
            for y in range(self.size_y())
        ]

    def check_group(self, group: Group, v: bool) -> bool:
        """Return True when every present cell of ``group`` has value ``v``."""
        for point in group.to_points():
            value = self.value_for(point.x, point.y)
            if value is not None and value != v:
                return False
        return True

    def coords_from_group(self, group: Group) -> List[VarCoord]:
        coords = []
        for point in group.to_points():
            coord = self.var_coord_for(point.x, point.y)
            if coord is not None:
                coords.append(coord)
        return coords

    def get_all_groups(self, v: bool) -> List[Group]:
        """Return every uniform rectangle of value ``v`` (no wrap-around)."""
        size_x, size_y = self.size_x(), self.size_y()
        codes_x, codes_y = self._codes
        groups: List[Group] = []
        for w, h in group_shapes(size_x, size_y):
            for x in range(size_x - w + 1):
                if not _valid_span(codes_x, x, w):
                    continue
                for y in range(size_y - h + 1):
                    if not _valid_span(codes_y, y, h):
                        continue
                    group = Group(Point(x, y), Point(w, h))
                    if self.check_group(group, v):
                        groups.append(group)
        logger.debug("get_all_groups(%s): %d candidate(s)", v, len(groups))
        return groups

    def get_filtered_groups(self, v: bool) -> List[Group]:
        return filter_groups(self.get_all_groups(v))

    def get_formula(self, v: bool) -> List[Term]:
        """Return one term per surviving group; ``v`` True for SOP, False for POS."""
        return get_formula(self, v)

    def get_formula_string(self, v: bool) -> str:
        return format_formula(self.get_formula(v), v)


def load_kmap(path: Union[str, Path]) -> KMap:
    """Read a truth table file into a :class:`KMap`."""
    return KMap.from_path(path)


__all__ = [
    "AxisAssignment",
    "Cell",
    "KMap",
    "SHAPES",
    "filter_groups",
    "gray_sequence",
    "group_shapes",
    "load_kmap",
    "remove_contained",
    "remove_redundant",
    "split_variables",
]
