"""Integer points and rectangular groups on a Karnaugh map."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class Point:
    """Integer 2D point, x along the columns and y along the rows."""

    x: int = 0
    y: int = 0


@dataclass(frozen=True)
class Group:
    """Axis-aligned rectangle given by its top-left start and its size."""

    start: Point
    size: Point

    @property
    def width(self) -> int:
        return self.size.x

    @property
    def height(self) -> int:
        return self.size.y

    @property
    def area(self) -> int:
        return self.size.x * self.size.y

    def is_in(self, other: "Group") -> bool:
        """Return True when this rectangle lies entirely inside ``other``."""
        return (
            self.start.x >= other.start.x
            and self.start.y >= other.start.y
            and self.start.x + self.size.x <= other.start.x + other.size.x
            and self.start.y + self.size.y <= other.start.y + other.size.y
        )

    def to_points(self) -> List[Point]:
        """Return every covered point, column by column."""
        return [
            Point(self.start.x + dx, self.start.y + dy)
            for dx in range(self.size.x)
            for dy in range(self.size.y)
        ]


__all__ = ["Point", "Group"]
