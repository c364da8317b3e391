"""Board geometry: grid points, directions, and bounds."""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np


class Direction(enum.Enum):
    """Cardinal movement directions with (dx, dy) values."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]

    def is_opposite(self, other: Direction) -> bool:
        """Return True if turning from *other* to this would be a 180° reversal."""
        return self is other.opposite

    @classmethod
    def from_name(cls, name: str) -> Direction:
        """Parse ``"up"``, ``"U"``, ``"Right"`` and friends."""
        key = name.strip().upper()
        for direction in cls:
            if key in (direction.name, direction.name[0]):
                return direction
        raise ValueError(f"Unknown direction: {name!r}.")


_OPPOSITES: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


@dataclass(frozen=True)
class GridPoint:
    """A cell coordinate. Off-board values are legal and used transiently."""

    x: int
    y: int

    def moved(self, direction: Direction) -> GridPoint:
        dx, dy = direction.value
        return GridPoint(self.x + dx, self.y + dy)

    def to_list(self) -> list[int]:
        return [self.x, self.y]


def move(point: GridPoint, direction: Direction) -> GridPoint:
    """Translate *point* by exactly one cell along *direction*."""
    return point.moved(direction)


def opposite(direction: Direction) -> Direction:
    return direction.opposite


class Grid:
    """Fixed-size board with a NumPy occupancy view.

    Coordinates are ``(x, y)``; occupancy masks are indexed ``[y, x]``
    to match NumPy row-major ordering.
    """

    def __init__(self, columns: int = 20, rows: int = 20) -> None:
        if columns < 4 or rows < 4:
            raise ValueError("Grid dimensions must be at least 4×4.")
        self.columns = columns
        self.rows = rows

    @property
    def size(self) -> int:
        return self.columns * self.rows

    def in_bounds(self, point: GridPoint) -> bool:
        """Check whether a point lies on the board."""
        return 0 <= point.x < self.columns and 0 <= point.y < self.rows

    def center(self) -> GridPoint:
        return GridPoint(self.columns // 2, self.rows // 2)

    def occupancy(self, points: Iterable[GridPoint]) -> np.ndarray:
        """Return a ``(rows, columns)`` boolean mask of the on-board *points*."""
        mask = np.zeros((self.rows, self.columns), dtype=bool)
        for p in points:
            if self.in_bounds(p):
                mask[p.y, p.x] = True
        return mask

    def free_cells(self, points: Iterable[GridPoint]) -> list[GridPoint]:
        """Return every cell not covered by *points*, in row-major order."""
        ys, xs = np.nonzero(~self.occupancy(points))
        return [
            GridPoint(x, y)
            for y, x in zip(ys.tolist(), xs.tolist(), strict=True)
        ]

    def to_dict(self) -> dict:
        """Serialize board dimensions to a dictionary."""
        return {"columns": self.columns, "rows": self.rows}
