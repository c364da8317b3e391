"""Snake representation and movement logic."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable

from snake_core.grid import Direction, Grid, GridPoint


class Snake:
    """A snake represented as an ordered deque of body segments.

    The head is ``body[0]``; the tail is ``body[-1]``. The snake never
    validates its own moves: bounds and self-collision are checked by the
    engine against the prospective head before :meth:`advance` is called.
    """

    def __init__(
        self,
        body: Iterable[GridPoint],
        direction: Direction = Direction.RIGHT,
    ) -> None:
        self.body: deque[GridPoint] = deque(body)
        if not self.body:
            raise ValueError("Snake length must be at least 1.")
        self.direction = direction

    @classmethod
    def initial(
        cls,
        grid: Grid,
        length: int = 3,
        direction: Direction = Direction.RIGHT,
    ) -> Snake:
        """Build the starting snake centered on *grid*.

        The head sits at ``(columns // 2, rows // 2)`` and the body trails
        away from the heading.
        """
        if length < 1:
            raise ValueError("Snake length must be at least 1.")
        head = grid.center()
        back = direction.opposite
        body = [head]
        for _ in range(length - 1):
            body.append(body[-1].moved(back))
        return cls(body, direction)

    @property
    def head(self) -> GridPoint:
        """Return the head coordinate."""
        return self.body[0]

    @property
    def tail(self) -> list[GridPoint]:
        """All segments except the head."""
        return list(self.body)[1:]

    @property
    def length(self) -> int:
        return len(self.body)

    def change_direction(self, new_direction: Direction) -> bool:
        """Change heading unless it is a 180° reversal.

        Returns True if the change was accepted.
        """
        if new_direction.is_opposite(self.direction):
            return False
        self.direction = new_direction
        return True

    def next_head(self) -> GridPoint:
        """Compute the next head position without moving."""
        return self.head.moved(self.direction)

    def advance(self, grow: bool = False) -> GridPoint | None:
        """Move the snake one step forward.

        Returns the vacated tail cell, or ``None`` if the snake grew.
        """
        self.body.appendleft(self.next_head())
        if grow:
            return None
        return self.body.pop()

    def occupies(self, point: GridPoint) -> bool:
        """Check whether the snake occupies a given cell."""
        return point in self.body

    def would_collide(self, point: GridPoint, grow: bool = False) -> bool:
        """Check whether moving the head to *point* hits the body.

        The current tail is left out unless the snake is growing, since it
        vacates its cell on the same step.
        """
        segments = list(self.body)
        if not grow:
            segments = segments[:-1]
        return point in segments

    def collided_with_self(self) -> bool:
        """Check whether the head overlaps any other body segment."""
        return self.head in self.tail

    def collided_with_wall(self, grid: Grid) -> bool:
        return not grid.in_bounds(self.head)

    def to_dict(self) -> dict:
        """Serialize snake state to a dictionary."""
        return {
            "body": [seg.to_list() for seg in self.body],
            "direction": self.direction.name.lower(),
        }
