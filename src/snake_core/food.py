"""Food placement logic."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from snake_core.grid import GridPoint

if TYPE_CHECKING:
    from snake_core.grid import Grid
    from snake_core.snake import Snake

logger = logging.getLogger(__name__)

# Returned when the snake covers every cell.
FALLBACK_POSITION = GridPoint(0, 0)


@dataclass(frozen=True)
class Food:
    """The single food item on the board."""

    position: GridPoint

    def to_dict(self) -> dict:
        return {"position": self.position.to_list()}


def spawn_food(
    grid: Grid,
    avoiding: Snake,
    rng: np.random.Generator | None = None,
) -> Food:
    """Place food uniformly at random on a cell the snake does not occupy.

    Falls back to :data:`FALLBACK_POSITION` when the board is full.
    """
    rng = rng if rng is not None else np.random.default_rng()
    free = grid.free_cells(avoiding.body)
    if not free:
        logger.warning(
            "No free cells on a %dx%d board; placing food at %s.",
            grid.columns, grid.rows, FALLBACK_POSITION,
        )
        return Food(FALLBACK_POSITION)
    idx = int(rng.integers(len(free)))
    return Food(free[idx])
