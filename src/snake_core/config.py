"""Game configuration constants."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

from snake_core.grid import Direction, Grid
from snake_core.snake import Snake

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameConfig:
    """Board size, cadence and scoring for one engine.

    Supports JSON serialization so a session can be reproduced.
    """

    # Board
    columns: int = 20
    rows: int = 20

    # Cadence, in seconds between ticks
    tick_interval: float = 0.15

    # Scoring
    points_per_food: int = 10

    # Starting snake
    initial_length: int = 3
    initial_direction: str = "right"

    def __post_init__(self) -> None:
        if self.columns < 4 or self.rows < 4:
            raise ValueError("Grid dimensions must be at least 4×4.")
        if self.tick_interval <= 0:
            raise ValueError("tick_interval must be positive.")
        if self.points_per_food <= 0:
            raise ValueError("points_per_food must be positive.")
        if self.initial_length < 1:
            raise ValueError("initial_length must be at least 1.")
        direction = Direction.from_name(self.initial_direction)

        grid = self.grid()
        start = Snake.initial(grid, self.initial_length, direction)
        if not all(grid.in_bounds(seg) for seg in start.body):
            raise ValueError(
                f"initial_length {self.initial_length} does not fit on a "
                f"{self.columns}x{self.rows} board.",
            )

    @property
    def direction(self) -> Direction:
        return Direction.from_name(self.initial_direction)

    def grid(self) -> Grid:
        return Grid(columns=self.columns, rows=self.rows)

    def to_dict(self) -> dict:
        """Serialize to a plain dict."""
        return asdict(self)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        raw = json.loads(Path(path).read_text())
        return cls(**raw)
