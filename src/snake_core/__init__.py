"""Snake Core — tick-driven snake simulation engine."""

from snake_core.config import GameConfig
from snake_core.engine import GameEngine
from snake_core.food import Food, spawn_food
from snake_core.grid import Direction, Grid, GridPoint, move, opposite
from snake_core.models import GamePhase, GameSnapshot
from snake_core.scheduler import (
    AsyncioScheduler,
    ManualScheduler,
    Scheduler,
    ThreadScheduler,
)
from snake_core.snake import Snake

__all__ = [
    "AsyncioScheduler",
    "Direction",
    "Food",
    "GameConfig",
    "GameEngine",
    "GamePhase",
    "GameSnapshot",
    "Grid",
    "GridPoint",
    "ManualScheduler",
    "Scheduler",
    "Snake",
    "ThreadScheduler",
    "move",
    "opposite",
    "spawn_food",
]
