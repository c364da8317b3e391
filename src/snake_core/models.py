"""Pydantic models for the observable game state."""

from __future__ import annotations

import enum

from pydantic import BaseModel, ConfigDict, Field


class GamePhase(str, enum.Enum):
    """Lifecycle states for a game engine."""

    IDLE = "idle"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"


class PointModel(BaseModel):
    """A board cell as seen by the rendering layer."""

    model_config = ConfigDict(frozen=True)

    x: int
    y: int


class BoardModel(BaseModel):
    model_config = ConfigDict(frozen=True)

    columns: int = Field(ge=4)
    rows: int = Field(ge=4)


class GameSnapshot(BaseModel):
    """Immutable copy of everything a renderer needs after a tick."""

    model_config = ConfigDict(frozen=True)

    seq: int = Field(ge=0)
    phase: GamePhase
    score: int = Field(ge=0)
    tick: int = Field(ge=0)
    snake: list[PointModel] = Field(min_length=1)
    heading: str
    food: PointModel
    board: BoardModel

    @property
    def length(self) -> int:
        return len(self.snake)

    @property
    def head(self) -> PointModel:
        return self.snake[0]
