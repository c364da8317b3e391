"""Tick-driven game engine composing grid, snake, and food logic."""

from __future__ import annotations

import functools
import logging
import threading
from collections.abc import Callable

import numpy as np

from snake_core.config import GameConfig
from snake_core.food import Food, spawn_food
from snake_core.grid import Direction, GridPoint
from snake_core.models import BoardModel, GamePhase, GameSnapshot, PointModel
from snake_core.scheduler import ManualScheduler, Scheduler
from snake_core.snake import Snake

logger = logging.getLogger(__name__)

Observer = Callable[[GameSnapshot], None]


class GameEngine:
    """Single-snake, tick-driven game engine.

    The engine owns the snake, the food and the score, and advances them
    once per :meth:`tick` while the phase is ``PLAYING``. A scheduler
    supplied by the host is armed on start/resume and disarmed on
    pause/game over; ``tick`` is still a no-op in any other phase.

    Ticks, transitions and direction requests are serialized by a
    reentrant lock, so input may arrive from a different thread than the
    one driving the cadence. Observers receive snapshots in commit order;
    a snapshot superseded before it is delivered is dropped.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        scheduler: Scheduler | None = None,
        rng: np.random.Generator | None = None,
        seed: int | None = None,
    ) -> None:
        self.config = config if config is not None else GameConfig()
        self.grid = self.config.grid()
        self.scheduler = scheduler if scheduler is not None else ManualScheduler()
        self.rng = rng if rng is not None else np.random.default_rng(seed)

        self._lock = threading.RLock()
        self._notify_lock = threading.RLock()
        self._observers: list[Observer] = []
        self._seq = 0
        self._delivered_seq = 0
        self._arm_token = 0

        self.phase = GamePhase.IDLE
        self._reset_state()

    # --- lifecycle ---

    def start(self) -> None:
        """Reset everything and begin playing. Valid from any phase."""
        with self._lock:
            self._disarm()
            self._reset_state()
            self.phase = GamePhase.PLAYING
            self._arm()
            snapshot = self._commit()
        logger.info("Game started (food at %s).", self.food.position)
        self._notify(snapshot)

    def restart(self) -> None:
        """Same as :meth:`start`."""
        self.start()

    def reset(self) -> None:
        """Stop the cadence and return to a fresh ``IDLE`` game."""
        with self._lock:
            self._disarm()
            self._reset_state()
            self.phase = GamePhase.IDLE
            snapshot = self._commit()
        self._notify(snapshot)

    def pause(self) -> None:
        with self._lock:
            if self.phase != GamePhase.PLAYING:
                return
            self.phase = GamePhase.PAUSED
            self._disarm()
            snapshot = self._commit()
        logger.debug("Game paused at tick %d.", snapshot.tick)
        self._notify(snapshot)

    def resume(self) -> None:
        with self._lock:
            if self.phase != GamePhase.PAUSED:
                return
            self.phase = GamePhase.PLAYING
            self._arm()
            snapshot = self._commit()
        logger.debug("Game resumed at tick %d.", snapshot.tick)
        self._notify(snapshot)

    # --- input ---

    def request_direction_change(self, direction: Direction) -> None:
        """Buffer a heading change for the next tick.

        Ignored outside ``PLAYING`` and when *direction* reverses the
        current heading. A later valid request overwrites an earlier one.
        """
        with self._lock:
            if self.phase != GamePhase.PLAYING:
                return
            if direction.is_opposite(self.snake.direction):
                return
            self._pending_direction = direction

    def swipe_up(self) -> None:
        self.request_direction_change(Direction.UP)

    def swipe_down(self) -> None:
        self.request_direction_change(Direction.DOWN)

    def swipe_left(self) -> None:
        self.request_direction_change(Direction.LEFT)

    def swipe_right(self) -> None:
        self.request_direction_change(Direction.RIGHT)

    # --- simulation ---

    def tick(self) -> None:
        """Advance the game by one step. No-op unless ``PLAYING``."""
        snapshot = self._step()
        if snapshot is not None:
            self._notify(snapshot)

    def _step(self) -> GameSnapshot | None:
        with self._lock:
            if self.phase != GamePhase.PLAYING:
                return None

            if self._pending_direction is not None:
                # Re-validated against the heading at the start of the tick.
                self.snake.change_direction(self._pending_direction)
                self._pending_direction = None

            next_head = self.snake.next_head()

            if not self.grid.in_bounds(next_head):
                self._end_game("wall", next_head)
            elif self.snake.would_collide(next_head):
                self._end_game("self", next_head)
            else:
                will_eat = next_head == self.food.position
                self.snake.advance(grow=will_eat)
                self.tick_count += 1
                if will_eat:
                    self.score += self.config.points_per_food
                    self.food = spawn_food(self.grid, self.snake, self.rng)
                    logger.debug(
                        "Food eaten at tick %d; score %d, length %d.",
                        self.tick_count, self.score, self.snake.length,
                    )
            return self._commit()

    # --- observation ---

    @property
    def pending_direction(self) -> Direction | None:
        return self._pending_direction

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register *observer* for snapshots; returns an unsubscribe callable."""
        with self._lock:
            self._observers.append(observer)

        def unsubscribe() -> None:
            with self._lock:
                if observer in self._observers:
                    self._observers.remove(observer)

        return unsubscribe

    def snapshot(self) -> GameSnapshot:
        """Return an immutable copy of the observable state."""
        with self._lock:
            return GameSnapshot(
                seq=self._seq,
                phase=self.phase,
                score=self.score,
                tick=self.tick_count,
                snake=[PointModel(x=p.x, y=p.y) for p in self.snake.body],
                heading=self.snake.direction.name.lower(),
                food=PointModel(
                    x=self.food.position.x, y=self.food.position.y,
                ),
                board=BoardModel(
                    columns=self.grid.columns, rows=self.grid.rows,
                ),
            )

    def get_state(self) -> dict:
        """Return the full, serializable game state."""
        return self.snapshot().model_dump(mode="json")

    # --- internals ---

    def _reset_state(self) -> None:
        self.snake = Snake.initial(
            self.grid, self.config.initial_length, self.config.direction,
        )
        self.food: Food = spawn_food(self.grid, self.snake, self.rng)
        self.score = 0
        self.tick_count = 0
        self._pending_direction: Direction | None = None

    def _arm(self) -> None:
        self._arm_token += 1
        callback = functools.partial(self._scheduled_tick, self._arm_token)
        self.scheduler.arm(self.config.tick_interval, callback)

    def _disarm(self) -> None:
        self._arm_token += 1
        self.scheduler.disarm()

    def _scheduled_tick(self, token: int) -> None:
        # Callbacks from a superseded arm may still be in flight.
        with self._lock:
            if token != self._arm_token:
                return
            snapshot = self._step()
        if snapshot is not None:
            self._notify(snapshot)

    def _end_game(self, cause: str, at: GridPoint) -> None:
        self._disarm()
        self.phase = GamePhase.GAME_OVER
        logger.info(
            "Game over (%s collision at %s) after %d ticks with score %d.",
            cause, at, self.tick_count, self.score,
        )

    def _commit(self) -> GameSnapshot:
        self._seq += 1
        return self.snapshot()

    def _notify(self, snapshot: GameSnapshot) -> None:
        with self._notify_lock:
            if snapshot.seq <= self._delivered_seq:
                return
            self._delivered_seq = snapshot.seq
            with self._lock:
                observers = list(self._observers)
            for observer in observers:
                # An observer may trigger a newer commit; stop delivering this one.
                if self._delivered_seq != snapshot.seq:
                    return
                try:
                    observer(snapshot)
                except Exception:
                    logger.exception("Observer %r failed.", observer)
