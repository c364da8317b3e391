"""Cadence sources that call the engine's tick at a fixed interval.

The engine only needs ``arm(interval, callback)`` and ``disarm()``; the
host picks whichever implementation matches its event model.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Callable
from typing import Protocol

logger = logging.getLogger(__name__)

TickCallback = Callable[[], None]


class Scheduler(Protocol):
    """Periodic timer capability injected into the engine."""

    @property
    def armed(self) -> bool: ...

    def arm(self, interval: float, callback: TickCallback) -> None: ...

    def disarm(self) -> None: ...


class ManualScheduler:
    """Scheduler driven by hand, for tests and headless runs."""

    def __init__(self) -> None:
        self.interval: float | None = None
        self._callback: TickCallback | None = None

    @property
    def armed(self) -> bool:
        return self._callback is not None

    def arm(self, interval: float, callback: TickCallback) -> None:
        self.interval = interval
        self._callback = callback

    def disarm(self) -> None:
        self._callback = None

    def fire(self, times: int = 1) -> int:
        """Invoke the callback up to *times* times while armed.

        Returns how many ticks actually fired.
        """
        fired = 0
        for _ in range(times):
            if self._callback is None:
                break
            self._callback()
            fired += 1
        return fired


class AsyncioScheduler:
    """Runs the callback from a background task on the running event loop."""

    def __init__(self) -> None:
        self.interval: float | None = None
        self._armed = False
        self._task: asyncio.Task | None = None

    @property
    def armed(self) -> bool:
        return self._armed and self._task is not None and not self._task.done()

    def arm(self, interval: float, callback: TickCallback) -> None:
        self.disarm()
        self.interval = interval
        self._armed = True
        self._task = asyncio.get_running_loop().create_task(
            self._tick_loop(interval, callback),
        )

    def disarm(self) -> None:
        self._armed = False
        task = self._task
        if task is not None and not task.done():
            task.cancel()

    async def wait_disarmed(self) -> None:
        """Wait until the most recent tick loop has finished."""
        task = self._task
        if task is not None:
            await asyncio.gather(task, return_exceptions=True)

    async def _tick_loop(self, interval: float, callback: TickCallback) -> None:
        try:
            while True:
                await asyncio.sleep(interval)
                callback()
        except asyncio.CancelledError:
            logger.debug("Tick loop cancelled.")
        except Exception:
            logger.exception("Tick loop error; stopping.")


class ThreadScheduler:
    """Runs the callback from a daemon thread.

    Each arm gets its own stop event so a stale thread never outlives a
    disarm/arm pair.
    """

    def __init__(self, name: str = "snake-tick") -> None:
        self.name = name
        self.interval: float | None = None
        self._stop: threading.Event | None = None
        self._thread: threading.Thread | None = None
        self._lock = threading.Lock()

    @property
    def armed(self) -> bool:
        with self._lock:
            return self._stop is not None and not self._stop.is_set()

    def arm(self, interval: float, callback: TickCallback) -> None:
        with self._lock:
            if self._stop is not None:
                self._stop.set()
            stop = threading.Event()
            self.interval = interval
            self._stop = stop
            self._thread = threading.Thread(
                target=self._run,
                args=(interval, callback, stop),
                name=self.name,
                daemon=True,
            )
            self._thread.start()

    def disarm(self) -> None:
        with self._lock:
            if self._stop is not None:
                self._stop.set()
            self._stop = None

    def join(self, timeout: float | None = None) -> None:
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)

    @staticmethod
    def _run(
        interval: float,
        callback: TickCallback,
        stop: threading.Event,
    ) -> None:
        try:
            while not stop.wait(interval):
                if stop.is_set():
                    break
                callback()
        except Exception:
            logger.exception("Tick thread error; stopping.")
            stop.set()
