"""
scheduler.py — Tick scheduler.

Frame-driven replacement for a periodic timer: the controller feeds it
elapsed frame time and it fires the tick callback whenever a full
interval has passed. The interval follows the model's tick_interval_ms,
so speed-ups take effect on the very next tick.
"""

import logging
from typing import Callable

logger = logging.getLogger(__name__)


class TickScheduler:
    """
    Runs at most one tick per advance() call and never re-enters the
    callback. stop() discards any accumulated time, so nothing scheduled
    before the stop can fire after it.
    """

    def __init__(self):
        self.interval_ms: float | None = None
        self.generation: int = 0
        self._elapsed_ms: float = 0.0
        self._in_tick: bool = False

    @property
    def running(self) -> bool:
        return self.interval_ms is not None

    def sync(self, interval_ms: float | None) -> None:
        """Start, retime or stop to match the model's current interval."""
        if interval_ms is None:
            if self.running:
                self.stop()
            return
        if not self.running:
            self.start(interval_ms)
        elif interval_ms != self.interval_ms:
            logger.debug("Tick interval %sms -> %sms", self.interval_ms, interval_ms)
            self.interval_ms = interval_ms

    def start(self, interval_ms: float) -> None:
        self.interval_ms = interval_ms
        self._elapsed_ms = 0.0
        self.generation += 1

    def stop(self) -> None:
        self.interval_ms = None
        self._elapsed_ms = 0.0
        self.generation += 1

    def advance(self, dt_ms: float, callback: Callable[[], object]) -> bool:
        """
        Add dt_ms of elapsed time. Returns True if the callback ran.

        A long frame does not trigger a burst of catch-up ticks: surplus
        time beyond one interval is dropped.
        """
        if not self.running or self._in_tick:
            return False

        self._elapsed_ms += dt_ms
        if self._elapsed_ms < self.interval_ms:
            return False

        self._elapsed_ms -= self.interval_ms
        if self._elapsed_ms >= self.interval_ms:
            self._elapsed_ms = 0.0
        generation = self.generation
        self._in_tick = True
        try:
            callback()
        finally:
            self._in_tick = False
        # The callback may have stopped or restarted us; leftover time
        # belongs to the old timer.
        if generation != self.generation:
            self._elapsed_ms = 0.0
        return True
