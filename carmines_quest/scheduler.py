"""Cooperative timer scheduler on a virtual millisecond clock.

The scheduler never sleeps and never spawns threads: time only moves when
:meth:`Scheduler.advance` is called, and due timers fire synchronously, in
deadline order, from inside that call. Timers sharing a deadline fire in the
order they were scheduled. A callback may cancel any timer, including the one
being fired, and cancelled timers never fire again.
"""

import heapq
import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Timer:
    """Handle returned by the scheduler.

    Attributes:
        name: Label used in logs.
        callback: Zero-argument function invoked when due.
        due_ms: Next deadline on the scheduler clock.
        interval_ms: Period for repeating timers, ``None`` for one-shot.
        active: False once cancelled or, for one-shot timers, fired.
    """

    name: str
    callback: Callable[[], None] = field(repr=False)
    due_ms: int
    interval_ms: Optional[int] = None
    active: bool = True


class Scheduler:
    def __init__(self, start_ms: int = 0) -> None:
        self._now_ms = start_ms
        self._queue: List[Tuple[int, int, Timer]] = []
        self._counter = 0

    @property
    def now_ms(self) -> int:
        return self._now_ms

    def call_later(
        self, delay_ms: int, callback: Callable[[], None], name: str = "timer"
    ) -> Timer:
        """Schedule a one-shot timer ``delay_ms`` from now."""
        if delay_ms < 0:
            raise ValueError("delay_ms must not be negative")
        timer = Timer(name=name, callback=callback, due_ms=self._now_ms + delay_ms)
        self._push(timer)
        return timer

    def call_every(
        self, interval_ms: int, callback: Callable[[], None], name: str = "timer"
    ) -> Timer:
        """Schedule a repeating timer; the first firing is one interval away."""
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        timer = Timer(
            name=name,
            callback=callback,
            due_ms=self._now_ms + interval_ms,
            interval_ms=interval_ms,
        )
        self._push(timer)
        return timer

    def cancel(self, timer: Timer) -> None:
        timer.active = False

    def cancel_all(self) -> None:
        for _, _, timer in self._queue:
            timer.active = False
        self._queue.clear()

    def remaining_ms(self, timer: Timer) -> int:
        """Milliseconds until ``timer`` fires, 0 if inactive."""
        if not timer.active:
            return 0
        return max(0, timer.due_ms - self._now_ms)

    def pending(self) -> List[Timer]:
        """Active timers in firing order."""
        return [t for _, _, t in sorted(self._queue, key=lambda e: e[:2]) if t.active]

    def advance(self, ms: int) -> None:
        """Move the clock forward by ``ms``, firing every timer that falls due."""
        if ms < 0:
            raise ValueError("Cannot advance the clock backwards")
        target = self._now_ms + ms
        while self._queue and self._queue[0][0] <= target:
            due, _, timer = heapq.heappop(self._queue)
            if not timer.active:
                continue
            self._now_ms = due
            if timer.interval_ms is not None:
                timer.due_ms = due + timer.interval_ms
                self._push(timer)
            else:
                timer.active = False
            logger.debug("Firing %s at %d ms", timer.name, due)
            timer.callback()
        self._now_ms = target

    def _push(self, timer: Timer) -> None:
        heapq.heappush(self._queue, (timer.due_ms, self._counter, timer))
        self._counter += 1
