"""Countdown clock and the scheduling seam that drives it.

The core never owns a thread or an event loop.  A session asks a
:class:`Scheduler` for one repeating task while it is playing and cancels it
on every way out of ``playing``.  The Qt host plugs in a QTimer-backed
scheduler; tests and headless hosts use :class:`ManualScheduler`.
"""

from __future__ import annotations

from typing import Callable, List, Optional, Protocol

TICK_INTERVAL = 0.1
TICK_STEP = 0.1

# Rounding applied after each change so repeated 0.1 steps land on zero.
_PRECISION = 6


class CountdownClock:
    """Seconds remaining, clamped at zero and optionally capped."""

    def __init__(self, seconds: float, cap: Optional[float] = None) -> None:
        self._cap = cap
        self._remaining = self._clamp(float(seconds))
        self._expired = self._remaining <= 0.0

    @property
    def remaining(self) -> float:
        return self._remaining

    @property
    def expired(self) -> bool:
        return self._expired

    def _clamp(self, value: float) -> float:
        value = max(0.0, round(value, _PRECISION))
        if self._cap is not None:
            value = min(value, self._cap)
        return value

    def tick(self, step: float = TICK_STEP) -> bool:
        """Count down one step; True only on the tick that reaches zero."""
        if self._expired:
            return False
        self._remaining = self._clamp(self._remaining - step)
        if self._remaining <= 0.0:
            self._expired = True
            return True
        return False

    def add(self, seconds: float) -> None:
        if self._expired:
            return
        self._remaining = self._clamp(self._remaining + seconds)


class ScheduledTask(Protocol):
    @property
    def active(self) -> bool: ...

    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_every(self, interval: float, callback: Callable[[], None]) -> ScheduledTask: ...


class ManualTask:
    def __init__(self, interval: float, callback: Callable[[], None], due: float) -> None:
        self.interval = interval
        self.callback = callback
        self.due = due
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        self._active = False


class ManualScheduler:
    """Deterministic scheduler advanced explicitly by the caller."""

    def __init__(self) -> None:
        self._now = 0.0
        self._tasks: List[ManualTask] = []

    @property
    def now(self) -> float:
        return self._now

    @property
    def active_tasks(self) -> List[ManualTask]:
        return [t for t in self._tasks if t.active]

    def call_every(self, interval: float, callback: Callable[[], None]) -> ManualTask:
        task = ManualTask(interval, callback, self._now + interval)
        self._tasks.append(task)
        return task

    def advance(self, seconds: float) -> None:
        """Move time forward, firing due callbacks in time order."""
        end = round(self._now + seconds, _PRECISION)
        while True:
            pending = [t for t in self._tasks if t.active and t.due <= end]
            if not pending:
                break
            task = min(pending, key=lambda t: t.due)
            self._now = task.due
            task.due = round(task.due + task.interval, _PRECISION)
            task.callback()
        self._now = end
        self._tasks = [t for t in self._tasks if t.active]
