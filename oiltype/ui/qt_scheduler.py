"""QTimer-backed scheduler for the session countdown."""

from __future__ import annotations

from typing import Callable, Optional

from PySide6.QtCore import QObject, QTimer


class QtTask:
    def __init__(self, timer: QTimer) -> None:
        self._timer: Optional[QTimer] = timer

    @property
    def active(self) -> bool:
        return self._timer is not None and self._timer.isActive()

    def cancel(self) -> None:
        if self._timer is None:
            return
        self._timer.stop()
        self._timer.deleteLater()
        self._timer = None


class QtScheduler:
    """Runs repeating callbacks on the GUI thread, serialized with key events."""

    def __init__(self, parent: Optional[QObject] = None) -> None:
        self._parent = parent

    def call_every(self, interval: float, callback: Callable[[], None]) -> QtTask:
        timer = QTimer(self._parent)
        timer.setInterval(max(1, int(round(interval * 1000))))
        timer.timeout.connect(callback)
        timer.start()
        return QtTask(timer)
