"""
Tick Schedulers
===============
The periodic timer behind autoplay, behind a small start/stop interface.

Why is this file needed?
------------------------
1. Lifecycle: the controller starts the timer on play and cancels it on
   pause and teardown; the interface makes "is a timer running?" a
   question that can be asked and tested.
2. Headless tests: a manual scheduler can stand in for QTimer, so the
   playback state machine runs without a Qt event loop.

Classes:
    TickScheduler: Abstract interface.
    QtTickScheduler: QTimer-backed implementation used by the GUI.
    ManualTickScheduler: Fires only when told to (tests, CLI stepping).
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Callable, Optional

from PySide6.QtCore import QTimer

logger = logging.getLogger(__name__)

TickCallback = Callable[[], None]


class TickScheduler(ABC):
    @abstractmethod
    def start(self, interval_ms: int, callback: TickCallback) -> None:
        """Begin calling `callback` every `interval_ms` until stopped."""

    @abstractmethod
    def stop(self) -> None:
        """Cancel the periodic callback. Safe to call when not running."""

    @abstractmethod
    def set_interval(self, interval_ms: int) -> None:
        pass

    @property
    @abstractmethod
    def is_active(self) -> bool:
        pass


class QtTickScheduler(TickScheduler):
    def __init__(self) -> None:
        self.timer = QTimer()
        self._callback: Optional[TickCallback] = None
        self.timer.timeout.connect(self._on_timeout)

    def _on_timeout(self) -> None:
        if self._callback is not None:
            self._callback()

    def start(self, interval_ms: int, callback: TickCallback) -> None:
        self._callback = callback
        self.timer.setInterval(interval_ms)
        self.timer.start()

    def stop(self) -> None:
        self.timer.stop()
        self._callback = None

    def set_interval(self, interval_ms: int) -> None:
        self.timer.setInterval(interval_ms)

    @property
    def is_active(self) -> bool:
        return self.timer.isActive()


class ManualTickScheduler(TickScheduler):
    """Scheduler that only ticks through `fire()`."""

    def __init__(self) -> None:
        self.interval_ms: Optional[int] = None
        self._callback: Optional[TickCallback] = None
        self.start_count = 0
        self.stop_count = 0

    def start(self, interval_ms: int, callback: TickCallback) -> None:
        self.interval_ms = interval_ms
        self._callback = callback
        self.start_count += 1

    def stop(self) -> None:
        if self._callback is not None:
            self.stop_count += 1
        self._callback = None

    def set_interval(self, interval_ms: int) -> None:
        self.interval_ms = interval_ms

    @property
    def is_active(self) -> bool:
        return self._callback is not None

    def fire(self, times: int = 1) -> None:
        for _ in range(times):
            if self._callback is None:
                return
            self._callback()
