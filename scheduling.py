"""
magicscreen - Scheduling
Timer abstraction shared by the frame loop and the clear animation.

QtScheduler runs callbacks from the Qt event loop; ManualScheduler is a
deterministic clock that only moves when advance() is called.
"""

import heapq
import itertools
from typing import Callable, List, Tuple

from PyQt6.QtCore import Qt, QTimer


class TimerHandle:
    """Cancellable registration returned by call_every / call_later."""

    def __init__(self, cancel_fn: Callable[["TimerHandle"], None] = None):
        self._cancel_fn = cancel_fn
        self.active = True

    def cancel(self) -> None:
        if not self.active:
            return
        self.active = False
        if self._cancel_fn is not None:
            self._cancel_fn(self)


class QtScheduler:
    """QTimer-backed scheduler. Must be used from the GUI thread."""

    def __init__(self):
        self._timers: dict = {}

    def call_every(self, interval_ms: int, callback: Callable[[], None]) -> TimerHandle:
        return self._start(interval_ms, callback, single_shot=False)

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle:
        return self._start(delay_ms, callback, single_shot=True)

    def cancel_all(self) -> None:
        for handle in list(self._timers):
            handle.cancel()

    def _start(self, interval_ms: int, callback, single_shot: bool) -> TimerHandle:
        timer = QTimer()
        timer.setTimerType(Qt.TimerType.PreciseTimer)
        timer.setSingleShot(single_shot)
        handle = TimerHandle(self._release)
        self._timers[handle] = timer

        def fire():
            if not handle.active:
                return
            if single_shot:
                handle.cancel()
            callback()

        timer.timeout.connect(fire)
        timer.start(max(0, int(interval_ms)))
        return handle

    def _release(self, handle: TimerHandle) -> None:
        timer = self._timers.pop(handle, None)
        if timer is not None:
            timer.stop()
            timer.deleteLater()


class ManualScheduler:
    """Virtual-time scheduler. Nothing fires until advance() moves the clock."""

    def __init__(self):
        self.now_ms = 0
        self._queue: List[Tuple[int, int, TimerHandle]] = []
        self._entries: dict = {}
        self._seq = itertools.count()

    def call_every(self, interval_ms: int, callback: Callable[[], None]) -> TimerHandle:
        return self._add(max(1, int(interval_ms)), callback, repeat=True)

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle:
        return self._add(max(0, int(delay_ms)), callback, repeat=False)

    def pending(self) -> int:
        return len(self._entries)

    def cancel_all(self) -> None:
        for handle in list(self._entries):
            handle.cancel()

    def advance(self, ms: int) -> int:
        """Move the clock forward, firing due callbacks in time order.
        Returns how many callbacks ran."""
        target = self.now_ms + int(ms)
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, handle = heapq.heappop(self._queue)
            entry = self._entries.get(handle)
            if entry is None:
                continue
            self.now_ms = due
            interval, callback, repeat = entry
            if repeat:
                heapq.heappush(self._queue, (due + interval, next(self._seq), handle))
            else:
                handle.cancel()
            callback()
            fired += 1
        self.now_ms = target
        return fired

    def run_until_idle(self, limit_ms: int = 60_000) -> None:
        """Advance until no one-shot or repeating timer remains (bounded)."""
        deadline = self.now_ms + limit_ms
        while self._entries and self.now_ms < deadline:
            next_due = min(due for due, _, h in self._queue if h in self._entries)
            self.advance(next_due - self.now_ms)

    def _add(self, interval: int, callback, repeat: bool) -> TimerHandle:
        handle = TimerHandle(self._drop)
        self._entries[handle] = (interval, callback, repeat)
        heapq.heappush(self._queue, (self.now_ms + interval, next(self._seq), handle))
        return handle

    def _drop(self, handle: TimerHandle) -> None:
        self._entries.pop(handle, None)
