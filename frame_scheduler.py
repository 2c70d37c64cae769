"""Per-frame keyboard poll loop.

Only the keyboard tick runs here; dial drags are handled straight from
pointer events on the same thread.
"""

from typing import Callable, Optional

from logging_utils import log_event
from scheduling import TimerHandle


class FrameScheduler:
    def __init__(self, scheduler, on_frame: Callable[[], None], interval_ms: int = 16):
        self.scheduler = scheduler
        self.on_frame = on_frame
        self.interval_ms = interval_ms
        self.frame_count = 0
        self._handle: Optional[TimerHandle] = None

    @property
    def running(self) -> bool:
        return self._handle is not None and self._handle.active

    def start(self) -> None:
        if self.running:
            return
        self._handle = self.scheduler.call_every(self.interval_ms, self._frame)
        log_event("DEBUG", "Frame", "Loop started", interval_ms=self.interval_ms)

    def stop(self) -> None:
        if self._handle is None:
            return
        self._handle.cancel()
        self._handle = None
        log_event("DEBUG", "Frame", "Loop stopped", frames=self.frame_count)

    def _frame(self) -> None:
        self.frame_count += 1
        self.on_frame()
