"""
magicscreen - Clear Animator
Shake-to-clear as a small state machine:

  IDLE --trigger--> FADING --opacity hits 0--> RESETTING --> COOLDOWN --delay--> IDLE

Only IDLE accepts a trigger; shakes arriving in any other phase are dropped,
never queued. The wipe refills the whole raster, so strokes drawn while the
screen was fading are erased along with everything else.
"""

from enum import IntEnum
from typing import Callable, Optional

from config import ClearConfig
from logging_utils import log_event
from scheduling import TimerHandle

_OPACITY_EPSILON = 1e-9


class ClearPhase(IntEnum):
    IDLE = 0
    FADING = 1
    RESETTING = 2
    COOLDOWN = 3


class ClearAnimator:
    def __init__(self, config: ClearConfig, scheduler,
                 reset_callback: Callable[[], None],
                 opacity_callback: Callable[[float], None] = None,
                 phase_callback: Callable[[ClearPhase], None] = None):
        self.config = config
        self.scheduler = scheduler
        self.reset_callback = reset_callback
        self.opacity_callback = opacity_callback
        self.phase_callback = phase_callback

        self.phase = ClearPhase.IDLE
        self.opacity = 1.0
        self._fade_ticks = 0
        self._timer: Optional[TimerHandle] = None

    @property
    def busy(self) -> bool:
        return self.phase != ClearPhase.IDLE

    def trigger(self) -> bool:
        """Start a fade. Returns False (and does nothing) unless IDLE."""
        if self.busy:
            return False
        self._fade_ticks = 0
        self._set_phase(ClearPhase.FADING)
        self._timer = self.scheduler.call_every(self.config.fade_interval_ms, self._fade_tick)
        return True

    def cancel(self) -> None:
        """Abort any running animation (teardown). Leaves the screen fully visible."""
        self._stop_timer()
        self.opacity = 1.0
        if self.busy:
            self._set_phase(ClearPhase.IDLE)

    def _fade_tick(self) -> None:
        if self.phase != ClearPhase.FADING:
            return
        self._fade_ticks += 1
        # Derived from the tick count so float drift cannot add an extra tick
        remaining = 1.0 - self._fade_ticks * self.config.fade_step
        if remaining <= _OPACITY_EPSILON:
            self._publish_opacity(0.0)
            self._stop_timer()
            self._reset()
        else:
            self._publish_opacity(remaining)

    def _reset(self) -> None:
        self._set_phase(ClearPhase.RESETTING)
        self.reset_callback()
        self._publish_opacity(1.0)
        self._set_phase(ClearPhase.COOLDOWN)
        self._timer = self.scheduler.call_later(self.config.cooldown_ms, self._finish_cooldown)

    def _finish_cooldown(self) -> None:
        self._timer = None
        self._set_phase(ClearPhase.IDLE)

    def _stop_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _publish_opacity(self, value: float) -> None:
        self.opacity = value
        if self.opacity_callback is not None:
            self.opacity_callback(value)

    def _set_phase(self, phase: ClearPhase) -> None:
        self.phase = phase
        log_event("DEBUG", "Clear", "Phase", phase=phase.name)
        if self.phase_callback is not None:
            self.phase_callback(phase)
