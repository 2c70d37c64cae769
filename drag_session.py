"""Dial drag sessions as plain values.

A session starts on pointer-down, folds every pointer-move into an angular
delta and ends on pointer-up. Transitions return new sessions rather than
mutating captured state.
"""

import math
from dataclasses import dataclass, replace
from typing import Tuple

import numpy as np


@dataclass(frozen=True)
class DragSession:
    active: bool = False
    last_angle: float = 0.0


IDLE_SESSION = DragSession()


def pointer_angle(px: float, py: float, cx: float, cy: float) -> float:
    """Angle in degrees of the pointer around the dial centre (screen coords, y down).
    A pointer exactly on the centre, or any non-finite input, reads as 0."""
    dx = px - cx
    dy = py - cy
    if not (math.isfinite(dx) and math.isfinite(dy)) or (dx == 0 and dy == 0):
        return 0.0
    return float(np.degrees(np.arctan2(dy, dx)))


def wrap_delta(delta: float) -> float:
    """Shortest-arc form of an angle difference, in (-180, 180]."""
    if delta > 180:
        delta -= 360
    elif delta <= -180:  # exactly -180 becomes +180 so the range stays half-open
        delta += 360
    return delta


def begin_drag(angle: float) -> DragSession:
    return DragSession(active=True, last_angle=angle)


def update_drag(session: DragSession, angle: float) -> Tuple[DragSession, float]:
    """Advance an active session to ``angle``; returns (session, wrapped delta).
    Inactive sessions ignore moves."""
    if not session.active:
        return session, 0.0
    delta = wrap_delta(angle - session.last_angle)
    return replace(session, last_angle=angle), delta


def end_drag(session: DragSession) -> DragSession:
    return IDLE_SESSION
