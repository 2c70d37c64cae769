"""
magicscreen - Sketch State
Authoritative stylus position and the two dial angles.

The cursor is the only state shared by the keyboard tick and both dial drags,
so every mutation goes through CursorModel.apply_delta / reset under one lock.
"""

import math
import threading
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Tuple


class Dial(IntEnum):
    """Physical knobs. LEFT turns the x axis, RIGHT turns the y axis."""
    LEFT = 1
    RIGHT = 2


@dataclass(frozen=True)
class CursorPosition:
    x: float
    y: float


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _finite(value: float) -> float:
    return value if math.isfinite(value) else 0.0


class CursorModel:
    """Stylus position, always inside [0, width] x [0, height]."""

    def __init__(self, width: float, height: float):
        self._lock = threading.RLock()
        self._width = float(width)
        self._height = float(height)
        self._position = CursorPosition(self._width / 2, self._height / 2)

    @property
    def position(self) -> CursorPosition:
        return self._position

    @property
    def width(self) -> float:
        return self._width

    @property
    def height(self) -> float:
        return self._height

    @property
    def center(self) -> CursorPosition:
        return CursorPosition(self._width / 2, self._height / 2)

    def apply_delta(self, dx: float, dy: float) -> Tuple[CursorPosition, CursorPosition]:
        """Move by (dx, dy), saturating at the screen edges.
        Returns (previous, current). Overshoot is discarded, not carried."""
        with self._lock:
            previous = self._position
            self._position = CursorPosition(
                clamp(previous.x + _finite(dx), 0.0, self._width),
                clamp(previous.y + _finite(dy), 0.0, self._height),
            )
            return previous, self._position

    def reset(self, width: float = None, height: float = None) -> CursorPosition:
        """Re-centre the stylus, optionally adopting new screen dimensions."""
        with self._lock:
            if width is not None:
                self._width = float(width)
            if height is not None:
                self._height = float(height)
            self._position = self.center
            return self._position


class AngleModel:
    """Visual rotation of each dial in degrees. Unbounded, never wraps."""

    def __init__(self):
        self._angles: Dict[Dial, float] = {Dial.LEFT: 0.0, Dial.RIGHT: 0.0}

    def angle(self, dial: Dial) -> float:
        return self._angles[dial]

    def angles(self) -> Tuple[float, float]:
        return self._angles[Dial.LEFT], self._angles[Dial.RIGHT]

    def rotate(self, dial: Dial, delta: float) -> float:
        if math.isfinite(delta):
            self._angles[dial] += delta
        return self._angles[dial]

    def set_angle(self, dial: Dial, value: float) -> float:
        if math.isfinite(value):
            self._angles[dial] = value
        return self._angles[dial]
