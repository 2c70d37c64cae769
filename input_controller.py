"""
magicscreen - Input Controller
Two producers of stylus movement:

  KeyboardController  – polled once per frame from the set of held keys;
                        both axes combine into one diagonal move per tick
  DialDragController  – one per dial, event driven; each pointer-move becomes
                        a single-axis move scaled from the dial's rotation
"""

from dataclasses import dataclass
from typing import FrozenSet, Iterable, Optional, Set

from config import KeyBindings, MotionConfig
from drag_session import IDLE_SESSION, begin_drag, end_drag, pointer_angle, update_drag
from sketch_state import AngleModel, Dial
from stroke_renderer import StrokeRenderer


class InputState:
    """Currently held key names. Ticks read it without consuming it."""

    def __init__(self):
        self._held: Set[str] = set()

    def press(self, key: str) -> None:
        self._held.add(key)

    def release(self, key: str) -> None:
        self._held.discard(key)

    def clear(self) -> None:
        self._held.clear()

    def snapshot(self) -> FrozenSet[str]:
        return frozenset(self._held)

    def __contains__(self, key: str) -> bool:
        return key in self._held


@dataclass(frozen=True)
class TickResult:
    dx: float = 0.0
    dy: float = 0.0
    left_turn: float = 0.0
    right_turn: float = 0.0

    @property
    def moved(self) -> bool:
        return self.dx != 0 or self.dy != 0

    @property
    def turned(self) -> bool:
        return self.left_turn != 0 or self.right_turn != 0


class KeyboardController:
    def __init__(self, renderer: StrokeRenderer, angles: AngleModel,
                 bindings: KeyBindings, motion: MotionConfig):
        self.renderer = renderer
        self.angles = angles
        self.bindings = bindings
        self.motion = motion
        self.state = InputState()

    def tick(self, held: Optional[Iterable[str]] = None) -> TickResult:
        """One frame of keyboard movement. ``held`` overrides the live InputState."""
        keys = self.state.snapshot() if held is None else frozenset(held)
        step = self.motion.key_step
        turn = self.motion.key_angle_step
        b = self.bindings

        dx = dy = left = right = 0.0
        if b.decrease_x in keys:
            dx -= step
            left -= turn
        if b.increase_x in keys:
            dx += step
            left += turn
        if b.decrease_y in keys:
            dy -= step
            right -= turn
        if b.increase_y in keys:
            dy += step
            right += turn

        # Knobs keep turning while the stylus is pinned against an edge
        if left:
            self.angles.rotate(Dial.LEFT, left)
        if right:
            self.angles.rotate(Dial.RIGHT, right)

        result = TickResult(dx, dy, left, right)
        if result.moved:
            self.renderer.move(dx, dy)
        return result


class DialDragController:
    """Pointer-drag tracking for one dial (LEFT drives x, RIGHT drives y)."""

    def __init__(self, dial: Dial, renderer: StrokeRenderer, angles: AngleModel, motion: MotionConfig):
        self.dial = dial
        self.renderer = renderer
        self.angles = angles
        self.motion = motion
        self.session = IDLE_SESSION

    @property
    def active(self) -> bool:
        return self.session.active

    def press(self, px: float, py: float, cx: float, cy: float) -> None:
        self.session = begin_drag(pointer_angle(px, py, cx, cy))

    def move_to(self, px: float, py: float, cx: float, cy: float) -> float:
        """Returns the wrapped angular delta applied (0 when not dragging)."""
        if not self.session.active:
            return 0.0
        self.session, delta = update_drag(self.session, pointer_angle(px, py, cx, cy))
        self.angles.rotate(self.dial, delta)
        travel = delta * self.motion.drag_scale
        if self.dial == Dial.LEFT:
            self.renderer.move(travel, 0.0)
        else:
            self.renderer.move(0.0, travel)
        return delta

    def release(self) -> None:
        self.session = end_drag(self.session)
