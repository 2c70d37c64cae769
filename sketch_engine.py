"""
magicscreen - Sketch Engine
Single owner of all drawing state. The view talks to this object only:

  key_down/key_up + frame tick   -> KeyboardController -> StrokeRenderer
  begin_drag/drag_to/end_drag    -> DialDragController -> StrokeRenderer
  shake                          -> ClearAnimator      -> StrokeRenderer.clear

Everything runs on one thread (the Qt GUI thread); state changes are
reported to the listener as EngineEvent values.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple

from clear_animator import ClearAnimator, ClearPhase
from config import Config
from frame_scheduler import FrameScheduler
from input_controller import DialDragController, KeyboardController
from logging_utils import log_event
from sketch_state import AngleModel, CursorModel, CursorPosition, Dial
from stroke_renderer import StrokeRenderer, qimage_surface_factory


@dataclass(frozen=True)
class EngineEvent:
    """kind is one of: raster, angles, opacity, phase, size"""
    kind: str
    value: Any = None


class SketchEngine:
    def __init__(self, config: Config, scheduler,
                 listener: Callable[[EngineEvent], None] = None,
                 surface_factory=qimage_surface_factory):
        self.config = config
        self.scheduler = scheduler
        self.listener = listener

        screen = config.screen
        self.cursor = CursorModel(screen.initial_width, screen.initial_height)
        self.angle_model = AngleModel()
        self.renderer = StrokeRenderer(self.cursor, screen, surface_factory,
                                       on_paint=lambda: self._emit("raster"))
        self.keyboard = KeyboardController(self.renderer, self.angle_model, config.keys, config.motion)
        self.dials: Dict[Dial, DialDragController] = {
            dial: DialDragController(dial, self.renderer, self.angle_model, config.motion)
            for dial in Dial
        }
        self.animator = ClearAnimator(
            config.clear,
            scheduler,
            reset_callback=self.renderer.clear,
            opacity_callback=lambda value: self._emit("opacity", value),
            phase_callback=lambda phase: self._emit("phase", phase),
        )
        self.frames = FrameScheduler(scheduler, self.tick, config.motion.frame_interval_ms)
        self._size: Optional[Tuple[int, int]] = None

    # ---- read-only views ----

    @property
    def position(self) -> CursorPosition:
        return self.cursor.position

    @property
    def angles(self) -> Tuple[float, float]:
        return self.angle_model.angles()

    @property
    def opacity(self) -> float:
        return self.animator.opacity

    @property
    def phase(self) -> ClearPhase:
        return self.animator.phase

    @property
    def surface(self):
        return self.renderer.surface

    @property
    def size(self) -> Optional[Tuple[int, int]]:
        return self._size

    # ---- lifecycle ----

    def initialize(self, width: int, height: int) -> None:
        """Blank raster at the given size with the stylus centred."""
        self._size = (max(1, int(width)), max(1, int(height)))
        self.renderer.initialize(*self._size)
        log_event("INFO", "Engine", "Screen initialized", width=self._size[0], height=self._size[1])
        self._emit("size", self._size)

    def resize(self, width: int, height: int) -> bool:
        """Any size change is a full re-initialization; the drawing is lost.
        Returns False when the size is unchanged."""
        if self._size == (max(1, int(width)), max(1, int(height))):
            return False
        self.initialize(width, height)
        return True

    def start(self) -> None:
        if self._size is None:
            self.initialize(self.config.screen.initial_width, self.config.screen.initial_height)
        self.frames.start()

    def shutdown(self) -> None:
        """Stop the frame loop and any fade, and let go of the raster."""
        self.frames.stop()
        self.animator.cancel()
        self.keyboard.state.clear()
        for controller in self.dials.values():
            controller.release()
        self.renderer.detach_surface()
        log_event("INFO", "Engine", "Shut down", frames=self.frames.frame_count)

    # ---- keyboard ----

    def key_down(self, key: str) -> None:
        self.keyboard.state.press(key)

    def key_up(self, key: str) -> None:
        self.keyboard.state.release(key)

    def release_keys(self) -> None:
        self.keyboard.state.clear()

    def tick(self) -> None:
        result = self.keyboard.tick()
        if result.turned:
            self._emit("angles", self.angles)

    # ---- dials ----

    def begin_drag(self, dial: Dial, px: float, py: float, cx: float, cy: float) -> None:
        self.dials[dial].press(px, py, cx, cy)

    def drag_to(self, dial: Dial, px: float, py: float, cx: float, cy: float) -> float:
        controller = self.dials[dial]
        if not controller.active:
            return 0.0
        delta = controller.move_to(px, py, cx, cy)
        self._emit("angles", self.angles)
        return delta

    def end_drag(self, dial: Dial) -> None:
        self.dials[dial].release()

    # ---- shake ----

    def shake(self) -> bool:
        started = self.animator.trigger()
        if started:
            log_event("INFO", "Engine", "Shake to clear")
        return started

    def _emit(self, kind: str, value: Any = None) -> None:
        if self.listener is not None:
            self.listener(EngineEvent(kind, value))
