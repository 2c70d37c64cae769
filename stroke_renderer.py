"""
magicscreen - Stroke Renderer
Turns a position delta into one painted segment and commits the new
cursor position. The only code path that moves the stylus.
"""

from typing import Callable, Optional

from config import ScreenConfig
from raster import QImageSurface
from sketch_state import CursorModel, CursorPosition


SurfaceFactory = Callable[[int, int, ScreenConfig], object]


def qimage_surface_factory(width: int, height: int, screen: ScreenConfig) -> QImageSurface:
    return QImageSurface(width, height, screen.background_color, screen.line_color, screen.line_width)


class StrokeRenderer:
    """
    Owns the raster surface and paints into it.

    A renderer without a surface (never initialized, or detached on teardown)
    keeps updating the cursor but paints nothing.
    """

    def __init__(self, cursor: CursorModel, screen: ScreenConfig,
                 surface_factory: SurfaceFactory = qimage_surface_factory,
                 on_paint: Callable[[], None] = None):
        self.cursor = cursor
        self.screen = screen
        self.surface_factory = surface_factory
        self.on_paint = on_paint
        self.surface: Optional[object] = None

    def initialize(self, width: int, height: int) -> CursorPosition:
        """(Re)create the raster at the given size, blank, with the stylus centred.
        Any previous drawing is discarded."""
        width, height = max(1, int(width)), max(1, int(height))
        self.surface = self.surface_factory(width, height, self.screen)
        position = self.cursor.reset(width, height)
        self._notify()
        return position

    def move(self, dx: float, dy: float) -> CursorPosition:
        previous, current = self.cursor.apply_delta(dx, dy)
        if self.surface is not None:
            self.surface.draw_segment(previous, current)
            self._notify()
        return current

    def clear(self) -> CursorPosition:
        """Wipe to the background fill and re-centre, keeping the current size."""
        if self.surface is not None:
            self.surface.fill()
        position = self.cursor.reset()
        self._notify()
        return position

    def detach_surface(self) -> None:
        self.surface = None

    def _notify(self) -> None:
        if self.on_paint is not None:
            self.on_paint()
