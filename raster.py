"""
magicscreen - Raster Surface
QImage-backed drawing surface. Pixels only: there is no stroke history,
so the only way to remove a line is to refill the whole image.
"""

import numpy as np

from PyQt6.QtCore import QPointF, Qt
from PyQt6.QtGui import QColor, QImage, QPainter, QPen

from sketch_state import CursorPosition


class QImageSurface:
    """Fixed-size raster with a background fill and a round-capped stroke pen."""

    def __init__(self, width: int, height: int, background: str, line_color: str, line_width: float):
        self.width = max(1, int(width))
        self.height = max(1, int(height))
        self.background = QColor(background)
        self._pen = QPen(QColor(line_color))
        self._pen.setWidthF(line_width)
        self._pen.setCapStyle(Qt.PenCapStyle.RoundCap)
        self._pen.setJoinStyle(Qt.PenJoinStyle.RoundJoin)
        self.image = QImage(self.width, self.height, QImage.Format.Format_RGB32)
        self.fill()

    def fill(self) -> None:
        self.image.fill(self.background)

    def draw_segment(self, start: CursorPosition, end: CursorPosition) -> None:
        painter = QPainter(self.image)
        try:
            painter.setRenderHint(QPainter.RenderHint.Antialiasing)
            painter.setPen(self._pen)
            painter.drawLine(QPointF(start.x, start.y), QPointF(end.x, end.y))
        finally:
            painter.end()

    def pixel(self, x: int, y: int) -> QColor:
        return self.image.pixelColor(int(x), int(y))

    def to_array(self) -> np.ndarray:
        """Copy of the pixels as (height, width) uint32 0xFFRRGGBB values."""
        ptr = self.image.constBits()
        ptr.setsize(self.image.sizeInBytes())
        rows = np.frombuffer(ptr, dtype=np.uint32).reshape(self.height, self.image.bytesPerLine() // 4)
        return rows[:, :self.width].copy()

    def is_blank(self) -> bool:
        return bool(np.all(self.to_array() == np.uint32(self.background.rgb())))
