import os
import unittest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import numpy as np
from PyQt6.QtGui import QColor, QGuiApplication

from raster import QImageSurface
from sketch_state import CursorPosition

_app = None


def setUpModule():
    global _app
    _app = QGuiApplication.instance() or QGuiApplication([])


class TestQImageSurface(unittest.TestCase):
    def setUp(self):
        self.surface = QImageSurface(200, 100, "#c0c0c0", "#3a3a3a", 1.5)

    def test_new_surface_is_blank_background(self):
        self.assertTrue(self.surface.is_blank())
        self.assertEqual(self.surface.pixel(0, 0), QColor("#c0c0c0"))
        self.assertEqual(self.surface.pixel(199, 99), QColor("#c0c0c0"))

    def test_segment_marks_pixels(self):
        self.surface.draw_segment(CursorPosition(20, 50), CursorPosition(180, 50))

        self.assertFalse(self.surface.is_blank())
        on_line = self.surface.pixel(100, 50)
        self.assertLess(on_line.red(), 0xc0)
        self.assertEqual(self.surface.pixel(100, 10), QColor("#c0c0c0"))

    def test_fill_erases_everything(self):
        self.surface.draw_segment(CursorPosition(0, 0), CursorPosition(199, 99))
        self.surface.fill()
        self.assertTrue(self.surface.is_blank())

    def test_to_array_shape_and_values(self):
        pixels = self.surface.to_array()
        self.assertEqual(pixels.shape, (100, 200))
        self.assertEqual(pixels.dtype, np.uint32)
        self.assertTrue(np.all(pixels == np.uint32(QColor("#c0c0c0").rgb())))

    def test_degenerate_size_is_at_least_one_pixel(self):
        surface = QImageSurface(0, -5, "#c0c0c0", "#3a3a3a", 1.5)
        self.assertEqual((surface.width, surface.height), (1, 1))
        self.assertTrue(surface.is_blank())


if __name__ == "__main__":
    unittest.main()
