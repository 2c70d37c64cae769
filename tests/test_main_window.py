import os
import unittest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QKeySequence
from PyQt6.QtWidgets import QApplication

from clear_animator import ClearPhase
from config import Config
from layout import compute_layout
from main import SHAKE_OFFSETS, MagicScreenWindow
from sketch_engine import EngineEvent

_app = None


def setUpModule():
    global _app
    _app = QApplication.instance() or QApplication([])


class TestMagicScreenWindow(unittest.TestCase):
    def setUp(self):
        self.window = MagicScreenWindow(Config())

    def tearDown(self):
        self.window.close()

    def test_engine_started_with_initial_screen(self):
        self.assertTrue(self.window.engine.frames.running)
        self.assertEqual(self.window.engine.size, (600, 400))
        self.assertEqual(self.window.screen_widget.width(), 600)

    def test_arrow_key_names_match_default_bindings(self):
        cfg = Config()
        self.assertEqual(QKeySequence(Qt.Key.Key_Left.value).toString(), cfg.keys.decrease_x)
        self.assertEqual(QKeySequence(Qt.Key.Key_Right.value).toString(), cfg.keys.increase_x)
        self.assertEqual(QKeySequence(Qt.Key.Key_Up.value).toString(), cfg.keys.decrease_y)
        self.assertEqual(QKeySequence(Qt.Key.Key_Down.value).toString(), cfg.keys.increase_y)

    def test_angle_events_turn_dial_widgets(self):
        self.window._on_engine_event(EngineEvent("angles", (45.0, -12.0)))
        self.assertEqual(self.window.left_dial.angle, 45.0)
        self.assertEqual(self.window.right_dial.angle, -12.0)

    def test_layout_resizes_engine_screen(self):
        self.window.resize(1000, 750)
        self.window._apply_layout()
        width, height = self.window.engine.size
        self.assertGreaterEqual(width, 200)
        self.assertGreaterEqual(height, 120)
        self.assertEqual(self.window.screen_widget.width(), width)
        self.assertTrue(self.window.engine.surface.is_blank())

    def test_screws_sized_from_layout(self):
        self.window.resize(1000, 750)
        self.window._apply_layout()
        central = self.window.centralWidget()
        expected = compute_layout(central.width(), central.height(), self.window.config.layout)

        body = self.window.body
        self.assertAlmostEqual(body.screw_size, expected.screw_size)
        centers = body.screw_centers()
        self.assertEqual(len(centers), 4)
        for center in centers:
            self.assertTrue(0 < center.x() < body.width())
            self.assertTrue(0 < center.y() < body.height())

    def test_fade_start_wobbles_body_then_settles(self):
        self.window._on_engine_event(EngineEvent("phase", ClearPhase.FADING))
        self.assertEqual(self.window.shake_offset, SHAKE_OFFSETS[0])
        self.assertTrue(self.window._shake_handle.active)

        for _ in range(len(SHAKE_OFFSETS)):
            self.window._shake_step()

        self.assertEqual(self.window.shake_offset, (0, 0))
        self.assertIsNone(self.window._shake_handle)
        self.assertEqual(self.window._outer.contentsMargins().left(), 0)

    def test_other_phases_do_not_wobble(self):
        for phase in (ClearPhase.RESETTING, ClearPhase.COOLDOWN, ClearPhase.IDLE):
            self.window._on_engine_event(EngineEvent("phase", phase))
        self.assertIsNone(self.window._shake_handle)
        self.assertEqual(self.window.shake_offset, (0, 0))

    def test_close_shuts_engine_down(self):
        self.window.show()
        _app.processEvents()
        self.window.close()
        self.assertFalse(self.window.engine.frames.running)
        self.assertIsNone(self.window.engine.surface)


if __name__ == "__main__":
    unittest.main()
