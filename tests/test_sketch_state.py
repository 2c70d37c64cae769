import math
import random
import threading
import unittest

from sketch_state import AngleModel, CursorModel, CursorPosition, Dial, clamp


class TestCursorModel(unittest.TestCase):
    def test_starts_centred(self):
        cursor = CursorModel(600, 400)
        self.assertEqual(cursor.position, CursorPosition(300.0, 200.0))

    def test_apply_delta_returns_previous_and_current(self):
        cursor = CursorModel(600, 400)
        previous, current = cursor.apply_delta(5, -3)
        self.assertEqual(previous, CursorPosition(300.0, 200.0))
        self.assertEqual(current, CursorPosition(305.0, 197.0))
        self.assertEqual(cursor.position, current)

    def test_saturates_without_carry_over(self):
        cursor = CursorModel(600, 400)
        cursor.apply_delta(10_000, -10_000)
        self.assertEqual(cursor.position, CursorPosition(600.0, 0.0))

        # Overshoot is discarded: moving back starts from the edge
        cursor.apply_delta(-10, 10)
        self.assertEqual(cursor.position, CursorPosition(590.0, 10.0))

    def test_random_moves_stay_in_bounds(self):
        rng = random.Random(1234)
        cursor = CursorModel(320, 240)
        for _ in range(2000):
            cursor.apply_delta(rng.uniform(-500, 500), rng.uniform(-500, 500))
            pos = cursor.position
            self.assertTrue(0.0 <= pos.x <= 320.0)
            self.assertTrue(0.0 <= pos.y <= 240.0)

    def test_non_finite_delta_is_ignored(self):
        cursor = CursorModel(100, 100)
        cursor.apply_delta(float("nan"), float("inf"))
        self.assertEqual(cursor.position, CursorPosition(50.0, 50.0))

    def test_reset_recentres_and_resizes(self):
        cursor = CursorModel(600, 400)
        cursor.apply_delta(-290, -190)
        self.assertEqual(cursor.reset(), CursorPosition(300.0, 200.0))

        cursor.reset(200, 100)
        self.assertEqual((cursor.width, cursor.height), (200.0, 100.0))
        self.assertEqual(cursor.position, CursorPosition(100.0, 50.0))

    def test_concurrent_deltas_are_not_lost(self):
        cursor = CursorModel(10_000, 10_000)

        def worker():
            for _ in range(1000):
                cursor.apply_delta(1, 1)

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.assertEqual(cursor.position, CursorPosition(9000.0, 9000.0))


class TestAngleModel(unittest.TestCase):
    def test_accumulates_without_wrapping(self):
        angles = AngleModel()
        for _ in range(150):
            angles.rotate(Dial.LEFT, 3.0)
        self.assertEqual(angles.angle(Dial.LEFT), 450.0)
        self.assertEqual(angles.angle(Dial.RIGHT), 0.0)

    def test_dials_are_independent(self):
        angles = AngleModel()
        angles.rotate(Dial.LEFT, -30)
        angles.rotate(Dial.RIGHT, 12.5)
        self.assertEqual(angles.angles(), (-30.0, 12.5))

    def test_set_angle_and_nan_guard(self):
        angles = AngleModel()
        angles.set_angle(Dial.RIGHT, 720.0)
        angles.rotate(Dial.RIGHT, float("nan"))
        angles.set_angle(Dial.RIGHT, float("inf"))
        self.assertEqual(angles.angle(Dial.RIGHT), 720.0)
        self.assertFalse(math.isnan(angles.angle(Dial.LEFT)))


class TestClamp(unittest.TestCase):
    def test_clamp(self):
        self.assertEqual(clamp(-1, 0, 10), 0)
        self.assertEqual(clamp(11, 0, 10), 10)
        self.assertEqual(clamp(5.5, 0, 10), 5.5)


if __name__ == "__main__":
    unittest.main()
