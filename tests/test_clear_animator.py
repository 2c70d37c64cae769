import unittest

from clear_animator import ClearAnimator, ClearPhase
from config import ClearConfig
from scheduling import ManualScheduler


class TestClearAnimator(unittest.TestCase):
    def setUp(self):
        self.scheduler = ManualScheduler()
        self.resets = []
        self.opacities = []
        self.phases = []
        self.animator = ClearAnimator(
            ClearConfig(),
            self.scheduler,
            reset_callback=lambda: self.resets.append(self.scheduler.now_ms),
            opacity_callback=self.opacities.append,
            phase_callback=self.phases.append,
        )

    def test_full_cycle(self):
        self.assertTrue(self.animator.trigger())
        self.assertEqual(self.animator.phase, ClearPhase.FADING)

        # 20 ticks of 0.05 at 40 ms
        self.scheduler.advance(799)
        self.assertEqual(self.resets, [])
        self.scheduler.advance(1)

        self.assertEqual(self.resets, [800])
        self.assertEqual(self.animator.phase, ClearPhase.COOLDOWN)
        self.assertEqual(self.animator.opacity, 1.0)

        self.scheduler.advance(200)
        self.assertEqual(self.animator.phase, ClearPhase.IDLE)
        self.assertEqual(
            self.phases,
            [ClearPhase.FADING, ClearPhase.RESETTING, ClearPhase.COOLDOWN, ClearPhase.IDLE],
        )
        self.assertEqual(self.scheduler.pending(), 0)

    def test_opacity_steps_down_then_restores(self):
        self.animator.trigger()
        self.scheduler.run_until_idle()

        self.assertEqual(len(self.opacities), 21)
        self.assertAlmostEqual(self.opacities[0], 0.95)
        self.assertAlmostEqual(self.opacities[9], 0.5)
        self.assertEqual(self.opacities[-2], 0.0)
        self.assertEqual(self.opacities[-1], 1.0)
        fade = self.opacities[:-1]
        self.assertTrue(all(a > b for a, b in zip(fade, fade[1:])))

    def test_trigger_while_fading_is_dropped(self):
        self.animator.trigger()
        self.scheduler.advance(200)
        opacity_before = self.animator.opacity

        self.assertFalse(self.animator.trigger())

        self.assertAlmostEqual(opacity_before, 0.75)
        self.assertEqual(self.animator.opacity, opacity_before)
        self.assertEqual(self.scheduler.pending(), 1)

        self.scheduler.run_until_idle()
        self.assertEqual(self.resets, [800])
        self.assertEqual(self.phases.count(ClearPhase.FADING), 1)

    def test_trigger_during_cooldown_is_dropped(self):
        self.animator.trigger()
        self.scheduler.advance(900)
        self.assertEqual(self.animator.phase, ClearPhase.COOLDOWN)

        self.assertFalse(self.animator.trigger())
        self.scheduler.advance(100)
        self.assertEqual(self.animator.phase, ClearPhase.IDLE)
        self.assertEqual(len(self.resets), 1)

        self.assertTrue(self.animator.trigger())

    def test_trigger_during_reset_is_dropped(self):
        results = []
        animator = ClearAnimator(
            ClearConfig(),
            self.scheduler,
            reset_callback=lambda: results.append(animator.trigger()),
        )
        animator.trigger()
        self.scheduler.run_until_idle()
        self.assertEqual(results, [False])

    def test_cancel_mid_fade(self):
        self.animator.trigger()
        self.scheduler.advance(120)

        self.animator.cancel()

        self.assertEqual(self.animator.phase, ClearPhase.IDLE)
        self.assertEqual(self.animator.opacity, 1.0)
        self.assertEqual(self.scheduler.pending(), 0)
        self.scheduler.advance(2000)
        self.assertEqual(self.resets, [])

    def test_cancel_when_idle_is_noop(self):
        self.animator.cancel()
        self.assertEqual(self.phases, [])

    def test_custom_timing(self):
        animator = ClearAnimator(
            ClearConfig(fade_step=0.25, fade_interval_ms=10, cooldown_ms=0),
            self.scheduler,
            reset_callback=lambda: self.resets.append(self.scheduler.now_ms),
        )
        animator.trigger()
        self.scheduler.advance(40)
        self.assertEqual(self.resets, [40])
        self.scheduler.advance(0)
        self.assertFalse(animator.busy)


if __name__ == "__main__":
    unittest.main()
