import unittest

from cubic_sim.config import EngineConfig, RenderConfig


class TestConfig(unittest.TestCase):
    def test_engine_defaults(self):
        c = EngineConfig()
        self.assertEqual(c.scramble_length, 20)
        self.assertEqual(c.scramble_delay, 0.1)
        self.assertEqual(c.solve_interval, 0.5)
        self.assertEqual(c.rotation_tolerance, 1e-3)

    def test_engine_rejects_bad_values(self):
        with self.assertRaises(ValueError):
            EngineConfig(scramble_length=0)
        with self.assertRaises(ValueError):
            EngineConfig(solve_interval=-1)
        with self.assertRaises(ValueError):
            EngineConfig(rotation_tolerance=0)

    def test_anim_step(self):
        # 0.3 s a 16 ms por frame -> 18.75 frames -> 4.8 grados por frame
        self.assertAlmostEqual(RenderConfig().anim_step, 4.8)
        self.assertEqual(RenderConfig(animation_duration=0.001).anim_step, 90.0)
        with self.assertRaises(ValueError):
            RenderConfig(frame_interval_ms=0)


if __name__ == "__main__":
    unittest.main()
