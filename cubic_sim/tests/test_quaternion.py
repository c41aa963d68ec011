import math
import unittest

from cubic_sim.logic.quaternion import (
    IDENTITY,
    almost_equal,
    canonical,
    conjugate,
    from_axis_angle,
    is_identity,
    multiply,
    normalize,
    rotate_vector,
    to_axis_angle,
)


class TestQuaternion(unittest.TestCase):
    def test_identity_is_neutral(self):
        q = from_axis_angle((0.0, 1.0, 0.0), math.pi / 2)
        self.assertTrue(almost_equal(multiply(IDENTITY, q), q, 1e-12))
        self.assertTrue(almost_equal(multiply(q, IDENTITY), q, 1e-12))

    def test_conjugate_cancels(self):
        q = from_axis_angle((1.0, 0.0, 0.0), -math.pi / 2)
        self.assertTrue(is_identity(multiply(q, conjugate(q)), 1e-12))

    def test_composition_order(self):
        # Primero X (+90), después Y (+90)
        qx = from_axis_angle((1.0, 0.0, 0.0), math.pi / 2)
        qy = from_axis_angle((0.0, 1.0, 0.0), math.pi / 2)
        v = rotate_vector(multiply(qy, qx), (0.0, 1.0, 0.0))
        # y --X--> z --Y--> x
        for got, want in zip(v, (1.0, 0.0, 0.0)):
            self.assertAlmostEqual(got, want, places=12)

    def test_rotate_vector_about_y(self):
        q = from_axis_angle((0.0, 1.0, 0.0), math.pi / 2)
        v = rotate_vector(q, (1.0, 0.0, 0.0))
        for got, want in zip(v, (0.0, 0.0, -1.0)):
            self.assertAlmostEqual(got, want, places=12)

    def test_normalize(self):
        q = normalize((0.0, 2.0, 0.0, 2.0))
        self.assertAlmostEqual(sum(c * c for c in q), 1.0, places=12)
        with self.assertRaises(ValueError):
            normalize((0.0, 0.0, 0.0, 0.0))

    def test_canonical_hemisphere(self):
        self.assertEqual(canonical((0.0, 0.0, 0.0, -1.0)), (0.0, 0.0, 0.0, 1.0))
        self.assertEqual(canonical((0.0, -1.0, 0.0, 0.0)), (0.0, 1.0, 0.0, 0.0))
        self.assertEqual(canonical((0.5, -0.5, 0.5, 0.5)), (0.5, -0.5, 0.5, 0.5))

    def test_full_turn_canonicalizes_to_identity(self):
        q90 = from_axis_angle((0.0, 1.0, 0.0), math.pi / 2)
        acc = IDENTITY
        for _ in range(4):
            acc = canonical(normalize(multiply(q90, acc)))
        self.assertTrue(is_identity(acc, 1e-9))

    def test_to_axis_angle(self):
        axis, deg = to_axis_angle(from_axis_angle((0.0, 0.0, 1.0), math.pi / 2))
        self.assertAlmostEqual(deg, 90.0, places=9)
        for got, want in zip(axis, (0.0, 0.0, 1.0)):
            self.assertAlmostEqual(got, want, places=9)
        self.assertEqual(to_axis_angle(IDENTITY), ((1.0, 0.0, 0.0), 0.0))

    def test_is_identity_tolerance(self):
        self.assertTrue(is_identity((0.0005, 0.0, -0.0005, 0.9995)))
        self.assertFalse(is_identity((0.002, 0.0, 0.0, 1.0)))


if __name__ == "__main__":
    unittest.main()
