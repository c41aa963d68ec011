import unittest

from cubic_sim.core import CubeModel
from cubic_sim.logic.moves import ALL_MOVES, Move, inverse_sequence, parse_sequence
from cubic_sim.logic.quaternion import almost_equal, rotate_vector
from cubic_sim.logic.scramble import generate_scramble

LATTICE_POINTS = sorted(
    (x, y, z) for x in (-1, 0, 1) for y in (-1, 0, 1) for z in (-1, 0, 1)
)


def scrambled(seed: int, n: int = 30) -> CubeModel:
    c = CubeModel()
    c.apply_sequence(generate_scramble(n, seed=seed))
    return c


class TestCubeModel(unittest.TestCase):
    def assertBijection(self, c: CubeModel) -> None:
        self.assertEqual(sorted(c.positions().values()), LATTICE_POINTS)

    def test_starts_solved(self):
        c = CubeModel()
        self.assertTrue(c.is_solved())
        self.assertEqual(len(c.cubies), 27)
        self.assertEqual([cb.cubie_id for cb in c.cubies], list(range(27)))
        for cb in c.cubies:
            self.assertEqual(cb.logical_position, cb.solved_position)
        self.assertBijection(c)

    def test_U_then_Uprime_returns(self):
        c = CubeModel()
        before = c.to_hashable()
        c.apply_move("U")
        self.assertNotEqual(before, c.to_hashable())
        c.apply_move("U'")
        self.assertEqual(before, c.to_hashable())
        self.assertTrue(c.is_solved())

    def test_every_move_then_inverse_returns_from_any_state(self):
        for seed in range(3):
            c = scrambled(seed)
            for m in ALL_MOVES:
                with self.subTest(seed=seed, move=m.label):
                    before = [(cb.logical_position, cb.net_rotation) for cb in c.cubies]
                    c.apply_move(m)
                    c.apply_move(m.inverse)
                    after = [(cb.logical_position, cb.net_rotation) for cb in c.cubies]
                    for (p0, q0), (p1, q1) in zip(before, after):
                        self.assertEqual(p0, p1)
                        self.assertTrue(almost_equal(q0, q1, 1e-3))

    def test_four_turns_return(self):
        for m in ALL_MOVES:
            with self.subTest(move=m.label):
                c = scrambled(11)
                before = c.to_hashable()
                for _ in range(4):
                    c.apply_move(m)
                self.assertEqual(before, c.to_hashable())

    def test_four_turns_from_solved_is_solved(self):
        c = CubeModel()
        c.apply_sequence("R R R R")
        self.assertTrue(c.is_solved())

    def test_layer_closure(self):
        c = scrambled(5)
        for m in ALL_MOVES:
            with self.subTest(move=m.label):
                axis, value = m.affected_layer
                before_ids = {cb.cubie_id for cb in c.cubies_in_layer(axis, value)}
                outside = {
                    cb.cubie_id: (cb.logical_position, cb.net_rotation)
                    for cb in c.cubies
                    if cb.cubie_id not in before_ids
                }

                moved = c.apply_move(m)

                self.assertEqual(len(before_ids), 9)
                self.assertEqual({cb.cubie_id for cb in moved}, before_ids)
                after_ids = {cb.cubie_id for cb in c.cubies_in_layer(axis, value)}
                self.assertEqual(after_ids, before_ids)
                for cb in c.cubies:
                    if cb.cubie_id in outside:
                        self.assertEqual((cb.logical_position, cb.net_rotation), outside[cb.cubie_id])
                self.assertBijection(c)

    def test_bijection_after_long_sequence(self):
        c = CubeModel()
        c.apply_sequence("R U R' U' L D L' D' F B' U U R R")
        self.assertBijection(c)
        c.apply_sequence(generate_scramble(200, seed=3))
        self.assertBijection(c)

    def test_rotation_matches_position(self):
        # La rotación neta lleva la posición resuelta a la posición lógica.
        c = scrambled(42, 60)
        for cb in c.cubies:
            p = tuple(float(v) for v in cb.solved_position)
            got = rotate_vector(cb.net_rotation, p)
            for g, want in zip(got, cb.logical_position):
                self.assertAlmostEqual(g, want, places=6)

    def test_sexy_move_and_its_inverse(self):
        c = CubeModel()
        seq = parse_sequence("R U R' U'")
        c.apply_sequence(seq)
        self.assertFalse(c.is_solved())
        self.assertBijection(c)
        self.assertGreater(sum(1 for cb in c.cubies if not cb.is_home()), 0)

        self.assertEqual(inverse_sequence(seq), parse_sequence("U R U' R'"))
        c.apply_sequence("U R U' R'")
        self.assertTrue(c.is_solved())

    def test_cubie_at(self):
        c = CubeModel()
        c.apply_move(Move.U)
        # U: (x, y, z) -> (z, y, -x); el cubie de (1, 1, 1) pasa a (1, 1, -1)
        moved = c.cubie_at((1, 1, -1))
        self.assertEqual(moved.solved_position, (1, 1, 1))
        with self.assertRaises(KeyError):
            c.cubie_at((2, 0, 0))

    def test_invalid_move_raises(self):
        c = CubeModel()
        with self.assertRaises(ValueError):
            c.apply_move("X")
        with self.assertRaises(ValueError):
            c.apply_move("U2")

    def test_reset(self):
        c = scrambled(9)
        self.assertFalse(c.is_solved())
        ids = [id(cb) for cb in c.cubies]
        c.reset()
        self.assertTrue(c.is_solved())
        self.assertEqual(ids, [id(cb) for cb in c.cubies])


if __name__ == "__main__":
    unittest.main()
