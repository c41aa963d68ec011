import random
import unittest

from cubic_sim.logic.moves import ALL_MOVES, Move
from cubic_sim.logic.scramble import generate_scramble


class TestScramble(unittest.TestCase):
    def test_length_and_alphabet(self):
        seq = generate_scramble(20, seed=1)
        self.assertEqual(len(seq), 20)
        self.assertTrue(all(isinstance(m, Move) for m in seq))

    def test_seed_is_reproducible(self):
        self.assertEqual(generate_scramble(25, seed=7), generate_scramble(25, seed=7))

    def test_rng_is_used(self):
        a = generate_scramble(10, rng=random.Random(3))
        b = generate_scramble(10, rng=random.Random(3))
        self.assertEqual(a, b)

    def test_draws_cover_all_moves_with_repeats(self):
        seq = generate_scramble(2000, seed=0)
        self.assertEqual(set(seq), set(ALL_MOVES))
        # Con reemplazo: hay repeticiones consecutivas.
        self.assertTrue(any(a is b for a, b in zip(seq, seq[1:])))

    def test_non_positive_length_raises(self):
        with self.assertRaises(ValueError):
            generate_scramble(0)
        with self.assertRaises(ValueError):
            generate_scramble(-3)


if __name__ == "__main__":
    unittest.main()
