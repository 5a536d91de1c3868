import unittest
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from ColorBSP.permutation import (
    generate_permutation,
    first_selector,
    last_selector,
    create_random_selector
)


def is_permutation(values, n):
    return len(values) == n and sorted(values) == list(range(n))


class TestGeneratePermutation(unittest.TestCase):

    def test_bijection_for_every_selector(self):
        selectors = [first_selector, last_selector, create_random_selector(0), create_random_selector(99)]
        for select in selectors:
            for n in range(0, 25):
                perm = generate_permutation(n, select)
                self.assertTrue(is_permutation(perm, n))
                self.assertEqual(len(perm), n)
                self.assertEqual(len(set(perm)), n)
                self.assertTrue(all(0 <= value < n for value in perm))

    def test_default_is_identity(self):
        self.assertEqual(generate_permutation(5), [0, 1, 2, 3, 4])

    def test_last_selector_reverses(self):
        self.assertEqual(generate_permutation(4, last_selector), [3, 2, 1, 0])

    def test_empty(self):
        self.assertEqual(generate_permutation(0), [])

    def test_random_selector_is_reproducible(self):
        a = generate_permutation(30, create_random_selector(5))
        b = generate_permutation(30, create_random_selector(5))
        self.assertEqual(a, b)

    def test_custom_selector_sees_shrinking_pool(self):
        seen = []

        def select(remaining):
            seen.append(remaining)
            return remaining // 2

        perm = generate_permutation(4, select)
        self.assertEqual(seen, [4, 3, 2, 1])
        self.assertEqual(perm, [2, 1, 3, 0])

    def test_rejects_bad_size(self):
        for bad in (-1, 2.0, True, "3"):
            with self.assertRaises(ValueError):
                generate_permutation(bad)

    def test_rejects_bad_selector_result(self):
        with self.assertRaises(ValueError):
            generate_permutation(3, lambda remaining: remaining)
        with self.assertRaises(ValueError):
            generate_permutation(3, lambda remaining: -1)

    def test_is_permutation(self):
        self.assertTrue(is_permutation([2, 0, 1], 3))
        self.assertFalse(is_permutation([0, 0, 1], 3))
        self.assertFalse(is_permutation([0, 1], 3))


if __name__ == '__main__':
    unittest.main()
