"""
Permutation generation by without-replacement selection.

A selector is a function select(k) -> index in [0, k) into the list of
values not yet used. Whatever the selector does, the result is a bijection
on [0, n). The engine uses permutations to order destinations during
Aggregating and sources within each destination; because merging is
associative and commutative, the outcome must not depend on which
permutation comes out.
"""

import random
import threading


def first_selector(remaining):
    return 0


def last_selector(remaining):
    return remaining - 1


def create_random_selector(seed=None):
    rng = random.Random(seed)
    lock = threading.Lock()

    def select(remaining):
        with lock:
            return rng.randrange(remaining)

    return select


def generate_permutation(n, select=None):
    if isinstance(n, bool) or not isinstance(n, int) or n < 0:
        raise ValueError(f"\033[31mPermutation size must be a non-negative int, got {n!r}\033[0m")
    select = select or first_selector

    unused = list(range(n))
    permutation = []
    while unused:
        index = select(len(unused))
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(unused):
            raise ValueError(f"\033[31mSelector returned {index!r}, expected an index in [0, {len(unused)})\033[0m")
        permutation.append(unused.pop(index))
    return permutation
