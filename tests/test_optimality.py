from __future__ import annotations

import itertools
import random
from fractions import Fraction

import pytest

from huffcode.core import (
    build_tree,
    generate_codes,
    huffman,
    shannon_bound,
    verify_prefix_free,
    weighted_length,
)

pytestmark = pytest.mark.p1


def _brute_force_min_weighted_length(freqs: list[int]) -> int:
    """Minimum over every length vector satisfying Kraft (sum 2^-l <= 1).

    Kraft's inequality is necessary and sufficient for a prefix-free binary
    code with those lengths to exist, so this is the true optimum.
    """
    n = len(freqs)
    best: int | None = None
    for lengths in itertools.product(range(1, n), repeat=n):
        if sum(Fraction(1, 2**ln) for ln in lengths) > 1:
            continue
        cost = sum(f * ln for f, ln in zip(freqs, lengths, strict=True))
        if best is None or cost < best:
            best = cost
    assert best is not None
    return best


def _random_distributions(seed: int, count: int, *, max_n: int, max_freq: int):
    rng = random.Random(seed)
    for _ in range(count):
        n = rng.randint(1, max_n)
        yield {f"s{i}": rng.randint(0, max_freq) for i in range(n)}


@pytest.mark.parametrize("n", [2, 3, 4, 5, 6])
def test_huffman_matches_brute_force_optimum(n: int) -> None:
    rng = random.Random(1000 + n)
    for _ in range(8):
        dist = {f"s{i}": rng.randint(0, 30) for i in range(n)}
        codes = huffman(dist)
        assert weighted_length(dist, codes) == _brute_force_min_weighted_length(list(dist.values()))


def test_generated_codes_always_prefix_free() -> None:
    for dist in _random_distributions(7, 200, max_n=60, max_freq=1000):
        codes = generate_codes(build_tree(dist))
        assert len(codes) == len(dist)
        assert all(codes[s] and set(codes[s]) <= {"0", "1"} for s in dist)
        assert verify_prefix_free(codes)


def test_weighted_length_invariant_to_insertion_order_random() -> None:
    rng = random.Random(99)
    for dist in _random_distributions(11, 100, max_n=40, max_freq=50):
        items = list(dist.items())
        rng.shuffle(items)
        shuffled = dict(items)
        assert weighted_length(dist, huffman(dist)) == weighted_length(shuffled, huffman(shuffled))


def test_idempotent_weighted_length() -> None:
    for dist in _random_distributions(5, 50, max_n=80, max_freq=10):
        a = huffman(dist)
        b = huffman(dist)
        assert a == b
        assert weighted_length(dist, a) == weighted_length(dist, b)


def test_shannon_bound_sandwich_random() -> None:
    for dist in _random_distributions(3, 100, max_n=100, max_freq=1000):
        # zero-frequency symbols still cost bits, the upper bound needs p > 0
        dist = {s: f for s, f in dist.items() if f > 0}
        total = sum(dist.values())
        if len(dist) < 2:
            continue
        bound = shannon_bound(dist)
        wlen = weighted_length(dist, huffman(dist))
        assert bound - 1e-9 * total <= wlen < bound + total
