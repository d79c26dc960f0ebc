"""Benchmark harness: random distributions in, timed Huffman runs out.

Determinism note:
Distributions are drawn sequentially from one seeded RNG before any trial is
dispatched, and results are collected in submission order. Everything except
``time_ms`` is therefore identical for any ``jobs`` value.
"""

from __future__ import annotations

import random
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from huffcode.bench_spec import BenchSpecV1
from huffcode.core import huffman, verify_prefix_free, weighted_length


@dataclass(frozen=True, slots=True)
class TrialResult:
    n: int
    trial: int
    time_ms: float
    weighted_length: int
    codes_count: int
    prefix_free: bool


def create_random_freqs(n: int, max_freq: int, rng: random.Random) -> dict[str, int]:
    """n symbols "s0".."s{n-1}", frequencies uniform in [1, max_freq]."""
    if n < 0:
        raise ValueError(f"n negativo: {n}")
    if max_freq < 1:
        raise ValueError(f"max_freq deve essere >= 1: {max_freq}")
    return {f"s{i}": rng.randint(1, max_freq) for i in range(n)}


def run_trial(freqs: dict[str, int], *, n: int, trial: int) -> TrialResult:
    t0 = time.perf_counter()
    codes = huffman(freqs)
    t_ms = (time.perf_counter() - t0) * 1000.0

    return TrialResult(
        n=n,
        trial=trial,
        time_ms=t_ms,
        weighted_length=weighted_length(freqs, codes),
        codes_count=len(codes),
        prefix_free=verify_prefix_free(codes),
    )


def run_experiments(spec: BenchSpecV1, *, jobs: int = 1) -> list[TrialResult]:
    """Run ``spec.trials`` trials for each size, one size at a time.

    jobs > 1 runs the trials of a size on a thread pool.
    """
    rng = random.Random(spec.seed)
    results: list[TrialResult] = []

    for n in spec.sizes:
        batch = [
            (t, create_random_freqs(n, spec.max_freq, rng)) for t in range(1, spec.trials + 1)
        ]
        if jobs > 1 and len(batch) > 1:
            with ThreadPoolExecutor(max_workers=int(jobs)) as ex:
                futs = [ex.submit(run_trial, freqs, n=n, trial=t) for t, freqs in batch]
                results.extend(fut.result() for fut in futs)
        else:
            for t, freqs in batch:
                results.append(run_trial(freqs, n=n, trial=t))

    return results
