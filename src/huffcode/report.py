"""CSV reports for benchmark runs.

Two files, same layout as the historical harness:
  - per-trial: one row per (n, trial)
  - summary:   one row per n (avg/min/max/stddev of time_ms)

Only the time columns vary between runs of the same spec.
"""

from __future__ import annotations

import csv
import statistics
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path

from huffcode.bench import TrialResult

PER_TRIAL_HEADER = ("n", "trial", "time_ms", "weighted_length", "codes_count", "prefix_free")
SUMMARY_HEADER = ("n", "avg_ms", "min_ms", "max_ms", "stddev_ms", "trials")


@dataclass(frozen=True, slots=True)
class SizeSummary:
    n: int
    avg_ms: float
    min_ms: float
    max_ms: float
    stddev_ms: float
    trials: int


def summarize(results: Iterable[TrialResult]) -> list[SizeSummary]:
    """Group by n (first-seen order); stddev is the population one."""
    by_n: dict[int, list[float]] = {}
    for r in results:
        by_n.setdefault(r.n, []).append(r.time_ms)

    out: list[SizeSummary] = []
    for n, times in by_n.items():
        out.append(
            SizeSummary(
                n=n,
                avg_ms=statistics.fmean(times),
                min_ms=min(times),
                max_ms=max(times),
                stddev_ms=statistics.pstdev(times),
                trials=len(times),
            )
        )
    return out


def _ms(x: float) -> str:
    return f"{x:.3f}"


def _bool(x: bool) -> str:
    return "true" if x else "false"


def write_per_trial_csv(path: Path, results: Sequence[TrialResult]) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="") as f:
        w = csv.writer(f, lineterminator="\n")
        w.writerow(PER_TRIAL_HEADER)
        for r in results:
            w.writerow(
                [r.n, r.trial, _ms(r.time_ms), r.weighted_length, r.codes_count, _bool(r.prefix_free)]
            )


def write_summary_csv(path: Path, summaries: Sequence[SizeSummary]) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="") as f:
        w = csv.writer(f, lineterminator="\n")
        w.writerow(SUMMARY_HEADER)
        for s in summaries:
            w.writerow(
                [s.n, _ms(s.avg_ms), _ms(s.min_ms), _ms(s.max_ms), _ms(s.stddev_ms), s.trials]
            )
