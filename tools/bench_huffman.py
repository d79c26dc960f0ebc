#!/usr/bin/env python3
"""Soak benchmark for the Huffman core.

Runs the bench spec several times, collecting wall time and peak RSS, and
checks that every non-timing column is identical across iterations.

Usage example:
  python tools/bench_huffman.py --spec @tools/bench_specs/smoke_v1.json --jobs 4 --iters 3

Notes:
- Uses internal APIs (no subprocess). Run inside repo venv.
- CSV reports are not written; rows are printed as JSON lines.
"""

from __future__ import annotations

import argparse
import json
import resource
import time
from typing import Any


def _peak_rss_kb() -> int:
    # Linux: ru_maxrss is KB
    return int(resource.getrusage(resource.RUSAGE_SELF).ru_maxrss)


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="bench_huffman.py", description="huffcode soak benchmark")
    ap.add_argument("--spec", default=None, help="Bench spec (@file.json or inline JSON)")
    ap.add_argument("--jobs", type=int, default=1)
    ap.add_argument("--iters", type=int, default=3)
    ns = ap.parse_args(argv)

    from huffcode.bench import run_experiments
    from huffcode.bench_spec import BenchSpecV1, load_bench_spec
    from huffcode.report import summarize

    spec = load_bench_spec(ns.spec) if ns.spec else BenchSpecV1()

    rows: list[dict[str, Any]] = []
    baseline: list[tuple[int, int, int, int, bool]] | None = None
    t0_all = time.perf_counter()

    for i in range(int(ns.iters)):
        rss0 = _peak_rss_kb()
        t0 = time.perf_counter()
        results = run_experiments(spec, jobs=max(1, int(ns.jobs)))
        t_run = time.perf_counter() - t0
        rss1 = _peak_rss_kb()

        stable = [(r.n, r.trial, r.weighted_length, r.codes_count, r.prefix_free) for r in results]
        if baseline is None:
            baseline = stable
        same = stable == baseline

        row = {
            "iter": i + 1,
            "spec": spec.name,
            "jobs": int(ns.jobs),
            "run_sec": t_run,
            "sizes": [
                {"n": s.n, "avg_ms": s.avg_ms, "max_ms": s.max_ms, "trials": s.trials}
                for s in summarize(results)
            ],
            "peak_rss_kb": {"before": rss0, "after": rss1, "max": max(rss0, rss1)},
            "all_prefix_free": all(r.prefix_free for r in results),
            "deterministic": bool(same),
        }
        rows.append(row)
        print(json.dumps(row, ensure_ascii=False))
        if not same:
            raise SystemExit("mismatch: weighted_length/codes_count diversi tra iterazioni")
        if not row["all_prefix_free"]:
            raise SystemExit("codici non prefix-free")

    total = time.perf_counter() - t0_all
    avg_run = sum(r["run_sec"] for r in rows) / len(rows) if rows else 0.0
    summary = {
        "schema": "huffcode.bench_huffman.v1",
        "iters": len(rows),
        "avg_run_sec": avg_run,
        "wall_total_sec": total,
        "max_peak_rss_kb": max((r["peak_rss_kb"]["max"] for r in rows), default=0),
    }
    print(json.dumps(summary, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
